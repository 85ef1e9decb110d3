import io

import pytest

from tgfgen.codegen.generate import emit_parser_to_string, generate_parser_from_file
from tgfgen.grammar.loader import load_grammar_text
from tgfgen.grammar.transform import grammar_from_string, load_grammar


def _py(g, name="demo", **kw) -> str:
    return emit_parser_to_string(g, name, lang="python", **kw)


def test_concrete_scenario_document():
    doc = _py(grammar_from_string("start => 'a' 'b' | null."), source_text="start => 'a' 'b' | null.")
    assert "# The content of the file demo is:\n# start => 'a' 'b' | null.\n" in doc
    assert "class demo:\n" in doc
    assert "    nonterminal = IntEnum(\"nonterminal\", [\n        (\"start\", 0),\n    ])\n" in doc
    assert "    _ts = [\n        '\\0', 'a', 'b',\n    ]\n" in doc
    assert "        q(nt(0), (t(1)+t(2)) | (nul))\n        return q\n" in doc


def test_generated_module_runs(load_module):
    g = grammar_from_string("start => 'a' 'b' | null.")
    mod = load_module(_py(g))
    p = mod.demo()
    assert p.nonterminal.start == 0
    assert p.parse("ab") is not None and p.found()
    assert p.parse("") is not None and p.found()
    assert p.parse("abx") is None and not p.found()
    err = p.get_error()
    assert err.pos == 2 and err.unexpected == "x"


def test_generated_module_rebuilds_identical_grammar(load_module, grammar_path):
    path = grammar_path("expr.tgf")
    g = load_grammar(path)
    src = _py(g, "expr_parser", source_text=load_grammar_text(path), source_name=path)
    mod = load_module(src)
    p = mod.expr_parser()
    assert p.g.nts == g.nts
    assert p.g.prods == g.prods
    assert p.g.start == g.start
    assert p.g.cc.ids() == g.cc.ids()
    assert [m.name for m in p.nonterminal] == list(g.nts)
    assert [m.value for m in p.nonterminal] == list(range(len(g.nts)))


@pytest.mark.parametrize("text,ok", [
    ("1+2*3", True),
    (" ( 1 + 22 ) * 3 ", True),
    ("7", True),
    ("1+", False),
    ("(1", False),
    ("a", False),
])
def test_generated_expr_parser_accepts_same_language(load_module, grammar_path, text, ok):
    out = io.StringIO()
    generate_parser_from_file(out, "expr_parser", grammar_path("expr.tgf"), lang="python")
    p = load_module(out.getvalue()).expr_parser()
    assert (p.parse(text) is not None) == ok
    assert p.found() == ok


def test_parse_stream_and_end_marker(load_module, grammar_path):
    out = io.StringIO()
    generate_parser_from_file(out, "expr_parser", grammar_path("expr.tgf"), lang="python")
    p = load_module(out.getvalue()).expr_parser()
    assert p.parse_stream(io.StringIO("1+2")) is not None
    assert p.parse(io.StringIO("1+2")) is not None
    assert p.parse("1+2;garbage", eof=";") is not None
    assert p.parse("1+2garbage", size=3) is not None


def test_escapes_module(load_module, grammar_path):
    out = io.StringIO()
    generate_parser_from_file(out, "esc", grammar_path("escapes.tgf"), lang="python")
    p = load_module(out.getvalue()).esc()
    assert p._ts == ["\0", "'", "\\", "\r", "\n", "\t"]
    assert p.parse("'ab c\\") is not None
    assert p.parse("\t\t\r\n") is not None
    assert p.parse("\t'") is None


def test_wide_module_loads(load_module):
    g = grammar_from_string("@use_char_class alpha.\nstart => alpha+ '!'.")
    doc = _py(g, wide=True)
    assert "        U'\\0', U'!',\n" in doc
    p = load_module(doc).demo()
    assert p.parse("héllo!") is not None


def test_python_target_deterministic(grammar_path):
    a, b = io.StringIO(), io.StringIO()
    generate_parser_from_file(a, "x", grammar_path("expr.tgf"), lang="python")
    generate_parser_from_file(b, "x", grammar_path("expr.tgf"), lang="python")
    assert a.getvalue() == b.getvalue()


@pytest.mark.parametrize("name", [
    "name", "value", "real", "to_bytes", "_x_", "mro", "__x__", "class",
])
def test_enum_usable_for_any_nonterminal_name(load_module, name):
    g = grammar_from_string(f"start => {name} 'a'.\n{name} => 'b'.")
    p = load_module(_py(g)).demo()
    members = list(p.nonterminal)
    assert [m.value for m in members] == [0, 1]
    assert members[0].name == "start"
    assert p.nts[members[1].value] == name
    assert p.parse("ba") is not None
