import io

import pytest

from tgfgen.codegen.generate import (
    emit_parser_to_string, generate_parser, generate_parser_from_file,
    generate_parser_from_string,
)
from tgfgen.grammar.transform import grammar_from_string

SIMPLE = "start => 'a' 'b' | null.\n"


def _cpp(src: str = SIMPLE, **kw) -> str:
    out = io.StringIO()
    generate_parser_from_string(out, "demo", src, **kw)
    return out.getvalue()


def test_concrete_scenario_document():
    doc = _cpp()
    assert doc.startswith("// This file is generated by tgfgen")
    assert "// The content of the file demo is:\n// start => 'a' 'b' | null.\n\n#include" in doc
    assert "struct demo {\n\tdemo() :\n" in doc
    assert "g(nts, load_prods(), nt(0), cc), p(g) { }" in doc
    assert "\tenum struct nonterminal : size_t {\n\t\t\tstart,\n\t};\n" in doc
    assert "\tstd::vector<char> ts{\n\t\t'\\0', 'a', 'b',\n\t};\n" in doc
    assert "\t\tfor (const auto& nt : {\n\t\t\t\"start\",\n\t\t}) nts.get(nt);\n" in doc
    assert "\t\tq(nt(0), (t(1)+t(2)) | (nul));\n\t\treturn q;\n" in doc
    assert doc.endswith("};\n")


def test_wrapper_api_present():
    doc = _cpp()
    assert "parse(\n\t\tconst char* data, size_t size = 0," in doc
    assert "std::basic_istream<char>& is," in doc
    assert "bool found() { return p.found(); }" in doc
    assert "typename idni::parser<char>::perror_t get_error()" in doc


def test_wide_mode():
    doc = _cpp(wide=True)
    assert "std::vector<char32_t> ts{\n\t\tU'\\0', U'a', U'b',\n" in doc
    assert "\t\t\tU\"start\",\n" in doc
    assert "idni::parser<char32_t>" in doc
    assert "std::char_traits<char32_t>::eof()" in doc


def test_char_class_names_block():
    doc = _cpp("@use_char_class eof, digit.\nstart => digit eof.")
    assert ("predefined_char_classes<char>({\n\t\t\t\"eof\",\n\t\t\t\"digit\",\n\t\t}, nts);"
            in doc)
    assert "q(nt(2), (nt(1)+nt(0)));" in doc


def test_deterministic(grammar_path):
    a, b = io.StringIO(), io.StringIO()
    generate_parser_from_file(a, "expr_parser", grammar_path("expr.tgf"))
    generate_parser_from_file(b, "expr_parser", grammar_path("expr.tgf"))
    assert a.getvalue() == b.getvalue() != ""


def test_provenance_from_file(grammar_path):
    path = grammar_path("expr.tgf")
    out = io.StringIO()
    generate_parser_from_file(out, "expr_parser", path)
    doc = out.getvalue()
    assert f"// from the grammar in file: {path}\n" in doc
    assert "// # arithmetic expressions over single digits\n" in doc
    assert "// factor  => digit+ | '(' ws expr ws ')'.\n" in doc


def test_unreadable_provenance_degrades_to_empty(tmp_path):
    g = grammar_from_string(SIMPLE)
    missing = str(tmp_path / "missing.tgf")
    out = io.StringIO()
    generate_parser(out, g, "demo", source_path=missing)
    doc = out.getvalue()
    assert f"// The content of the file {missing} is:\n\n#include" in doc
    assert "q(nt(0), (t(1)+t(2)) | (nul));" in doc


def test_empty_grammar_writes_nothing():
    out = io.StringIO()
    generate_parser_from_string(out, "demo", "# no rules\n")
    assert out.getvalue() == ""
    assert emit_parser_to_string(grammar_from_string(""), "demo") == ""


def test_tables_wrap_every_ten_entries():
    letters = "abcdefghijkl"
    src = "start => " + " ".join(f"'{c}'" for c in letters) + "."
    doc = _cpp(src)
    assert "\t\t'\\0', 'a', 'b', 'c', 'd', 'e', 'f', 'g', 'h', 'i',\n\t\t'j', 'k', 'l',\n" in doc


def test_escaped_terminals(grammar_path):
    out = io.StringIO()
    generate_parser_from_file(out, "esc", grammar_path("escapes.tgf"))
    assert "\t\t'\\0', '\\'', '\\\\', '\\r', '\\n', '\\t',\n" in out.getvalue()


def test_narrow_non_ascii_terminal_is_one_byte_constant():
    doc = _cpp("start => 'é'.")
    assert "\t\t'\\0', '\\xe9',\n" in doc
    assert "'é'" not in doc.split("#include", 1)[1]


def test_narrow_terminal_beyond_latin1_writes_nothing():
    out = io.StringIO()
    with pytest.raises(ValueError, match="wide"):
        generate_parser_from_string(out, "demo", "start => 'Ā'.")
    assert out.getvalue() == ""
    assert "\t\tU'\\0', U'Ā',\n" in _cpp("start => 'Ā'.", wide=True)


def test_enum_renames_reserved_names_but_keeps_name_table():
    doc = _cpp("start => int.\nint => 'a'.")
    assert "\tenum struct nonterminal : size_t {\n\t\t\tstart, int_1,\n\t};\n" in doc
    assert "\t\t\t\"start\", \"int\",\n" in doc
