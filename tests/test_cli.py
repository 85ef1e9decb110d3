import pytest

from tgfgen.tgfc import _sanitize_module_name, main


def test_check(grammar_path, capsys):
    assert main(["check", grammar_path("expr.tgf")]) == 0
    out = capsys.readouterr().out
    assert out.startswith("[CHECK OK] nonterminals=")
    assert "char_classes=3" in out


def test_check_debug_summary(grammar_path, capsys):
    assert main(["check", grammar_path("expr.tgf"), "-D"]) == 0
    err = capsys.readouterr().err
    assert "[DEBUG] AST ready | rules=5 char_class_decls=1" in err
    assert "Char classes:\n  eof, digit, space" in err


def test_build_python(grammar_path, tmp_path, capsys, load_module):
    out = tmp_path / "gen" / "expr-parser.py"
    assert main(["build", grammar_path("expr.tgf"), "--lang", "python", "-o", str(out)]) == 0
    assert f"[EMIT] lang=python -> {out}" in capsys.readouterr().out
    p = load_module(out.read_text(encoding="utf-8")).expr_parser()
    assert p.parse("1+2") is not None


def test_build_cpp_with_module_name(grammar_path, tmp_path):
    out = tmp_path / "expr.h"
    assert main(["build", grammar_path("expr.tgf"), "-o", str(out), "-m", "calc", "--wide"]) == 0
    doc = out.read_text(encoding="utf-8")
    assert "struct calc {" in doc
    assert "std::vector<char32_t> ts{" in doc


def test_build_empty_grammar_writes_no_file(tmp_path, capsys):
    src = tmp_path / "empty.tgf"
    src.write_text("# nothing here\n", encoding="utf-8")
    out = tmp_path / "empty.h"
    assert main(["build", str(src), "-o", str(out)]) == 0
    assert "[WARN] Grammar has no productions" in capsys.readouterr().err
    assert not out.exists()


def test_syntax_error_exit_code(tmp_path, capsys):
    src = tmp_path / "bad.tgf"
    src.write_text("start => 'a'\n", encoding="utf-8")
    assert main(["check", str(src)]) == 2
    err = capsys.readouterr().err
    assert "[SYNTAX ERROR]" in err
    assert "Missing '.'" in err
    assert main(["build", str(src), "-o", str(tmp_path / "x.h")]) == 2


def test_missing_grammar_file(tmp_path, capsys):
    assert main(["check", str(tmp_path / "nope.tgf")]) == 2
    assert "[ERROR] FileNotFoundError" in capsys.readouterr().err


def test_parse_text(grammar_path, capsys):
    assert main(["parse", grammar_path("expr.tgf"), "--text", "1*2"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("[PARSE OK] trees=")
    assert "'start'" in out


def test_parse_error(grammar_path, capsys):
    assert main(["parse", grammar_path("expr.tgf"), "--text", "1+x"]) == 1
    err = capsys.readouterr().err
    assert "[PARSE ERROR]" in err
    assert "Parse error at 1:3: unexpected 'x'" in err


def test_parse_input_file(grammar_path, tmp_path):
    data = tmp_path / "in.txt"
    data.write_text("(3)", encoding="utf-8")
    assert main(["parse", grammar_path("expr.tgf"), "--input", str(data)]) == 0


def test_parse_requires_input(grammar_path):
    with pytest.raises(SystemExit):
        main(["parse", grammar_path("expr.tgf")])


@pytest.mark.parametrize("name,expected", [
    ("expr_parser.h", "expr_parser"),
    ("expr-parser.py", "expr_parser"),
    ("9-out.py", "parser_9_out"),
])
def test_sanitize_module_name(name, expected):
    assert _sanitize_module_name(name) == expected


def test_build_unencodable_terminal_keeps_existing_output(tmp_path, capsys):
    src = tmp_path / "sur.tgf"
    src.write_text('start => "\\ud800".\n', encoding="utf-8")
    out = tmp_path / "o.h"
    out.write_text("previous\n", encoding="utf-8")
    assert main(["build", str(src), "-o", str(out), "--wide"]) == 2
    assert "[ERROR] UnicodeEncodeError" in capsys.readouterr().err
    assert out.read_text(encoding="utf-8") == "previous\n"


def test_build_narrow_terminal_out_of_range(tmp_path, capsys):
    src = tmp_path / "wide.tgf"
    src.write_text("start => 'Ā'.\n", encoding="utf-8")
    out = tmp_path / "o.h"
    assert main(["build", str(src), "-o", str(out)]) == 2
    assert "[ERROR] ValueError" in capsys.readouterr().err
    assert not out.exists()
