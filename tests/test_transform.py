import pytest

from tgfgen.grammar.model import (
    EPSILON, NonterminalRef as N, Production, TerminalRef as T,
)
from tgfgen.grammar.transform import grammar_from_string, load_grammar


def test_concrete_scenario():
    g = grammar_from_string("start => 'a' 'b' | null.")
    assert list(g.nts) == ["start"]
    assert g.start == 0
    assert g.prods == [Production(0, [(T("a"), T("b")), (EPSILON,)])]
    assert len(g.cc) == 0


def test_char_classes_interned_first_and_deduplicated():
    g = grammar_from_string("@use_char_class digit, eof.\n@use_char_class digit.\nstart => digit eof.")
    assert list(g.nts) == ["digit", "eof", "start"]
    assert g.cc.ids() == [0, 1]
    assert g.start == 2
    assert g.cc.match(0, "7") and not g.cc.match(0, "x")
    assert g.cc.match(1, None) and not g.cc.match(1, "a")


def test_unknown_char_class():
    with pytest.raises(SyntaxError, match="Unknown character class 'digits'"):
        grammar_from_string("@use_char_class digits.\nstart => 'a'.")


def test_nonterminals_in_first_appearance_order():
    g = grammar_from_string("start => b a.\na => 'x'.\nb => 'y'.")
    assert list(g.nts) == ["start", "b", "a"]
    assert [p.lhs for p in g.prods] == [0, 2, 1]


def test_lowering_helpers():
    g = grammar_from_string("start => ( 'a' | 'b' ) 'c'? d+.\nd => 'd'.")
    assert list(g.nts) == ["start", "__grp1", "__opt1", "d", "__rep1"]
    grp, opt, dd, rep = 1, 2, 3, 4
    # helpers are appended before the production that uses them
    assert g.prods[0] == Production(grp, [(T("a"),), (T("b"),)])
    assert g.prods[1] == Production(opt, [(T("c"),), (EPSILON,)])
    assert g.prods[2] == Production(rep, [(N(dd), N(rep)), (EPSILON,)])
    assert g.prods[3] == Production(0, [(N(grp), N(opt), N(dd), N(rep))])
    assert g.prods[4] == Production(dd, [(T("d"),)])


def test_braces_are_zero_or_more():
    g = grammar_from_string("start => { 'x' }.")
    assert list(g.nts) == ["start", "__grp1", "__rep1"]
    assert g.prods[0] == Production(1, [(T("x"),)])
    assert g.prods[1] == Production(2, [(N(1), N(2)), (EPSILON,)])
    assert g.prods[2] == Production(0, [(N(2),)])


def test_strings_and_null_inside_sequences():
    g = grammar_from_string("start => \"ab\" null 'c' | \"\".")
    assert g.prods == [Production(0, [(T("a"), T("b"), T("c")), (EPSILON,)])]


def test_same_head_in_several_rules_keeps_separate_productions():
    g = grammar_from_string("start => 'a'.\nstart => 'b'.")
    assert len(g) == 2
    assert g.by_lhs() == {0: [(T("a"),), (T("b"),)]}


def test_undefined_start_is_interned_last():
    g = grammar_from_string("expr => 'x'.", start="top")
    assert list(g.nts) == ["expr", "top"]
    assert g.start == 1


def test_empty_grammar():
    g = grammar_from_string("# only a comment\n")
    assert len(g) == 0
    assert list(g.nts) == ["start"]


def test_load_grammar_from_file(grammar_path):
    g = load_grammar(grammar_path("expr.tgf"))
    assert list(g.nts)[:3] == ["eof", "digit", "space"]
    assert "start" in g.nts and "factor" in g.nts
    assert g.nts[g.start] == "start"
