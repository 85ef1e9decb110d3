# tgfgen/grammar/transform.py
"""TGF AST의 EBNF(?,*,+,[],{})를 BNF로 전개해 Grammar 모델을 만든다."""

from __future__     import annotations
from typing         import List
from .ast           import *
from .model         import (
    EPSILON, Alternative, Grammar, Literal, Nonterminals, NonterminalRef,
    Production, TerminalRef,
)
from .charclass     import CHAR_CLASSES, predefined_char_classes
from .loader        import load_grammar_text
from .parser        import parse_tgf


class _Lowering:
    def __init__(self, g: TgfGrammar):
        self.g = g
        self.nts = Nonterminals()
        self.prods: List[Production] = []
        self._grp_id = 0
        self._rep_id = 0
        self._opt_id = 0

    # 새 비단말(ID)
    def _new_grp(self) -> int:
        self._grp_id += 1
        return self.nts.get(f"__grp{self._grp_id}")

    def _new_rep(self) -> int:
        self._rep_id += 1
        return self.nts.get(f"__rep{self._rep_id}")

    def _new_opt(self) -> int:
        self._opt_id += 1
        return self.nts.get(f"__opt{self._opt_id}")

    def _lits_from_atom_base(self, atom: Atom) -> List[Literal]:
        node = atom.node
        if isinstance(node, Name):
            return [NonterminalRef(self.nts.get(node.ident))]
        elif isinstance(node, Char):
            return [TerminalRef(node.ch)]
        elif isinstance(node, Str):
            return [TerminalRef(c) for c in node.text]
        elif isinstance(node, Null):
            return []
        elif isinstance(node, Group):
            grp = self._new_grp()
            self._lower_expr_into(grp, node.expr)
            return [NonterminalRef(grp)]
        else:
            raise TypeError("unknown Atom.node")

    @staticmethod
    def _alt(lits: List[Literal]) -> Alternative:
        return tuple(lits) if lits else (EPSILON,)

    def _lower_seq_atoms(self, atoms: List[Atom]) -> Alternative:
        """시퀀스 내 원자들을 전개하여 대안 1개로 반환."""
        rhs: List[Literal] = []
        for a in atoms:
            base = self._lits_from_atom_base(a)
            if a.suffix == Suffix.NONE:
                rhs.extend(base)
            elif a.suffix == Suffix.OPT:
                opt = self._new_opt()
                # opt -> base | ε
                self.prods.append(Production(opt, [self._alt(base), (EPSILON,)]))
                rhs.append(NonterminalRef(opt))
            elif a.suffix in (Suffix.STAR, Suffix.PLUS):
                rep = self._new_rep()
                # rep -> base rep | ε   (우측 재귀)
                self.prods.append(Production(rep, [tuple(base) + (NonterminalRef(rep),), (EPSILON,)]))
                if a.suffix == Suffix.PLUS:
                    # PLUS는 최소 1회: base + rep
                    rhs.extend(base)
                rhs.append(NonterminalRef(rep))
            else:
                raise ValueError(f"unknown suffix: {a.suffix}")
        return self._alt(rhs)

    def _lower_expr_into(self, lhs: int, expr: Expr) -> None:
        alts = [self._lower_seq_atoms(seq.items) for seq in expr.alts]
        self.prods.append(Production(lhs, alts))

    def lower(self, start: str) -> Grammar:
        names: List[str] = []
        for decl in self.g.char_classes:
            for name in decl.names:
                if name not in CHAR_CLASSES:
                    span = decl.span
                    where = f" at {span.line}:{span.col}" if span else ""
                    raise SyntaxError(f"Unknown character class '{name}'{where}; "
                                      f"known: {', '.join(sorted(CHAR_CLASSES))}")
                if name not in names:
                    names.append(name)
        cc = predefined_char_classes(names, self.nts)

        for r in self.g.rules:
            self._lower_expr_into(self.nts.get(r.name), r.expr)

        return Grammar(self.nts, self.prods, self.nts.get(start), cc)


def build_grammar(g: TgfGrammar, start: str = "start") -> Grammar:
    """TGF AST → Grammar(비단말 테이블, 프로덕션, 문자 클래스)"""
    return _Lowering(g).lower(start)


def grammar_from_string(src: str, start: str = "start") -> Grammar:
    return build_grammar(parse_tgf(src), start)


def load_grammar(path: str, start: str = "start") -> Grammar:
    return grammar_from_string(load_grammar_text(path), start)
