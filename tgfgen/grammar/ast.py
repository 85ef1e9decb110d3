# tgfgen/grammar/ast.py
"""TGF AST
- CharClassDecl: @use_char_class a, b, c.
- Rule         : name => expr .
- Expr/Seq/Atom: EBNF 표현을 그대로 보존(?,*,+,[],{} 포함)
"""

from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import List, Optional, Union

@dataclass
class Span:
    line: int
    col: int

@dataclass
class CharClassDecl:
    names: List[str]
    span: Optional[Span] = None

class Suffix:
    NONE = "none"
    OPT  = "opt"
    STAR = "star"
    PLUS = "plus"

@dataclass
class Name:
    ident: str
    span: Optional[Span] = None

@dataclass
class Char:
    """'c' 단일 문자 단말"""
    ch: str
    span: Optional[Span] = None

@dataclass
class Str:
    """"str" 문자열. 문자 단말의 연접으로 전개된다("" 는 ε)"""
    text: str
    span: Optional[Span] = None

@dataclass
class Null:
    span: Optional[Span] = None

@dataclass
class Group:
    expr: "Expr"
    span: Optional[Span] = None


AtomKind = Union[Name, Char, Str, Null, Group]

@dataclass
class Atom:
    node: AtomKind
    suffix: str = Suffix.NONE

@dataclass
class Seq:
    """대안(alt) 하나의 시퀀스."""
    items: List[Atom]

@dataclass
class Expr:
    alts: List[Seq]

@dataclass
class Rule:
    name: str
    expr: Expr
    span: Optional[Span] = None


@dataclass
class TgfGrammar:
    char_classes: List[CharClassDecl] = field(default_factory=list)
    rules: List[Rule] = field(default_factory=list)
