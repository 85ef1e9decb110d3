"""TGF 문법 파서
- @use_char_class a, b, c.
- 규칙: name => expr .   (':=' 도 허용)
- 원자: IDENT | 'c' | "str" | null | ( expr ) | [ expr ] | { expr }
- 후위 수식자: ? * +
- 주석: # ... 줄 끝까지
- 마침표(.)는 모든 선언/규칙 종료에 **반드시 필요**
"""

from __future__ import annotations
import regex as re
from dataclasses import dataclass
from typing import List, Optional, Tuple
from .ast import *
import ast as _pyast

# ---- Lexer 토큰 ----
_TOKEN_SPEC = [
    ("WS",       r"[ \t\f\r]+"),
    ("NEWLINE",  r"\n"),
    ("COMMENT",  r"#[^\n]*"),
    ("ARROW",    r"=>|:="),
    ("DIRECTIVE", r"@[A-Za-z_][A-Za-z0-9_]*"),
    ("DOT",      r"\."),
    ("COMMA",    r","),
    ("OR",       r"\|"),
    ("LPAREN",   r"\("),
    ("RPAREN",   r"\)"),
    ("LBRACK",   r"\["),
    ("RBRACK",   r"\]"),
    ("LBRACE",   r"\{"),
    ("RBRACE",   r"\}"),
    ("QMARK",    r"\?"),
    ("STAR",     r"\*"),
    ("PLUS",     r"\+"),
    ("SSTRING",  r"'(?:\\.|[^'\\\n])*'"),
    ("STRING",   r'"(?:\\.|[^"\\\n])*"'),
    ("IDENT",    r"[A-Za-z_][A-Za-z0-9_]*"),
]
MASTER_RE = re.compile("|".join(f"(?P<{n}>{p})" for n, p in _TOKEN_SPEC), re.S)

_ATOM_START = ("IDENT", "SSTRING", "STRING", "LPAREN", "LBRACK", "LBRACE")

@dataclass
class Tok:
    kind: str
    lexeme: str
    start: int
    end: int
    line: int
    col: int

def _scan(src: str) -> List[Tok]:
    """공백/개행/주석은 줄/칼럼 갱신만 하고 토큰스트림에는 **넣지 않는다**."""
    toks: List[Tok] = []
    line = col = 1
    i = 0
    while i < len(src):
        m = MASTER_RE.match(src, i)
        if not m:
            raise SyntaxError(f"Unexpected char {src[i]!r} at {line}:{col}\n"
                              + _snippet_caret_at_pos(src, i))
        kind = m.lastgroup or ""
        lex = m.group(0)
        start, end = i, m.end()

        if kind not in ("WS", "COMMENT", "NEWLINE"):
            toks.append(Tok(kind, lex, start, end, line, col))

        if kind == "NEWLINE":
            line += 1
            col = 1
        else:
            col += len(lex)
        i = end

    toks.append(Tok("EOF", "", len(src), len(src), line, col))
    return toks


# ---------- error handling utils ----------
def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """pos가 속한 라인의 [시작, 끝+1) 범위"""
    start = src.rfind("\n", 0, pos)
    start = 0 if start == -1 else start + 1
    end = src.find("\n", pos)
    if end == -1:
        end = len(src)
    return start, end

def _snippet_with_caret(src: str, tok: Tok) -> str:
    """토큰 시작 위치에 캐럿"""
    start, end = _line_bounds(src, tok.start)
    caret = " " * (tok.col - 1) + "^"
    return f"{src[start:end]}\n{caret}"

def _snippet_caret_at_pos(src: str, pos: int) -> str:
    start, end = _line_bounds(src, pos)
    caret = " " * (pos - start) + "^"
    return f"{src[start:end]}\n{caret}"

# --- 토큰 스트림 ---
class _TS:
    def __init__(self, toks: List[Tok], src: str):
        self.toks = toks
        self.i = 0
        self.src = src

    def la(self) -> Tok:
        return self.toks[self.i]

    def eat(self, kind: str) -> Tok:
        t = self.la()
        if t.kind != kind:
            snippet = _snippet_with_caret(self.src, t)
            raise SyntaxError(
                f"Expected {kind}, got {t.kind} at {t.line}:{t.col}\n{snippet}"
            )
        self.i += 1
        return t

    def match(self, kind: str) -> Optional[Tok]:
        if self.la().kind == kind:
            return self.eat(kind)
        return None

def _unquote(tok: Tok, src: str) -> str:
    # 따옴표 포함 원문. Python 리터럴 파서로 이스케이프를 정확히 복원.
    try:
        return _pyast.literal_eval(tok.lexeme)
    except (ValueError, SyntaxError):
        snippet = _snippet_with_caret(src, tok)
        raise SyntaxError(f"Invalid escape in {tok.lexeme} at {tok.line}:{tok.col}\n{snippet}") from None

def _require_dot(ts: _TS, context: str, example: str, anchor: Optional[Tok] = None) -> None:
    """
    마침표 강제. 없으면 직전 토큰(anchor)의 끝 위치에 캐럿을 찍어 보고한다.
    """
    if ts.match("DOT"):
        return
    got = ts.la()
    found = "EOF" if got.kind == "EOF" else got.kind
    if anchor is not None:
        snippet = _snippet_caret_at_pos(ts.src, anchor.end)
    else:
        snippet = _snippet_with_caret(ts.src, got)
    raise SyntaxError(
        f"Missing '.' after {context} (terminating dot is mandatory).\n"
        f"- Found: {found} at {got.line}:{got.col}\n"
        f"- Example: {example}\n\n"
        f"{snippet}"
    )


def _parse_char_class_decl(ts: _TS, g: TgfGrammar, head: Tok) -> None:
    """@use_char_class NAME (, NAME)* ."""
    names: List[str] = [ts.eat("IDENT").lexeme]
    while ts.match("COMMA"):
        names.append(ts.eat("IDENT").lexeme)
    _require_dot(ts, "@use_char_class directive", "@use_char_class eof, alpha, digit.",
                 anchor=ts.toks[ts.i - 1])
    g.char_classes.append(CharClassDecl(names, Span(head.line, head.col)))


# --- Grammar Parsing ---
def parse_tgf(src: str) -> TgfGrammar:
    ts = _TS(_scan(src), src)
    g = TgfGrammar()

    while ts.la().kind != "EOF":
        t = ts.la()
        if t.kind == "DIRECTIVE":
            ts.eat("DIRECTIVE")
            if t.lexeme == "@use_char_class":
                _parse_char_class_decl(ts, g, t)
            else:
                snippet = _snippet_with_caret(src, t)
                raise SyntaxError(f"Unknown directive {t.lexeme} at {t.line}:{t.col}\n{snippet}")
            continue

        lhs_tok = ts.eat("IDENT")
        if lhs_tok.lexeme == "null":
            snippet = _snippet_with_caret(src, lhs_tok)
            raise SyntaxError(f"'null' cannot head a rule at {lhs_tok.line}:{lhs_tok.col}\n{snippet}")
        ts.eat("ARROW")
        expr = _parse_expr(ts)
        _require_dot(ts, f"rule '{lhs_tok.lexeme}'", f"{lhs_tok.lexeme} => ... .",
                     anchor=ts.toks[ts.i - 1])
        g.rules.append(Rule(lhs_tok.lexeme, expr, Span(lhs_tok.line, lhs_tok.col)))

    return g

def _parse_expr(ts: _TS) -> Expr:
    alts = [_parse_seq(ts)]
    while ts.match("OR"):
        alts.append(_parse_seq(ts))
    return Expr(alts)

def _parse_seq(ts: _TS) -> Seq:
    items: List[Atom] = []
    while ts.la().kind in _ATOM_START:
        items.append(_parse_atom(ts))
    if not items:
        t = ts.la()
        snippet = _snippet_with_caret(ts.src, t)
        raise SyntaxError(f"Empty alternative at {t.line}:{t.col} (use 'null' for ε)\n{snippet}")
    return Seq(items)


def _parse_atom(ts: _TS) -> Atom:
    t = ts.la()
    span = Span(t.line, t.col)
    if t.kind == "IDENT":
        ts.eat("IDENT")
        node = Null(span) if t.lexeme == "null" else Name(t.lexeme, span)
    elif t.kind == "SSTRING":
        ts.eat("SSTRING")
        text = _unquote(t, ts.src)
        if len(text) != 1:
            snippet = _snippet_with_caret(ts.src, t)
            raise SyntaxError(f"Character literal must hold exactly one character: {t.lexeme} "
                              f"at {t.line}:{t.col}\n{snippet}")
        node = Char(text, span)
    elif t.kind == "STRING":
        ts.eat("STRING")
        node = Str(_unquote(t, ts.src), span)
    elif t.kind == "LPAREN":
        ts.eat("LPAREN")
        node = Group(_parse_expr(ts), span)
        ts.eat("RPAREN")
    elif t.kind == "LBRACK":
        ts.eat("LBRACK")
        node = Group(_parse_expr(ts), span)
        ts.eat("RBRACK")
        return Atom(node, Suffix.OPT)
    else:
        ts.eat("LBRACE")
        node = Group(_parse_expr(ts), span)
        ts.eat("RBRACE")
        return Atom(node, Suffix.STAR)

    # EBNF 수식자
    suf = Suffix.NONE
    if ts.match("QMARK"):
        suf = Suffix.OPT
    elif ts.match("STAR"):
        suf = Suffix.STAR
    elif ts.match("PLUS"):
        suf = Suffix.PLUS
    return Atom(node, suf)
