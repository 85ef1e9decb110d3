"""
tgfgen 코드 생성용 IR
=======

Grammar를 GrammarInspector로 읽어, 타깃 언어(C++/Python) 방출기가 소비하기
쉬운 **중간표현(IR)** 으로 변환한다.

설계 포인트
-----------
- 프로덕션은 (kind, arg) 참조 튜플의 리스트로 인코딩한다.
  * kind: 1=NT, 2=T, 3=NUL
  * arg : NT→비단말 ID, T→단말 테이블 인덱스, NUL→0
- 단말 테이블은 인코딩 중 TerminalInterner가 채운다. 프로덕션 인코딩이
  **먼저** 끝난 뒤 테이블을 스냅샷하므로, 참조 인덱스와 테이블 위치가 항상
  일치한다.

주의
----
- terminals[0]은 항상 NUL('\\0')이다(TerminalInterner 규약).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple
from ..grammar.inspector import GrammarInspector
from ..grammar.model import Grammar, NonterminalRef, TerminalRef
from .terminals import TerminalInterner

NT, T, NUL = 1, 2, 3

Ref = Tuple[int, int]

# 생성 코드의 열거형 멤버로 쓸 수 없는 이름(C++ 예약어, Python enum 예약 이름)
_CPP_KEYWORDS = frozenset("""
    alignas alignof and and_eq asm auto bitand bitor bool break case catch char
    char8_t char16_t char32_t class compl concept const consteval constexpr
    constinit const_cast continue co_await co_return co_yield decltype default
    delete do double dynamic_cast else enum explicit export extern false float
    for friend goto if inline int long mutable namespace new noexcept not not_eq
    nullptr operator or or_eq private protected public register
    reinterpret_cast requires return short signed sizeof static static_assert
    static_cast struct switch template this thread_local throw true try typedef
    typeid typename union unsigned using virtual void volatile wchar_t while
    xor xor_eq
""".split())


def _reserved_member_name(name: str) -> bool:
    if name in _CPP_KEYWORDS or name == "mro":
        return True
    # _sunder_ / __dunder__ / 클래스 private(_nonterminal__x)
    return (name.startswith("_") and name.endswith("_")) or name.startswith("_nonterminal__")


def enum_member_names(nonterms: Sequence[str]) -> List[str]:
    """
    비단말 이름 → 열거형 멤버 이름. 예약된 이름만 바꾼다:
    앞쪽 `_`를 떼고 `_ID`를 붙인다(충돌 시 `_2`, `_3` ...).
    """
    taken = set(nonterms)
    out: List[str] = []
    for nid, name in enumerate(nonterms):
        if _reserved_member_name(name):
            base = f"{name.lstrip('_') or 'nt'}_{nid}"
            alias, k = base, 1
            while alias in taken:
                k += 1
                alias = f"{base}_{k}"
            taken.add(alias)
            name = alias
        out.append(name)
    return out

@dataclass
class EncodedProduction:
    lhs: int
    alternatives: List[List[Ref]]

@dataclass
class CodegenIR:
    """
    CodegenIR
    =========
    emit_*.py에서 사용하는 IR.

    Fields
    ------
    module_name : 생성될 구조체/클래스 이름
    wide        : char32_t(U 접두사) 여부
    start       : 시작 비단말 ID
    nonterms    : 비단말 이름 리스트 (ID 순)
    enum_names  : 열거형 멤버 이름 (nonterms와 같은 순서, 예약된 이름은 치환, enum_member_names 참고)
    cc_names    : 문자 클래스 술어 이름 (테이블 순, 빈 이름 제외)
    terminals   : 단말 문자 리스트 (인터닝 순, [0] == '\\0')
    ts_table    : terminals를 이스케이프한 문자 상수
    prods       : 인코딩된 프로덕션 (선언 순)
    provenance  : 원본 문법 텍스트(출처 블록용, 없으면 "")
    source_name : 출처 이름(파일 경로 등)
    """
    module_name: str
    wide: bool
    start: int
    nonterms: List[str]
    cc_names: List[str]
    terminals: List[str]
    ts_table: List[str]
    prods: List[EncodedProduction] = field(default_factory=list)
    enum_names: List[str] = field(default_factory=list)
    provenance: str = ""
    source_name: str = ""


def encode_productions(gi: GrammarInspector, ts: TerminalInterner) -> List[EncodedProduction]:
    """프로덕션을 선언 순서대로 참조 리스트로 인코딩한다. 단말은 ts에 인터닝된다."""
    out: List[EncodedProduction] = []
    for p in gi.prods():
        alts: List[List[Ref]] = []
        for alt in p.alternatives:
            refs: List[Ref] = []
            for lit in alt:
                if isinstance(lit, NonterminalRef):
                    refs.append((NT, lit.id))
                elif isinstance(lit, TerminalRef):
                    refs.append((T, ts.intern(lit.ch)))
                else:
                    refs.append((NUL, 0))
            alts.append(refs)
        out.append(EncodedProduction(p.lhs, alts))
    return out


def build_ir(g: Grammar, module_name: str, *, wide: bool = False,
             provenance: str = "", source_name: str = "") -> CodegenIR:
    """
    build_ir(g, module_name, ...) -> CodegenIR
    ------------------------------------------
    인코딩 → 테이블 스냅샷 순서로 IR을 만든다. 실행마다 새 TerminalInterner를 쓴다.
    """
    gi = GrammarInspector(g)
    ts = TerminalInterner()
    prods = encode_productions(gi, ts)
    return CodegenIR(
        module_name=module_name,
        wide=wide,
        start=gi.start(),
        nonterms=list(gi.nts()),
        cc_names=gi.cc_names(),
        terminals=ts.terminals,
        ts_table=ts.render_table(wide),
        prods=prods,
        enum_names=enum_member_names(gi.nts()),
        provenance=provenance,
        source_name=source_name or module_name,
    )


def render_prod_rhs(p: EncodedProduction) -> str:
    """`(t(1)+t(2)) | (nul)`: C++/Python 공통 결합자 표기."""
    parts = []
    for alt in p.alternatives:
        syms = []
        for kind, arg in alt:
            if kind == NT:
                syms.append(f"nt({arg})")
            elif kind == T:
                syms.append(f"t({arg})")
            else:
                syms.append("nul")
        parts.append("(" + "+".join(syms) + ")")
    return " | ".join(parts)


def wrap_items(items: List[str], indent: str, per_line: int = 10) -> str:
    """`a, b, ...` 를 per_line개씩 줄바꿈한 블록(각 줄 indent로 시작, 끝 개행)."""
    lines = []
    for i in range(0, len(items), per_line):
        lines.append(indent + " ".join(x + "," for x in items[i:i + per_line]))
    return "\n".join(lines) + "\n" if lines else ""
