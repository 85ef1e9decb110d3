# tgfgen/grammar/model.py
"""문법 모델(Grammar IR)

- Nonterminals : 비단말 이름 ↔ 정수 ID 인터닝 테이블(선언 순서 = ID)
- Literal      : NonterminalRef | TerminalRef | Epsilon
- Production   : lhs(비단말 ID) + 대안(Alternative) 리스트
- Grammar      : 시작기호 + 비단말 테이블 + 프로덕션 + 문자 클래스 술어
- Prods        : 생성된 파서 모듈이 문법을 재구성할 때 쓰는 결합자 DSL
                 (`+` = 연접, `|` = 선택)

빌더(transform)나 생성된 모듈이 한 번 만들고, 코드 생성 중에는 읽기 전용이다.
"""

from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import Callable, Dict, Iterator, List, Optional, Tuple, Union


class Nonterminals:
    """
    비단말 인터닝 테이블.
    - get(name): 처음 보는 이름이면 뒤에 추가하고 ID를 돌려준다.
    - ID는 항상 0..N-1 (선언 순서)
    """

    def __init__(self, names: Optional[List[str]] = None):
        self._names: List[str] = []
        self._ids: Dict[str, int] = {}
        for nm in names or []:
            self.get(nm)

    def get(self, name: str) -> int:
        nid = self._ids.get(name)
        if nid is None:
            nid = len(self._names)
            self._names.append(name)
            self._ids[name] = nid
        return nid

    def __getitem__(self, nid: int) -> str:
        return self._names[nid]

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._ids

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Nonterminals):
            return NotImplemented
        return self._names == other._names

    def __repr__(self) -> str:
        return f"Nonterminals({self._names!r})"


# ---- 리터럴(태그드 유니온) ----

@dataclass(frozen=True)
class NonterminalRef:
    id: int

@dataclass(frozen=True)
class TerminalRef:
    ch: str

class Epsilon:
    """ε 표식. 문자가 아니며 EPSILON 싱글턴으로만 쓴다."""
    _inst: Optional["Epsilon"] = None

    def __new__(cls) -> "Epsilon":
        if cls._inst is None:
            cls._inst = super().__new__(cls)
        return cls._inst

    def __repr__(self) -> str:
        return "EPSILON"

EPSILON = Epsilon()

Literal = Union[NonterminalRef, TerminalRef, Epsilon]
Alternative = Tuple[Literal, ...]


@dataclass
class Production:
    """
    프로덕션 1개.
    - lhs: 좌변 비단말 ID
    - alternatives: 대안 리스트(선언 순서). 대안 하나는 리터럴 튜플(연접)
      ε 대안은 (EPSILON,) 으로 표현
    """
    lhs: int
    alternatives: List[Alternative]


@dataclass
class CharClassFns:
    """문자 클래스 술어: 비단말 ID -> (이름, 술어). 반복은 ID 순."""
    fns: Dict[int, Tuple[str, Callable[[Optional[str]], bool]]] = field(default_factory=dict)

    def is_pred(self, nid: int) -> bool:
        return nid in self.fns

    def match(self, nid: int, ch: Optional[str]) -> bool:
        return self.fns[nid][1](ch)

    def ids(self) -> List[int]:
        return sorted(self.fns)

    def __len__(self) -> int:
        return len(self.fns)


@dataclass
class Grammar:
    nts: Nonterminals
    prods: List[Production]
    start: int
    cc: CharClassFns = field(default_factory=CharClassFns)

    def __len__(self) -> int:
        return len(self.prods)

    def by_lhs(self) -> Dict[int, List[Alternative]]:
        """lhs ID -> 대안 리스트(프로덕션 선언 순서로 이어붙임)."""
        out: Dict[int, List[Alternative]] = {}
        for p in self.prods:
            out.setdefault(p.lhs, []).extend(p.alternatives)
        return out


# ---- 생성 코드용 결합자 DSL ----

class Prods:
    """
    대안(Alternative)들의 묶음.
      nt(1) + t(2)      → 연접: 대안 × 대안
      (…) | (…)         → 선택: 대안 리스트 이어붙이기
    """

    def __init__(self, alternatives: List[Alternative]):
        self.alternatives = alternatives

    @classmethod
    def nonterminal(cls, nid: int) -> "Prods":
        return cls([(NonterminalRef(nid),)])

    @classmethod
    def terminal(cls, ch: str) -> "Prods":
        return cls([(TerminalRef(ch),)])

    @classmethod
    def null(cls) -> "Prods":
        return cls([(EPSILON,)])

    def __add__(self, other: "Prods") -> "Prods":
        return Prods([a + b for a in self.alternatives for b in other.alternatives])

    def __or__(self, other: "Prods") -> "Prods":
        return Prods(self.alternatives + other.alternatives)

    def __repr__(self) -> str:
        return f"Prods({self.alternatives!r})"


class Productions(list):
    """`q(nt(0), rhs)` 형태로 프로덕션을 쌓는 리스트."""

    def __call__(self, lhs: Prods, rhs: Prods) -> "Productions":
        head = lhs.alternatives[0][0]
        if not isinstance(head, NonterminalRef):
            raise TypeError(f"production head must be a nonterminal, got {head!r}")
        self.append(Production(head.id, list(rhs.alternatives)))
        return self
