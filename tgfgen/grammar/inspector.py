"""Grammar 읽기 전용 조회 인터페이스."""
from __future__     import annotations
from typing         import List, Tuple

from .model         import Grammar, Production


class GrammarInspector:
    """
    GrammarInspector
    ================
    코드 생성기가 Grammar를 읽을 때 쓰는 **읽기 전용** 창구.
    모든 조회는 튜플/복사본을 돌려주며 원본을 변경하지 않는다.

    - start()      : 시작 비단말 ID
    - nts()        : 비단말 이름 테이블(ID 순)
    - prods()      : 프로덕션 리스트(선언 순)
    - cc_names()   : 이름이 비어 있지 않은 문자 클래스 술어 이름(테이블 순)
    """

    def __init__(self, g: Grammar):
        self._g = g

    def start(self) -> int:
        return self._g.start

    def nts(self) -> Tuple[str, ...]:
        return tuple(self._g.nts)

    def prods(self) -> Tuple[Production, ...]:
        return tuple(self._g.prods)

    def cc_names(self) -> List[str]:
        names = self._g.nts
        return [names[nid] for nid in self._g.cc.ids() if names[nid]]
