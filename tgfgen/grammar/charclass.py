# tgfgen/grammar/charclass.py
"""미리 정의된 문자 클래스 술어.

`@use_char_class` 로 선언된 이름마다 같은 이름의 비단말을 만들고, 그 비단말이
입력 문자 1개를 술어로 매칭하도록 CharClassFns에 등록한다.
판정은 `regex`의 POSIX 클래스([[:alpha:]] 등)를 사용한다.

- eof 는 입력 끝의 가상 심볼(None)에만 매칭된다.
"""

from __future__ import annotations
from typing import Callable, Dict, List, Optional
import regex as re

from .model import CharClassFns, Nonterminals

_POSIX = {
    "alnum":     "alnum",
    "alpha":     "alpha",
    "blank":     "blank",
    "cntrl":     "cntrl",
    "digit":     "digit",
    "graph":     "graph",
    "printable": "print",
    "punct":     "punct",
    "space":     "space",
    "xdigit":    "xdigit",
}

def _posix_fn(cls_name: str) -> Callable[[Optional[str]], bool]:
    pat = re.compile(f"[[:{cls_name}:]]")
    def fn(ch: Optional[str]) -> bool:
        return ch is not None and pat.fullmatch(ch) is not None
    return fn

def _eof(ch: Optional[str]) -> bool:
    return ch is None

CHAR_CLASSES: Dict[str, Callable[[Optional[str]], bool]] = {"eof": _eof}
CHAR_CLASSES.update({name: _posix_fn(posix) for name, posix in _POSIX.items()})


def predefined_char_classes(names: List[str], nts: Nonterminals) -> CharClassFns:
    """
    이름 목록으로 CharClassFns를 만든다. 각 이름은 nts에 인터닝된다.
    알 수 없는 이름이면 KeyError.
    """
    cc = CharClassFns()
    for name in names:
        fn = CHAR_CLASSES[name]
        cc.fns[nts.get(name)] = (name, fn)
    return cc
