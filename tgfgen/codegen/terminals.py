"""단말 문자 인터닝 + 문자 상수 이스케이프.

단말 ID는 프로덕션을 인코딩하면서 **처음 쓰인 순서**대로 배정된다.
0번은 항상 NUL('\\0')로 예약한다(단말을 하나도 쓰지 않는 문법에서도 동일).
"""

from __future__ import annotations
from typing import Dict, List

_ESCAPES = {
    "\0": "\\0",
    "\r": "\\r",
    "\n": "\\n",
    "\t": "\\t",
    "\\": "\\\\",
    "'":  "\\'",
}


def escape_char(ch: str, wide: bool = False) -> str:
    """
    문자 1개를 C++/Python 공통 문자 상수로. wide면 U 접두사.
    narrow(char) 테이블은 1바이트 단위이므로 0x80..0xFF는 '\\xNN'로 쓰고,
    그보다 큰 코드 포인트는 ValueError(wide로 빌드해야 함).
    """
    if wide:
        return "U'" + _ESCAPES.get(ch, ch) + "'"
    code = ord(ch)
    if code > 0xFF:
        raise ValueError(f"Terminal {ch!r} (U+{code:04X}) does not fit a narrow char table; "
                         f"use wide mode")
    if code > 0x7F:
        return f"'\\x{code:02x}'"
    return "'" + _ESCAPES.get(ch, ch) + "'"


class TerminalInterner:
    def __init__(self):
        self._ts: List[str] = ["\0"]
        self._ids: Dict[str, int] = {"\0": 0}

    def intern(self, ch: str) -> int:
        tid = self._ids.get(ch)
        if tid is None:
            tid = len(self._ts)
            self._ts.append(ch)
            self._ids[ch] = tid
        return tid

    @property
    def terminals(self) -> List[str]:
        return list(self._ts)

    def render_table(self, wide: bool = False) -> List[str]:
        return [escape_char(ch, wide) for ch in self._ts]

    def __len__(self) -> int:
        return len(self._ts)


def escape_string(s: str, wide: bool = False) -> str:
    """이름 등 문자열 리터럴(큰따옴표)."""
    return ("U" if wide else "") + '"' + s.replace("\\", "\\\\").replace('"', '\\"') + '"'
