""".tgf 파일 로더"""

from __future__ import annotations
from pathlib    import Path


def load_grammar_text(path: str) -> str:
    """
    Load Grammar Text
    """
    text = Path(path).read_text(encoding="utf-8")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def read_provenance(path: str) -> str:
    """출처 블록용 원문. 읽을 수 없으면 빈 문자열(오류 아님)."""
    try:
        return load_grammar_text(path)
    except (OSError, UnicodeDecodeError):
        return ""
