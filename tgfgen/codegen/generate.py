"""파서 모듈 생성 파이프라인.

Grammar → build_ir(인코딩 + 테이블 스냅샷) → emit_{cpp,py}_to_string → 한 번의 write.

- 프로덕션이 없는 문법은 아무것도 쓰지 않는다(오류 아님).
- 렌더링 도중 예외가 나면 sink에는 아무것도 쓰이지 않는다.
"""

from __future__ import annotations
from typing import Optional, TextIO

from ..grammar.loader import read_provenance
from ..grammar.model import Grammar
from ..grammar.transform import grammar_from_string, load_grammar
from .ir import build_ir
from .emit_cpp import emit_cpp_to_string
from .emit_py import emit_py_to_string

EMITTERS = {
    "cpp": emit_cpp_to_string,
    "python": emit_py_to_string,
}


def emit_parser_to_string(g: Grammar, module_name: str, *, lang: str = "cpp",
                          wide: bool = False, source_text: str = "",
                          source_name: Optional[str] = None) -> str:
    """문법 g로부터 파서 모듈 소스 전체를 만든다. 빈 문법이면 ""."""
    emit = EMITTERS[lang]
    if len(g) == 0:
        return ""
    ir = build_ir(g, module_name, wide=wide, provenance=source_text,
                  source_name=source_name or module_name)
    return emit(ir)


def generate_parser(out: TextIO, g: Grammar, module_name: str, *,
                    source_path: Optional[str] = None, **kw) -> TextIO:
    """source_path가 주어지면 그 파일 내용을 출처 블록으로 쓴다(읽기 실패 시 빈 블록)."""
    if source_path is not None:
        kw["source_text"] = read_provenance(source_path)
        kw.setdefault("source_name", source_path)
    src = emit_parser_to_string(g, module_name, **kw)
    if src:
        out.write(src)
    return out


def generate_parser_from_string(out: TextIO, module_name: str, grammar_tgf: str,
                                start: str = "start", **kw) -> TextIO:
    """TGF 문자열에서 생성. 출처 블록은 문법 문자열 자체."""
    g = grammar_from_string(grammar_tgf, start)
    return generate_parser(out, g, module_name, source_text=grammar_tgf, **kw)


def generate_parser_from_file(out: TextIO, module_name: str, tgf_filename: str,
                              start: str = "start", **kw) -> TextIO:
    """TGF 파일에서 생성. 출처 블록은 파일 내용(읽기 실패 시 빈 블록)."""
    g = load_grammar(tgf_filename, start)
    return generate_parser(out, g, module_name, source_path=tgf_filename, **kw)
