# tgfgen/tgfc.py
"""tgfc – tgfgen CLI

사용 예)
    $ python -m tgfgen.tgfc check tests/grammars/expr.tgf -D
    $ python -m tgfgen.tgfc build tests/grammars/expr.tgf --lang cpp    -o out/expr_parser.h  -D
    $ python -m tgfgen.tgfc build tests/grammars/expr.tgf --lang python -o out/expr_parser.py --wide
    $ python -m tgfgen.tgfc parse tests/grammars/expr.tgf --text "1+2"

기능
----
- check : 문법을 읽어 파이프라인(TGF→AST→Grammar) 검증 및 요약 출력
- build : 문법을 읽어 타깃 언어 코드(현재 C++/Python)로 방출
- parse : 문법으로 입력 텍스트를 바로 파싱해 결과를 보여줌

디버그 모드(-D/--debug)를 켜면 단계별 요약을 표준에러로 출력합니다.
"""

from __future__ import annotations
import argparse
import pathlib
import re
import sys
from typing import Optional

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _sanitize_module_name(name: str) -> str:
    """출력 파일명을 C++ 구조체/Python 클래스 식별자로 변환."""
    stem = pathlib.Path(name).stem
    stem = re.sub(r"[^A-Za-z0-9_]", "_", stem)
    if not stem or not re.match(r"[A-Za-z_]", stem[0]):
        stem = "parser_" + (stem or "out")
    return stem

# ------------------------------
# 파이프라인 로딩
# ------------------------------

def _load_pipeline(grammar_path: str, start: str, debug: bool):
    """.tgf 파일을 읽어 AST→Grammar 까지 생성."""
    from .grammar.loader import load_grammar_text
    from .grammar.parser import parse_tgf
    from .grammar.transform import build_grammar

    src = load_grammar_text(grammar_path)
    ast = parse_tgf(src)
    if debug: _eprint("[DEBUG] AST ready | rules=%d char_class_decls=%d" %
                      (len(ast.rules), len(ast.char_classes)))

    g = build_grammar(ast, start)
    if debug: _eprint("[DEBUG] Grammar ready | nonterms=%d prods=%d char_classes=%d start=%s" %
                      (len(g.nts), len(g.prods), len(g.cc), start))
    return src, g


def _print_grammar_summary(g) -> None:
    from .grammar.inspector import GrammarInspector
    gi = GrammarInspector(g)
    _eprint("\n[Grammar]")
    _eprint(f"Start: {gi.nts()[gi.start()]}")
    _eprint("Nonterminals:")
    _eprint("  " + ", ".join(gi.nts()))
    _eprint("Char classes:")
    _eprint("  " + (", ".join(gi.cc_names()) or "(none)"))
    _eprint(f"Productions: {len(gi.prods())}")

# ------------------------------
# 커맨드 구현
# ------------------------------

def cmd_check(args) -> int:
    try:
        src, g = _load_pipeline(args.file, args.start, debug=args.debug)
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if args.debug:
        _print_grammar_summary(g)

    print(f"[CHECK OK] nonterminals={len(g.nts)} productions={len(g.prods)} char_classes={len(g.cc)}")
    return 0


def cmd_build(args) -> int:
    from .codegen.generate import emit_parser_to_string
    try:
        src, g = _load_pipeline(args.file, args.start, debug=args.debug)
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if args.debug:
        _print_grammar_summary(g)

    out_path = pathlib.Path(args.output)
    module_name = args.module or _sanitize_module_name(out_path.name)
    try:
        out = emit_parser_to_string(g, module_name, lang=args.lang, wide=args.wide,
                                    source_text=src, source_name=args.file)
        if not out:
            _eprint(f"[WARN] Grammar has no productions; nothing written to {out_path}")
            return 0
        # 인코딩이 끝난 뒤에만 출력 파일을 연다(실패 시 기존 파일 보존)
        data = out.encode("utf-8")
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(data)
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    print(f"[EMIT] lang={args.lang} -> {out_path}")
    if args.debug:
        _eprint(f"[DEBUG] module={module_name} wide={args.wide} bytes={len(out)}")
    return 0


def cmd_parse(args) -> int:
    """문법으로 입력을 바로 파싱해 수용 여부(또는 오류 위치)를 보여줍니다."""
    from .runtime import Parser
    try:
        _src, g = _load_pipeline(args.file, args.start, debug=False)
        if args.text is not None:
            text = args.text
        else:
            with open(args.input, "r", encoding="utf-8") as f:
                text = f.read()
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    p = Parser(g)
    forest = p.parse(text)
    if forest is None:
        _eprint("[PARSE ERROR]")
        _eprint(str(p.get_error()))
        return 1
    print(f"[PARSE OK] trees={forest.count_trees()}")
    print(forest.tree())
    return 0


# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="tgfc", description="tgfgen parser generator CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="문법을 읽어 Grammar를 구성하고 요약을 출력합니다")
    p_check.add_argument("file", help=".tgf 문법 파일")
    p_check.add_argument("--start", default="start", help="시작 비단말 이름")
    p_check.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_check.set_defaults(func=cmd_check)

    p_build = sub.add_parser("build", help="타깃 언어(C++/Python)용 파서 모듈을 생성합니다")
    p_build.add_argument("file", help=".tgf 문법 파일")
    p_build.add_argument("--lang", choices=["cpp", "python"], default="cpp", help="타깃 언어")
    p_build.add_argument("-o", "--output", required=True, help="출력 파일 경로")
    p_build.add_argument("-m", "--module", help="구조체/클래스 이름(미지정시 출력 파일명에서 유도)")
    p_build.add_argument("--start", default="start", help="시작 비단말 이름")
    p_build.add_argument("--wide", action="store_true", help="char32_t 문자(U 접두사)로 방출")
    p_build.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_build.set_defaults(func=cmd_build)

    p_parse = sub.add_parser("parse", help="문법으로 입력 텍스트를 파싱합니다")
    p_parse.add_argument("file", help=".tgf 문법 파일")
    p_parse.add_argument("--start", default="start", help="시작 비단말 이름")
    src_group = p_parse.add_mutually_exclusive_group(required=True)
    src_group.add_argument("--text", help="직접 입력 텍스트")
    src_group.add_argument("--input", help="입력 텍스트 파일 경로")
    p_parse.set_defaults(func=cmd_parse)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
