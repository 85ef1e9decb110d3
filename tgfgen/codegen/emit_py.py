# tgfgen/codegen/emit_py.py
"""Python Code Emit (tgfgen.runtime 위에서 동작하는 단일 모듈 생성).

C++ 방출기와 같은 골격을 Python 클래스로 옮긴다:
  * `# ` 주석 출처 블록
  * `nonterminal` IntEnum (값 = 비단말 ID)
  * `_ts` 단말 문자 테이블, 비단말 이름, 문자 클래스 이름
  * `_load_prods()`: `q(nt(i), (t(j)+...) | (nul))` 형태의 재구성 코드
  * tgfgen.runtime.Parser 에 위임하는 parse/parse_stream/found/get_error
"""

from __future__ import annotations
from .ir import CodegenIR, render_prod_rhs, wrap_items
from .terminals import escape_string


def _fmt_provenance(ir: CodegenIR) -> str:
    return "".join(f"# {line}\n" for line in ir.provenance.splitlines())


def emit_py_to_string(ir: CodegenIR) -> str:
    """
    emit_py_to_string(ir) -> str
    ----------------------------
    CodegenIR을 받아 **하나의 Python 모듈 문자열**을 생성한다.
    module_name은 클래스 이름으로 쓰이므로 유효한 식별자여야 한다.
    """
    enum_src = wrap_items([f"({escape_string(nt)}, {i})" for i, nt in enumerate(ir.enum_names)],
                          " " * 8)
    ts_src = wrap_items(ir.ts_table, " " * 8)
    nts_src = wrap_items([escape_string(nt, ir.wide) for nt in ir.nonterms], " " * 12)
    cc_src = "".join(f"            {escape_string(nm)},\n" for nm in ir.cc_names)
    prods_src = "".join(f"        q(nt({p.lhs}), {render_prod_rhs(p)})\n" for p in ir.prods)

    return (
        f"# This file is generated by tgfgen (tgfc build --lang python)\n"
        f"# from the grammar in file: {ir.source_name}\n"
        f"# The content of the file {ir.source_name} is:\n"
        f"{_fmt_provenance(ir)}\n"
        f"from enum import IntEnum\n"
        f"\n"
        f"from tgfgen.runtime import (\n"
        f"    Grammar, Nonterminals, Parser, Prods, Productions, predefined_char_classes,\n"
        f")\n"
        f"\n"
        f"\n"
        f"class {ir.module_name}:\n"
        f"    nonterminal = IntEnum(\"nonterminal\", [\n"
        f"{enum_src}"
        f"    ])\n"
        f"\n"
        f"    _ts = [\n"
        f"{ts_src}"
        f"    ]\n"
        f"\n"
        f"    def __init__(self):\n"
        f"        self.nts = self._load_nonterminals()\n"
        f"        self.cc = self._load_cc()\n"
        f"        self.g = Grammar(self.nts, self._load_prods(), {ir.start}, self.cc)\n"
        f"        self.p = Parser(self.g)\n"
        f"\n"
        f"    def parse(self, data, size=0, eof=None):\n"
        f"        return self.p.parse(data, size, eof)\n"
        f"\n"
        f"    def parse_stream(self, stream, size=0, eof=None):\n"
        f"        return self.p.parse_stream(stream, size, eof)\n"
        f"\n"
        f"    def found(self):\n"
        f"        return self.p.found()\n"
        f"\n"
        f"    def get_error(self):\n"
        f"        return self.p.get_error()\n"
        f"\n"
        f"    def _t(self, tid):\n"
        f"        return Prods.terminal(self._ts[tid])\n"
        f"\n"
        f"    def _nt(self, ntid):\n"
        f"        return Prods.nonterminal(ntid)\n"
        f"\n"
        f"    def _load_nonterminals(self):\n"
        f"        nts = Nonterminals()\n"
        f"        for nt in (\n"
        f"{nts_src}"
        f"        ):\n"
        f"            nts.get(nt)\n"
        f"        return nts\n"
        f"\n"
        f"    def _load_cc(self):\n"
        f"        return predefined_char_classes([\n"
        f"{cc_src}"
        f"        ], self.nts)\n"
        f"\n"
        f"    def _load_prods(self):\n"
        f"        t, nt = self._t, self._nt\n"
        f"        q, nul = Productions(), Prods.null()\n"
        f"{prods_src}"
        f"        return q\n"
    )
