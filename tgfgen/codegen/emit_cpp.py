# tgfgen/codegen/emit_cpp.py
"""C++ Code Emit (IDNI parser.h 용 단일 헤더 생성).

개요
----
- CodegenIR을 받아 C++ 소스 코드를 **문자열로** 생성한다.
- 방출되는 구조체는:
  * 원본 문법을 `// ` 주석으로 담은 출처 블록
  * `enum struct nonterminal` 상수
  * 비단말 이름/문자 클래스 이름/단말 문자 테이블
  * `load_prods()`: 프로덕션 재구성 코드
  * idni::parser 에 위임하는 parse/found/get_error 래퍼
- 생성된 헤더는 런타임에 문법 파일을 읽지 않는다.
"""

from __future__ import annotations
from .ir import CodegenIR, render_prod_rhs, wrap_items
from .terminals import escape_string


def _char_type(ir: CodegenIR) -> str:
    return "char32_t" if ir.wide else "char"


def _fmt_provenance(ir: CodegenIR) -> str:
    return "".join(f"// {line}\n" for line in ir.provenance.splitlines())


def _fmt_prods(ir: CodegenIR) -> str:
    return "".join(f"\t\tq(nt({p.lhs}), {render_prod_rhs(p)});\n" for p in ir.prods)


def emit_cpp_to_string(ir: CodegenIR) -> str:
    """
    emit_cpp_to_string(ir) -> str
    -----------------------------
    CodegenIR을 받아 **하나의 C++ 헤더 문자열**을 생성한다.
    """
    name = ir.module_name
    cht = _char_type(ir)
    eof = f"std::char_traits<{cht}>::eof()"

    nts_enum = wrap_items(ir.enum_names, "\t\t\t")
    nts_names = wrap_items([escape_string(nt, ir.wide) for nt in ir.nonterms], "\t\t\t")
    cc_names = "".join(f"\t\t\t{escape_string(nm)},\n" for nm in ir.cc_names)
    ts_src = wrap_items(ir.ts_table, "\t\t")

    return (
        f"// This file is generated by tgfgen (tgfc build --lang cpp)\n"
        f"// from the grammar in file: {ir.source_name}\n"
        f"// The content of the file {ir.source_name} is:\n"
        f"{_fmt_provenance(ir)}\n"
        f"#include <string.h>\n"
        f"#include \"parser.h\"\n"
        f"struct {name} {{\n"
        f"\t{name}() :\n"
        f"\t\tnts(load_nonterminals()), cc(load_cc()),\n"
        f"\t\tg(nts, load_prods(), nt({ir.start}), cc), p(g) {{ }}\n"
        f"\tstd::unique_ptr<typename idni::parser<{cht}>::pforest> parse(\n"
        f"\t\tconst {cht}* data, size_t size = 0,\n"
        f"\t\t{cht} eof = {eof})\n"
        f"\t\t\t{{ return p.parse(data, size, eof); }}\n"
        f"\tstd::unique_ptr<typename idni::parser<{cht}>::pforest> parse(\n"
        f"\t\tstd::basic_istream<{cht}>& is,\n"
        f"\t\tsize_t size = 0,\n"
        f"\t\t{cht} eof = {eof})\n"
        f"\t\t\t{{ return p.parse(is, size, eof); }}\n"
        f"\tbool found() {{ return p.found(); }}\n"
        f"\ttypename idni::parser<{cht}>::perror_t get_error()\n"
        f"\t\t{{ return p.get_error(); }}\n"
        f"\tenum struct nonterminal : size_t {{\n"
        f"{nts_enum}"
        f"\t}};\n"
        f"private:\n"
        f"\tstd::vector<{cht}> ts{{\n"
        f"{ts_src}"
        f"\t}};\n"
        f"\tidni::nonterminals<{cht}> nts{{}};\n"
        f"\tidni::char_class_fns<{cht}> cc;\n"
        f"\tidni::grammar<{cht}> g;\n"
        f"\tidni::parser<{cht}> p;\n"
        f"\tidni::prods<{cht}> t(size_t tid) {{\n"
        f"\t\treturn idni::prods<{cht}>(ts[tid]);\n"
        f"\t}}\n"
        f"\tidni::prods<{cht}> nt(size_t ntid) {{\n"
        f"\t\treturn idni::prods<{cht}>(idni::lit<{cht}>(ntid, &nts));\n"
        f"\t}}\n"
        f"\tidni::nonterminals<{cht}> load_nonterminals() const {{\n"
        f"\t\tidni::nonterminals<{cht}> nts{{}};\n"
        f"\t\tfor (const auto& nt : {{\n"
        f"{nts_names}"
        f"\t\t}}) nts.get(nt);\n"
        f"\t\treturn nts;\n"
        f"\t}}\n"
        f"\tidni::char_class_fns<{cht}> load_cc() {{\n"
        f"\t\treturn idni::predefined_char_classes<{cht}>({{\n"
        f"{cc_names}"
        f"\t\t}}, nts);\n"
        f"\t}}\n"
        f"\tidni::prods<{cht}> load_prods() {{\n"
        f"\t\tidni::prods<{cht}> q, nul(idni::lit<{cht}>{{}});\n"
        f"{_fmt_prods(ir)}"
        f"\t\treturn q;\n"
        f"\t}}\n"
        f"}};\n"
    )
