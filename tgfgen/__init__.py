# tgfgen/__init__.py
"""tgfgen: TGF grammar to standalone parser module generator.

- grammar : TGF parser/builder and the Grammar model
- codegen : IR encoding and C++/Python emitters
- runtime : Earley engine used by generated Python modules
"""

from .codegen.generate import (
    emit_parser_to_string, generate_parser, generate_parser_from_file,
    generate_parser_from_string,
)
from .grammar.transform import build_grammar, grammar_from_string, load_grammar
