# tgfgen/runtime/__init__.py
"""Runtime support for generated parser modules.

A generated module rebuilds its grammar from literal tables with:
- Nonterminals, Prods, Productions, Grammar (grammar model + combinators)
- predefined_char_classes (named character-class predicates)
and delegates parsing to Parser (Earley recognizer returning a Forest).
"""

from ..grammar.model import (
    EPSILON, CharClassFns, Grammar, Nonterminals, NonterminalRef, Production,
    Prods, Productions, TerminalRef,
)
from ..grammar.charclass import CHAR_CLASSES, predefined_char_classes
from .earley import Forest, Leaf, Node, ParseError, Parser
