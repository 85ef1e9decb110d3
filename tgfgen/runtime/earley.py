# tgfgen/runtime/earley.py
"""Earley recognizer + packed parse forest.

- Works directly on characters: terminals are single characters, char-class
  nonterminals match one character through their predicate.
- Nullable nonterminals are advanced at prediction time (Aycock/Horspool),
  so epsilon productions need no special completion pass.
- The end of input is a virtual symbol (None) that only the `eof` char
  class matches; the start symbol may span the input with or without it.
- Parse failures are not exceptions: parse() returns None and the error
  record is available through get_error().
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, NamedTuple, Optional, Set, Tuple, Union

from ..grammar.model import EPSILON, Grammar, NonterminalRef, TerminalRef

# (lhs, alt index, dot, origin)
Item = Tuple[int, int, int, int]


class Node(NamedTuple):
    nt: int
    start: int
    end: int

class Leaf(NamedTuple):
    ch: str
    pos: int

Child = Union[Node, Leaf]


def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    start = src.rfind("\n", 0, pos)
    start = 0 if start < 0 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end < 0 else end
    return start, end


@dataclass
class ParseError:
    """Error record of the last failed parse (furthest position reached)."""
    pos: int
    line: int
    col: int
    unexpected: Optional[str]
    expected: List[str]
    text: str = field(default="", repr=False)

    def snippet(self) -> str:
        start, end = _line_bounds(self.text, self.pos)
        return f"{self.text[start:end]}\n{' ' * (self.col - 1)}^"

    def __str__(self) -> str:
        exp = ", ".join(self.expected)
        if self.unexpected is None:
            head = f"Parse error at EOF: expected one of {{{exp}}}"
        else:
            head = (f"Parse error at {self.line}:{self.col}: unexpected {self.unexpected!r}, "
                    f"expected one of {{{exp}}}")
        return head + "\n" + self.snippet()


class Forest:
    """Packed forest over completed spans. Children are computed lazily."""

    def __init__(self, parser: "Parser", symbols: List[Optional[str]],
                 done: Set[Tuple[int, int, int]], root: Node):
        self._p = parser
        self._symbols = symbols
        self._done = done
        self._packs: Dict[Node, List[Tuple[Child, ...]]] = {}
        self.root = root

    def name_of(self, node: Node) -> str:
        return self._p.g.nts[node.nt]

    def children(self, node: Node) -> List[Tuple[Child, ...]]:
        """Packed alternatives of node; each is a tuple of child nodes/leaves."""
        packs = self._packs.get(node)
        if packs is not None:
            return packs
        packs = []
        if not self._p.g.cc.is_pred(node.nt):
            for rhs in self._p._alts.get(node.nt, []):
                for split in self._splits(rhs, 0, node.start, node.end):
                    pack = tuple(split)
                    if pack not in packs:
                        packs.append(pack)
        self._packs[node] = packs
        return packs

    def _splits(self, rhs: Tuple, k: int, pos: int, end: int) -> List[List[Child]]:
        if k == len(rhs):
            return [[]] if pos == end else []
        sym = rhs[k]
        out: List[List[Child]] = []
        if isinstance(sym, TerminalRef):
            if pos < end and self._symbols[pos] == sym.ch:
                for rest in self._splits(rhs, k + 1, pos + 1, end):
                    out.append([Leaf(sym.ch, pos)] + rest)
            return out
        for e in range(pos, end + 1):
            if (sym.id, pos, e) in self._done:
                for rest in self._splits(rhs, k + 1, e, end):
                    out.append([Node(sym.id, pos, e)] + rest)
        return out

    def tree(self, node: Optional[Node] = None):
        """One derivation as nested `(name, [children])`; characters are leaves."""
        return self._tree(node or self.root, frozenset())

    def _tree(self, node: Node, path: FrozenSet[Node]):
        name = self.name_of(node)
        if self._p.g.cc.is_pred(node.nt):
            ch = self._symbols[node.start]
            return (name, [ch] if ch is not None else [])
        path = path | {node}
        for pack in self.children(node):
            kids = []
            for c in pack:
                if isinstance(c, Leaf):
                    kids.append(c.ch)
                    continue
                sub = None if c in path else self._tree(c, path)
                if sub is None:
                    break
                kids.append(sub)
            else:
                return (name, kids)
        return None

    def count_trees(self, node: Optional[Node] = None) -> int:
        """Number of acyclic derivations below node."""
        return self._count(node or self.root, frozenset())

    def _count(self, node: Node, path: FrozenSet[Node]) -> int:
        if self._p.g.cc.is_pred(node.nt):
            return 1
        path = path | {node}
        total = 0
        for pack in self.children(node):
            n = 1
            for c in pack:
                if isinstance(c, Node):
                    n *= 0 if c in path else self._count(c, path)
            total += n
        return total


class Parser:
    def __init__(self, g: Grammar):
        self.g = g
        self._alts: Dict[int, List[Tuple]] = {
            lhs: [tuple(l for l in alt if l is not EPSILON) for alt in alts]
            for lhs, alts in g.by_lhs().items()
        }
        self._nullable = self._compute_nullable()
        self._found = False
        self._error: Optional[ParseError] = None

    def _compute_nullable(self) -> Set[int]:
        nullable: Set[int] = set()
        changed = True
        while changed:
            changed = False
            for lhs, alts in self._alts.items():
                if lhs in nullable or self.g.cc.is_pred(lhs):
                    continue
                for rhs in alts:
                    if all(isinstance(s, NonterminalRef) and s.id in nullable for s in rhs):
                        nullable.add(lhs)
                        changed = True
                        break
        return nullable

    # ---- public API ----
    def parse(self, data, size: int = 0, eof: Optional[str] = None) -> Optional[Forest]:
        """Parse a str/bytes buffer (or a stream). size > 0 limits the input;
        input also stops at the first `eof` character when given."""
        if hasattr(data, "read"):
            return self.parse_stream(data, size, eof)
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode("latin-1")
        text = data[:size] if size else data
        if eof is not None:
            cut = text.find(eof)
            if cut >= 0:
                text = text[:cut]
        return self._run(text)

    def parse_stream(self, stream, size: int = 0, eof: Optional[str] = None) -> Optional[Forest]:
        data = stream.read(size) if size else stream.read()
        return self.parse(data, 0, eof)

    def found(self) -> bool:
        return self._found

    def get_error(self) -> Optional[ParseError]:
        return self._error

    # ---- recognizer ----
    def _run(self, text: str) -> Optional[Forest]:
        g = self.g
        n = len(text)
        symbols: List[Optional[str]] = list(text) + [None]
        sets: List[List[Item]] = [[] for _ in range(n + 2)]
        seen: List[Set[Item]] = [set() for _ in range(n + 2)]
        waiting: List[Dict[int, List[Item]]] = [{} for _ in range(n + 2)]
        done: Set[Tuple[int, int, int]] = set()

        def add(i: int, item: Item) -> None:
            if item not in seen[i]:
                seen[i].add(item)
                sets[i].append(item)

        for a in range(len(self._alts.get(g.start, []))):
            add(0, (g.start, a, 0, 0))

        for i in range(n + 2):
            agenda = sets[i]
            predicted: Set[int] = set()
            k = 0
            while k < len(agenda):
                lhs, a, dot, org = agenda[k]
                k += 1
                rhs = self._alts[lhs][a]
                if dot == len(rhs):
                    done.add((lhs, org, i))
                    for (l2, a2, d2, o2) in list(waiting[org].get(lhs, ())):
                        add(i, (l2, a2, d2 + 1, o2))
                    continue
                sym = rhs[dot]
                nxt = (lhs, a, dot + 1, org)
                if isinstance(sym, TerminalRef):
                    if i <= n and symbols[i] == sym.ch:
                        add(i + 1, nxt)
                    continue
                nid = sym.id
                if g.cc.is_pred(nid):
                    if i <= n and g.cc.match(nid, symbols[i]):
                        done.add((nid, i, i + 1))
                        add(i + 1, nxt)
                    continue
                waiting[i].setdefault(nid, []).append((lhs, a, dot, org))
                if nid not in predicted:
                    predicted.add(nid)
                    for b in range(len(self._alts.get(nid, []))):
                        add(i, (nid, b, 0, i))
                if nid in self._nullable:
                    add(i, nxt)

        root = None
        for end in (n + 1, n):
            if (g.start, 0, end) in done:
                root = Node(g.start, 0, end)
                break
        self._found = root is not None
        if root is None:
            self._error = self._make_error(text, sets)
            return None
        self._error = None
        return Forest(self, symbols, done, root)

    def _make_error(self, text: str, sets: List[List[Item]]) -> ParseError:
        n = len(text)
        pos = max(i for i in range(n + 1) if sets[i] or i == 0)
        expected: List[str] = []
        for lhs, a, dot, _org in sets[pos]:
            rhs = self._alts[lhs][a]
            if dot == len(rhs):
                continue
            sym = rhs[dot]
            if isinstance(sym, TerminalRef):
                label = repr(sym.ch)
            elif self.g.cc.is_pred(sym.id):
                label = self.g.nts[sym.id]
            else:
                continue
            if label not in expected:
                expected.append(label)
        line_start, _ = _line_bounds(text, pos)
        return ParseError(
            pos=pos,
            line=text.count("\n", 0, pos) + 1,
            col=pos - line_start + 1,
            unexpected=text[pos] if pos < n else None,
            expected=sorted(expected),
            text=text,
        )
