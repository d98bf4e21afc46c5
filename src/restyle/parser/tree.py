"""tree-sitter front end: parse a JS/JSX module and walk its syntax tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser, Tree

from restyle.model.span import Span
from restyle.parser.errors import ParseError

JS_LANGUAGE = Language(tree_sitter_javascript.language())


@dataclass
class Module:
    """A parsed module: the source bytes plus the tree-sitter tree over them."""

    source: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8")


def parse_module(source: str) -> Module:
    """Parse *source* as a JavaScript (JSX) module.

    Raises :class:`ParseError` at the first syntax error: rewriting around a
    partially understood tree could corrupt the file.
    """
    data = source.encode("utf-8")
    tree = Parser(JS_LANGUAGE).parse(data)
    if tree.root_node.has_error:
        bad = _first_error(tree.root_node)
        if bad is None:
            raise ParseError("Syntax error")
        row, column = bad.start_point[0], bad.start_point[1]
        what = f"missing {bad.type}" if bad.is_missing else "unexpected input"
        raise ParseError(
            f"Syntax error at line {row + 1}, column {column + 1}: {what}",
            line=row + 1,
            column=column + 1,
        )
    return Module(source=data, tree=tree)


def _first_error(node: Node) -> Node | None:
    for child in node.children:
        if child.type == "ERROR" or child.is_missing:
            return child
        if child.has_error:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def walk(node: Node, visit: Callable[[Node], bool]) -> None:
    """Pre-order walk over named nodes.  *visit* returns False to skip children."""
    stack = [node]
    while stack:
        current = stack.pop()
        if visit(current):
            stack.extend(reversed(current.named_children))


def iter_nodes(node: Node, types: Iterable[str]) -> Iterator[Node]:
    """Yield every named node of the given types under *node*, in document order."""
    wanted = set(types)
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type in wanted:
            yield current
        stack.extend(reversed(current.named_children))


def significant_children(node: Node) -> list[Node]:
    """Named children of *node* without comments."""
    return [child for child in node.named_children if child.type != "comment"]


def same_node(a: Node | None, b: Node | None) -> bool:
    if a is None or b is None:
        return False
    return a.start_byte == b.start_byte and a.end_byte == b.end_byte and a.type == b.type


def line_span(source: bytes, start: int, end: int) -> Span:
    """Widen ``[start, end)`` to whole lines when nothing else shares them.

    Used when deleting statements so no blank line or stray indentation is
    left behind.
    """
    s = start
    while s > 0 and source[s - 1 : s] in (b" ", b"\t"):
        s -= 1
    at_line_start = s == 0 or source[s - 1 : s] == b"\n"
    e = end
    while e < len(source) and source[e : e + 1] in (b" ", b"\t"):
        e += 1
    if source[e : e + 2] == b"\r\n":
        e += 2
    elif source[e : e + 1] == b"\n":
        e += 1
    elif e < len(source):
        return Span(start, end)
    return Span(s if at_line_start else start, e)
