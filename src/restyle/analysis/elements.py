"""JSX element access: tag names and the ``style`` attribute."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

from tree_sitter import Node

from restyle.model.span import Span
from restyle.parser.tree import Module, iter_nodes, significant_children

_INTRINSIC_RE = re.compile(r"^[a-z]")

ELEMENT_TYPES = ("jsx_opening_element", "jsx_self_closing_element")


@dataclass(frozen=True)
class Element:
    """An opening or self-closing JSX tag.

    ``style_expression`` is the expression inside ``style={...}``, or None when
    the element has no style attribute with an expression value.
    """

    node: Node
    tag: Node | None
    tag_text: str
    closing_tag: Node | None
    style_attribute: Node | None
    style_expression: Node | None

    @property
    def is_intrinsic(self) -> bool:
        """Built-in markup element (``div``, ``button``) rather than a component."""
        return self.tag is not None and self.tag.type == "identifier" and bool(
            _INTRINSIC_RE.match(self.tag_text)
        )

    @property
    def is_namespaced(self) -> bool:
        return self.tag is not None and self.tag.type == "jsx_namespace_name"

    @property
    def line(self) -> int:
        return self.node.start_point[0] + 1

    def style_removal(self) -> Span:
        """Span that removes the style attribute along with the whitespace before it."""
        attr = self.style_attribute
        if attr is None:
            raise ValueError("Element has no style attribute")
        previous = attr.prev_sibling
        start = previous.end_byte if previous is not None else attr.start_byte
        return Span(start, attr.end_byte)


def read_element(module: Module, node: Node) -> Element:
    tag = node.child_by_field_name("name")
    closing = None
    if node.type == "jsx_opening_element" and node.parent is not None:
        close = node.parent.child_by_field_name("close_tag")
        if close is not None:
            closing = close.child_by_field_name("name")
    style_attribute, style_expression = _style_attribute(module, node)
    return Element(
        node=node,
        tag=tag,
        tag_text=module.text(tag) if tag is not None else "",
        closing_tag=closing,
        style_attribute=style_attribute,
        style_expression=style_expression,
    )


def iter_elements(module: Module) -> Iterator[Element]:
    """Every JSX element in the module, outer elements before inner ones."""
    for node in iter_nodes(module.root, ELEMENT_TYPES):
        yield read_element(module, node)


def _style_attribute(module: Module, node: Node) -> tuple[Node | None, Node | None]:
    for attr in node.named_children:
        if attr.type != "jsx_attribute":
            continue
        parts = significant_children(attr)
        if len(parts) < 2 or module.text(parts[0]) != "style":
            continue
        value = parts[-1]
        if value.type != "jsx_expression":
            continue
        inner = significant_children(value)
        if len(inner) != 1 or inner[0].type in ("spread_element", "sequence_expression"):
            continue
        return attr, inner[0]
    return None, None
