"""Build :mod:`restyle.model.expr` values from tree-sitter expression nodes."""

from __future__ import annotations

from tree_sitter import Node

from restyle.model.expr import (
    ArrayLiteral,
    BooleanLiteral,
    Call,
    Expr,
    Identifier,
    MemberAccess,
    NullLiteral,
    NumberLiteral,
    ObjectLiteral,
    Opaque,
    OpaqueMember,
    Property,
    Spread,
    StringLiteral,
    SubscriptAccess,
    TemplateLiteral,
    UnaryOp,
)
from restyle.parser.tree import significant_children


def build_expr(node: Node, source: bytes) -> Expr:
    """Convert a tree-sitter expression node into an :class:`Expr`.

    Parentheses are transparent.  Node kinds the transform never inspects come
    back as :class:`Opaque`.
    """
    kind = node.type
    start, end = node.start_byte, node.end_byte
    text = source[start:end].decode("utf-8")

    if kind == "parenthesized_expression":
        inner = significant_children(node)
        if len(inner) == 1:
            return build_expr(inner[0], source)
        return Opaque(start=start, end=end, text=text, kind=kind)

    if kind == "string":
        return StringLiteral(start=start, end=end, text=text, raw=text[1:-1])

    if kind == "number":
        value = _parse_number(text)
        if value is None:
            return Opaque(start=start, end=end, text=text, kind=kind)
        return NumberLiteral(start=start, end=end, text=text, value=value)

    if kind in ("true", "false"):
        return BooleanLiteral(start=start, end=end, text=text, value=kind == "true")

    if kind == "null":
        return NullLiteral(start=start, end=end, text=text)

    if kind == "identifier":
        return Identifier(start=start, end=end, text=text, name=text)

    if kind == "member_expression":
        obj = node.child_by_field_name("object")
        prop = node.child_by_field_name("property")
        if obj is None or prop is None or prop.type == "private_property_identifier":
            return Opaque(start=start, end=end, text=text, kind=kind)
        return MemberAccess(
            start=start,
            end=end,
            text=text,
            object=build_expr(obj, source),
            property=_node_text(prop, source),
            optional=node.child_by_field_name("optional_chain") is not None,
        )

    if kind == "subscript_expression":
        obj = node.child_by_field_name("object")
        index = node.child_by_field_name("index")
        if obj is None or index is None:
            return Opaque(start=start, end=end, text=text, kind=kind)
        return SubscriptAccess(
            start=start,
            end=end,
            text=text,
            object=build_expr(obj, source),
            index=build_expr(index, source),
        )

    if kind == "unary_expression":
        operator = node.child_by_field_name("operator")
        argument = node.child_by_field_name("argument")
        if operator is None or argument is None:
            return Opaque(start=start, end=end, text=text, kind=kind)
        return UnaryOp(
            start=start,
            end=end,
            text=text,
            operator=_node_text(operator, source),
            argument=build_expr(argument, source),
        )

    if kind == "object":
        members = tuple(_build_member(child, source) for child in significant_children(node))
        return ObjectLiteral(start=start, end=end, text=text, members=members)

    if kind == "array":
        elements = tuple(_build_element(child, source) for child in significant_children(node))
        return ArrayLiteral(start=start, end=end, text=text, elements=elements)

    if kind == "template_string":
        return _build_template(node, source)

    if kind == "call_expression":
        callee = node.child_by_field_name("function")
        args = node.child_by_field_name("arguments")
        # Tagged templates share the call_expression node type.
        if callee is None or args is None or args.type != "arguments":
            return Opaque(start=start, end=end, text=text, kind=kind)
        if node.child_by_field_name("optional_chain") is not None:
            return Opaque(start=start, end=end, text=text, kind=kind)
        return Call(
            start=start,
            end=end,
            text=text,
            callee=build_expr(callee, source),
            arguments=tuple(_build_element(a, source) for a in significant_children(args)),
        )

    return Opaque(start=start, end=end, text=text, kind=kind)


def _node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8")


def _build_member(node: Node, source: bytes) -> Expr:
    start, end = node.start_byte, node.end_byte
    text = _node_text(node, source)
    if node.type == "pair":
        key = node.child_by_field_name("key")
        value = node.child_by_field_name("value")
        if key is None or value is None:
            return OpaqueMember(start=start, end=end, text=text, kind=node.type)
        key_text = _node_text(key, source)
        if key.type == "property_identifier":
            key_kind, key_name = "identifier", key_text
        elif key.type == "string":
            key_kind, key_name = "string", key_text[1:-1]
        elif key.type == "number":
            key_kind, key_name = "number", key_text
        else:
            key_kind, key_name = "computed", key_text
        return Property(
            start=start,
            end=end,
            text=text,
            key=key_name,
            key_kind=key_kind,
            value=build_expr(value, source),
        )
    if node.type == "spread_element":
        return _build_spread(node, source)
    return OpaqueMember(start=start, end=end, text=text, kind=node.type)


def _build_element(node: Node, source: bytes) -> Expr:
    if node.type == "spread_element":
        return _build_spread(node, source)
    return build_expr(node, source)


def _build_spread(node: Node, source: bytes) -> Expr:
    inner = significant_children(node)
    text = _node_text(node, source)
    if not inner:
        return Opaque(start=node.start_byte, end=node.end_byte, text=text, kind=node.type)
    return Spread(
        start=node.start_byte,
        end=node.end_byte,
        text=text,
        argument=build_expr(inner[0], source),
    )


def _build_template(node: Node, source: bytes) -> TemplateLiteral:
    # Quasis are cut from the byte ranges between substitutions so the raw
    # text survives exactly, escapes included.
    quasis: list[str] = []
    expressions: list[Expr] = []
    pos = node.start_byte + 1
    for child in node.named_children:
        if child.type != "template_substitution":
            continue
        quasis.append(source[pos : child.start_byte].decode("utf-8"))
        inner = significant_children(child)
        if inner:
            expressions.append(build_expr(inner[0], source))
        else:
            expressions.append(
                Opaque(start=child.start_byte, end=child.end_byte, text="", kind="empty")
            )
        pos = child.end_byte
    quasis.append(source[pos : node.end_byte - 1].decode("utf-8"))
    return TemplateLiteral(
        start=node.start_byte,
        end=node.end_byte,
        text=_node_text(node, source),
        quasis=tuple(quasis),
        expressions=tuple(expressions),
    )


def _parse_number(text: str) -> int | float | None:
    cleaned = text.replace("_", "")
    if cleaned.endswith("n"):
        return None
    try:
        return int(cleaned, 0)
    except ValueError:
        pass
    try:
        return float(cleaned)
    except ValueError:
        return None
