"""Classification of ``style={...}`` attribute expressions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from restyle.css.values import is_constant
from restyle.model.expr import ArrayLiteral, Expr, ObjectLiteral, Spread, is_member_of
from restyle.model.style_table import StyleValue


class ShapeKind(Enum):
    """How a style attribute relates to the style table."""

    DIRECT = "direct"  # style={styles.a}
    MERGE_OBJECT = "merge_object"  # style={{...styles.a, ...styles.b, rest}}
    MERGE_ARRAY = "merge_array"  # style={[styles.a, styles.b]}
    LITERAL = "literal"  # style={{color: "red"}}
    OPAQUE = "opaque"  # anything else


@dataclass(frozen=True)
class AttributeShape:
    """Result of classifying one style expression.

    Attributes:
        kind: The matched shape.
        expression: The classified expression.
        names: Style table entries the shape extracts, in order.
        references: The ``styles.<name>`` accesses covered by the shape.
        remainder: Object members left after a strict merge-object prefix.
    """

    kind: ShapeKind
    expression: Expr
    names: tuple[str, ...] = ()
    references: tuple[Expr, ...] = ()
    remainder: tuple[Expr, ...] = ()

    @property
    def references_table(self) -> bool:
        return self.kind in (ShapeKind.DIRECT, ShapeKind.MERGE_OBJECT, ShapeKind.MERGE_ARRAY)


def classify_style_expression(
    expr: Expr, table: str, binds: Callable[[int], bool] | None = None
) -> AttributeShape:
    """Match *expr* against the recognized style attribute shapes.

    *binds* tells whether a reference at a given offset names the table; a
    ``table.x`` access it rejects belongs to another binding and is opaque.
    """

    def is_table_ref(e: Expr) -> bool:
        return is_member_of(e, table) and (binds is None or binds(e.start))

    if is_table_ref(expr):
        return AttributeShape(ShapeKind.DIRECT, expr, (expr.property,), (expr,))  # type: ignore[attr-defined]

    if isinstance(expr, ObjectLiteral):
        prefix: list[Expr] = []
        for member in expr.members:
            if isinstance(member, Spread) and is_table_ref(member.argument):
                prefix.append(member.argument)
            else:
                break
        if prefix or not expr.members:
            return AttributeShape(
                ShapeKind.MERGE_OBJECT,
                expr,
                tuple(ref.property for ref in prefix),  # type: ignore[attr-defined]
                tuple(prefix),
                expr.members[len(prefix) :],
            )
        if is_constant(expr):
            return AttributeShape(ShapeKind.LITERAL, expr)
        return AttributeShape(ShapeKind.OPAQUE, expr)

    if isinstance(expr, ArrayLiteral):
        # Only arrays made entirely of table references convert: the generated
        # component cannot take a list-valued style prop.
        if all(is_table_ref(element) for element in expr.elements):
            return AttributeShape(
                ShapeKind.MERGE_ARRAY,
                expr,
                tuple(element.property for element in expr.elements),  # type: ignore[attr-defined]
                expr.elements,
            )
        return AttributeShape(ShapeKind.OPAQUE, expr)

    return AttributeShape(ShapeKind.OPAQUE, expr)


def needs_runtime(value: StyleValue) -> bool:
    """True if an inline style value relies on the enhancer (nested rules or fallbacks)."""
    if not isinstance(value, dict):
        return False
    return any(isinstance(v, (dict, list)) for v in value.values())
