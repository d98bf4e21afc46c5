"""Static classification of style expressions and their conversion to plain values."""

from __future__ import annotations

from restyle.model.expr import (
    ArrayLiteral,
    BooleanLiteral,
    Expr,
    NullLiteral,
    NumberLiteral,
    ObjectLiteral,
    Property,
    StringLiteral,
    TemplateLiteral,
    UnaryOp,
)
from restyle.model.style_table import StyleValue


def is_constant(expr: Expr) -> bool:
    """True if *expr* is fully resolvable without running any code.

    Accepts number/string/boolean/null literals, negated numbers, arrays and
    objects built only from constants (object keys must be identifiers or
    strings), and template literals whose substitutions are constant.
    """
    if isinstance(expr, (NumberLiteral, StringLiteral, BooleanLiteral, NullLiteral)):
        return True
    if isinstance(expr, UnaryOp):
        return expr.operator == "-" and isinstance(expr.argument, NumberLiteral)
    if isinstance(expr, ArrayLiteral):
        return all(is_constant(element) for element in expr.elements)
    if isinstance(expr, ObjectLiteral):
        return all(
            isinstance(member, Property)
            and member.key_kind in ("identifier", "string")
            and is_constant(member.value)
            for member in expr.members
        )
    if isinstance(expr, TemplateLiteral):
        return all(is_constant(e) for e in expr.expressions)
    return False


def is_declarative(expr: Expr) -> bool:
    """True if *expr* is an object literal of plain properties, nested objects included.

    Values need not be constant; non-constant values become interpolations.
    """
    if not isinstance(expr, ObjectLiteral):
        return False
    for member in expr.members:
        if not isinstance(member, Property):
            return False
        if isinstance(member.value, ObjectLiteral) and not is_declarative(member.value):
            return False
    return True


def style_value(expr: Expr) -> StyleValue:
    """Convert *expr* to a plain style value.

    Strings come back as raw template text (quotes stripped, escapes kept,
    backticks and ``${`` escaped) so they can be embedded in the generated
    template literal as-is.  Template literals keep their substitutions, and
    any expression that is not a literal becomes a ``${source}``
    interpolation of its own source text.
    """
    if isinstance(expr, StringLiteral):
        return escape_template(expr.raw)
    if isinstance(expr, (NumberLiteral, BooleanLiteral)):
        return expr.value
    if isinstance(expr, NullLiteral):
        return None
    if isinstance(expr, UnaryOp) and expr.operator == "-" and isinstance(expr.argument, NumberLiteral):
        return -expr.argument.value
    if isinstance(expr, ObjectLiteral):
        obj: dict[str, StyleValue] = {}
        for member in expr.members:
            if isinstance(member, Property):
                key = escape_template(member.key) if member.key_kind == "string" else member.key
                obj[key] = style_value(member.value)
        return obj
    if isinstance(expr, ArrayLiteral):
        return [style_value(element) for element in expr.elements]
    if isinstance(expr, TemplateLiteral):
        parts: list[str] = []
        for i, quasi in enumerate(expr.quasis):
            parts.append(quasi)
            if i < len(expr.expressions):
                parts.append("${" + expr.expressions[i].text + "}")
        return "".join(parts)
    return "${" + expr.text + "}"


def escape_template(raw: str) -> str:
    """Escape the characters that would end or interpolate a template literal."""
    out: list[str] = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        if ch == "\\" and i + 1 < len(raw):
            # Existing escapes mean the same thing inside a template.
            out.append(raw[i : i + 2])
            i += 2
            continue
        if ch == "`":
            out.append("\\`")
        elif ch == "$" and raw[i + 1 : i + 2] == "{":
            out.append("\\$")
        else:
            out.append(ch)
        i += 1
    return "".join(out)
