"""Expression model: a closed family of dataclasses for the JS expressions we inspect.

Every node records the byte span it occupies in the module source and its
source text, so analysis results can be turned back into text edits.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Expr:
    """Base class for all expression kinds."""

    start: int
    end: int
    text: str


@dataclass(frozen=True)
class StringLiteral(Expr):
    """A quoted string.  ``raw`` is the text between the quotes, escapes intact."""

    raw: str


@dataclass(frozen=True)
class NumberLiteral(Expr):
    value: int | float


@dataclass(frozen=True)
class BooleanLiteral(Expr):
    value: bool


@dataclass(frozen=True)
class NullLiteral(Expr):
    pass


@dataclass(frozen=True)
class Identifier(Expr):
    name: str


@dataclass(frozen=True)
class MemberAccess(Expr):
    """Static property access: ``object.property`` (or ``object?.property``)."""

    object: Expr
    property: str
    optional: bool = False


@dataclass(frozen=True)
class SubscriptAccess(Expr):
    """Computed property access: ``object[index]``."""

    object: Expr
    index: Expr


@dataclass(frozen=True)
class UnaryOp(Expr):
    operator: str
    argument: Expr


@dataclass(frozen=True)
class Property(Expr):
    """A ``key: value`` member of an object literal.

    ``key_kind`` is one of ``"identifier"``, ``"string"``, ``"number"`` or
    ``"computed"``; ``key`` holds the identifier name, the raw string contents
    or the key's source text respectively.
    """

    key: str
    key_kind: str
    value: Expr


@dataclass(frozen=True)
class Spread(Expr):
    """A ``...argument`` member of an object or array literal."""

    argument: Expr


@dataclass(frozen=True)
class OpaqueMember(Expr):
    """Object members we never look inside: methods, getters, shorthand."""

    kind: str


@dataclass(frozen=True)
class ObjectLiteral(Expr):
    members: tuple[Expr, ...]


@dataclass(frozen=True)
class ArrayLiteral(Expr):
    elements: tuple[Expr, ...]


@dataclass(frozen=True)
class TemplateLiteral(Expr):
    """A template string; ``quasis`` always has one more entry than ``expressions``."""

    quasis: tuple[str, ...]
    expressions: tuple[Expr, ...]


@dataclass(frozen=True)
class Call(Expr):
    callee: Expr
    arguments: tuple[Expr, ...]


@dataclass(frozen=True)
class Opaque(Expr):
    """Any expression kind the transform has no use for (``kind`` is the grammar node type)."""

    kind: str


def is_member_of(expr: Expr, object_name: str) -> bool:
    """True if *expr* is ``object_name.<identifier>`` (no optional chaining)."""
    return (
        isinstance(expr, MemberAccess)
        and not expr.optional
        and isinstance(expr.object, Identifier)
        and expr.object.name == object_name
    )
