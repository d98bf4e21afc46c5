"""Style table model: the module's ``const styles = {...}`` declaration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from restyle.model.span import Span

# A declarative style value: nested mapping of CSS property / selector keys to
# literal values.  Strings are raw template text, ready to embed in a template.
StyleValue = Union[str, int, float, bool, None, list, dict]


@dataclass(frozen=True)
class TableEntry:
    """One ``name: {...}`` property of the style table.

    ``style`` is ``None`` when the entry's value is not a plain object literal
    and therefore cannot be converted.
    """

    name: str
    span: Span
    style: dict[str, StyleValue] | None


@dataclass(frozen=True)
class TableScope:
    """Where the table binding is visible.

    ``region`` is the block (or module) the declaration sits in; ``shadowed``
    are nested regions that declare their own binding of the same name.
    """

    region: Span
    shadowed: tuple[Span, ...] = ()

    def encloses(self, offset: int) -> bool:
        return self.region.start <= offset < self.region.end

    def binds(self, offset: int) -> bool:
        """True if a reference at *offset* resolves to the table declaration."""
        return self.encloses(offset) and not any(
            s.start <= offset < s.end for s in self.shadowed
        )


@dataclass
class StyleTable:
    """The parsed style table plus the spans needed to prune or remove it.

    Attributes:
        identifier: Name the table is bound to (normally ``styles``).
        statement: The whole declaration statement (the ``export`` statement
            when the declaration is exported).
        declarator: The ``styles = ...`` declarator.
        removal: Span to delete when the table goes away entirely.  Covers the
            statement, or just the declarator and one comma when the
            statement declares other names too.
        sole_declarator: True if the statement declares only the table.
        entries: Table entries in source order.
        exported: True if the declaration is exported from the module.
        identity_call: Span of an identity-helper call wrapping the object
            literal, if any.
        scope: Visibility of the table binding; None means module-wide.
    """

    identifier: str
    statement: Span
    declarator: Span
    removal: Span
    sole_declarator: bool
    entries: list[TableEntry] = field(default_factory=list)
    exported: bool = False
    identity_call: Span | None = None
    scope: TableScope | None = None

    def binds(self, offset: int) -> bool:
        """True if a reference at *offset* names this table."""
        return self.scope is None or self.scope.binds(offset)

    def encloses(self, offset: int) -> bool:
        """True if declarations placed after the table are visible at *offset*."""
        return self.scope is None or self.scope.encloses(offset)

    def names(self) -> list[str]:
        return [entry.name for entry in self.entries]

    def get(self, name: str) -> TableEntry | None:
        """Return the entry for *name*; the last one wins for duplicate keys."""
        found = None
        for entry in self.entries:
            if entry.name == name:
                found = entry
        return found

    def __contains__(self, name: object) -> bool:
        return any(entry.name == name for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class UnparsedTable:
    """A style table whose initializer is not a plain object of properties."""

    identifier: str
    statement: Span
    reason: str
    scope: TableScope | None = None

    def binds(self, offset: int) -> bool:
        return self.scope is None or self.scope.binds(offset)
