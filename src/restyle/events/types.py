"""Event types emitted while transforming a module."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TableParsed:
    identifier: str
    entries: int


@dataclass(frozen=True)
class TableSkipped:
    identifier: str
    reason: str


@dataclass(frozen=True)
class ComponentSynthesized:
    name: str
    element_tag: str
    style_names: tuple[str, ...]


@dataclass(frozen=True)
class StyleUnresolved:
    style_name: str
    message: str
    line: int


@dataclass(frozen=True)
class ModuleTransformed:
    components: int
    table_removed: bool
    wrapper_removed: bool
