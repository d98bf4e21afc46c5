"""Synthesized styled components and the per-module registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class ComponentRecord:
    """A generated styled component.

    ``is_intrinsic`` distinguishes built-in elements (``styled.div``) from
    custom components (``styled(Card)``).
    """

    name: str
    element_tag: str
    is_intrinsic: bool
    css_text: str


class ComponentRegistry:
    """Insertion-ordered map of component name to record.

    Insertion order is the order the declarations are emitted in.
    """

    def __init__(self) -> None:
        self._records: dict[str, ComponentRecord] = {}

    def add(self, record: ComponentRecord) -> None:
        if record.name in self._records:
            raise ValueError(f"Duplicate component name: {record.name}")
        self._records[record.name] = record

    def get(self, name: str) -> ComponentRecord | None:
        return self._records.get(name)

    def names(self) -> list[str]:
        return list(self._records)

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __iter__(self) -> Iterator[ComponentRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)
