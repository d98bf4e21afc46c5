"""Byte ranges into the module source."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Span start {self.start} is after end {self.end}")

    def contains(self, other: Span) -> bool:
        return self.start <= other.start and other.end <= self.end
