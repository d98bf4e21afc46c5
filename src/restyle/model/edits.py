"""Edit plan: byte-range edits accumulated during analysis, applied in one batch."""

from __future__ import annotations

from dataclasses import dataclass, field

from restyle.model.span import Span


class EditConflictError(ValueError):
    """Raised when two planned edits touch overlapping source ranges."""

    def __init__(self, first: TextEdit, second: TextEdit) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"Overlapping edits: [{first.start}, {first.end}) and [{second.start}, {second.end})"
        )


@dataclass(frozen=True)
class TextEdit:
    """Replace source bytes ``[start, end)`` with ``text``.  Empty ranges insert."""

    start: int
    end: int
    text: str = ""
    # Orders insertions that share a position: lower goes first.
    order: int = 0

    def overlaps(self, other: TextEdit) -> bool:
        # Insertions at the edge of a replacement never conflict with it.
        if self.start == self.end or other.start == other.end:
            return other.start < self.start < other.end or self.start < other.start < self.end
        return self.start < other.end and other.start < self.end


@dataclass
class EditPlan:
    """An ordered collection of non-overlapping text edits."""

    edits: list[TextEdit] = field(default_factory=list)

    def replace(self, span: Span, text: str) -> None:
        self.add(TextEdit(span.start, span.end, text))

    def delete(self, span: Span) -> None:
        self.add(TextEdit(span.start, span.end, ""))

    def insert(self, position: int, text: str, order: int = 0) -> None:
        self.add(TextEdit(position, position, text, order))

    def add(self, edit: TextEdit) -> None:
        for existing in self.edits:
            if existing.overlaps(edit):
                raise EditConflictError(existing, edit)
        self.edits.append(edit)

    def __len__(self) -> int:
        return len(self.edits)

    def __bool__(self) -> bool:
        return bool(self.edits)

    def apply(self, source: bytes) -> bytes:
        """Return *source* with every edit applied."""
        # Back to front so earlier offsets stay valid.  Same-position
        # insertions are applied in reverse order so they read in order.
        ordered = sorted(
            enumerate(self.edits),
            key=lambda item: (item[1].start, item[1].end, item[1].order, item[0]),
            reverse=True,
        )
        result = source
        for _, edit in ordered:
            result = result[: edit.start] + edit.text.encode("utf-8") + result[edit.end :]
        return result
