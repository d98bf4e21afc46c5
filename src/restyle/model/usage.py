"""Usage state: what the rest of the module still needs from the style table."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class UsageState:
    """Per-module preservation record built by the usage scan.

    Attributes:
        preserve_wrapper: Some style usage still needs the runtime enhancer,
            so its call and import must stay.
        preserve_all_styles: The table escapes static analysis (computed
            access, bare reference, export), so no entry may be pruned.
        kept_names: Table entries referenced outside a convertible attribute.
    """

    preserve_wrapper: bool = False
    preserve_all_styles: bool = False
    kept_names: set[str] = field(default_factory=set)

    def keep(self, *names: str) -> None:
        self.kept_names.update(names)
