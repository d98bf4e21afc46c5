from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TransformConfig:
    table_identifier: str = "styles"
    enhancer_identifier: str = "Radium"
    enhancer_module: str = "radium"
    identity_helper: str = "prefixStyles"
    styled_identifier: str = "styled"
    styled_module: str = "styled-components"
    sentinel_components: tuple[str, ...] = ("ReactModal",)
    specificity_tags: tuple[str, ...] = ("button", "input")
    convert_inline_literals: bool = True
