"""Render declarative style objects as CSS text for styled-component templates.

Follows the conventions of the postcss-js object syntax the style tables were
written against:

    {backgroundColor: "red", fontSize: 12, ":hover": {opacity: 0.5}}

becomes::

    background-color: red;
    font-size: 12px;
    &:hover {
      opacity: 0.5;
    }
"""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from restyle.model.style_table import StyleValue

__all__ = ["UNITLESS", "dashify", "to_css", "component_css"]

INDENT = "  "

# Properties whose bare numbers must not get a ``px`` unit.
UNITLESS = frozenset(
    {
        "box-flex",
        "box-flex-group",
        "column-count",
        "flex",
        "flex-grow",
        "flex-positive",
        "flex-shrink",
        "flex-negative",
        "font-weight",
        "line-clamp",
        "line-height",
        "opacity",
        "order",
        "orphans",
        "tab-size",
        "widows",
        "z-index",
        "zoom",
        "fill-opacity",
        "stroke-dashoffset",
        "stroke-opacity",
        "stroke-width",
    }
)

_UPPER_RE = re.compile(r"([A-Z])")


def dashify(name: str) -> str:
    """Convert a camelCase style key to a CSS property name."""
    if name.startswith("--"):
        return name
    dashed = _UPPER_RE.sub(r"-\1", name)
    if dashed.startswith("ms-"):
        dashed = "-" + dashed
    return dashed.lower()


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _format_value(prop: str, value: StyleValue) -> str | None:
    if value is None or value is False:
        return None
    if value is True:
        return "true"
    if isinstance(value, (int, float)):
        if value == 0 or prop in UNITLESS:
            return _format_number(value)
        return _format_number(value) + "px"
    return str(value)


def _selector(key: str) -> str:
    # Pseudo-selectors attach to the component itself.
    if key.startswith(":"):
        return "&" + key
    return key


def _lines(style: Mapping[str, StyleValue], depth: int) -> list[str]:
    pad = INDENT * depth
    lines: list[str] = []
    for key, value in style.items():
        if value is None:
            continue
        if isinstance(value, dict):
            inner = _lines(value, depth + 1)
            lines.append(f"{pad}{_selector(key)} {{")
            lines.extend(inner)
            lines.append(f"{pad}}}")
            continue
        prop = dashify(key)
        values = value if isinstance(value, list) else [value]
        for item in values:
            if isinstance(item, dict):
                lines.append(f"{pad}{_selector(key)} {{")
                lines.extend(_lines(item, depth + 1))
                lines.append(f"{pad}}}")
                continue
            text = _format_value(prop, item)
            if text is not None:
                lines.append(f"{pad}{prop}: {text};")
    return lines


def to_css(style: Mapping[str, StyleValue], depth: int = 0) -> str:
    """Render *style* as CSS declarations, one per line, indented to *depth*."""
    return "\n".join(_lines(style, depth))


def component_css(
    styles: Iterable[Mapping[str, StyleValue]],
    tag: str,
    specificity_tags: Iterable[str] = ("button", "input"),
) -> str:
    """Combine *styles* into the body of a styled-component template.

    The text starts and ends with a newline.  For tags in *specificity_tags*
    the rules are wrapped in ``&&& { ... }`` so they beat the browser's
    default styling of form controls.  Returns an empty string when no
    declaration survives.
    """
    boosted = tag in tuple(specificity_tags)
    depth = 2 if boosted else 1
    lines: list[str] = []
    for style in styles:
        lines.extend(_lines(style, depth))
    if not lines:
        return ""
    if boosted:
        lines = [f"{INDENT}&&& {{", *lines, f"{INDENT}}}"]
    return "\n" + "\n".join(lines) + "\n"
