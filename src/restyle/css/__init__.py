"""Style value classification and CSS rendering."""

from restyle.css.converter import UNITLESS, component_css, dashify, to_css
from restyle.css.values import escape_template, is_constant, is_declarative, style_value

__all__ = [
    "UNITLESS",
    "dashify",
    "to_css",
    "component_css",
    "is_constant",
    "is_declarative",
    "style_value",
    "escape_template",
]
