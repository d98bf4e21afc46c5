"""Analysis: style attribute shapes, the usage scan and reference resolution."""

from restyle.analysis.elements import Element, iter_elements, read_element
from restyle.analysis.resolver import StyleReferenceResolver
from restyle.analysis.scanner import UsageScanner, scan_usage
from restyle.analysis.shapes import AttributeShape, ShapeKind, classify_style_expression

__all__ = [
    "Element",
    "iter_elements",
    "read_element",
    "AttributeShape",
    "ShapeKind",
    "classify_style_expression",
    "UsageScanner",
    "scan_usage",
    "StyleReferenceResolver",
]
