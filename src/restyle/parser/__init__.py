"""JavaScript front end: tree-sitter parsing and expression building."""

from restyle.parser.builder import build_expr
from restyle.parser.errors import ParseError
from restyle.parser.locate import ImportInfo, collect_bindings, find_imports, find_style_table
from restyle.parser.tree import Module, iter_nodes, parse_module, walk

__all__ = [
    "ParseError",
    "Module",
    "parse_module",
    "walk",
    "iter_nodes",
    "build_expr",
    "ImportInfo",
    "find_imports",
    "find_style_table",
    "collect_bindings",
]
