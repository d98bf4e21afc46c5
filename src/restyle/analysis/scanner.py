"""Usage scan: one walk over the module that decides what must be preserved."""

from __future__ import annotations

from typing import Callable

from tree_sitter import Node

from restyle.analysis.elements import ELEMENT_TYPES, Element, read_element
from restyle.analysis.shapes import ShapeKind, classify_style_expression, needs_runtime
from restyle.config import TransformConfig
from restyle.css.values import style_value
from restyle.model.span import Span
from restyle.model.style_table import StyleTable, UnparsedTable
from restyle.model.usage import UsageState
from restyle.parser.builder import build_expr
from restyle.parser.locate import find_imports
from restyle.parser.tree import Module, same_node, significant_children, walk


def will_convert_literal(
    element: Element,
    config: TransformConfig,
    table: StyleTable | UnparsedTable | None = None,
) -> bool:
    """True if a constant ``style={{...}}`` on *element* is turned into a component.

    Components land next to a style table, so elements the table's block
    does not enclose are left alone.
    """
    return (
        config.convert_inline_literals
        and element.is_intrinsic
        and element.tag_text not in config.sentinel_components
        and (not isinstance(table, StyleTable) or table.encloses(element.node.start_byte))
    )


def table_binder(table: StyleTable | UnparsedTable | None) -> Callable[[int], bool] | None:
    """Offset predicate for references that name *table*; None when there is no table."""
    if table is None:
        return None
    return table.binds


class UsageScanner:
    """Builds the :class:`UsageState` for one module.

    Table references that sit inside a convertible style attribute are skipped;
    every other ``styles.<name>`` keeps ``<name>``; computed or bare references
    keep the whole table; style attributes the resolver cannot handle, and
    enhancer references that are not plain wrapper calls, keep the enhancer.
    """

    def __init__(
        self,
        module: Module,
        table: StyleTable | UnparsedTable | None,
        config: TransformConfig,
    ) -> None:
        self.module = module
        self.table = table
        self.config = config
        self.state = UsageState()
        # Spans of table accesses owned by a convertible attribute shape.
        self._covered: set[tuple[int, int]] = set()
        self._enhancer_extras: set[str] = set()
        self._binds = table_binder(table)

    def scan(self) -> UsageState:
        if isinstance(self.table, UnparsedTable):
            self.state.preserve_all_styles = True
            self.state.preserve_wrapper = True
        elif isinstance(self.table, StyleTable) and self.table.exported:
            self.state.preserve_all_styles = True

        for info in find_imports(self.module):
            if info.module_name == self.config.enhancer_module:
                self._enhancer_extras.update(
                    n for n in info.local_names if n != self.config.enhancer_identifier
                )

        walk(self.module.root, self._visit)
        return self.state

    # ---- visitor ----

    def _visit(self, node: Node) -> bool:
        kind = node.type
        if kind == "import_statement":
            return False
        if (
            kind == "variable_declarator"
            and isinstance(self.table, StyleTable)
            and _is_span(node, self.table.declarator)
        ):
            return False
        if kind in ELEMENT_TYPES:
            self._visit_element(read_element(self.module, node))
            return True
        if kind == "member_expression" and (node.start_byte, node.end_byte) in self._covered:
            return False
        if kind == "identifier":
            name = self.module.text(node)
            if name == self.config.table_identifier:
                if self._names_table(node):
                    self._table_reference(node)
            elif name == self.config.enhancer_identifier:
                self._enhancer_reference(node)
            elif name in self._enhancer_extras:
                self.state.preserve_wrapper = True
        elif kind == "shorthand_property_identifier":
            if self.module.text(node) == self.config.table_identifier and self._names_table(node):
                self.state.preserve_all_styles = True
        return True

    def _visit_element(self, element: Element) -> None:
        if element.style_expression is None:
            return
        expr = build_expr(element.style_expression, self.module.source)
        shape = classify_style_expression(expr, self.config.table_identifier, self._binds)
        if shape.references_table:
            self._covered.update((ref.start, ref.end) for ref in shape.references)
        elif shape.kind is ShapeKind.LITERAL:
            converts = will_convert_literal(element, self.config, self.table)
            if not converts and needs_runtime(style_value(expr)):
                self.state.preserve_wrapper = True
        else:
            self.state.preserve_wrapper = True

    def _names_table(self, node: Node) -> bool:
        return self._binds is None or self._binds(node.start_byte)

    def _table_reference(self, node: Node) -> None:
        parent = node.parent
        if parent is not None and same_node(parent.child_by_field_name("object"), node):
            if parent.type == "member_expression":
                prop = parent.child_by_field_name("property")
                if prop is not None:
                    self.state.keep(self.module.text(prop))
                    return
        # Computed access, or the table itself escaping.
        self.state.preserve_all_styles = True

    def _enhancer_reference(self, node: Node) -> None:
        parent = node.parent
        if parent is None:
            return
        if parent.type == "decorator":
            return
        if parent.type == "call_expression" and same_node(parent.child_by_field_name("function"), node):
            if is_wrapper_call(parent):
                return
        self.state.preserve_wrapper = True


def is_wrapper_call(call: Node) -> bool:
    """True for ``wrapper(x)``: exactly one plain argument and not itself called."""
    args = call.child_by_field_name("arguments")
    if args is None or args.type != "arguments":
        return False
    values = significant_children(args)
    if len(values) != 1 or values[0].type == "spread_element":
        return False
    outer = call.parent
    if outer is not None and outer.type == "call_expression":
        if same_node(outer.child_by_field_name("function"), call):
            return False
    return True


def _is_span(node: Node, span: Span) -> bool:
    return node.start_byte == span.start and node.end_byte == span.end


def scan_usage(
    module: Module,
    table: StyleTable | UnparsedTable | None,
    config: TransformConfig | None = None,
) -> UsageState:
    """Run the usage scan and return the populated :class:`UsageState`."""
    return UsageScanner(module, table, config or TransformConfig()).scan()
