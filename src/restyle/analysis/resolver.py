"""Style reference resolution: turn recognized style attributes into components."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from restyle.analysis.elements import Element, iter_elements
from restyle.analysis.scanner import table_binder, will_convert_literal
from restyle.analysis.shapes import AttributeShape, ShapeKind, classify_style_expression
from restyle.config import TransformConfig
from restyle.css.converter import component_css, to_css
from restyle.css.values import style_value
from restyle.events import types as events
from restyle.events.bus import EventBus
from restyle.model.diagnostic import Diagnostic, Severity
from restyle.model.edits import EditPlan
from restyle.model.expr import ObjectLiteral, Spread
from restyle.model.span import Span
from restyle.model.style_table import StyleTable, StyleValue, UnparsedTable
from restyle.model.usage import UsageState
from restyle.parser.builder import build_expr
from restyle.parser.tree import Module

if TYPE_CHECKING:
    from restyle.transforms.synthesizer import ComponentSynthesizer

logger = logging.getLogger("restyle")


class StyleReferenceResolver:
    """Walks every JSX element once, in document order, converting what it can.

    Recognized shapes (see :mod:`restyle.analysis.shapes`) whose styles all
    resolve become synthesized components; the attribute is dropped or
    trimmed to what the component does not cover.  Shapes left in place keep
    their table entries and the enhancer alive.
    """

    def __init__(
        self,
        module: Module,
        table: StyleTable | UnparsedTable | None,
        usage: UsageState,
        synthesizer: ComponentSynthesizer,
        plan: EditPlan,
        config: TransformConfig,
        bus: EventBus | None = None,
    ) -> None:
        self.module = module
        self.table = table
        self.usage = usage
        self.synthesizer = synthesizer
        self.plan = plan
        self.config = config
        self.bus = bus
        self.diagnostics: list[Diagnostic] = []

    def resolve(self) -> list[Diagnostic]:
        for element in iter_elements(self.module):
            self.resolve_element(element)
        return self.diagnostics

    def resolve_element(self, element: Element) -> None:
        if element.style_expression is None or element.tag is None:
            return
        expr = build_expr(element.style_expression, self.module.source)
        shape = classify_style_expression(
            expr, self.config.table_identifier, table_binder(self.table)
        )

        if shape.kind is ShapeKind.OPAQUE:
            return
        if shape.kind is ShapeKind.LITERAL:
            self._convert_literal(element, shape)
            return
        if element.tag_text in self.config.sentinel_components:
            # Consumes the raw style object itself.
            self.usage.keep(*shape.names)
            return
        if element.is_namespaced:
            self._leave(shape)
            return
        if not shape.names:
            self.plan.delete(element.style_removal())
            return
        if not isinstance(self.table, StyleTable):
            self._leave(shape)
            return

        styles = self._lookup(shape.names, element)
        if styles is None:
            self._leave(shape)
            return
        css = component_css(styles, element.tag_text, self.config.specificity_tags)
        record = self.synthesizer.synthesize(element, shape.names, css)
        self._rewrite_attribute(element, shape)
        self._emit(events.ComponentSynthesized(record.name, record.element_tag, shape.names))

    # ---- helpers ----

    def _convert_literal(self, element: Element, shape: AttributeShape) -> None:
        if not will_convert_literal(element, self.config, self.table):
            return
        value = style_value(shape.expression)
        css = component_css([value], element.tag_text, self.config.specificity_tags)  # type: ignore[list-item]
        if css:
            record = self.synthesizer.synthesize(element, (), css)
            self._emit(events.ComponentSynthesized(record.name, record.element_tag, ()))
        self.plan.delete(element.style_removal())

    def _lookup(
        self, names: tuple[str, ...], element: Element
    ) -> list[dict[str, StyleValue]] | None:
        """Styles for *names*, or None after warning about the first bad one."""
        assert isinstance(self.table, StyleTable)
        table = self.config.table_identifier
        styles = []
        for name in names:
            entry = self.table.get(name)
            if entry is None or entry.style is None:
                self._warn("unresolved-style", f"Cannot resolve `{table}.{name}`", name, element)
                return None
            if not to_css(entry.style):
                self._warn("empty-style", f"{table}.{name} is empty", name, element)
                return None
            styles.append(entry.style)
        return styles

    def _leave(self, shape: AttributeShape) -> None:
        self.usage.keep(*shape.names)
        self.usage.preserve_wrapper = True

    def _rewrite_attribute(self, element: Element, shape: AttributeShape) -> None:
        if not shape.remainder:
            self.plan.delete(element.style_removal())
            return
        obj = shape.expression
        assert isinstance(obj, ObjectLiteral)
        remainder = shape.remainder
        if len(remainder) == 1 and isinstance(remainder[0], Spread):
            self.plan.replace(Span(obj.start, obj.end), remainder[0].argument.text)
            return
        # Drop the leading spreads and their commas, keep the rest verbatim.
        self.plan.delete(Span(obj.members[0].start, remainder[0].start))

    def _warn(self, code: str, message: str, name: str, element: Element) -> None:
        diagnostic = Diagnostic(
            code=code,
            severity=Severity.WARNING,
            message=message,
            line=element.line,
            style_name=name,
        )
        self.diagnostics.append(diagnostic)
        logger.warning("%s (line %d)", message, element.line)
        self._emit(events.StyleUnresolved(name, message, element.line))

    def _emit(self, event: object) -> None:
        if self.bus is not None:
            self.bus.emit(event)

