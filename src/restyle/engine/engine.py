"""Transform engine: scan, resolve and rewrite one module."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from restyle.analysis.resolver import StyleReferenceResolver
from restyle.analysis.scanner import scan_usage
from restyle.config import TransformConfig
from restyle.events import types as events
from restyle.events.bus import EventBus
from restyle.model.component import ComponentRecord, ComponentRegistry
from restyle.model.diagnostic import Diagnostic, Severity
from restyle.model.edits import EditPlan
from restyle.model.style_table import StyleTable, UnparsedTable
from restyle.model.usage import UsageState
from restyle.parser.locate import collect_bindings, find_style_table
from restyle.parser.tree import parse_module
from restyle.transforms.rewriter import RewriteSummary, TreeRewriter
from restyle.transforms.synthesizer import ComponentSynthesizer, render_declaration

logger = logging.getLogger("restyle")


@dataclass(frozen=True)
class TransformResult:
    """Outcome of transforming one module.

    Attributes:
        source: The rewritten module source.
        original: The source as given.
        components: Synthesized components in emission order.
        usage: The final usage state.
        diagnostics: Warnings and notes produced along the way.
        table: The style table found in the module, if any.
        summary: What the module-level rewrite did.
    """

    source: str
    original: str
    components: tuple[ComponentRecord, ...] = ()
    usage: UsageState = field(default_factory=UsageState)
    diagnostics: tuple[Diagnostic, ...] = ()
    table: StyleTable | UnparsedTable | None = None
    summary: RewriteSummary = field(default_factory=RewriteSummary)

    @property
    def changed(self) -> bool:
        return self.source != self.original

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_warning]


class StyleMigrationEngine:
    """Runs the scan -> resolve -> rewrite pipeline over single modules.

    The engine keeps no state between :meth:`run` calls.
    """

    def __init__(self, config: TransformConfig | None = None, bus: EventBus | None = None) -> None:
        self.config = config or TransformConfig()
        self.bus = bus

    def run(self, source: str) -> TransformResult:
        """Transform *source*; raises :class:`~restyle.parser.ParseError` on bad syntax."""
        config = self.config
        module = parse_module(source)
        diagnostics: list[Diagnostic] = []

        table = find_style_table(module, config.table_identifier, config.identity_helper)
        if isinstance(table, UnparsedTable):
            message = f"Leaving `{table.identifier}` unconverted: {table.reason}"
            diagnostics.append(
                Diagnostic(
                    code="non-declarative-table",
                    severity=Severity.INFO,
                    message=message,
                    line=_line_of(module.source, table.statement.start),
                )
            )
            logger.info(message)
            self._emit(events.TableSkipped(table.identifier, table.reason))
        elif isinstance(table, StyleTable):
            self._emit(events.TableParsed(table.identifier, len(table)))

        # Phase 1: what must survive.
        usage = scan_usage(module, table, config)

        # Phase 2: convert elements, collecting edits.
        registry = ComponentRegistry()
        plan = EditPlan()
        synthesizer = ComponentSynthesizer(registry, collect_bindings(module), plan, config)
        resolver = StyleReferenceResolver(module, table, usage, synthesizer, plan, config, self.bus)
        diagnostics.extend(resolver.resolve())

        # Phase 3: module-level edits, then one batched application.
        summary = TreeRewriter(module, table, usage, synthesizer, plan, config).rewrite()
        output = plan.apply(module.source).decode("utf-8")

        self._emit(
            events.ModuleTransformed(len(registry), summary.table_removed, summary.wrapper_removed)
        )
        return TransformResult(
            source=output,
            original=source,
            components=tuple(registry),
            usage=usage,
            diagnostics=tuple(diagnostics),
            table=table,
            summary=summary,
        )

    def _emit(self, event: object) -> None:
        if self.bus is not None:
            self.bus.emit(event)


def _line_of(source: bytes, offset: int) -> int:
    return source.count(b"\n", 0, offset) + 1


def transform_source(
    source: str, config: TransformConfig | None = None, bus: EventBus | None = None
) -> TransformResult:
    """Transform one module's source text with a fresh engine."""
    return StyleMigrationEngine(config, bus).run(source)


def render_components(result: TransformResult, config: TransformConfig | None = None) -> list[str]:
    """Declaration source for each component in *result*."""
    styled = (config or TransformConfig()).styled_identifier
    return [render_declaration(record, styled) for record in result.components]
