"""Tree rewrite: module-level edits applied once every element is resolved."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tree_sitter import Node

from restyle.analysis.scanner import is_wrapper_call
from restyle.config import TransformConfig
from restyle.model.edits import EditPlan
from restyle.model.span import Span
from restyle.model.style_table import StyleTable, UnparsedTable
from restyle.model.usage import UsageState
from restyle.parser.locate import collect_bindings, find_imports
from restyle.parser.tree import Module, iter_nodes, line_span, significant_children
from restyle.transforms.synthesizer import ComponentSynthesizer

logger = logging.getLogger("restyle")


@dataclass(frozen=True)
class RewriteSummary:
    """What the module-level rewrite did."""

    import_added: bool = False
    table_removed: bool = False
    pruned: tuple[str, ...] = ()
    wrapper_removed: bool = False
    helper_calls_unwrapped: int = 0


class TreeRewriter:
    """Adds the module-level edits to the plan.

    Runs only when at least one component was synthesized: inserts the
    ``styled`` import and the component declarations, prunes or removes the
    style table, unwraps identity-helper calls and, unless the usage state
    says otherwise, removes the enhancer.
    """

    def __init__(
        self,
        module: Module,
        table: StyleTable | UnparsedTable | None,
        usage: UsageState,
        synthesizer: ComponentSynthesizer,
        plan: EditPlan,
        config: TransformConfig,
    ) -> None:
        self.module = module
        self.table = table
        self.usage = usage
        self.synthesizer = synthesizer
        self.plan = plan
        self.config = config

    def rewrite(self) -> RewriteSummary:
        if not self.synthesizer.registry:
            return RewriteSummary()

        import_added = self._ensure_styled_import()
        table_removed, pruned, removed_span = self._place_components()
        unwrapped = self._remove_identity_helper(removed_span)
        wrapper_removed = False
        if not self.usage.preserve_wrapper:
            wrapper_removed = self._remove_enhancer()
        return RewriteSummary(
            import_added=import_added,
            table_removed=table_removed,
            pruned=pruned,
            wrapper_removed=wrapper_removed,
            helper_calls_unwrapped=unwrapped,
        )

    # ---- styled import ----

    def _ensure_styled_import(self) -> bool:
        styled = self.config.styled_identifier
        if styled in collect_bindings(self.module, top_level_only=True):
            return False
        line = f'import {styled} from "{self.config.styled_module}";\n'
        statements = self._statements()
        body = statements[self._prologue_length(statements) :]
        if body:
            self.plan.insert(body[0].start_byte, line, order=-1)
        elif statements:
            # Only directives: the import follows them.
            self.plan.insert(statements[-1].end_byte, "\n" + line.rstrip("\n"), order=-1)
        else:
            self.plan.insert(self.module.root.end_byte, line, order=-1)
        return True

    # ---- component declarations and the style table ----

    def _place_components(self) -> tuple[bool, tuple[str, ...], Span | None]:
        text = "\n\n".join(self.synthesizer.declarations())
        table = self.table
        if not isinstance(table, StyleTable):
            self._insert_before_code(text)
            return False, (), None

        indent = self._indentation(table.statement.start)
        text = _indent(text, indent)
        after = "\n\n" + indent + text
        if self.usage.preserve_all_styles:
            self.plan.insert(table.statement.end, after)
            return False, (), None

        keep = [entry.name in self.usage.kept_names for entry in table.entries]
        pruned = tuple(e.name for e, k in zip(table.entries, keep) if not k)
        if any(keep):
            self._prune(table, keep)
            self.plan.insert(table.statement.end, after)
            return False, pruned, None

        # Nothing left: the declarations take the table's place.
        if table.sole_declarator:
            self.plan.replace(table.statement, text)
        else:
            self.plan.delete(table.removal)
            self.plan.insert(table.statement.end, after)
        logger.debug("Removed style table %s", table.identifier)
        return True, pruned, table.removal

    def _prune(self, table: StyleTable, keep: list[bool]) -> None:
        entries = table.entries
        last_kept = max(i for i, k in enumerate(keep) if k)
        for i, entry in enumerate(entries):
            if keep[i] or i > last_kept:
                continue
            # Up to the next entry, taking the separating comma along.
            self.plan.delete(Span(entry.span.start, entries[i + 1].span.start))
        if last_kept < len(entries) - 1:
            self.plan.delete(Span(entries[last_kept].span.end, entries[-1].span.end))

    def _insert_before_code(self, text: str) -> None:
        statements = self._statements()
        for stmt in statements[self._prologue_length(statements) :]:
            if stmt.type not in ("import_statement", "export_statement"):
                self.plan.insert(stmt.start_byte, text + "\n\n")
                return
        end = self.module.root.end_byte
        lead = "" if self.module.source[:end].endswith(b"\n") else "\n"
        self.plan.insert(end, lead + "\n" + text + "\n")

    def _statements(self) -> list[Node]:
        return [
            s for s in significant_children(self.module.root) if s.type != "hash_bang_line"
        ]

    @staticmethod
    def _prologue_length(statements: list[Node]) -> int:
        """Number of leading directives (``'use strict';`` and the like)."""
        count = 0
        for stmt in statements:
            inner = significant_children(stmt) if stmt.type == "expression_statement" else []
            if len(inner) != 1 or inner[0].type != "string":
                break
            count += 1
        return count

    def _indentation(self, offset: int) -> str:
        """Whitespace between the start of the line and *offset*, if that is all there is."""
        source = self.module.source
        start = source.rfind(b"\n", 0, offset) + 1
        lead = source[start:offset].decode("utf-8")
        return lead if not lead.strip() else ""

    # ---- identity helper and enhancer ----

    def _remove_identity_helper(self, removed: Span | None) -> int:
        helper = self.config.identity_helper
        for info in find_imports(self.module):
            if info.local_names == (helper,):
                self._delete_statement(info.node)
        count = 0
        for call, arg in self._wrapper_calls(helper):
            if removed is not None and removed.contains(Span(call.start_byte, call.end_byte)):
                continue
            self._unwrap(call, arg)
            count += 1
        return count

    def _remove_enhancer(self) -> bool:
        removed = False
        for info in find_imports(self.module):
            if info.module_name == self.config.enhancer_module:
                self._delete_statement(info.node)
                removed = True
        for call, arg in self._wrapper_calls(self.config.enhancer_identifier):
            self._unwrap(call, arg)
            removed = True
        for decorator in iter_nodes(self.module.root, ("decorator",)):
            inner = significant_children(decorator)
            if len(inner) == 1 and self.module.text(inner[0]) == self.config.enhancer_identifier:
                self.plan.delete(line_span(self.module.source, decorator.start_byte, decorator.end_byte))
                removed = True
        if removed:
            logger.debug("Removed %s wrapper", self.config.enhancer_identifier)
        return removed

    def _wrapper_calls(self, callee_name: str) -> list[tuple[Node, Node]]:
        calls = []
        for call in iter_nodes(self.module.root, ("call_expression",)):
            callee = call.child_by_field_name("function")
            if callee is None or callee.type != "identifier":
                continue
            if self.module.text(callee) != callee_name or not is_wrapper_call(call):
                continue
            args = call.child_by_field_name("arguments")
            calls.append((call, significant_children(args)[0]))
        return calls

    def _unwrap(self, call: Node, arg: Node) -> None:
        """``wrapper(arg)`` -> ``arg``, as two deletions so edits inside *arg* survive."""
        self.plan.delete(Span(call.start_byte, arg.start_byte))
        self.plan.delete(Span(arg.end_byte, call.end_byte))

    def _delete_statement(self, node: Node) -> None:
        self.plan.delete(line_span(self.module.source, node.start_byte, node.end_byte))


def _indent(text: str, indent: str) -> str:
    """Prefix every non-empty line after the first with *indent*."""
    if not indent:
        return text
    first, *rest = text.split("\n")
    return "\n".join([first] + [indent + line if line else line for line in rest])
