"""Locate the module-level pieces the transform works on.

The style table declaration, the module's import statements and the set of
names bound in the module.
"""

from __future__ import annotations

from dataclasses import dataclass

from tree_sitter import Node

from restyle.css.values import is_declarative, style_value
from restyle.model.expr import Call, Identifier, ObjectLiteral, Property
from restyle.model.span import Span
from restyle.model.style_table import StyleTable, TableEntry, TableScope, UnparsedTable
from restyle.parser.builder import build_expr
from restyle.parser.tree import Module, iter_nodes, significant_children


@dataclass(frozen=True)
class ImportInfo:
    """One ``import ... from "module"`` statement.

    ``local_names`` are the bindings it introduces, in source order.
    """

    node: Node
    module_name: str
    local_names: tuple[str, ...]

    @property
    def span(self) -> Span:
        return Span(self.node.start_byte, self.node.end_byte)


def find_style_table(
    module: Module, identifier: str, identity_helper: str
) -> StyleTable | UnparsedTable | None:
    """Find the first ``const <identifier> = ...`` declaration and parse it.

    The initializer may be wrapped in a one-argument call to *identity_helper*.
    Returns an :class:`UnparsedTable` when the initializer is not an object
    literal made only of ``key: value`` properties, and None when the module
    declares no table at all.
    """
    for decl in iter_nodes(module.root, ("lexical_declaration",)):
        if _declaration_kind(module, decl) != "const":
            continue
        declarators = [c for c in decl.named_children if c.type == "variable_declarator"]
        for declarator in declarators:
            name = declarator.child_by_field_name("name")
            if name is None or name.type != "identifier" or module.text(name) != identifier:
                continue
            return _parse_table(module, decl, declarator, declarators, identifier, identity_helper)
    return None


def _declaration_kind(module: Module, decl: Node) -> str:
    kind = decl.child_by_field_name("kind")
    if kind is None:
        kind = decl.children[0] if decl.children else None
    return module.text(kind) if kind is not None else ""


def _parse_table(
    module: Module,
    decl: Node,
    declarator: Node,
    declarators: list[Node],
    identifier: str,
    identity_helper: str,
) -> StyleTable | UnparsedTable:
    exported = decl.parent is not None and decl.parent.type == "export_statement"
    statement = decl.parent if exported else decl
    statement_span = Span(statement.start_byte, statement.end_byte)
    scope = table_scope(module, decl, declarator, identifier)

    value = declarator.child_by_field_name("value")
    if value is None:
        return UnparsedTable(
            identifier, statement_span, "declared without an initializer", scope
        )

    expr = build_expr(value, module.source)
    identity_call = None
    if (
        isinstance(expr, Call)
        and isinstance(expr.callee, Identifier)
        and expr.callee.name == identity_helper
        and expr.arguments
    ):
        identity_call = Span(expr.start, expr.end)
        expr = expr.arguments[0]

    if not isinstance(expr, ObjectLiteral):
        return UnparsedTable(
            identifier, statement_span, "initializer is not an object literal", scope
        )
    if any(not isinstance(member, Property) for member in expr.members):
        return UnparsedTable(
            identifier,
            statement_span,
            "object literal has spread, method or shorthand members",
            scope,
        )

    entries = []
    for member in expr.members:
        style = style_value(member.value) if is_declarative(member.value) else None
        entries.append(TableEntry(name=member.key, span=Span(member.start, member.end), style=style))

    index = next(i for i, d in enumerate(declarators) if d.start_byte == declarator.start_byte)
    sole = len(declarators) == 1
    if sole:
        removal = statement_span
    elif index < len(declarators) - 1:
        removal = Span(declarator.start_byte, declarators[index + 1].start_byte)
    else:
        removal = Span(declarators[index - 1].end_byte, declarator.end_byte)

    return StyleTable(
        identifier=identifier,
        statement=statement_span,
        declarator=Span(declarator.start_byte, declarator.end_byte),
        removal=removal,
        sole_declarator=sole,
        entries=entries,
        exported=exported,
        identity_call=identity_call,
        scope=scope,
    )


_BLOCK_TYPES = (
    "program",
    "statement_block",
    "class_static_block",
    "switch_case",
    "switch_default",
    "for_statement",
    "for_in_statement",
)
_FUNCTION_TYPES = (
    "function_declaration",
    "function_expression",
    "generator_function_declaration",
    "generator_function",
    "arrow_function",
    "method_definition",
)
_BINDING_TYPES = (
    "variable_declarator",
    "function_declaration",
    "generator_function_declaration",
    "class_declaration",
    "formal_parameters",
    "arrow_function",
    "catch_clause",
    "for_in_statement",
)


def table_scope(module: Module, decl: Node, declarator: Node, identifier: str) -> TableScope:
    """Lexical scope of the table declaration *decl*.

    The region is the innermost block holding the declaration.  Nested
    functions, blocks and clauses inside it that bind *identifier* again are
    recorded as shadowed: references there name something else.
    """
    region_node = _enclosing(decl, _BLOCK_TYPES) or module.root
    region = Span(region_node.start_byte, region_node.end_byte)
    shadowed = []
    for node in iter_nodes(region_node, _BINDING_TYPES):
        if node.type == "variable_declarator" and node.start_byte == declarator.start_byte:
            continue
        shadow = _shadow_region(module, node, identifier)
        if shadow is None:
            continue
        span = Span(shadow.start_byte, shadow.end_byte)
        if span != region and region.contains(span):
            shadowed.append(span)
    return TableScope(region, tuple(shadowed))


def _enclosing(node: Node, types: tuple[str, ...]) -> Node | None:
    current = node.parent
    while current is not None and current.type not in types:
        current = current.parent
    return current


def _shadow_region(module: Module, node: Node, identifier: str) -> Node | None:
    """The region in which *node* rebinds *identifier*, or None."""
    names: set[str] = set()
    kind = node.type
    if kind == "variable_declarator":
        _declared_names(module, node, names)
        if identifier not in names:
            return None
        if node.parent is not None and node.parent.type == "variable_declaration":
            return _enclosing(node, _FUNCTION_TYPES)
        return _enclosing(node, _BLOCK_TYPES)
    if kind in ("function_declaration", "generator_function_declaration", "class_declaration"):
        _declared_names(module, node, names)
        return _enclosing(node, _BLOCK_TYPES) if identifier in names else None
    if kind == "formal_parameters":
        for param in node.named_children:
            _pattern_names(module, param, names)
        return node.parent if identifier in names else None
    if kind == "for_in_statement" and node.child_by_field_name("kind") is None:
        return None
    field_name = "left" if kind == "for_in_statement" else "parameter"
    target = node.child_by_field_name(field_name)
    if target is not None:
        _pattern_names(module, target, names)
    return node if identifier in names else None


def find_imports(module: Module) -> list[ImportInfo]:
    """Return the module's top-level import statements in source order."""
    imports = []
    for stmt in significant_children(module.root):
        if stmt.type != "import_statement":
            continue
        source_node = stmt.child_by_field_name("source")
        if source_node is None:
            continue
        module_name = module.text(source_node)[1:-1]
        imports.append(ImportInfo(stmt, module_name, tuple(_import_names(module, stmt))))
    return imports


def _import_names(module: Module, stmt: Node) -> list[str]:
    names: list[str] = []
    for clause in stmt.named_children:
        if clause.type != "import_clause":
            continue
        for part in clause.named_children:
            if part.type == "identifier":
                names.append(module.text(part))
            elif part.type == "namespace_import":
                names.extend(module.text(c) for c in part.named_children if c.type == "identifier")
            elif part.type == "named_imports":
                for spec in part.named_children:
                    if spec.type != "import_specifier":
                        continue
                    local = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
                    if local is not None:
                        names.append(module.text(local))
    return names


def collect_bindings(module: Module, top_level_only: bool = False) -> set[str]:
    """Names declared in the module.

    With *top_level_only* only module-scope bindings are returned (imports and
    top-level declarations); otherwise every declaration in any scope counts.
    """
    names: set[str] = set()
    for info in find_imports(module):
        names.update(info.local_names)
    if top_level_only:
        for stmt in significant_children(module.root):
            if stmt.type == "export_statement":
                inner = stmt.child_by_field_name("declaration")
                if inner is not None:
                    _declared_names(module, inner, names)
            else:
                _declared_names(module, stmt, names)
        return names

    for node in iter_nodes(
        module.root,
        (
            "variable_declarator",
            "function_declaration",
            "generator_function_declaration",
            "class_declaration",
            "formal_parameters",
            "arrow_function",
            "catch_clause",
        ),
    ):
        if node.type == "formal_parameters":
            for param in node.named_children:
                _pattern_names(module, param, names)
        elif node.type == "arrow_function":
            param = node.child_by_field_name("parameter")
            if param is not None:
                _pattern_names(module, param, names)
        elif node.type == "catch_clause":
            param = node.child_by_field_name("parameter")
            if param is not None:
                _pattern_names(module, param, names)
        else:
            _declared_names(module, node, names)
    return names


def _declared_names(module: Module, node: Node, names: set[str]) -> None:
    if node.type in ("lexical_declaration", "variable_declaration"):
        for declarator in node.named_children:
            if declarator.type == "variable_declarator":
                _declared_names(module, declarator, names)
    elif node.type == "variable_declarator":
        target = node.child_by_field_name("name")
        if target is not None:
            _pattern_names(module, target, names)
    elif node.type in (
        "function_declaration",
        "generator_function_declaration",
        "class_declaration",
    ):
        target = node.child_by_field_name("name")
        if target is not None:
            names.add(module.text(target))


def _pattern_names(module: Module, node: Node, names: set[str]) -> None:
    kind = node.type
    if kind in ("identifier", "shorthand_property_identifier_pattern"):
        names.add(module.text(node))
    elif kind == "pair_pattern":
        value = node.child_by_field_name("value")
        if value is not None:
            _pattern_names(module, value, names)
    elif kind in ("assignment_pattern", "object_assignment_pattern"):
        left = node.child_by_field_name("left")
        if left is not None:
            _pattern_names(module, left, names)
    elif kind in ("object_pattern", "array_pattern", "rest_pattern"):
        for child in node.named_children:
            _pattern_names(module, child, names)
