"""restyle model layer -- public type re-exports."""

from restyle.model.component import ComponentRecord, ComponentRegistry
from restyle.model.diagnostic import Diagnostic, Severity
from restyle.model.edits import EditConflictError, EditPlan, TextEdit
from restyle.model.span import Span
from restyle.model.style_table import (
    StyleTable,
    StyleValue,
    TableEntry,
    TableScope,
    UnparsedTable,
)
from restyle.model.usage import UsageState

__all__ = [
    # span / edits
    "Span",
    "TextEdit",
    "EditPlan",
    "EditConflictError",
    # style table
    "StyleValue",
    "TableEntry",
    "TableScope",
    "StyleTable",
    "UnparsedTable",
    # usage
    "UsageState",
    # components
    "ComponentRecord",
    "ComponentRegistry",
    # diagnostic
    "Severity",
    "Diagnostic",
]
