"""Transform engine: the scan -> resolve -> rewrite pipeline."""

from restyle.engine.engine import (
    StyleMigrationEngine,
    TransformResult,
    render_components,
    transform_source,
)

__all__ = [
    "StyleMigrationEngine",
    "TransformResult",
    "render_components",
    "transform_source",
]
