"""restyle: migrate Radium inline style tables to styled-components."""

__version__ = "0.1.0"

from restyle.config import TransformConfig  # noqa: E402
from restyle.engine import StyleMigrationEngine, TransformResult, transform_source  # noqa: E402
from restyle.parser import ParseError  # noqa: E402

__all__ = [
    "__version__",
    "TransformConfig",
    "StyleMigrationEngine",
    "TransformResult",
    "transform_source",
    "ParseError",
]
