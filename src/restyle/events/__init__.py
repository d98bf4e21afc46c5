"""Event system: bus and event types for transform progress."""

from restyle.events.bus import EventBus
from restyle.events.types import (
    ComponentSynthesized,
    ModuleTransformed,
    StyleUnresolved,
    TableParsed,
    TableSkipped,
)

__all__ = [
    "EventBus",
    "ComponentSynthesized",
    "ModuleTransformed",
    "StyleUnresolved",
    "TableParsed",
    "TableSkipped",
]
