"""Logic layer: events, accessibility attributes and interactions."""

from stellarix.logic.builder import LogicLayerBuilder
from stellarix.logic.layer import Lifecycle, LogicLayer, normalize_payload
from stellarix.logic.names import Interaction

__all__ = [
    "Interaction",
    "Lifecycle",
    "LogicLayer",
    "LogicLayerBuilder",
    "normalize_payload",
]
