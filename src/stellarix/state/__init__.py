"""State/store layer.

Every component instance owns exactly one :class:`Store`.  The store holds
an immutable snapshot and is the only place new snapshots are committed.
"""

from stellarix.state.models import ComponentOptions, ComponentState
from stellarix.state.store import DerivedStore, Store, create_component_state

__all__ = [
    "ComponentOptions",
    "ComponentState",
    "DerivedStore",
    "Store",
    "create_component_state",
]
