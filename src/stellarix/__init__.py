"""stellarix - headless UI primitive runtime: reactive state, logic layers and adapter contract."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("stellarix")
except PackageNotFoundError:
    __version__ = "0+local"
from stellarix.adapter import ElementBinding, FrameworkAdapter
from stellarix.config import RuntimeConfig
from stellarix.dom import DomEvent
from stellarix.exceptions import (
    AdapterConnectionError,
    AlreadyConnectedError,
    EventChainDepthError,
    ImplementationMissingError,
    NotConnectedError,
    SchedulerUnavailableError,
    StellarixConfigError,
    StellarixError,
    UnknownNameError,
)
from stellarix.logic import Interaction, Lifecycle, LogicLayer, LogicLayerBuilder, normalize_payload
from stellarix.primitive import (
    A11yMetadata,
    ComponentMetadata,
    ComponentStructure,
    ElementSpec,
    EventMetadata,
    Primitive,
    PrimitiveDescriptor,
    PrimitiveFactory,
    PrimitiveFactoryBuilder,
    create_primitive,
)
from stellarix.state import ComponentOptions, ComponentState, DerivedStore, Store, create_component_state
from stellarix.timers import AsyncioScheduler, ManualScheduler, Scheduler, TimerGroup

__all__ = [
    "__version__",
    "A11yMetadata",
    "AdapterConnectionError",
    "AlreadyConnectedError",
    "AsyncioScheduler",
    "ComponentMetadata",
    "ComponentOptions",
    "ComponentState",
    "ComponentStructure",
    "DerivedStore",
    "DomEvent",
    "ElementBinding",
    "ElementSpec",
    "EventChainDepthError",
    "EventMetadata",
    "FrameworkAdapter",
    "ImplementationMissingError",
    "Interaction",
    "Lifecycle",
    "LogicLayer",
    "LogicLayerBuilder",
    "ManualScheduler",
    "NotConnectedError",
    "Primitive",
    "PrimitiveDescriptor",
    "PrimitiveFactory",
    "PrimitiveFactoryBuilder",
    "RuntimeConfig",
    "SchedulerUnavailableError",
    "Scheduler",
    "StellarixConfigError",
    "StellarixError",
    "Store",
    "TimerGroup",
    "UnknownNameError",
    "create_component_state",
    "create_primitive",
    "normalize_payload",
]
