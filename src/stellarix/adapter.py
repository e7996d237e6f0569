"""Contract between primitives and rendering-framework adapters."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from stellarix.primitive import Primitive

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class FrameworkAdapter(Protocol[T_co]):
    """Translate a live primitive into a framework-native component.

    An adapter reads ``primitive.state`` (or uses ``primitive.subscribe``)
    to re-render, applies ``logic.get_a11y_props(element)`` as element
    attributes and attaches ``logic.get_interaction_handlers(element)`` as
    native listeners.  Domain events should only reach the logic layer
    through those listeners.

    Adapters may also define ``optimize(component) -> component``.
    """

    name: str
    version: str

    def create_component(self, core: Primitive[Any, Any]) -> T_co: ...


@dataclass(frozen=True, slots=True)
class ElementBinding:
    """Everything an adapter needs to render one named sub-element."""

    element: str
    attributes: Mapping[str, Any] = field(default_factory=dict)
    listeners: Mapping[str, Callable[..., None]] = field(default_factory=dict)
