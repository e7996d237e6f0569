"""Fluent builder for logic layers."""

from __future__ import annotations

import enum
import logging
from types import MappingProxyType
from typing import Generic, Self, TypeVar

from stellarix.config import RuntimeConfig
from stellarix.logic.layer import (
    A11yGenerator,
    CleanupHook,
    EventHandler,
    Initializer,
    InteractionMapper,
    LogicLayer,
    LogicTables,
)
from stellarix.logic.names import Interaction, coerce_name

_logger = logging.getLogger(__name__)

S = TypeVar("S")


class LogicLayerBuilder(Generic[S]):
    """Collect event, accessibility and interaction registrations.

    Registration order does not matter; the last registration for a key
    wins.  Names are validated against the component's closed enums as
    they are registered.

    Usage::

        logic = (
            LogicLayerBuilder[ToggleState](ToggleEvent, ToggleElement, name="Toggle")
            .on_event(ToggleEvent.CHANGE, on_change)
            .with_a11y(ToggleElement.ROOT, root_attributes)
            .with_interaction(ToggleElement.ROOT, Interaction.CLICK, on_click)
            .build()
        )
    """

    def __init__(
        self,
        events: type[enum.StrEnum],
        elements: type[enum.StrEnum],
        *,
        name: str | None = None,
        config: RuntimeConfig | None = None,
    ) -> None:
        self._events = events
        self._elements = elements
        self._name = name or events.__name__.removesuffix("Event")
        self._config = config
        self._handlers: dict[enum.StrEnum, EventHandler] = {}
        self._a11y: dict[enum.StrEnum, A11yGenerator] = {}
        self._interactions: dict[enum.StrEnum, dict[Interaction, InteractionMapper]] = {}
        self._initializers: list[Initializer] = []
        self._cleanups: list[CleanupHook] = []

    def on_event(self, name: str, handler: EventHandler) -> Self:
        """Register ``handler(state, payload) -> next event | None`` for *name*."""
        event = coerce_name(self._events, name, kind="event")
        if event in self._handlers:
            _logger.debug("%s: replacing handler for event %r", self._name, str(event))
        self._handlers[event] = handler
        return self

    def with_a11y(self, element: str, generator: A11yGenerator) -> Self:
        """Register a pure ``generator(state) -> attributes`` for *element*."""
        key = coerce_name(self._elements, element, kind="element")
        self._a11y[key] = generator
        return self

    def with_interaction(self, element: str, interaction: str, mapper: InteractionMapper) -> Self:
        """Register ``mapper(state, native_event) -> event | None`` for *element*.

        A mapper that already performed its side effect returns ``None``.
        """
        key = coerce_name(self._elements, element, kind="element")
        kind = coerce_name(Interaction, interaction, kind="interaction")
        self._interactions.setdefault(key, {})[kind] = mapper
        return self

    def on_initialize(self, initializer: Initializer) -> Self:
        """Register ``initializer(state) -> teardown | None`` run by ``initialize()``."""
        self._initializers.append(initializer)
        return self

    def on_cleanup(self, hook: CleanupHook) -> Self:
        """Register a zero-argument hook run by ``cleanup()``."""
        self._cleanups.append(hook)
        return self

    def build(self) -> LogicLayer[S]:
        tables = LogicTables(
            events=self._events,
            elements=self._elements,
            handlers=MappingProxyType(dict(self._handlers)),
            a11y=MappingProxyType(dict(self._a11y)),
            interactions=MappingProxyType(
                {key: MappingProxyType(dict(mappers)) for key, mappers in self._interactions.items()}
            ),
            initializers=tuple(self._initializers),
            cleanups=tuple(self._cleanups),
        )
        return LogicLayer(tables, name=self._name, config=self._config)
