"""Logic layer instances and their lifecycle.

A :class:`LogicLayer` is produced by :class:`~stellarix.logic.builder.LogicLayerBuilder`.
Its registration tables are frozen at build time; only the lifecycle and
the store binding change afterwards::

    UNINITIALIZED --connect()--> CONNECTED --initialize()--> ACTIVE --cleanup()--> DISPOSED

Every callback registered on a logic layer receives the state it needs as
an argument.  The store itself is never handed to a callback.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from stellarix.config import DEFAULT_CONFIG, RuntimeConfig
from stellarix.exceptions import AlreadyConnectedError, EventChainDepthError, NotConnectedError
from stellarix.logic.names import Interaction, coerce_name
from stellarix.state.store import Store

_logger = logging.getLogger(__name__)

S = TypeVar("S")

EventHandler = Callable[[Any, Any], str | None]
A11yGenerator = Callable[[Any], Mapping[str, Any]]
InteractionMapper = Callable[[Any, Any], str | None]
Initializer = Callable[[Any], Callable[[], None] | None]
CleanupHook = Callable[[], None]
BoundInteraction = Callable[..., None]


class Lifecycle(enum.StrEnum):
    UNINITIALIZED = "uninitialized"
    CONNECTED = "connected"
    ACTIVE = "active"
    DISPOSED = "disposed"


def normalize_payload(payload: Any, key: str = "event") -> Any:
    """Unwrap ``{key: value}`` payloads so handlers see one shape.

    ``handle_event("click", e)`` and ``handle_event("click", {"event": e})``
    both hand ``e`` to the handler.  Other payloads pass through untouched.
    """
    if isinstance(payload, Mapping) and key in payload:
        return payload[key]
    return payload


@dataclass(frozen=True, slots=True)
class LogicTables:
    """Frozen registrations captured by ``LogicLayerBuilder.build()``."""

    events: type[enum.StrEnum]
    elements: type[enum.StrEnum]
    handlers: Mapping[enum.StrEnum, EventHandler]
    a11y: Mapping[enum.StrEnum, A11yGenerator]
    interactions: Mapping[enum.StrEnum, Mapping[Interaction, InteractionMapper]]
    initializers: tuple[Initializer, ...] = ()
    cleanups: tuple[CleanupHook, ...] = ()


class LogicLayer(Generic[S]):
    """Event, accessibility and interaction policy for one component instance."""

    def __init__(
        self,
        tables: LogicTables,
        *,
        name: str = "component",
        config: RuntimeConfig | None = None,
    ) -> None:
        self._tables = tables
        self._name = name
        self._config = config or DEFAULT_CONFIG
        self._store: Store[S] | None = None
        self._lifecycle = Lifecycle.UNINITIALIZED
        self._teardowns: list[Callable[[], None]] = []

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def lifecycle(self) -> Lifecycle:
        return self._lifecycle

    @property
    def is_active(self) -> bool:
        return self._lifecycle is Lifecycle.ACTIVE

    @property
    def events(self) -> type[enum.StrEnum]:
        return self._tables.events

    @property
    def elements(self) -> type[enum.StrEnum]:
        return self._tables.elements

    def registered_events(self) -> frozenset[str]:
        return frozenset(str(name) for name in self._tables.handlers)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def connect(self, store: Store[S]) -> None:
        """Bind this logic layer to its one store."""
        if self._lifecycle is not Lifecycle.UNINITIALIZED:
            raise AlreadyConnectedError(
                f"{self._name} logic is already connected (lifecycle: {self._lifecycle}); "
                "a logic layer serves exactly one store"
            )
        self._store = store
        self._lifecycle = Lifecycle.CONNECTED
        _logger.debug("%s logic connected to %r", self._name, store)

    def initialize(self) -> None:
        """Run one-time setup hooks.  Safe to call more than once."""
        if self._lifecycle is Lifecycle.ACTIVE:
            return
        if self._lifecycle is Lifecycle.DISPOSED:
            _logger.debug("%s logic: initialize() after cleanup ignored", self._name)
            return
        store = self._require_store("initialize")
        for initializer in self._tables.initializers:
            teardown = initializer(store.get_state())
            if teardown is not None:
                self._teardowns.append(teardown)
        self._lifecycle = Lifecycle.ACTIVE
        _logger.debug("%s logic initialized", self._name)

    def cleanup(self) -> None:
        """Tear down setup hooks, detach from the store and dispose.

        Idempotent.  Calls arriving after cleanup are silent no-ops.  Every
        teardown and cleanup hook runs even if an earlier one raises; the
        first error is re-raised once all of them have run.
        """
        if self._lifecycle is Lifecycle.DISPOSED:
            return
        self._lifecycle = Lifecycle.DISPOSED
        teardowns = list(reversed(self._teardowns))
        self._teardowns.clear()
        errors: list[Exception] = []
        for step in (*teardowns, *self._tables.cleanups):
            try:
                step()
            except Exception as exc:
                errors.append(exc)
        self._store = None
        _logger.debug("%s logic disposed", self._name)
        if errors:
            for extra in errors[1:]:
                _logger.warning("%s logic: additional cleanup error", self._name, exc_info=extra)
            raise errors[0]

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def handle_event(self, name: str, payload: Any = None) -> None:
        """Dispatch *name* to its registered handler.

        A handler may return another event name to hand off to; the hand-off
        reuses the same payload and is bounded by ``max_chain_depth``.
        """
        if self._lifecycle is Lifecycle.DISPOSED:
            _logger.debug("%s logic: event %r after cleanup ignored", self._name, name)
            return
        self._require_store("handle_event")

        event = coerce_name(self._tables.events, name, kind="event")
        value = normalize_payload(payload, self._config.payload_key)
        chain = [event]
        while True:
            handler = self._tables.handlers.get(event)
            if handler is None:
                _logger.debug("%s logic: no handler for event %r", self._name, str(event))
                return

            store = self._store
            if store is None:
                return
            next_name = handler(store.get_state(), value)
            if not next_name or self._lifecycle is Lifecycle.DISPOSED:
                return

            if len(chain) > self._config.max_chain_depth:
                hops = " -> ".join(str(item) for item in (*chain, next_name))
                raise EventChainDepthError(
                    f"{self._name} event chain exceeded {self._config.max_chain_depth} hop(s): {hops}",
                    chain=tuple(str(item) for item in chain),
                )
            event = coerce_name(self._tables.events, next_name, kind="event")
            chain.append(event)

    def get_a11y_props(self, element: str) -> dict[str, Any]:
        """Return accessibility attributes for *element* in the current state.

        Attributes whose value is ``None`` are omitted.
        """
        if self._lifecycle is Lifecycle.DISPOSED:
            return {}
        store = self._require_store("get_a11y_props")
        key = coerce_name(self._tables.elements, element, kind="element")
        generator = self._tables.a11y.get(key)
        if generator is None:
            return {}
        attributes = generator(store.get_state())
        return {attr: value for attr, value in attributes.items() if value is not None}

    def get_interaction_handlers(self, element: str) -> dict[str, BoundInteraction]:
        """Return ``{interaction name: listener}`` for *element*.

        Each listener runs the registered mapper against the current state
        and dispatches the event name it returns with the native event as
        payload.  Listeners become no-ops once the layer is disposed.
        """
        if self._lifecycle is Lifecycle.DISPOSED:
            return {}
        self._require_store("get_interaction_handlers")
        key = coerce_name(self._tables.elements, element, kind="element")
        mappers = self._tables.interactions.get(key, {})
        return {str(interaction): self._bind(key, interaction, mapper) for interaction, mapper in mappers.items()}

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _bind(self, element: str, interaction: str, mapper: InteractionMapper) -> BoundInteraction:
        def listener(native_event: Any = None) -> None:
            store = self._store
            if store is None or self._lifecycle is Lifecycle.DISPOSED:
                _logger.debug("%s logic: %s on %s after cleanup ignored", self._name, interaction, element)
                return
            event_name = mapper(store.get_state(), native_event)
            if event_name:
                self.handle_event(event_name, native_event)

        listener.__name__ = f"{element}_{interaction}"
        return listener

    def _require_store(self, operation: str) -> Store[S]:
        if self._store is None:
            raise NotConnectedError(
                f"{self._name} logic is not connected; call connect(store) before {operation}()"
            )
        return self._store

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, lifecycle={self._lifecycle.value!r})"
