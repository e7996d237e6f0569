"""Reactive in-memory state store.

A store owns the single authoritative snapshot for one component instance.
``set_state`` commits a new snapshot and then synchronously notifies every
subscriber, in registration order, with that snapshot.  Subscribers never
need to read the store back: the snapshot is the argument.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from stellarix._summary import summarize_for_log
from stellarix.config import DEFAULT_CONFIG, RuntimeConfig

_logger = logging.getLogger(__name__)

S = TypeVar("S")
T = TypeVar("T")
U = TypeVar("U")

Unsubscribe = Callable[[], None]


def _merge_patch(current: Any, patch: Mapping[str, Any]) -> Any:
    """Return a new snapshot with *patch* applied on top of *current*.

    Pydantic snapshots are re-validated so that unknown keys and wrong
    types are rejected at commit time.
    """
    if isinstance(current, BaseModel):
        values = {name: getattr(current, name) for name in type(current).model_fields}
        values.update(patch)
        return type(current).model_validate(values)
    if isinstance(current, Mapping):
        merged = dict(current)
        merged.update(patch)
        return merged
    raise TypeError(f"Cannot apply a partial update to {type(current).__name__} state")


@dataclass(slots=True, eq=False)
class _Subscription(Generic[T]):
    listener: Callable[[T], None]
    active: bool = True


class _SubscriberList(Generic[T]):
    """Ordered listener registry with notification-safe removal."""

    def __init__(self) -> None:
        self._entries: list[_Subscription[T]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, listener: Callable[[T], None]) -> Unsubscribe:
        entry = _Subscription(listener)
        self._entries.append(entry)

        def unsubscribe() -> None:
            if not entry.active:
                return
            entry.active = False
            self._entries.remove(entry)

        return unsubscribe

    def notify(self, value: T) -> None:
        # Iterate over a copy: listeners added during this pass wait for the
        # next commit, listeners removed before their turn are skipped.
        for entry in tuple(self._entries):
            if entry.active:
                entry.listener(value)

    def clear(self) -> None:
        for entry in self._entries:
            entry.active = False
        self._entries.clear()


class Store(Generic[S]):
    """Per-instance reactive state container.

    Parameters
    ----------
    name : str
        Component type name, used in logs and diagnostics.
    initial_state : S
        First snapshot.  Usually a frozen :class:`ComponentState`.
    config : RuntimeConfig or None
        Runtime configuration; ``debug`` enables commit tracing.
    """

    def __init__(
        self,
        name: str,
        initial_state: S,
        *,
        config: RuntimeConfig | None = None,
    ) -> None:
        self._name = name
        self._state = initial_state
        self._config = config or DEFAULT_CONFIG
        self._subscribers: _SubscriberList[S] = _SubscriberList()
        self._commits = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def commits(self) -> int:
        """Number of snapshots committed since construction."""
        return self._commits

    def get_state(self) -> S:
        """Return the last committed snapshot."""
        return self._state

    def set_state(self, updater: S | Mapping[str, Any] | Callable[[S], Any]) -> S:
        """Commit a new snapshot and notify subscribers.

        *updater* may be:

        * a callable ``old -> new`` whose result replaces the snapshot;
        * a mapping, merged on top of the current snapshot;
        * any other value, which replaces the snapshot as a whole.

        When the snapshot is a pydantic model, a mapping returned by a
        callable is applied as a patch, since a plain mapping cannot stand
        in for the model.

        Exceptions from the updater, from validation, or from any
        subscriber propagate to the caller.  A failing subscriber leaves
        the new snapshot committed.
        """
        if callable(updater):
            candidate = updater(self._state)
            if isinstance(candidate, Mapping) and isinstance(self._state, BaseModel):
                candidate = _merge_patch(self._state, candidate)
        elif isinstance(updater, Mapping):
            candidate = _merge_patch(self._state, updater)
        else:
            candidate = updater

        self._state = candidate
        self._commits += 1
        if self._config.debug and _logger.isEnabledFor(logging.DEBUG):
            _logger.debug("[%s] state updated: %s", self._name, summarize_for_log(candidate))

        self._subscribers.notify(candidate)
        return candidate

    def subscribe(self, listener: Callable[[S], None]) -> Unsubscribe:
        """Register *listener* for future commits.

        The listener is not called on registration.  The returned callable
        unregisters it; calling it more than once is harmless.
        """
        return self._subscribers.add(listener)

    def derive(self, selector: Callable[[S], U]) -> DerivedStore[S, U]:
        """Create a read-only projection of this store."""
        return DerivedStore(self, selector)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, commits={self._commits})"


class DerivedStore(Generic[S, U]):
    """Read-only projection ``selector(state)`` of a base store.

    ``get()`` always recomputes from the base store's current snapshot.
    Subscribers are notified only when the selected value changes
    (compared with ``!=``).  The selector runs on every base commit, so a
    selector that raises surfaces on the triggering ``set_state``.
    """

    def __init__(self, source: Store[S], selector: Callable[[S], U]) -> None:
        self._source = source
        self._selector = selector
        self._last = selector(source.get_state())
        self._subscribers: _SubscriberList[U] = _SubscriberList()
        self._detach: Unsubscribe | None = source.subscribe(self._on_commit)

    def get(self) -> U:
        return self._selector(self._source.get_state())

    def subscribe(self, listener: Callable[[U], None]) -> Unsubscribe:
        return self._subscribers.add(listener)

    def dispose(self) -> None:
        """Detach from the base store and drop all subscribers."""
        if self._detach is not None:
            self._detach()
            self._detach = None
        self._subscribers.clear()

    def _on_commit(self, _state: S) -> None:
        # Nested commits made by earlier subscribers may already have moved
        # the base store on; project the newest snapshot so derived
        # subscribers never see a superseded value.
        value = self._selector(self._source.get_state())
        if value == self._last:
            return
        self._last = value
        self._subscribers.notify(value)


def create_component_state(
    name: str,
    initial_state: S,
    *,
    config: RuntimeConfig | None = None,
) -> Store[S]:
    """Create the store for one component instance."""
    return Store(name, initial_state, config=config)
