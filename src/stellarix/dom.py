"""Framework-neutral view of native interaction events.

Adapters may hand logic layers their own native event objects.  The
helpers below read the few properties interaction mappers care about
from either an attribute-style object or a mapping.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

ACTIVATION_KEYS = frozenset({"Enter", " "})


@dataclass(slots=True)
class DomEvent:
    """Minimal native event used by adapters without an event object of their own."""

    type: str
    key: str | None = None
    target: Any = None
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


def event_key(event: Any) -> str | None:
    """Return the keyboard key carried by *event*, if any."""
    if event is None:
        return None
    if isinstance(event, Mapping):
        key = event.get("key")
    else:
        key = getattr(event, "key", None)
    return key if isinstance(key, str) else None


def prevent_default(event: Any) -> bool:
    """Call ``prevent_default()`` on *event* when it supports it."""
    prevent = getattr(event, "prevent_default", None)
    if callable(prevent):
        prevent()
        return True
    return False
