"""Closed name sets for logic-layer registrations.

Each component type declares its event and element names as a
:class:`enum.StrEnum`.  Interaction names come from :class:`Interaction`.
Names are checked when registered and when dispatched, so a typo fails
loudly at the call site.
"""

from __future__ import annotations

import enum
from typing import TypeVar

from stellarix.exceptions import UnknownNameError

E = TypeVar("E", bound=enum.StrEnum)


class Interaction(enum.StrEnum):
    """Native interaction names an adapter can attach listeners for.

    Values follow the DOM event type names.
    """

    CLICK = "click"
    DOUBLE_CLICK = "dblclick"
    KEY_DOWN = "keydown"
    KEY_UP = "keyup"
    FOCUS = "focus"
    BLUR = "blur"
    MOUSE_DOWN = "mousedown"
    MOUSE_UP = "mouseup"
    MOUSE_ENTER = "mouseenter"
    MOUSE_LEAVE = "mouseleave"
    POINTER_DOWN = "pointerdown"
    POINTER_UP = "pointerup"
    INPUT = "input"
    CHANGE = "change"
    SUBMIT = "submit"


def coerce_name(names: type[E], value: str, *, kind: str) -> E:
    """Return the member of *names* matching *value*.

    Raises
    ------
    UnknownNameError
        If *value* is not one of the enum's values.
    """
    try:
        return names(value)
    except ValueError:
        allowed = ", ".join(repr(member.value) for member in names)
        raise UnknownNameError(
            f"Unknown {kind} {value!r} for {names.__name__}; expected one of: {allowed}",
            kind=kind,
            name=str(value),
        ) from None
