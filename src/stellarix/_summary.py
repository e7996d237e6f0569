"""Helpers for compact debug logging of component state.

State snapshots may carry long strings (messages, labels) and callback
references.  This module turns them into a bounded, log-friendly shape
before they are emitted at DEBUG level.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel


def summarize_for_log(value: Any, *, max_string: int = 120, _depth: int = 0) -> Any:
    """Return a compact copy of *value* suitable for debug logs."""
    if _depth > 10:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, BaseModel):
        value = {name: getattr(value, name) for name in type(value).model_fields}

    if isinstance(value, Mapping):
        return {
            str(k): summarize_for_log(v, max_string=max_string, _depth=_depth + 1)
            for k, v in value.items()
        }

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [summarize_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    if callable(value):
        return f"<callable:{getattr(value, '__name__', type(value).__name__)}>"

    # Fallback: represent unknown objects without dumping internals.
    return repr(value)
