"""Element id generation for rendered sub-elements."""

from __future__ import annotations

import re
import secrets

_NON_ID_CHARS = re.compile(r"[^a-z0-9-]+")


def generate_component_id(component_name: str, *, prefix: str = "stellarix") -> str:
    """Return a unique DOM-safe id such as ``stellarix-button-1a2b3c4d``."""
    slug = _NON_ID_CHARS.sub("-", component_name.strip().lower()).strip("-") or "component"
    return f"{prefix}-{slug}-{secrets.token_hex(4)}"
