"""Runtime configuration for stellarix."""

from __future__ import annotations

import dataclasses
import os
from typing import Any


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class RuntimeConfig:
    """Runtime configuration shared by stores, logic layers and primitives.

    Parameters
    ----------
    debug : bool
        Trace every store commit at DEBUG level, including a summarized
        snapshot of the new state.
    max_chain_depth : int
        How many follow-up events a handler chain may dispatch after the
        initial event.  ``1`` allows a handler to hand off to exactly one
        other handler.  ``0`` disables chaining.
    payload_key : str
        Wrapper key unwrapped by ``handle_event``.  A payload mapping that
        carries this key is replaced by its value before reaching the
        handler, so ``{"event": e}`` and ``e`` behave the same.
    default_version : str
        Metadata version for primitives that do not declare their own.
    """

    debug: bool = False
    max_chain_depth: int = 1
    payload_key: str = "event"
    default_version: str = "0.0.1"

    def __post_init__(self) -> None:
        if self.max_chain_depth < 0:
            raise ValueError("max_chain_depth must be >= 0")
        if not self.payload_key:
            raise ValueError("payload_key must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> RuntimeConfig:
        """Create configuration from environment variables.

        Reads ``STELLARIX_DEBUG``, ``STELLARIX_MAX_CHAIN_DEPTH``,
        ``STELLARIX_PAYLOAD_KEY`` and ``STELLARIX_DEFAULT_VERSION``.
        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        RuntimeConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        if "debug" not in overrides:
            config_kwargs["debug"] = _env_bool(env.get("STELLARIX_DEBUG"), False)

        depth_env = env.get("STELLARIX_MAX_CHAIN_DEPTH")
        if depth_env is not None and "max_chain_depth" not in overrides:
            config_kwargs["max_chain_depth"] = int(depth_env)

        _ENV_CONFIG_MAP = {
            "STELLARIX_PAYLOAD_KEY": "payload_key",
            "STELLARIX_DEFAULT_VERSION": "default_version",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        config_kwargs.update(overrides)

        return cls(**config_kwargs)


DEFAULT_CONFIG = RuntimeConfig()
