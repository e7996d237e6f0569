"""Custom exception hierarchy for stellarix."""

from __future__ import annotations


class StellarixError(Exception):
    """Base exception for all stellarix errors."""


class StellarixConfigError(StellarixError):
    """A component was wired or configured incorrectly.

    These are programming errors on the integrating side and are raised
    immediately instead of producing a silently broken component.
    """


class NotConnectedError(StellarixConfigError):
    """A logic layer was used before ``connect()`` bound it to a store."""


class AlreadyConnectedError(StellarixConfigError):
    """A logic layer was connected a second time (or after disposal)."""


class ImplementationMissingError(StellarixConfigError):
    """A primitive shell was connected before an implementation was attached."""


class UnknownNameError(StellarixConfigError):
    """An event, element or interaction name is not part of its closed set."""

    def __init__(self, message: str, *, kind: str = "", name: str = "") -> None:
        self.kind = kind
        self.name = name
        super().__init__(message)


class EventChainDepthError(StellarixConfigError):
    """An event handler chain exceeded the configured hop limit.

    Raised when handlers keep returning follow-up event names past
    ``RuntimeConfig.max_chain_depth``.
    """

    def __init__(self, message: str, *, chain: tuple[str, ...] = ()) -> None:
        self.chain = chain
        super().__init__(message)


class SchedulerUnavailableError(StellarixConfigError):
    """A timer was requested but no scheduler (event loop) is available."""


class AdapterConnectionError(StellarixError):
    """A framework adapter failed while creating a component."""

    def __init__(
        self,
        message: str,
        *,
        adapter: str = "",
        component: str = "",
    ) -> None:
        self.adapter = adapter
        self.component = component
        super().__init__(message)
