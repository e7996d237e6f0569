"""Alert primitive.

A live-region message that can be dismissed by the user (when
``dismissible``) or automatically after ``auto_close`` seconds.  Dismissal
first flags ``dismissing`` for the exit animation and hides the alert
``dismiss_animation`` seconds later.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import Field

from stellarix.config import RuntimeConfig
from stellarix.dom import ACTIVATION_KEYS, event_key, prevent_default
from stellarix.logic import Interaction, LogicLayer, LogicLayerBuilder
from stellarix.primitive import Primitive, PrimitiveDescriptor, PrimitiveFactory
from stellarix.state import ComponentOptions, ComponentState, DerivedStore, Store
from stellarix.timers import Scheduler, TimerGroup

_AUTO_CLOSE = "auto_close"
_HIDE = "hide"


class AlertVariant(enum.StrEnum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class DismissReason(enum.StrEnum):
    USER = "user"
    AUTO = "auto"


class AlertEvent(enum.StrEnum):
    DISMISS = "dismiss"
    VISIBILITY_CHANGE = "visibilityChange"
    CLOSE = "close"


class AlertElement(enum.StrEnum):
    ROOT = "root"
    CLOSE_BUTTON = "closeButton"


class AlertState(ComponentState):
    visible: bool = True
    variant: AlertVariant = AlertVariant.INFO
    dismissible: bool = False
    dismissing: bool = False
    message: str = ""
    title: str | None = None
    show_icon: bool = True


class AlertOptions(ComponentOptions):
    """Alert construction options.

    ``auto_close`` and ``dismiss_animation`` are in seconds; an
    ``auto_close`` of ``0`` disables automatic dismissal.
    """

    variant: AlertVariant = AlertVariant.INFO
    dismissible: bool = False
    message: str = ""
    title: str | None = None
    show_icon: bool = True
    visible: bool = True
    auto_close: float = Field(default=0.0, ge=0.0)
    dismiss_animation: float = Field(default=0.3, ge=0.0)
    on_dismiss: Callable[[DismissReason], None] | None = None
    on_visibility_change: Callable[[bool], None] | None = None


class AlertStore(Store[AlertState]):
    """Alert state with its own dismissal timers."""

    def __init__(
        self,
        options: AlertOptions,
        *,
        scheduler: Scheduler | None = None,
        config: RuntimeConfig | None = None,
    ) -> None:
        super().__init__(
            "Alert",
            AlertState(
                visible=options.visible,
                variant=options.variant,
                dismissible=options.dismissible,
                message=options.message,
                title=options.title,
                show_icon=options.show_icon,
            ),
            config=config,
        )
        self._initial = self.get_state()
        self._auto_close_after = options.auto_close
        self._animation = options.dismiss_animation
        self._auto_close: Callable[[], None] | None = None
        self.timers = TimerGroup(scheduler, owner="Alert")
        self.is_visible: DerivedStore[AlertState, bool] = self.derive(lambda s: s.visible and not s.dismissing)
        self.can_dismiss: DerivedStore[AlertState, bool] = self.derive(
            lambda s: s.dismissible and s.visible and not s.dismissing
        )

    def set_visible(self, visible: bool) -> None:
        if visible:
            self.show()
        else:
            self.hide()

    def set_variant(self, variant: AlertVariant) -> None:
        self.set_state({"variant": variant})

    def set_message(self, message: str) -> None:
        self.set_state({"message": message})

    def set_title(self, title: str | None) -> None:
        self.set_state({"title": title})

    def set_dismissible(self, dismissible: bool) -> None:
        self.set_state({"dismissible": dismissible})

    def set_dismissing(self, dismissing: bool) -> None:
        self.set_state({"dismissing": dismissing})

    def show(self) -> None:
        self.timers.cancel(_HIDE)
        self.set_state({"visible": True, "dismissing": False})
        self.start_auto_close()

    def hide(self) -> None:
        self.timers.cancel_all()
        self.set_state({"visible": False, "dismissing": False})

    def dismiss(self) -> bool:
        """Start the exit animation if the user may dismiss this alert.

        Returns ``False`` when the alert is not ``dismissible``, is hidden or
        is already leaving.
        """
        if not self.get_state().dismissible:
            return False
        return self.expire()

    def expire(self) -> bool:
        """Start the exit animation regardless of ``dismissible``.

        Used by the auto-close timer.  Returns ``False`` if already leaving or hidden.
        """
        current = self.get_state()
        if not current.visible or current.dismissing:
            return False
        self.timers.cancel(_AUTO_CLOSE)
        if self._animation <= 0:
            self.set_state({"visible": False, "dismissing": False})
            return True
        self.set_state({"dismissing": True})
        self.timers.start(_HIDE, self._animation, lambda: self.set_state({"visible": False, "dismissing": False}))
        return True

    def reset(self) -> None:
        self.timers.cancel_all()
        self.set_state(self._initial)
        if self._initial.visible:
            self.start_auto_close()

    def on_auto_close(self, callback: Callable[[], None] | None) -> None:
        """Set what runs when the auto-close timer fires."""
        self._auto_close = callback

    def start_auto_close(self) -> None:
        if self._auto_close_after <= 0 or self._auto_close is None:
            return
        self.timers.start(_AUTO_CLOSE, self._auto_close_after, self._auto_close)

    def dispose(self) -> None:
        self.timers.dispose()
        self.is_visible.dispose()
        self.can_dismiss.dispose()


def _can_dismiss(state: AlertState) -> bool:
    return state.dismissible and state.visible and not state.dismissing


def create_alert_logic(
    state: AlertStore,
    options: AlertOptions,
    *,
    config: RuntimeConfig | None = None,
) -> LogicLayer[AlertState]:
    def dismissed(reason: DismissReason) -> None:
        if options.on_dismiss is not None:
            options.on_dismiss(reason)

    def on_dismiss(current: AlertState, _payload: Any) -> None:
        # Events always come from the user; auto-close goes through `auto_close` below.
        if _can_dismiss(current) and state.dismiss():
            dismissed(DismissReason.USER)
        return None

    def on_visibility_change(_current: AlertState, payload: Any) -> None:
        if isinstance(payload, Mapping):
            visible = bool(payload.get("visible", False))
        else:
            visible = bool(payload)
        state.set_visible(visible)
        if options.on_visibility_change is not None:
            options.on_visibility_change(visible)
        return None

    def on_close(current: AlertState, payload: Any) -> str | None:
        prevent_default(payload)
        if not _can_dismiss(current):
            return None
        return AlertEvent.DISMISS

    def root_attributes(current: AlertState) -> dict[str, Any]:
        return {
            "role": "alert",
            "aria-live": "assertive" if current.variant is AlertVariant.ERROR else "polite",
            "aria-atomic": "true",
            "aria-hidden": None if current.visible else "true",
        }

    def close_button_attributes(current: AlertState) -> dict[str, Any]:
        return {
            "aria-label": "Close alert",
            "type": "button",
            "tabIndex": 0 if _can_dismiss(current) else -1,
        }

    def close_button_click(current: AlertState, event: Any) -> str | None:
        if not _can_dismiss(current):
            prevent_default(event)
            return None
        return AlertEvent.CLOSE

    def close_button_keydown(current: AlertState, event: Any) -> None:
        if event_key(event) not in ACTIVATION_KEYS:
            return None
        prevent_default(event)
        if _can_dismiss(current) and state.dismiss():
            dismissed(DismissReason.USER)
        return None

    def root_keydown(current: AlertState, event: Any) -> str | None:
        if event_key(event) == "Escape" and _can_dismiss(current):
            return AlertEvent.DISMISS
        return None

    def auto_close() -> None:
        if state.expire():
            dismissed(DismissReason.AUTO)

    def start_timers(current: AlertState) -> None:
        state.on_auto_close(auto_close)
        if current.visible:
            state.start_auto_close()
        return None

    return (
        LogicLayerBuilder[AlertState](AlertEvent, AlertElement, name="Alert", config=config)
        .on_event(AlertEvent.DISMISS, on_dismiss)
        .on_event(AlertEvent.VISIBILITY_CHANGE, on_visibility_change)
        .on_event(AlertEvent.CLOSE, on_close)
        .with_a11y(AlertElement.ROOT, root_attributes)
        .with_a11y(AlertElement.CLOSE_BUTTON, close_button_attributes)
        .with_interaction(AlertElement.ROOT, Interaction.KEY_DOWN, root_keydown)
        .with_interaction(AlertElement.CLOSE_BUTTON, Interaction.CLICK, close_button_click)
        .with_interaction(AlertElement.CLOSE_BUTTON, Interaction.KEY_DOWN, close_button_keydown)
        .on_initialize(start_timers)
        .on_cleanup(state.dispose)
        .build()
    )


ALERT_DESCRIPTOR = PrimitiveDescriptor.model_validate(
    {
        "accessibility": {
            "role": "alert",
            "keyboardShortcuts": ["Escape"],
            "ariaAttributes": ["aria-live", "aria-atomic", "aria-hidden"],
            "wcagLevel": "AA",
            "patterns": ["live-region", "dismissible"],
        },
        "events": {
            "supported": [e.value for e in AlertEvent],
            "custom": {
                "dismiss": "Fired when the alert is dismissed",
                "visibilityChange": "Fired when visibility changes",
                "close": "Fired when the close button is clicked",
            },
        },
        "structure": {
            "elements": {
                "root": {"type": "div", "role": "alert"},
                "closeButton": {"type": "button", "role": "button", "optional": True},
            },
            "variants": [v.value for v in AlertVariant],
        },
    }
)


def alert_factory(
    *,
    scheduler: Scheduler | None = None,
    config: RuntimeConfig | None = None,
) -> PrimitiveFactory[AlertState, AlertOptions]:
    return PrimitiveFactory(
        name="Alert",
        descriptor=ALERT_DESCRIPTOR,
        create_state=lambda options: AlertStore(options, scheduler=scheduler, config=config),
        create_logic=lambda store, options: create_alert_logic(store, options, config=config),
        options_model=AlertOptions,
        config=config,
    )


def create_alert(
    options: AlertOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> Primitive[AlertState, AlertOptions]:
    """Return a metadata-only Alert shell."""
    return alert_factory().shell(options, **overrides)


def create_alert_with_implementation(
    options: AlertOptions | Mapping[str, Any] | None = None,
    *,
    scheduler: Scheduler | None = None,
    config: RuntimeConfig | None = None,
    **overrides: Any,
) -> Primitive[AlertState, AlertOptions]:
    """Return a live Alert with its store and logic connected."""
    return alert_factory(scheduler=scheduler, config=config)(options, **overrides)
