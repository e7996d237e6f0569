"""Reference primitives built on the stellarix core."""

from stellarix.primitives.alert import (
    AlertElement,
    AlertEvent,
    AlertOptions,
    AlertState,
    AlertStore,
    AlertVariant,
    DismissReason,
    alert_factory,
    create_alert,
    create_alert_logic,
    create_alert_with_implementation,
)
from stellarix.primitives.button import (
    ButtonElement,
    ButtonEvent,
    ButtonOptions,
    ButtonSize,
    ButtonState,
    ButtonStore,
    ButtonVariant,
    button_factory,
    create_button,
    create_button_logic,
    create_button_with_implementation,
)
from stellarix.primitives.toggle import (
    ToggleElement,
    ToggleEvent,
    ToggleOptions,
    ToggleState,
    ToggleStore,
    create_toggle,
    create_toggle_logic,
    create_toggle_with_implementation,
    toggle_factory,
)

__all__ = [
    "AlertElement",
    "AlertEvent",
    "AlertOptions",
    "AlertState",
    "AlertStore",
    "AlertVariant",
    "ButtonElement",
    "ButtonEvent",
    "ButtonOptions",
    "ButtonSize",
    "ButtonState",
    "ButtonStore",
    "ButtonVariant",
    "DismissReason",
    "ToggleElement",
    "ToggleEvent",
    "ToggleOptions",
    "ToggleState",
    "ToggleStore",
    "alert_factory",
    "button_factory",
    "create_alert",
    "create_alert_logic",
    "create_alert_with_implementation",
    "create_button",
    "create_button_logic",
    "create_button_with_implementation",
    "create_toggle",
    "create_toggle_logic",
    "create_toggle_with_implementation",
    "toggle_factory",
]
