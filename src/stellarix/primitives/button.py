"""Button primitive."""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from typing import Any

from stellarix._ids import generate_component_id
from stellarix.config import RuntimeConfig
from stellarix.dom import ACTIVATION_KEYS, DomEvent, event_key, prevent_default
from stellarix.logic import Interaction, LogicLayer, LogicLayerBuilder
from stellarix.primitive import Primitive, PrimitiveDescriptor, PrimitiveFactory
from stellarix.state import ComponentOptions, ComponentState, DerivedStore, Store


class ButtonVariant(enum.StrEnum):
    DEFAULT = "default"
    PRIMARY = "primary"
    SECONDARY = "secondary"
    DESTRUCTIVE = "destructive"
    GHOST = "ghost"
    LINK = "link"
    ICON = "icon"


class ButtonSize(enum.StrEnum):
    SM = "sm"
    MD = "md"
    LG = "lg"


class ButtonEvent(enum.StrEnum):
    CLICK = "click"
    FOCUS = "focus"
    BLUR = "blur"
    KEYDOWN = "keydown"


class ButtonElement(enum.StrEnum):
    ROOT = "root"


class ButtonState(ComponentState):
    pressed: bool = False
    focused: bool = False
    disabled: bool = False
    loading: bool = False
    variant: ButtonVariant = ButtonVariant.DEFAULT
    size: ButtonSize = ButtonSize.MD


class ButtonOptions(ComponentOptions):
    variant: ButtonVariant = ButtonVariant.DEFAULT
    size: ButtonSize = ButtonSize.MD
    disabled: bool = False
    loading: bool = False
    on_click: Callable[[Any], None] | None = None
    on_focus: Callable[[Any], None] | None = None
    on_blur: Callable[[Any], None] | None = None


def _class_names(state: ButtonState) -> dict[str, str]:
    return {
        "base": "stellarix-button",
        "variant": f"stellarix-button--{state.variant}",
        "size": f"stellarix-button--{state.size}",
        "disabled": "stellarix-button--disabled" if state.disabled else "",
        "loading": "stellarix-button--loading" if state.loading else "",
        "pressed": "stellarix-button--pressed" if state.pressed else "",
        "focused": "stellarix-button--focused" if state.focused else "",
    }


class ButtonStore(Store[ButtonState]):
    def __init__(self, options: ButtonOptions, *, config: RuntimeConfig | None = None) -> None:
        super().__init__(
            "Button",
            ButtonState(
                disabled=options.disabled,
                loading=options.loading,
                variant=options.variant,
                size=options.size,
            ),
            config=config,
        )
        self.is_interactive: DerivedStore[ButtonState, bool] = self.derive(lambda s: not s.disabled and not s.loading)
        self.classes: DerivedStore[ButtonState, dict[str, str]] = self.derive(_class_names)

    def set_pressed(self, pressed: bool) -> None:
        self.set_state({"pressed": pressed})

    def set_focused(self, focused: bool) -> None:
        self.set_state({"focused": focused})

    def set_disabled(self, disabled: bool) -> None:
        self.set_state({"disabled": disabled})

    def set_loading(self, loading: bool) -> None:
        self.set_state({"loading": loading})

    def set_variant(self, variant: ButtonVariant) -> None:
        self.set_state({"variant": variant})

    def set_size(self, size: ButtonSize) -> None:
        self.set_state({"size": size})

    def dispose(self) -> None:
        self.is_interactive.dispose()
        self.classes.dispose()


def _inert(state: ButtonState) -> bool:
    return state.disabled or state.loading


def create_button_logic(
    state: ButtonStore,
    options: ButtonOptions,
    *,
    config: RuntimeConfig | None = None,
) -> LogicLayer[ButtonState]:
    component_id = generate_component_id("button")

    def on_click(_current: ButtonState, event: Any) -> None:
        if options.on_click is not None:
            options.on_click(event)
        return None

    def on_focus(_current: ButtonState, event: Any) -> None:
        state.set_focused(True)
        if options.on_focus is not None:
            options.on_focus(event)
        return None

    def on_blur(_current: ButtonState, event: Any) -> None:
        state.set_focused(False)
        if options.on_blur is not None:
            options.on_blur(event)
        return None

    def on_keydown(_current: ButtonState, event: Any) -> None:
        if event_key(event) not in ACTIVATION_KEYS:
            return None
        prevent_default(event)
        # Keyboard activation reports a synthetic click to the caller.
        if options.on_click is not None:
            options.on_click(DomEvent(type="click", target=getattr(event, "target", None)))
        return None

    def root_attributes(current: ButtonState) -> dict[str, Any]:
        return {
            "role": "button",
            "aria-pressed": current.pressed,
            "aria-disabled": current.disabled,
            "aria-busy": current.loading,
            "tabIndex": -1 if current.disabled else 0,
            "id": component_id,
        }

    def root_click(current: ButtonState, event: Any) -> str | None:
        if _inert(current):
            prevent_default(event)
            return None
        return ButtonEvent.CLICK

    def root_keydown(current: ButtonState, event: Any) -> str | None:
        if _inert(current):
            if event_key(event) in ACTIVATION_KEYS:
                prevent_default(event)
            return None
        return ButtonEvent.KEYDOWN

    def root_mousedown(current: ButtonState, _event: Any) -> None:
        if not _inert(current):
            state.set_pressed(True)
        return None

    def release(current: ButtonState, _event: Any) -> None:
        if current.pressed:
            state.set_pressed(False)
        return None

    return (
        LogicLayerBuilder[ButtonState](ButtonEvent, ButtonElement, name="Button", config=config)
        .on_event(ButtonEvent.CLICK, on_click)
        .on_event(ButtonEvent.FOCUS, on_focus)
        .on_event(ButtonEvent.BLUR, on_blur)
        .on_event(ButtonEvent.KEYDOWN, on_keydown)
        .with_a11y(ButtonElement.ROOT, root_attributes)
        .with_interaction(ButtonElement.ROOT, Interaction.CLICK, root_click)
        .with_interaction(ButtonElement.ROOT, Interaction.FOCUS, lambda _s, _e: ButtonEvent.FOCUS)
        .with_interaction(ButtonElement.ROOT, Interaction.BLUR, lambda _s, _e: ButtonEvent.BLUR)
        .with_interaction(ButtonElement.ROOT, Interaction.KEY_DOWN, root_keydown)
        .with_interaction(ButtonElement.ROOT, Interaction.MOUSE_DOWN, root_mousedown)
        .with_interaction(ButtonElement.ROOT, Interaction.MOUSE_UP, release)
        .with_interaction(ButtonElement.ROOT, Interaction.MOUSE_LEAVE, release)
        .on_cleanup(state.dispose)
        .build()
    )


BUTTON_DESCRIPTOR = PrimitiveDescriptor.model_validate(
    {
        "accessibility": {
            "role": "button",
            "keyboardShortcuts": ["Enter", "Space"],
            "ariaAttributes": ["aria-pressed", "aria-disabled", "aria-busy"],
        },
        "events": {"supported": [e.value for e in ButtonEvent]},
        "structure": {
            "elements": {"root": {"type": "button", "role": "button"}},
            "variants": [v.value for v in ButtonVariant],
            "sizes": [s.value for s in ButtonSize],
        },
    }
)


def button_factory(*, config: RuntimeConfig | None = None) -> PrimitiveFactory[ButtonState, ButtonOptions]:
    return PrimitiveFactory(
        name="Button",
        descriptor=BUTTON_DESCRIPTOR,
        create_state=lambda options: ButtonStore(options, config=config),
        create_logic=lambda store, options: create_button_logic(store, options, config=config),
        options_model=ButtonOptions,
        config=config,
    )


def create_button(
    options: ButtonOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> Primitive[ButtonState, ButtonOptions]:
    return button_factory().shell(options, **overrides)


def create_button_with_implementation(
    options: ButtonOptions | Mapping[str, Any] | None = None,
    *,
    config: RuntimeConfig | None = None,
    **overrides: Any,
) -> Primitive[ButtonState, ButtonOptions]:
    return button_factory(config=config)(options, **overrides)
