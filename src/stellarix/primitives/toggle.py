"""Toggle (switch) primitive."""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from typing import Any

from stellarix.config import RuntimeConfig
from stellarix.dom import event_key, prevent_default
from stellarix.logic import Interaction, LogicLayer, LogicLayerBuilder
from stellarix.primitive import Primitive, PrimitiveDescriptor, PrimitiveFactory
from stellarix.state import ComponentOptions, ComponentState, Store


class ToggleEvent(enum.StrEnum):
    CHANGE = "change"
    FOCUS = "focus"
    BLUR = "blur"


class ToggleElement(enum.StrEnum):
    ROOT = "root"


class ToggleState(ComponentState):
    checked: bool = False
    focused: bool = False
    disabled: bool = False


class ToggleOptions(ComponentOptions):
    checked: bool = False
    disabled: bool = False
    label: str | None = None
    on_change: Callable[[bool], None] | None = None
    on_focus: Callable[[Any], None] | None = None
    on_blur: Callable[[Any], None] | None = None


class ToggleStore(Store[ToggleState]):
    def __init__(self, options: ToggleOptions, *, config: RuntimeConfig | None = None) -> None:
        super().__init__("Toggle", ToggleState(checked=options.checked, disabled=options.disabled), config=config)
        self._initial = self.get_state()

    def set_checked(self, checked: bool) -> None:
        self.set_state({"checked": checked})

    def set_focused(self, focused: bool) -> None:
        self.set_state({"focused": focused})

    def set_disabled(self, disabled: bool) -> None:
        self.set_state({"disabled": disabled})

    def toggle(self) -> bool:
        committed = self.set_state(lambda prev: {"checked": not prev.checked})
        return committed.checked

    def reset(self) -> None:
        self.set_state(self._initial)


def create_toggle_logic(
    state: ToggleStore,
    options: ToggleOptions,
    *,
    config: RuntimeConfig | None = None,
) -> LogicLayer[ToggleState]:
    def on_change(current: ToggleState, payload: Any) -> None:
        # Interaction mappers flip the store first, so `current` already holds
        # the new value unless the payload names one explicitly.
        checked = current.checked
        if isinstance(payload, Mapping) and "checked" in payload:
            checked = bool(payload["checked"])
            if checked != current.checked:
                state.set_checked(checked)
        if options.on_change is not None:
            options.on_change(checked)
        return None

    def on_focus(_current: ToggleState, event: Any) -> None:
        state.set_focused(True)
        if options.on_focus is not None:
            options.on_focus(event)
        return None

    def on_blur(_current: ToggleState, event: Any) -> None:
        state.set_focused(False)
        if options.on_blur is not None:
            options.on_blur(event)
        return None

    def root_attributes(current: ToggleState) -> dict[str, Any]:
        return {
            "role": "switch",
            "aria-checked": "true" if current.checked else "false",
            "aria-disabled": "true" if current.disabled else None,
            "aria-label": options.label,
            "tabIndex": -1 if current.disabled else 0,
        }

    def root_click(current: ToggleState, event: Any) -> str | None:
        if current.disabled:
            prevent_default(event)
            return None
        state.toggle()
        return ToggleEvent.CHANGE

    def root_keydown(current: ToggleState, event: Any) -> str | None:
        if event_key(event) != " " or current.disabled:
            return None
        prevent_default(event)
        state.toggle()
        return ToggleEvent.CHANGE

    return (
        LogicLayerBuilder[ToggleState](ToggleEvent, ToggleElement, name="Toggle", config=config)
        .on_event(ToggleEvent.CHANGE, on_change)
        .on_event(ToggleEvent.FOCUS, on_focus)
        .on_event(ToggleEvent.BLUR, on_blur)
        .with_a11y(ToggleElement.ROOT, root_attributes)
        .with_interaction(ToggleElement.ROOT, Interaction.CLICK, root_click)
        .with_interaction(ToggleElement.ROOT, Interaction.KEY_DOWN, root_keydown)
        .with_interaction(ToggleElement.ROOT, Interaction.FOCUS, lambda _s, _e: ToggleEvent.FOCUS)
        .with_interaction(ToggleElement.ROOT, Interaction.BLUR, lambda _s, _e: ToggleEvent.BLUR)
        .build()
    )


TOGGLE_DESCRIPTOR = PrimitiveDescriptor.model_validate(
    {
        "accessibility": {
            "role": "switch",
            "keyboardShortcuts": ["Space"],
            "ariaAttributes": ["aria-checked", "aria-disabled"],
            "patterns": ["switch"],
        },
        "events": {
            "supported": [e.value for e in ToggleEvent],
            "required": [ToggleEvent.CHANGE.value],
        },
        "structure": {"elements": {"root": {"type": "button", "role": "switch"}}},
    }
)


def toggle_factory(*, config: RuntimeConfig | None = None) -> PrimitiveFactory[ToggleState, ToggleOptions]:
    return PrimitiveFactory(
        name="Toggle",
        descriptor=TOGGLE_DESCRIPTOR,
        create_state=lambda options: ToggleStore(options, config=config),
        create_logic=lambda store, options: create_toggle_logic(store, options, config=config),
        options_model=ToggleOptions,
        config=config,
    )


def create_toggle(
    options: ToggleOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> Primitive[ToggleState, ToggleOptions]:
    return toggle_factory().shell(options, **overrides)


def create_toggle_with_implementation(
    options: ToggleOptions | Mapping[str, Any] | None = None,
    *,
    config: RuntimeConfig | None = None,
    **overrides: Any,
) -> Primitive[ToggleState, ToggleOptions]:
    return toggle_factory(config=config)(options, **overrides)
