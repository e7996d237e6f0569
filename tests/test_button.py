from __future__ import annotations

from typing import Any

import pytest
from conftest import RecordingAdapter

from stellarix.dom import DomEvent
from stellarix.primitives.button import (
    BUTTON_DESCRIPTOR,
    ButtonOptions,
    ButtonSize,
    ButtonStore,
    ButtonVariant,
    create_button,
    create_button_with_implementation,
)


def test_shell_metadata() -> None:
    shell = create_button(variant="primary")
    assert shell.metadata.structure.sizes == ("sm", "md", "lg")
    assert "destructive" in BUTTON_DESCRIPTOR.structure.variants
    assert shell.options.variant is ButtonVariant.PRIMARY


def test_click_reaches_callback(adapter: RecordingAdapter) -> None:
    clicks: list[Any] = []
    button = create_button_with_implementation(on_click=clicks.append)
    rendered = button.connect(adapter)
    event = DomEvent(type="click")

    rendered.element("root").listeners["click"](event)

    assert clicks == [event]


@pytest.mark.parametrize("blocking", [{"disabled": True}, {"loading": True}])
def test_click_blocked_while_inert(blocking: dict[str, bool]) -> None:
    clicks: list[Any] = []
    button = create_button_with_implementation(on_click=clicks.append, **blocking)
    event = DomEvent(type="click")

    button.logic.get_interaction_handlers("root")["click"](event)

    assert clicks == []
    assert event.default_prevented


@pytest.mark.parametrize("key", ["Enter", " "])
def test_keyboard_activation_reports_synthetic_click(key: str) -> None:
    clicks: list[Any] = []
    button = create_button_with_implementation(on_click=clicks.append)
    event = DomEvent(type="keydown", key=key)

    button.logic.get_interaction_handlers("root")["keydown"](event)

    assert event.default_prevented
    assert [c.type for c in clicks] == ["click"]


def test_other_keys_do_nothing() -> None:
    clicks: list[Any] = []
    button = create_button_with_implementation(on_click=clicks.append)
    event = DomEvent(type="keydown", key="a")

    button.logic.get_interaction_handlers("root")["keydown"](event)

    assert clicks == []
    assert not event.default_prevented


def test_pressed_follows_mouse() -> None:
    button = create_button_with_implementation()
    handlers = button.logic.get_interaction_handlers("root")

    handlers["mousedown"](DomEvent(type="mousedown"))
    assert button.state.get_state().pressed is True
    assert button.logic.get_a11y_props("root")["aria-pressed"] is True

    handlers["mouseleave"](DomEvent(type="mouseleave"))
    assert button.state.get_state().pressed is False


def test_focus_and_blur_track_state() -> None:
    focused: list[str] = []
    button = create_button_with_implementation(on_focus=lambda _e: focused.append("focus"))
    handlers = button.logic.get_interaction_handlers("root")

    handlers["focus"]()
    assert button.state.get_state().focused is True
    handlers["blur"]()
    assert button.state.get_state().focused is False
    assert focused == ["focus"]


def test_a11y_id_is_stable_per_instance() -> None:
    first = create_button_with_implementation()
    second = create_button_with_implementation()

    first_id = first.logic.get_a11y_props("root")["id"]
    assert first_id.startswith("stellarix-button-")
    assert first.logic.get_a11y_props("root")["id"] == first_id
    assert second.logic.get_a11y_props("root")["id"] != first_id


def test_disabled_button_leaves_tab_order() -> None:
    button = create_button_with_implementation(disabled=True)
    assert button.logic.get_a11y_props("root")["tabIndex"] == -1


def test_store_derived_values() -> None:
    store = ButtonStore(ButtonOptions(size=ButtonSize.LG))
    interactive: list[bool] = []
    store.is_interactive.subscribe(interactive.append)

    assert store.classes.get()["size"] == "stellarix-button--lg"
    store.set_loading(True)
    store.set_pressed(True)
    store.set_loading(False)

    assert interactive == [False, True]
    assert store.classes.get()["pressed"] == "stellarix-button--pressed"

    store.dispose()
    assert store.subscriber_count == 0
