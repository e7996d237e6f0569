from __future__ import annotations

from conftest import RecordingAdapter

from stellarix.dom import DomEvent
from stellarix.primitives.toggle import (
    TOGGLE_DESCRIPTOR,
    ToggleEvent,
    ToggleOptions,
    ToggleStore,
    create_toggle_with_implementation,
)


def test_change_is_a_required_event() -> None:
    assert TOGGLE_DESCRIPTOR.events.required == ("change",)


def test_click_flips_and_reports(adapter: RecordingAdapter) -> None:
    changes: list[bool] = []
    toggle = create_toggle_with_implementation(on_change=changes.append, label="Wi-Fi")
    rendered = toggle.connect(adapter)

    rendered.element("root").listeners["click"](DomEvent(type="click"))
    rendered.element("root").listeners["click"](DomEvent(type="click"))

    assert changes == [True, False]
    assert rendered.element("root").attributes == {
        "role": "switch",
        "aria-checked": "false",
        "aria-label": "Wi-Fi",
        "tabIndex": 0,
    }


def test_space_toggles_other_keys_do_not() -> None:
    changes: list[bool] = []
    toggle = create_toggle_with_implementation(on_change=changes.append)
    keydown = toggle.logic.get_interaction_handlers("root")["keydown"]

    keydown(DomEvent(type="keydown", key="Enter"))
    space = DomEvent(type="keydown", key=" ")
    keydown(space)

    assert changes == [True]
    assert space.default_prevented


def test_disabled_toggle_ignores_clicks() -> None:
    changes: list[bool] = []
    toggle = create_toggle_with_implementation(on_change=changes.append, disabled=True)
    click = DomEvent(type="click")

    toggle.logic.get_interaction_handlers("root")["click"](click)

    assert changes == []
    assert click.default_prevented
    assert toggle.logic.get_a11y_props("root")["aria-disabled"] == "true"


def test_explicit_change_payload_sets_value() -> None:
    changes: list[bool] = []
    toggle = create_toggle_with_implementation(on_change=changes.append)

    toggle.logic.handle_event(ToggleEvent.CHANGE, {"checked": True})
    toggle.logic.handle_event(ToggleEvent.CHANGE, {"checked": True})

    assert toggle.state.get_state().checked is True
    assert toggle.state.commits == 1
    assert changes == [True, True]


def test_store_toggle_and_reset() -> None:
    store = ToggleStore(ToggleOptions(checked=True))

    assert store.toggle() is False
    assert store.toggle() is True
    store.set_checked(False)
    store.reset()

    assert store.get_state().checked is True
