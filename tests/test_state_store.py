from __future__ import annotations

import logging
from typing import Any

import pytest
from pydantic import ValidationError

from stellarix.config import RuntimeConfig
from stellarix.state import ComponentState, Store, create_component_state


class _Panel(ComponentState):
    visible: bool = True
    label: str = ""
    count: int = 0


def test_set_state_notifies_subscriber_with_new_snapshot() -> None:
    store = create_component_state("Panel", {"visible": True})
    seen: list[Any] = []
    store.subscribe(seen.append)

    store.set_state(lambda _old: {"visible": False})

    assert seen == [{"visible": False}]
    assert store.get_state() == {"visible": False}


def test_subscribe_does_not_fire_on_registration() -> None:
    store = create_component_state("Panel", _Panel())
    seen: list[_Panel] = []
    store.subscribe(seen.append)
    assert seen == []


def test_get_state_matches_snapshot_delivered_to_every_subscriber() -> None:
    store = create_component_state("Panel", _Panel())
    delivered: list[tuple[str, _Panel]] = []
    store.subscribe(lambda s: delivered.append(("a", s)))
    store.subscribe(lambda s: delivered.append(("b", s)))

    for count in range(3):
        delivered.clear()
        store.set_state({"count": count})
        assert [snapshot for _, snapshot in delivered] == [store.get_state(), store.get_state()]


def test_subscribers_notified_in_registration_order() -> None:
    store = create_component_state("Panel", _Panel())
    order: list[str] = []
    for name in ("a", "b", "c"):
        store.subscribe(lambda _s, name=name: order.append(name))

    store.set_state({"count": 1})
    store.set_state({"count": 2})

    assert order == ["a", "b", "c", "a", "b", "c"]


def test_partial_mapping_merges_into_model_snapshot() -> None:
    store = create_component_state("Panel", _Panel(label="x"))
    committed = store.set_state({"count": 5})

    assert committed == _Panel(visible=True, label="x", count=5)
    assert store.get_state() is committed


def test_total_replacement_value_replaces_snapshot() -> None:
    store = create_component_state("Panel", _Panel(count=1))
    store.set_state(_Panel(visible=False))
    assert store.get_state() == _Panel(visible=False, count=0)


def test_partial_update_with_unknown_field_is_rejected() -> None:
    store = create_component_state("Panel", _Panel())
    with pytest.raises(ValidationError):
        store.set_state({"visable": False})
    assert store.get_state() == _Panel()


def test_snapshots_are_immutable() -> None:
    store = create_component_state("Panel", _Panel())
    with pytest.raises(ValidationError):
        store.get_state().count = 3  # type: ignore[misc]


def test_listener_added_during_notification_waits_for_next_commit() -> None:
    store = create_component_state("Panel", _Panel())
    late: list[int] = []

    def add_late(_state: _Panel) -> None:
        store.subscribe(lambda s: late.append(s.count))

    unsubscribe = store.subscribe(add_late)
    store.set_state({"count": 1})
    unsubscribe()
    assert late == []

    store.set_state({"count": 2})
    assert late == [2]


def test_listener_removed_before_its_turn_is_skipped() -> None:
    store = create_component_state("Panel", _Panel())
    calls: list[str] = []
    unsubscribe_b: list[Any] = []

    store.subscribe(lambda _s: (calls.append("a"), unsubscribe_b[0]()))
    unsubscribe_b.append(store.subscribe(lambda _s: calls.append("b")))

    store.set_state({"count": 1})
    assert calls == ["a"]
    assert store.subscriber_count == 1


def test_unsubscribe_twice_is_harmless() -> None:
    store = create_component_state("Panel", _Panel())
    unsubscribe = store.subscribe(lambda _s: None)
    unsubscribe()
    unsubscribe()
    assert store.subscriber_count == 0


def test_nested_set_state_produces_separate_passes() -> None:
    store = create_component_state("Panel", _Panel())
    seen: list[int] = []

    def bump_once(state: _Panel) -> None:
        if state.count == 1:
            store.set_state({"count": 2})

    store.subscribe(bump_once)
    store.subscribe(lambda s: seen.append(s.count))

    store.set_state({"count": 1})

    # The nested commit notifies first; the outer pass then finishes.
    assert seen == [2, 1]
    assert store.get_state().count == 2
    assert store.commits == 2


def test_subscriber_error_propagates_after_commit() -> None:
    store = create_component_state("Panel", _Panel())

    def explode(_state: _Panel) -> None:
        raise RuntimeError("boom")

    store.subscribe(explode)
    with pytest.raises(RuntimeError, match="boom"):
        store.set_state({"count": 1})
    assert store.get_state().count == 1


def test_updater_error_leaves_state_untouched() -> None:
    store = create_component_state("Panel", _Panel())

    def bad(_old: _Panel) -> _Panel:
        raise ValueError("nope")

    with pytest.raises(ValueError):
        store.set_state(bad)
    assert store.commits == 0


def test_partial_update_on_scalar_state_is_rejected() -> None:
    store: Store[int] = Store("Counter", 0)
    store.set_state(lambda n: n + 1)
    assert store.get_state() == 1
    with pytest.raises(TypeError):
        store.set_state({"value": 2})


def test_debug_config_traces_commits(caplog: pytest.LogCaptureFixture) -> None:
    store = create_component_state("Panel", _Panel(), config=RuntimeConfig(debug=True))
    with caplog.at_level(logging.DEBUG, logger="stellarix.state.store"):
        store.set_state({"label": "y" * 500})

    assert "[Panel] state updated" in caplog.text
    assert "<truncated>" in caplog.text


def test_commits_not_traced_without_debug(caplog: pytest.LogCaptureFixture) -> None:
    store = create_component_state("Panel", _Panel())
    with caplog.at_level(logging.DEBUG, logger="stellarix.state.store"):
        store.set_state({"count": 1})
    assert "state updated" not in caplog.text


def test_callable_result_replaces_mapping_snapshot() -> None:
    store = create_component_state("Panel", {"visible": True, "title": "t"})

    store.set_state(lambda _old: {"visible": False})

    assert store.get_state() == {"visible": False}


def test_literal_mapping_still_merges_into_mapping_snapshot() -> None:
    store = create_component_state("Panel", {"visible": True, "title": "t"})

    store.set_state({"visible": False})

    assert store.get_state() == {"visible": False, "title": "t"}


def test_callable_mapping_result_patches_model_snapshot() -> None:
    store = create_component_state("Panel", _Panel(label="x"))

    store.set_state(lambda old: {"count": old.count + 1})

    assert store.get_state() == _Panel(label="x", count=1)
