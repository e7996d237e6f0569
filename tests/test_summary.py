from __future__ import annotations

from stellarix._summary import summarize_for_log
from stellarix.state import ComponentState


class _Snapshot(ComponentState):
    message: str = ""
    visible: bool = True


def test_summarize_truncates_long_strings() -> None:
    summary = summarize_for_log({"value": "x" * 600}, max_string=10)
    assert summary["value"].startswith("x" * 10)
    assert "<truncated>" in summary["value"]


def test_summarize_expands_models_and_names_callables() -> None:
    def on_dismiss() -> None:
        return None

    summary = summarize_for_log({"state": _Snapshot(message="hi"), "cb": on_dismiss, "tags": ("a", 1)})

    assert summary["state"] == {"message": "hi", "visible": True}
    assert summary["cb"] == "<callable:on_dismiss>"
    assert summary["tags"] == ["a", 1]


def test_summarize_limits_depth() -> None:
    nested: dict[str, object] = {}
    cursor = nested
    for _ in range(15):
        cursor["next"] = {}
        cursor = cursor["next"]  # type: ignore[assignment]

    summary = summarize_for_log(nested)
    for _ in range(11):
        summary = summary["next"]
    assert summary == "<max-depth>"
