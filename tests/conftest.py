"""Shared fixtures: a virtual clock and an in-memory adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from stellarix.adapter import ElementBinding
from stellarix.primitive import Primitive
from stellarix.timers import ManualScheduler


@dataclass
class RenderedComponent:
    """What the recording adapter produces: one entry per render pass."""

    name: str
    renders: list[dict[str, Any]] = field(default_factory=list)

    @property
    def last(self) -> dict[str, Any]:
        return self.renders[-1]

    def element(self, name: str) -> ElementBinding:
        binding: ElementBinding = self.last["elements"][name]
        return binding


class RecordingAdapter:
    """Adapter that 'renders' each snapshot into a list instead of a DOM."""

    name = "recording"
    version = "1.0.0"

    def __init__(self) -> None:
        self.optimized: list[RenderedComponent] = []

    def create_component(self, core: Primitive[Any, Any]) -> RenderedComponent:
        rendered = RenderedComponent(core.name)
        elements = list(core.metadata.structure.elements)

        def render(state: Any) -> None:
            rendered.renders.append({"state": state, "elements": {el: core.bind(el) for el in elements}})

        core.subscribe(render)
        render(core.state.get_state())
        return rendered

    def optimize(self, component: RenderedComponent) -> RenderedComponent:
        self.optimized.append(component)
        return component


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def adapter() -> RecordingAdapter:
    return RecordingAdapter()
