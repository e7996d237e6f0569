"""Base models for component state and construction options.

State and options are both immutable.  State snapshots are replaced as a
whole on every commit; options are validated once when a component is
built and never change afterwards.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ComponentState(BaseModel):
    """Base for flat per-component state records.

    Unknown fields are rejected, so a partial update with a misspelled
    key fails at the ``set_state`` call instead of being silently kept.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")


class ComponentOptions(BaseModel):
    """Base for per-component construction options.

    Options carry initial field values and callback references.  They are
    forwarded unchanged to the component's state and logic creators.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)
