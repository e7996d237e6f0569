"""Primitive factory: metadata, state and logic bundled into one unit.

A primitive starts life as a metadata-only shell created by
:func:`create_primitive`.  Attaching an implementation instantiates its
store and logic layer, connects and initializes them.  Only then can it
be handed to a framework adapter.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, Literal, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from stellarix.adapter import ElementBinding, FrameworkAdapter
from stellarix.config import DEFAULT_CONFIG, RuntimeConfig
from stellarix.exceptions import (
    AdapterConnectionError,
    ImplementationMissingError,
    StellarixConfigError,
    StellarixError,
)
from stellarix.logic.layer import LogicLayer
from stellarix.state.store import Store, Unsubscribe

_logger = logging.getLogger(__name__)

S = TypeVar("S")
O = TypeVar("O")  # noqa: E741
T = TypeVar("T")


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


class _MetadataModel(BaseModel):
    """Metadata accepts snake_case or camelCase keys and dumps camelCase by alias."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class A11yMetadata(_MetadataModel):
    role: str | None = None
    label: str | None = None
    description: str | None = None
    keyboard_shortcuts: tuple[str, ...] = ()
    aria_attributes: tuple[str, ...] = ()
    wcag_level: Literal["A", "AA", "AAA"] = "AA"
    patterns: tuple[str, ...] = ()


class EventMetadata(_MetadataModel):
    supported: tuple[str, ...] = ()
    required: tuple[str, ...] = ()
    custom: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _required_are_supported(self) -> EventMetadata:
        missing = sorted(set(self.required) - set(self.supported))
        if missing:
            raise ValueError(f"required events not in supported: {', '.join(missing)}")
        return self


class ElementSpec(_MetadataModel):
    type: str
    role: str | None = None
    optional: bool = False


class ComponentStructure(_MetadataModel):
    elements: dict[str, ElementSpec] = Field(default_factory=dict)
    slots: tuple[str, ...] = ()
    variants: tuple[str, ...] = ()
    sizes: tuple[str, ...] = ()


class PrimitiveDescriptor(_MetadataModel):
    """Per-type metadata a primitive is declared with."""

    accessibility: A11yMetadata = Field(default_factory=A11yMetadata)
    events: EventMetadata = Field(default_factory=EventMetadata)
    structure: ComponentStructure = Field(default_factory=ComponentStructure)


class ComponentMetadata(PrimitiveDescriptor):
    """Descriptor plus the component's name and version."""

    name: str
    version: str


# ---------------------------------------------------------------------------
# Primitive
# ---------------------------------------------------------------------------


class Primitive(Generic[S, O]):
    """One addressable, framework-agnostic component instance.

    ``state`` and ``logic`` are only available once an implementation has
    been attached.
    """

    def __init__(
        self,
        metadata: ComponentMetadata,
        *,
        options: O | None = None,
        on_destroy: Callable[[], None] | None = None,
    ) -> None:
        self.metadata = metadata
        self.options = options
        self._state: Store[S] | None = None
        self._logic: LogicLayer[S] | None = None
        self._on_destroy = on_destroy
        self._subscriptions: list[Unsubscribe] = []
        self._destroyed = False

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def is_implemented(self) -> bool:
        return self._state is not None and self._logic is not None

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    @property
    def state(self) -> Store[S]:
        if self._state is None:
            raise ImplementationMissingError(f"{self.name} has no state store; attach an implementation first")
        return self._state

    @property
    def logic(self) -> LogicLayer[S]:
        if self._logic is None:
            raise ImplementationMissingError(f"{self.name} has no logic layer; attach an implementation first")
        return self._logic

    def attach(
        self,
        create_state: Callable[[Any], Store[S]],
        create_logic: Callable[[Store[S], Any], LogicLayer[S]],
        options: O | None = None,
    ) -> Self:
        """Instantiate, connect and initialize the store and logic layer."""
        if self._destroyed:
            raise StellarixConfigError(f"{self.name} has been destroyed")
        if self.is_implemented:
            raise StellarixConfigError(f"{self.name} already has an implementation attached")

        resolved = options if options is not None else self.options
        state = create_state(resolved)
        logic = create_logic(state, resolved)
        logic.connect(state)
        try:
            logic.initialize()
        except Exception:
            logic.cleanup()
            raise

        self._state = state
        self._logic = logic
        self.options = resolved
        _logger.debug("%s implementation attached", self.name)
        return self

    def connect(self, adapter: FrameworkAdapter[T]) -> T:
        """Hand this primitive to *adapter* and return its native component."""
        adapter_name = getattr(adapter, "name", type(adapter).__name__)
        if not self.is_implemented:
            raise ImplementationMissingError(
                f"Cannot connect {self.name} to the {adapter_name!r} adapter: no implementation attached. "
                "Call attach() or build the primitive through a PrimitiveFactory first."
            )
        if self._destroyed:
            raise StellarixConfigError(f"Cannot connect {self.name}: it has been destroyed")

        try:
            component = adapter.create_component(self)
            optimize = getattr(adapter, "optimize", None)
            if optimize is not None:
                component = optimize(component)
        except StellarixError:
            raise
        except Exception as exc:
            raise AdapterConnectionError(
                f"Failed to connect {self.name} to {adapter_name} adapter: {exc}",
                adapter=str(adapter_name),
                component=self.name,
            ) from exc

        _logger.debug("%s connected to %s adapter", self.name, adapter_name)
        return component

    def subscribe(self, listener: Callable[[S], None]) -> Unsubscribe:
        """Subscribe to the store; released automatically by :meth:`destroy`."""
        unsubscribe = self.state.subscribe(listener)
        self._subscriptions.append(unsubscribe)
        return unsubscribe

    def bind(self, element: str) -> ElementBinding:
        """Return the attributes and listeners for one named element."""
        logic = self.logic
        return ElementBinding(
            element=str(element),
            attributes=logic.get_a11y_props(element),
            listeners=logic.get_interaction_handlers(element),
        )

    def destroy(self) -> None:
        """Dispose the logic layer and release adapter subscriptions.  Idempotent."""
        if self._destroyed:
            return
        self._destroyed = True
        try:
            if self._logic is not None:
                self._logic.cleanup()
        finally:
            subscriptions = list(self._subscriptions)
            self._subscriptions.clear()
            for unsubscribe in subscriptions:
                unsubscribe()
            if self._on_destroy is not None:
                self._on_destroy()
            _logger.debug("%s destroyed", self.name)

    def __repr__(self) -> str:
        status = "destroyed" if self._destroyed else "live" if self.is_implemented else "shell"
        return f"{type(self).__name__}(name={self.name!r}, status={status!r})"


def create_primitive(
    type_name: str,
    descriptor: PrimitiveDescriptor | Mapping[str, Any],
    *,
    version: str | None = None,
    options: Any = None,
    on_destroy: Callable[[], None] | None = None,
    config: RuntimeConfig | None = None,
) -> Primitive[Any, Any]:
    """Create a metadata-only primitive shell.

    The shell can be inspected (``metadata``) before any instance exists.
    """
    if not type_name:
        raise StellarixConfigError("A primitive needs a type name")
    if not isinstance(descriptor, PrimitiveDescriptor):
        descriptor = PrimitiveDescriptor.model_validate(descriptor)
    metadata = ComponentMetadata(
        name=type_name,
        version=version or (config or DEFAULT_CONFIG).default_version,
        accessibility=descriptor.accessibility,
        events=descriptor.events,
        structure=descriptor.structure,
    )
    return Primitive(metadata, options=options, on_destroy=on_destroy)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PrimitiveFactory(Generic[S, O]):
    """Callable producing live primitives of one type.

    Usage::

        alert = alert_factory()(message="Saved", dismissible=True)
    """

    name: str
    descriptor: PrimitiveDescriptor
    create_state: Callable[[Any], Store[S]]
    create_logic: Callable[[Store[S], Any], LogicLayer[S]]
    options_model: type[BaseModel] | None = None
    version: str | None = None
    on_destroy: Callable[[], None] | None = None
    config: RuntimeConfig | None = None

    def coerce_options(self, options: Any = None, **overrides: Any) -> Any:
        """Validate *options* once into the factory's options model."""
        model = self.options_model
        if model is None:
            return options
        if isinstance(options, model) and not overrides:
            return options
        if options is None:
            data: dict[str, Any] = {}
        elif isinstance(options, BaseModel):
            data = {name: getattr(options, name) for name in type(options).model_fields}
        else:
            data = dict(options)
        data.update(overrides)
        return model.model_validate(data)

    def shell(self, options: Any = None, **overrides: Any) -> Primitive[S, O]:
        """Return a metadata-only primitive carrying validated options."""
        return create_primitive(
            self.name,
            self.descriptor,
            version=self.version,
            options=self.coerce_options(options, **overrides),
            on_destroy=self.on_destroy,
            config=self.config,
        )

    def __call__(self, options: Any = None, **overrides: Any) -> Primitive[S, O]:
        return self.shell(options, **overrides).attach(self.create_state, self.create_logic)


class PrimitiveFactoryBuilder(Generic[S, O]):
    """Step-by-step construction of a :class:`PrimitiveFactory`."""

    def __init__(self, *, config: RuntimeConfig | None = None) -> None:
        self._config = config
        self._name: str | None = None
        self._version: str | None = None
        self._descriptor: PrimitiveDescriptor | None = None
        self._create_state: Callable[[Any], Store[S]] | None = None
        self._create_logic: Callable[[Store[S], Any], LogicLayer[S]] | None = None
        self._options_model: type[BaseModel] | None = None
        self._on_destroy: Callable[[], None] | None = None

    def with_name(self, name: str, version: str | None = None) -> Self:
        self._name = name
        if version:
            self._version = version
        return self

    def with_state(self, creator: Callable[[Any], Store[S]]) -> Self:
        self._create_state = creator
        return self

    def with_logic(self, creator: Callable[[Store[S], Any], LogicLayer[S]]) -> Self:
        self._create_logic = creator
        return self

    def with_descriptor(self, descriptor: PrimitiveDescriptor | Mapping[str, Any]) -> Self:
        if not isinstance(descriptor, PrimitiveDescriptor):
            descriptor = PrimitiveDescriptor.model_validate(descriptor)
        self._descriptor = descriptor
        return self

    def with_options(self, model: type[BaseModel]) -> Self:
        self._options_model = model
        return self

    def with_cleanup(self, hook: Callable[[], None]) -> Self:
        self._on_destroy = hook
        return self

    def build(self) -> PrimitiveFactory[S, O]:
        if not self._name:
            raise StellarixConfigError("Component name is required")
        if self._create_state is None:
            raise StellarixConfigError(f"{self._name}: state creator is required")
        if self._create_logic is None:
            raise StellarixConfigError(f"{self._name}: logic creator is required")
        if self._descriptor is None:
            raise StellarixConfigError(f"{self._name}: component descriptor is required")
        return PrimitiveFactory(
            name=self._name,
            descriptor=self._descriptor,
            create_state=self._create_state,
            create_logic=self._create_logic,
            options_model=self._options_model,
            version=self._version,
            on_destroy=self._on_destroy,
            config=self._config,
        )
