"""
Extension registry for authoring contexts.

A ``ContextFactory`` is an immutable, ordered set of registrations. Each
registration names an element or container constructor; the factory composes
them into a ``Context`` subclass whose methods create and register the
elements. Nested callbacks receive an instance of the same class, so every
registered kind is available at any depth.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from .errors import RegistrationError
from .log import get_logger

if TYPE_CHECKING:
    from .context import ContextBase
    from .elements import Container, Element

LOGGER = get_logger(__name__)


class RegistrationKind(str, Enum):
    """What a registered constructor produces."""

    ELEMENT = "element"
    CONTAINER = "container"


@dataclass(frozen=True)
class Registration:
    """A named constructor added to a context."""

    name: str
    kind: RegistrationKind
    constructor: Callable[..., Any]


class Context:
    """Capability object handed to authoring code.

    Registered element and container kinds appear as methods of generated
    subclasses; this base only carries the ownership context they act on.
    """

    __slots__ = ("_base",)

    def __init__(self, base: ContextBase):
        self._base = base

    @property
    def base(self) -> ContextBase:
        return self._base

    def __repr__(self) -> str:
        names = ", ".join(type(self).registered_names)
        return f"<{type(self).__name__} [{names}]>"

    # Overwritten on generated subclasses
    registered_names: tuple[str, ...] = ()


# Names a registration may not take over
RESERVED_NAMES = frozenset(dir(Context))


def _element_method(registration: Registration) -> Callable[..., Any]:
    constructor = registration.constructor

    def method(self: Context, *args: Any, **kwargs: Any) -> Element:
        return self._base.element(constructor(*args, **kwargs))

    method.__name__ = registration.name
    method.__doc__ = f"Create a {_constructor_name(constructor)} and add it to this context."
    return method


def _container_method(registration: Registration) -> Callable[..., Any]:
    constructor = registration.constructor
    name = registration.name

    def method(self: Context, *args: Any, **kwargs: Any) -> Awaitable[Container]:
        if not args:
            raise TypeError(f"{name}() requires a trailing callback or list of elements")
        *constructor_args, callback_or_list = args
        container = self._base.element(constructor(*constructor_args, **kwargs))
        return self._base.container(container, callback_or_list)

    method.__name__ = name
    method.__doc__ = (
        f"Create a {_constructor_name(constructor)}, add it to this context and fill it "
        "from a list of elements (right away) or a callback (once awaited)."
    )
    return method


def _constructor_name(constructor: Callable[..., Any]) -> str:
    return getattr(constructor, "__name__", type(constructor).__name__)


class ContextFactory:
    """Immutable registry of named element and container constructors."""

    def __init__(self, registrations: tuple[Registration, ...] = ()):
        self._registrations = registrations

    @property
    def registrations(self) -> tuple[Registration, ...]:
        return self._registrations

    def _extend(self, name: str, kind: RegistrationKind, constructor: Callable[..., Any]) -> ContextFactory:
        if not isinstance(name, str) or not name.isidentifier():
            raise RegistrationError(f"Registration name must be an identifier, got {name!r}")
        if name.startswith("_") or name in RESERVED_NAMES:
            raise RegistrationError(f"Registration name {name!r} is reserved")
        if not callable(constructor):
            raise RegistrationError(f"Constructor for {name!r} is not callable")

        LOGGER.debug("Registering %s %r -> %s", kind.value, name, _constructor_name(constructor))
        return ContextFactory(self._registrations + (Registration(name, kind, constructor),))

    def use_element(self, name: str, constructor: Callable[..., Element]) -> ContextFactory:
        """Return a factory whose contexts gain a ``name`` method creating elements.

        Args:
            name: Method name on the context
            constructor: Element class or any callable returning an element

        Returns:
            A new factory; this one is left unchanged
        """
        return self._extend(name, RegistrationKind.ELEMENT, constructor)

    def use_container(self, name: str, constructor: Callable[..., Container]) -> ContextFactory:
        """Return a factory whose contexts gain a ``name`` method creating containers.

        The method takes the constructor arguments followed by a callback or a
        list of elements.
        """
        return self._extend(name, RegistrationKind.CONTAINER, constructor)

    def resolved(self) -> dict[str, Registration]:
        """Effective registrations by name; later ones shadow earlier ones."""
        resolved: dict[str, Registration] = {}
        for registration in self._registrations:
            resolved[registration.name] = registration
        return resolved

    @cached_property
    def context_type(self) -> type[Context]:
        """The ``Context`` subclass exposing every registered kind."""
        namespace: dict[str, Any] = {"__slots__": ()}
        resolved = self.resolved()
        for name, registration in resolved.items():
            if registration.kind is RegistrationKind.CONTAINER:
                namespace[name] = _container_method(registration)
            else:
                namespace[name] = _element_method(registration)
        namespace["registered_names"] = tuple(resolved)
        return type("DocumentContext", (Context,), namespace)

    def __call__(self, base: ContextBase) -> Context:
        return self.context_type(base)
