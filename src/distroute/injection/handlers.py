"""Handler references and their resolution.

A route's handler is either a plain callable or a ``"Type@method"``
reference. References are resolved through an explicit
``ControllerRegistry``; class names are never imported dynamically.

Usage::

    controllers = ControllerRegistry()
    controllers.register(UserController)

    ref = as_handler_ref("UserController@show")   # BoundMethod
    func, args, kwargs = prepare_call(ref, {"id": "42"}, controllers=controllers)
"""

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from distroute.errors import ConfigurationError, HandlerNotFoundError
from distroute.injection.parameters import inspect_parameters
from distroute.injection.resolver import ArgumentResolver
from distroute.injection.services import ServiceLookup

logger = logging.getLogger("distroute.injection")


@dataclass(frozen=True, slots=True)
class FreeFunction:
    """A plain callable handler."""

    func: Callable[..., Any]

    @property
    def display_name(self) -> str:
        return getattr(self.func, "__qualname__", repr(self.func))


@dataclass(frozen=True, slots=True)
class BoundMethod:
    """A method on a controller class, instantiated per invocation."""

    type_name: str
    method_name: str

    @property
    def display_name(self) -> str:
        return f"{self.type_name}@{self.method_name}"


HandlerRef: TypeAlias = FreeFunction | BoundMethod


def as_handler_ref(target: Any) -> HandlerRef:
    """Normalize a registration-time handler into a ``HandlerRef``.

    Accepts a ``HandlerRef``, a ``"Type@method"`` string, or a callable.
    """
    if isinstance(target, (FreeFunction, BoundMethod)):
        return target

    if isinstance(target, str):
        type_name, sep, method_name = target.partition("@")
        if not sep or not type_name or not method_name or "@" in method_name:
            msg = f"Handler reference {target!r} must have the form 'Type@method'"
            raise ConfigurationError(msg)
        return BoundMethod(type_name.strip(), method_name.strip())

    if callable(target):
        return FreeFunction(target)

    msg = f"Handler must be a callable or a 'Type@method' string, got {type(target).__name__}"
    raise ConfigurationError(msg)


class ControllerRegistry:
    """Name → class table used to resolve ``BoundMethod`` references."""

    __slots__ = ("_types",)

    def __init__(self) -> None:
        self._types: dict[str, type] = {}

    def register(self, cls: type, name: str | None = None) -> type:
        """Register *cls* under *name* (default: the class name).

        Returns *cls* so it can be used as a decorator.
        """
        key = name or cls.__name__
        existing = self._types.get(key)
        if existing is not None and existing is not cls:
            msg = f"Controller name {key!r} is already registered to {existing.__qualname__}"
            raise ConfigurationError(msg)
        self._types[key] = cls
        return cls

    def lookup(self, type_name: str) -> type | None:
        return self._types.get(type_name)

    def resolve(self, ref: BoundMethod) -> tuple[type, str]:
        """Locate the class and method a ``BoundMethod`` points at.

        Raises ``HandlerNotFoundError`` if either is missing.
        """
        cls = self._types.get(ref.type_name)
        if cls is None:
            logger.debug("Unknown controller %r", ref.type_name)
            raise HandlerNotFoundError(ref.type_name, ref.method_name)
        if not callable(getattr(cls, ref.method_name, None)):
            raise HandlerNotFoundError(ref.type_name, ref.method_name)
        return cls, ref.method_name

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)


def construct(cls: type, resolver: ArgumentResolver) -> Any:
    """Instantiate *cls*, resolving its constructor from services only."""
    args, kwargs = resolver.resolve_all(inspect_parameters(cls))
    return cls(*args, **kwargs)


def prepare_call(
    ref: HandlerRef,
    path_values: Mapping[str, str] | None = None,
    *,
    services: ServiceLookup | None = None,
    controllers: ControllerRegistry | None = None,
) -> tuple[Callable[..., Any], list[Any], dict[str, Any]]:
    """Resolve *ref* to a callable plus the arguments to call it with.

    For a ``BoundMethod`` the controller is constructed first (path values
    do not apply to construction), then the method is bound from path
    values and services.
    """
    resolver = ArgumentResolver(services)

    if isinstance(ref, BoundMethod):
        if controllers is None:
            raise HandlerNotFoundError(ref.type_name, ref.method_name)
        cls, method_name = controllers.resolve(ref)
        target = getattr(construct(cls, resolver), method_name)
    else:
        target = ref.func

    args, kwargs = resolver.resolve_all(inspect_parameters(target), path_values)
    return target, args, kwargs
