"""Service lookup protocol and the default container.

The resolver only ever calls ``has(key)`` and ``get(key)``. Anything with
those two methods can stand in for ``Container``.
"""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from distroute.errors import ServiceNotFoundError


def type_key(cls: type) -> str:
    """The lookup key a type is registered and queried under."""
    return f"{cls.__module__}.{cls.__qualname__}"


@runtime_checkable
class ServiceLookup(Protocol):
    """Minimal service-lookup capability."""

    def has(self, key: str) -> bool: ...

    def get(self, key: str) -> Any: ...


class Container:
    """Dict-backed service container.

    Keys are strings or types; a type is stored under ``type_key(cls)``::

        services = Container()
        services.bind("mailer", SmtpMailer("localhost"))
        services.provide(Clock, SystemClock)   # factory, called on every get()

        services.has("mailer")                 # True
        services.get(type_key(Clock))          # fresh SystemClock
    """

    __slots__ = ("_factories", "_instances")

    def __init__(self) -> None:
        self._instances: dict[str, Any] = {}
        self._factories: dict[str, Callable[[], Any]] = {}

    def bind(self, key: str | type, value: Any) -> None:
        """Register a ready-made instance under *key*."""
        name = _normalize(key)
        self._factories.pop(name, None)
        self._instances[name] = value

    def provide(self, key: str | type, factory: Callable[[], Any]) -> None:
        """Register a zero-argument factory called on every lookup of *key*."""
        name = _normalize(key)
        self._instances.pop(name, None)
        self._factories[name] = factory

    def has(self, key: str | type) -> bool:
        name = _normalize(key)
        return name in self._instances or name in self._factories

    def get(self, key: str | type) -> Any:
        name = _normalize(key)
        if name in self._instances:
            return self._instances[name]
        if name in self._factories:
            return self._factories[name]()
        raise ServiceNotFoundError(name)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, type)):
            return False
        return self.has(key)

    def __len__(self) -> int:
        return len(self._instances) + len(self._factories)


def _normalize(key: str | type) -> str:
    if isinstance(key, type):
        return type_key(key)
    return key
