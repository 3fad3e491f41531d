"""Argument resolution — turn handler parameters into call arguments.

Resolution order, per parameter:

1. A path value with the parameter's name. ``NamedType(T)`` parameters
   receive ``T(raw)``; builtin parameters receive the raw string. Final.
2. The service lookup, for ``NamedType(T)`` parameters only: the entry
   under the parameter's name, or, when there is none, the entry under
   ``type_key(T)``. A value that is not a ``T`` is discarded, except for
   non-runtime-checkable protocols, which cannot be tested.
3. The parameter's default value.
4. ``None``.

A parameter nothing resolves becomes ``None`` instead of raising.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from distroute.errors import ParameterConversionError
from distroute.injection.parameters import HandlerParameter, NamedType
from distroute.injection.services import ServiceLookup

logger = logging.getLogger("distroute.injection")


class ArgumentResolver:
    """Resolves handler parameters against path values and a service lookup.

    Holds no state beyond the lookup it was given; safe to share across
    concurrent dispatches.
    """

    __slots__ = ("services",)

    def __init__(self, services: ServiceLookup | None = None) -> None:
        self.services = services

    def resolve(
        self,
        parameter: HandlerParameter,
        path_values: Mapping[str, str] | None = None,
    ) -> Any:
        """Resolve a single parameter. Returns ``None`` when nothing applies."""
        kind = parameter.kind

        if path_values is not None and parameter.name in path_values:
            raw = path_values[parameter.name]
            if isinstance(kind, NamedType):
                return _wrap(parameter.name, kind.type, raw)
            return raw

        value = None
        if self.services is not None and isinstance(kind, NamedType):
            value = _lookup(self.services, parameter.name, kind)

        if value is None and parameter.has_default:
            value = parameter.default

        return value

    def resolve_all(
        self,
        parameters: Iterable[HandlerParameter],
        path_values: Mapping[str, str] | None = None,
    ) -> tuple[list[Any], dict[str, Any]]:
        """Resolve every parameter into ``(args, kwargs)``.

        Positional parameters land in ``args`` in declaration order;
        keyword-only parameters land in ``kwargs``.
        """
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for parameter in parameters:
            value = self.resolve(parameter, path_values)
            if parameter.keyword_only:
                kwargs[parameter.name] = value
            else:
                args.append(value)
        return args, kwargs


def _lookup(services: ServiceLookup, name: str, kind: NamedType) -> Any:
    if services.has(name):
        key = name
    elif services.has(kind.key):
        key = kind.key
    else:
        return None

    value = services.get(key)
    if kind.checkable and not isinstance(value, kind.type):
        logger.debug(
            "Discarding service %r for parameter %r: %s is not a %s",
            key,
            name,
            type(value).__qualname__,
            kind.type.__qualname__,
        )
        return None
    return value


def _wrap(name: str, target: type, raw: str) -> Any:
    try:
        return target(raw)
    except (TypeError, ValueError) as exc:
        raise ParameterConversionError(name, target, raw) from exc
