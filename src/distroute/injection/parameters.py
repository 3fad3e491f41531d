"""Handler parameter metadata.

``inspect_parameters`` is the only place that reads a handler's
signature. Everything downstream works on ``HandlerParameter`` records.

A parameter's kind is either:

- ``Builtin`` — unannotated, or annotated with a builtin or a typing
  construct. Path values are passed through as raw strings.
- ``NamedType(T)`` — annotated with a user-defined class (``X | None``
  unwraps to ``X``). Path values are wrapped with ``T(raw)`` and the
  service lookup is consulted when no path value exists. Services are
  checked with ``isinstance`` unless ``T`` is a ``Protocol`` that is not
  ``@runtime_checkable``; those are trusted as registered.
"""

import inspect
import types
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias, Union, get_args, get_origin

from distroute.injection.services import type_key


@dataclass(frozen=True, slots=True)
class Builtin:
    """A parameter used as-is from its raw string."""


@dataclass(frozen=True, slots=True)
class NamedType:
    """A parameter whose value is an instance of ``type``."""

    type: type

    @property
    def key(self) -> str:
        return type_key(self.type)

    @property
    def checkable(self) -> bool:
        """False for a plain ``Protocol``, which ``isinstance`` cannot test."""
        if not getattr(self.type, "_is_protocol", False):
            return True
        return bool(getattr(self.type, "_is_runtime_protocol", False))


ParameterKind: TypeAlias = Builtin | NamedType

BUILTIN = Builtin()


@dataclass(frozen=True, slots=True)
class HandlerParameter:
    """One declared parameter of a handler or constructor."""

    name: str
    kind: ParameterKind = BUILTIN
    has_default: bool = False
    default: Any = None
    keyword_only: bool = False


def classify(annotation: Any) -> ParameterKind:
    """Map a type annotation to a parameter kind."""
    if annotation is inspect.Parameter.empty:
        return BUILTIN

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return classify(members[0])
        return BUILTIN
    if origin is not None:
        return BUILTIN

    if isinstance(annotation, type) and annotation.__module__ != "builtins":
        return NamedType(annotation)
    return BUILTIN


def inspect_parameters(handler: Callable[..., Any]) -> tuple[HandlerParameter, ...]:
    """Describe the bindable parameters of *handler*, in declaration order.

    ``*args`` and ``**kwargs`` are skipped. Passing a class describes its
    constructor (without ``self``).
    """
    sig = inspect.signature(handler, eval_str=True)
    parameters: list[HandlerParameter] = []

    for name, param in sig.parameters.items():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        has_default = param.default is not inspect.Parameter.empty
        parameters.append(
            HandlerParameter(
                name=name,
                kind=classify(param.annotation),
                has_default=has_default,
                default=param.default if has_default else None,
                keyword_only=param.kind is param.KEYWORD_ONLY,
            )
        )

    return tuple(parameters)
