"""Injection — resolve handler parameters into call arguments.

Pieces:
    HandlerParameter / inspect_parameters -- handler signature metadata
    ArgumentResolver -- path values, then services, then defaults
    Container / ServiceLookup -- the service-lookup capability
    ControllerRegistry -- resolves ``"Type@method"`` handler references
"""

from distroute.injection.handlers import (
    BoundMethod,
    ControllerRegistry,
    FreeFunction,
    HandlerRef,
    as_handler_ref,
)
from distroute.injection.parameters import (
    BUILTIN,
    Builtin,
    HandlerParameter,
    NamedType,
    inspect_parameters,
)
from distroute.injection.resolver import ArgumentResolver
from distroute.injection.services import Container, ServiceLookup, type_key

__all__ = [
    "BUILTIN",
    "ArgumentResolver",
    "BoundMethod",
    "Builtin",
    "Container",
    "ControllerRegistry",
    "FreeFunction",
    "HandlerParameter",
    "HandlerRef",
    "NamedType",
    "ServiceLookup",
    "as_handler_ref",
    "inspect_parameters",
    "type_key",
]
