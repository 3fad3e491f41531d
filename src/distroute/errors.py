"""distroute exception hierarchy.

Shared across the compiler, router, resolver and route invocation so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class DistrouteError(Exception):
    """Base for all distroute-specific errors."""


class ConfigurationError(DistrouteError):
    """Raised when router setup is invalid.

    Typically raised during route registration, before dispatch starts.
    """


class PatternSyntaxError(ConfigurationError):
    """A route pattern contains a malformed placeholder."""

    def __init__(self, pattern: str, detail: str) -> None:
        self.pattern = pattern
        self.detail = detail
        super().__init__(f"Invalid route pattern {pattern!r}: {detail}")


@dataclass(frozen=True, slots=True)
class HTTPError(DistrouteError):
    """An error that maps directly to an HTTP status code."""

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NoRouteMatchedError(HTTPError):
    """404 — no registered route accepts the request method and path."""

    def __init__(self, method: str, path: str) -> None:
        super().__init__(status=404, detail=f"No route matches {method} {path!r}")
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "path", path)


class HandlerNotFoundError(DistrouteError, LookupError):
    """A ``Type@method`` reference names a type or method that cannot be located."""

    def __init__(self, type_name: str, method_name: str) -> None:
        self.type_name = type_name
        self.method_name = method_name
        super().__init__(f"Handler {type_name}@{method_name} not found")


class HandlerContractViolationError(DistrouteError, TypeError):
    """A handler returned something that is not a response."""

    def __init__(self, handler_name: str, result: object) -> None:
        self.handler_name = handler_name
        self.result = result
        super().__init__(
            f"{handler_name} must return a response object, got {type(result).__name__}"
        )


class ParameterConversionError(DistrouteError, ValueError):
    """A captured path value could not be wrapped in the parameter's declared type."""

    def __init__(self, name: str, target: type, value: str) -> None:
        self.name = name
        self.target = target
        self.value = value
        super().__init__(
            f"Cannot convert path parameter {name}={value!r} to {target.__qualname__}"
        )


class ServiceNotFoundError(DistrouteError, LookupError):
    """The service container has no entry for the requested key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"No service registered for {key!r}")
