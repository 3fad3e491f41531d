"""distroute — a regex-based request router with argument injection.

Compiles ``{name}``-style URL patterns into anchored regular expressions,
matches requests in registration order, and calls handlers with
arguments resolved from the path, a service container, and defaults.

Basic usage::

    from distroute import Request, Response, Router

    router = Router()

    @router.route("/hello/{name}/{?greeting}")
    def hello(name: str, greeting: str = "Hello"):
        return Response(f"{greeting}, {name}!")

    router.dispatch(Request("GET", "/hello/alice"))   # "Hello, alice!"
"""

__version__ = "0.3.0"
__all__ = [
    "ArgumentResolver",
    "BoundMethod",
    "ConfigurationError",
    "Container",
    "ControllerRegistry",
    "DistrouteError",
    "FreeFunction",
    "HTTPError",
    "HandlerContractViolationError",
    "HandlerNotFoundError",
    "NoRouteMatchedError",
    "ParameterConversionError",
    "PatternSyntaxError",
    "Request",
    "Response",
    "Route",
    "RouteMatch",
    "Router",
    "RouterConfig",
    "ServiceLookup",
    "ServiceNotFoundError",
    "compile_pattern",
]

_ERRORS = (
    "ConfigurationError",
    "DistrouteError",
    "HTTPError",
    "HandlerContractViolationError",
    "HandlerNotFoundError",
    "NoRouteMatchedError",
    "ParameterConversionError",
    "PatternSyntaxError",
    "ServiceNotFoundError",
)

_INJECTION = (
    "ArgumentResolver",
    "BoundMethod",
    "Container",
    "ControllerRegistry",
    "FreeFunction",
    "ServiceLookup",
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import distroute`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from distroute.routing.router import Router

        return Router

    if name in ("Route", "RouteMatch"):
        from distroute.routing import route as _route

        return getattr(_route, name)

    if name == "compile_pattern":
        from distroute.routing.pattern import compile_pattern

        return compile_pattern

    if name == "RouterConfig":
        from distroute.config import RouterConfig

        return RouterConfig

    if name == "Request":
        from distroute.http.request import Request

        return Request

    if name == "Response":
        from distroute.http.response import Response

        return Response

    if name in _INJECTION:
        from distroute import injection as _injection

        return getattr(_injection, name)

    if name in _ERRORS:
        from distroute import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
