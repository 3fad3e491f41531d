"""Route and RouteMatch frozen dataclasses."""

import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from distroute.errors import HandlerContractViolationError
from distroute.http.request import RequestLike
from distroute.http.response import SupportsResponse
from distroute.injection.handlers import (
    ControllerRegistry,
    HandlerRef,
    as_handler_ref,
    prepare_call,
)
from distroute.injection.services import ServiceLookup
from distroute.routing import matcher
from distroute.routing.params import DEFAULT_FRAGMENT, ParameterDefinition
from distroute.routing.pattern import CompiledPattern, compile_pattern

logger = logging.getLogger("distroute.routing")


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    The pattern is compiled once, when the route is created. ``handler``
    accepts anything ``as_handler_ref`` does and is stored normalized.
    An empty ``methods`` set accepts any request method.
    """

    methods: frozenset[str]
    pattern: str
    handler: HandlerRef
    name: str | None = None
    default_fragment: str = field(default=DEFAULT_FRAGMENT, repr=False)
    strict: bool = field(default=True, repr=False)
    compiled: CompiledPattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "methods", frozenset(self.methods))
        object.__setattr__(self, "handler", as_handler_ref(self.handler))
        object.__setattr__(
            self,
            "compiled",
            compile_pattern(
                self.pattern,
                default_fragment=self.default_fragment,
                strict=self.strict,
            ),
        )

    @property
    def expression(self) -> str:
        return self.compiled.expression

    @property
    def parameters(self) -> tuple[ParameterDefinition, ...]:
        return self.compiled.parameters

    def match(self, method: str, path: str) -> bool:
        """True if this route accepts *method* and *path*."""
        return matcher.matches(self.compiled, self.methods, method, path)

    def extract(self, path: str) -> dict[str, str]:
        """Path values captured from *path*, keyed by parameter name."""
        return matcher.extract(self.compiled, path)

    def invoke(
        self,
        request: RequestLike,
        *,
        services: ServiceLookup | None = None,
        controllers: ControllerRegistry | None = None,
    ) -> SupportsResponse:
        """Call the handler for *request* and return its response.

        Raises ``HandlerNotFoundError`` when a ``Type@method`` reference
        cannot be located, and ``HandlerContractViolationError`` when the
        handler returns something that is not a response.
        """
        func, args, kwargs = self._prepare(request, services, controllers)
        return self._check_response(func(*args, **kwargs))

    async def ainvoke(
        self,
        request: RequestLike,
        *,
        services: ServiceLookup | None = None,
        controllers: ControllerRegistry | None = None,
    ) -> SupportsResponse:
        """Like ``invoke``, awaiting the handler's result when it is awaitable."""
        func, args, kwargs = self._prepare(request, services, controllers)
        result = func(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return self._check_response(result)

    def _prepare(
        self,
        request: RequestLike,
        services: ServiceLookup | None,
        controllers: ControllerRegistry | None,
    ) -> tuple[Any, list[Any], dict[str, Any]]:
        path_values = self.extract(request.path)
        logger.debug(
            "Invoking %s for %s %s with %r",
            self.handler.display_name,
            request.method,
            request.path,
            path_values,
        )
        return prepare_call(
            self.handler,
            path_values,
            services=services,
            controllers=controllers,
        )

    def _check_response(self, result: Any) -> SupportsResponse:
        if isinstance(result, SupportsResponse):
            return result
        if inspect.iscoroutine(result):
            # Never awaited: an async handler reached the sync path
            result.close()
        raise HandlerContractViolationError(self.handler.display_name, result)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: Mapping[str, str]
