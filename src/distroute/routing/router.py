"""Ordered router with first-match dispatch.

Routes are tried in registration order; the first route whose method set
and expression accept the request wins. Registration and dispatch are
separate phases: the route list is frozen on ``compile()`` or on the
first lookup, after which no more routes can be added.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import Any

from distroute._internal.types import Handler
from distroute.config import RouterConfig
from distroute.errors import ConfigurationError, NoRouteMatchedError
from distroute.http.request import RequestLike
from distroute.http.response import SupportsResponse
from distroute.injection.handlers import ControllerRegistry, HandlerRef
from distroute.injection.services import ServiceLookup
from distroute.routing.route import Route, RouteMatch

logger = logging.getLogger("distroute.routing")


class Router:
    """Ordered list of routes plus the collaborators needed to invoke them.

    Usage::

        router = Router(services=container)

        @router.controller
        class UserController:
            def __init__(self, repo: UserRepository): ...
            def show(self, id: UserId) -> Response: ...

        router.get("/users/{id:(\\d+)}", "UserController@show")

        with router.group("/admin"):
            router.any("/{?section}", admin_index)

        response = router.dispatch(Request("GET", "/users/42"))
    """

    __slots__ = (
        "_base_pattern",
        "_freeze_lock",
        "_frozen",
        "_routes",
        "config",
        "controllers",
        "services",
    )

    def __init__(
        self,
        config: RouterConfig | None = None,
        *,
        services: ServiceLookup | None = None,
        controllers: ControllerRegistry | None = None,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self.services = services
        self.controllers: ControllerRegistry = (
            controllers if controllers is not None else ControllerRegistry()
        )
        self._routes: list[Route] = []
        self._base_pattern: str = self.config.base_pattern
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    # -- Registration --

    @property
    def base_pattern(self) -> str:
        """Prefix prepended to patterns registered from now on."""
        return self._base_pattern

    @base_pattern.setter
    def base_pattern(self, pattern: str) -> None:
        self._base_pattern = pattern

    def map(
        self,
        methods: Iterable[str],
        pattern: str,
        handler: Handler | HandlerRef | str,
        *,
        name: str | None = None,
    ) -> Route:
        """Register *handler* for *pattern* under the current base pattern.

        An empty *methods* iterable accepts any method.
        """
        self._check_not_frozen()
        _check_methods(methods)
        route = Route(
            methods=frozenset(methods),
            pattern=self._base_pattern + pattern,
            handler=handler,
            name=name,
            default_fragment=self.config.default_fragment,
            strict=self.config.strict_patterns,
        )
        self._routes.append(route)
        logger.debug(
            "Registered %s %s -> %s (%s)",
            ",".join(sorted(route.methods)) or "*",
            route.pattern,
            route.handler.display_name,
            route.expression,
        )
        return route

    def get(self, pattern: str, handler: Handler | HandlerRef | str, **kw: Any) -> Route:
        return self.map(("GET",), pattern, handler, **kw)

    def post(self, pattern: str, handler: Handler | HandlerRef | str, **kw: Any) -> Route:
        return self.map(("POST",), pattern, handler, **kw)

    def put(self, pattern: str, handler: Handler | HandlerRef | str, **kw: Any) -> Route:
        return self.map(("PUT",), pattern, handler, **kw)

    def patch(self, pattern: str, handler: Handler | HandlerRef | str, **kw: Any) -> Route:
        return self.map(("PATCH",), pattern, handler, **kw)

    def delete(self, pattern: str, handler: Handler | HandlerRef | str, **kw: Any) -> Route:
        return self.map(("DELETE",), pattern, handler, **kw)

    def options(self, pattern: str, handler: Handler | HandlerRef | str, **kw: Any) -> Route:
        return self.map(("OPTIONS",), pattern, handler, **kw)

    def head(self, pattern: str, handler: Handler | HandlerRef | str, **kw: Any) -> Route:
        return self.map(("HEAD",), pattern, handler, **kw)

    def trace(self, pattern: str, handler: Handler | HandlerRef | str, **kw: Any) -> Route:
        return self.map(("TRACE",), pattern, handler, **kw)

    def any(self, pattern: str, handler: Handler | HandlerRef | str, **kw: Any) -> Route:
        """Register a route accepting every request method."""
        return self.map((), pattern, handler, **kw)

    def route(
        self,
        pattern: str,
        *,
        methods: Iterable[str] = ("GET",),
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a function handler via decorator."""
        _check_methods(methods)

        def decorator(func: Handler) -> Handler:
            self.map(methods, pattern, func, name=name)
            return func

        return decorator

    def controller(self, cls: type | None = None, *, name: str | None = None) -> Any:
        """Register a controller class for ``"Type@method"`` handlers.

        Works bare (``@router.controller``), with a name
        (``@router.controller(name="Users")``) or as a plain call.
        """

        def register(target: type) -> type:
            self._check_not_frozen()
            return self.controllers.register(target, name)

        if cls is None:
            return register
        return register(cls)

    @contextmanager
    def group(self, prefix: str) -> Iterator[Router]:
        """Register routes under *prefix* for the duration of the block.

        Groups nest; the previous base pattern is restored on exit.
        """
        previous = self._base_pattern
        self._base_pattern = previous + prefix
        try:
            yield self
        finally:
            self._base_pattern = previous

    # -- Freezing --

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._ensure_frozen()

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes, in registration order."""
        return tuple(self._routes)

    # -- Lookup and dispatch --

    def find(self, request: RequestLike) -> Route:
        """First route accepting *request*.

        Raises ``NoRouteMatchedError`` when no route accepts it.
        """
        return self._first(request.method, request.path)

    def match(self, method: str, path: str) -> RouteMatch:
        """First matching route together with the values extracted from *path*."""
        route = self._first(method, path)
        return RouteMatch(route=route, path_params=route.extract(path))

    def dispatch(self, request: RequestLike) -> SupportsResponse:
        """Find the route for *request* and invoke its handler."""
        route = self.find(request)
        return route.invoke(request, services=self.services, controllers=self.controllers)

    async def adispatch(self, request: RequestLike) -> SupportsResponse:
        """Async ``dispatch``; coroutine handlers are awaited."""
        route = self.find(request)
        return await route.ainvoke(
            request, services=self.services, controllers=self.controllers
        )

    # -- Internal --

    def _first(self, method: str, path: str) -> Route:
        self._ensure_frozen()
        for route in self._routes:
            if route.match(method, path):
                return route
        logger.debug("No route matches %s %s", method, path)
        raise NoRouteMatchedError(method, path)

    def _ensure_frozen(self) -> None:
        """Freeze with double-check locking.

        Concurrent first requests must not race a half-built route list.
        """
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._frozen = True
            logger.debug("Router frozen with %d route(s)", len(self._routes))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot register routes after the router has started dispatching. "
                "Register routes and controllers before the first request."
            )
            raise ConfigurationError(msg)


def _check_methods(methods: Iterable[str]) -> None:
    if isinstance(methods, str):
        msg = (
            f"methods must be a collection of method names, got the string {methods!r}. "
            f"Use methods=[{methods!r}]."
        )
        raise ConfigurationError(msg)

