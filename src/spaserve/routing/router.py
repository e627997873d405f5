"""Compiled router.

Routes are registered during setup and frozen by ``compile()``. Exact
paths are looked up first; a single ``/{name:path}`` catch-all takes
everything else.
"""

from spaserve.errors import MethodNotAllowed, NotFound
from spaserve.routing.route import Route, RouteMatch


class Router:
    """Router with exact-path lookup and an optional catch-all.

    Usage::

        router = Router()
        router.add(Route("/", index, frozenset({"GET", "HEAD"})))
        router.add(Route("/{path:path}", asset, frozenset({"GET", "HEAD"})))
        router.compile()
        match = router.match("GET", "/app.js")
    """

    __slots__ = ("_catch_all", "_compiled", "_exact")

    def __init__(self) -> None:
        self._exact: dict[str, Route] = {}
        self._catch_all: Route | None = None
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        if route.catch_all_param is not None:
            if self._catch_all is not None:
                msg = f"Catch-all route already registered: {self._catch_all.path!r}"
                raise RuntimeError(msg)
            self._catch_all = route
            return

        if "{" in route.path:
            msg = f"Only exact paths and /{{name:path}} are supported, got {route.path!r}"
            raise ValueError(msg)

        key = "/" + route.path.strip("/")
        if key in self._exact:
            msg = f"Duplicate route: {route.path!r}"
            raise RuntimeError(msg)
        self._exact[key] = route

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes, catch-all last."""
        result = list(self._exact.values())
        if self._catch_all is not None:
            result.append(self._catch_all)
        return result

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method against compiled routes.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        route = self._exact.get(path)
        params: dict[str, str] = {}

        if route is None and self._catch_all is not None:
            route = self._catch_all
            params = {route.catch_all_param or "path": path.lstrip("/")}

        if route is None:
            raise NotFound(f"No route matches {method} {path!r}")

        if method not in route.methods:
            raise MethodNotAllowed(route.methods)

        return RouteMatch(route=route, path_params=params)
