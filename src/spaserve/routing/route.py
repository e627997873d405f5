"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    ``path`` is either an exact path (``/``) or a catch-all of the form
    ``/{name:path}``, which matches every path and binds the remainder
    (without the leading slash) to ``name``.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None

    @property
    def catch_all_param(self) -> str | None:
        """Parameter name for a ``/{name:path}`` route, else None."""
        stripped = self.path.strip("/")
        if stripped.startswith("{") and stripped.endswith(":path}"):
            return stripped[1 : -len(":path}")]
        return None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
