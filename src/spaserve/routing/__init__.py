"""Route table: exact routes plus a catch-all."""

from spaserve.routing.route import Route, RouteMatch
from spaserve.routing.router import Router

__all__ = ["Route", "RouteMatch", "Router"]
