"""Routing: polyline paths between the anchor and a selected lodging."""

from roomora.routing.planner import RoutePlanner
from roomora.routing.schemas import RouteOverlay

__all__ = ["RoutePlanner", "RouteOverlay"]
