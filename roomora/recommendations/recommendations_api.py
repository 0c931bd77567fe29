"""
FastAPI endpoints for nearby recommendations and routes.

Provider failures never surface as errors here: the candidate source falls
back to synthetic data and the route planner answers with an empty path.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from roomora.candidates.source import CandidateSource
from roomora.recommendations.schemas import (
    NearbyRequest,
    NearbyResponse,
    RouteRequest,
    RouteResponse,
)
from roomora.routing.planner import RoutePlanner
from roomora.scoring.config import DEFAULT_SCORING_CONFIG
from roomora.scoring.engine import partition, rank
from roomora.shared.schemas.base import Coordinate


logger = logging.getLogger(__name__)


# Create router for recommendations route
router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])

# Provider adapters (shared across requests)
_source: Optional[CandidateSource] = None
_planner: Optional[RoutePlanner] = None


def get_source() -> CandidateSource:
    """Get or create the shared candidate source."""
    global _source
    if _source is None:
        _source = CandidateSource()
    return _source


def get_planner() -> RoutePlanner:
    """Get or create the shared route planner."""
    global _planner
    if _planner is None:
        _planner = RoutePlanner()
    return _planner


@router.post("/nearby", response_model=NearbyResponse)
def nearby(
    request: NearbyRequest,
    source: CandidateSource = Depends(get_source),
) -> NearbyResponse:
    """
    Rank lodgings around a position.

    Args:
        request: Position and optional radius

    Returns:
        Top picks and more places, best first
    """
    anchor = Coordinate(latitude=request.latitude, longitude=request.longitude)
    candidates = source.fetch_near(anchor, request.radius_m)
    ranked = rank(anchor, candidates, DEFAULT_SCORING_CONFIG)
    top, rest = partition(ranked, DEFAULT_SCORING_CONFIG)

    logger.info(
        f"[api=nearby] {len(candidates)} candidates | top={len(top)}, rest={len(rest)}"
    )
    return NearbyResponse(
        anchor=anchor,
        top=top,
        rest=rest,
        synthetic=any(c.synthetic for c in candidates),
    )


@router.post("/route", response_model=RouteResponse)
def route(
    request: RouteRequest,
    planner: RoutePlanner = Depends(get_planner),
) -> RouteResponse:
    """
    Route between two points.

    Returns:
        Waypoints, or an empty list when the routing service fails
    """
    return RouteResponse(coordinates=planner.route(request.origin, request.destination))
