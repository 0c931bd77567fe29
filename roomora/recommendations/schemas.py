"""
API request/response models for nearby recommendations and routes.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from roomora.candidates.schemas import ScoredCandidate
from roomora.shared.schemas.base import Coordinate


class NearbyRequest(BaseModel):
    """Request for lodgings around a position."""

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    radius_m: Optional[int] = Field(
        default=None, gt=0, le=50000, description="Search radius in metres"
    )


class NearbyResponse(BaseModel):
    """Ranked lodgings split into top picks and more places."""

    anchor: Coordinate
    top: List[ScoredCandidate]
    rest: List[ScoredCandidate]
    synthetic: bool = Field(
        default=False, description="True when the results are fallback data"
    )


class RouteRequest(BaseModel):
    origin: Coordinate
    destination: Coordinate


class RouteResponse(BaseModel):
    """Route waypoints, latitude first; empty when no route is available."""

    coordinates: List[Coordinate]
