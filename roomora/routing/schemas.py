"""
Route overlay model.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from roomora.shared.schemas.base import Coordinate


class RouteOverlay(BaseModel):
    """A drivable path from the anchor to a selected candidate."""

    model_config = ConfigDict(frozen=True)

    origin_id: str = Field(description="Identifier of the route origin")
    destination_id: str = Field(description="Candidate id of the destination")
    coordinates: List[Coordinate] = Field(
        default_factory=list, description="Ordered waypoints, latitude first"
    )
