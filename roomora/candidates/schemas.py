"""
Candidate lodging models.

Candidates are immutable per query and never persisted. A ScoredCandidate is
a Candidate with the distance and desirability score of one particular
anchor attached.
"""

from typing import FrozenSet

from pydantic import BaseModel, ConfigDict, Field

from roomora.shared.schemas.base import Coordinate


class Candidate(BaseModel):
    """A lodging under consideration for recommendation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Stable identifier (catalog id or OSM element id)")
    name: str = Field(description="Display name")
    coordinate: Coordinate = Field(description="Position of the lodging")
    rating: float = Field(ge=0.0, le=5.0, description="Rating out of 5")
    review_count: int = Field(ge=0, description="Number of reviews")
    price_per_night: int = Field(
        default=0, ge=0, description="Nightly price in NPR (0 when not quoted)"
    )
    amenities: FrozenSet[str] = Field(
        default_factory=frozenset, description="Amenity labels"
    )
    thumbnail: str = Field(default="", description="Thumbnail image reference")
    location: str = Field(
        default="", description="Locale label used for location filtering"
    )
    synthetic: bool = Field(
        default=False, description="True when produced by the synthetic generator"
    )


class ScoredCandidate(Candidate):
    """A candidate ranked against a specific anchor coordinate."""

    distance_km: float = Field(ge=0.0, description="Distance from the anchor in km")
    score: float = Field(description="Desirability score")

    @classmethod
    def from_candidate(
        cls, candidate: Candidate, distance_km: float, score: float
    ) -> "ScoredCandidate":
        return cls(
            **candidate.model_dump(exclude={"distance_km", "score"}),
            distance_km=distance_km,
            score=score,
        )
