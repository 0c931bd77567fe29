"""
Scoring configuration.

Weights reproduce the desirability formula
    score = rating*2 + ln(max(reviews, 1))*0.5 - distance_km*0.5
and the partition sizes of the "top picks" / "more places" view.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringConfig:
    """
    Attributes:
        rating_weight: Multiplier on the 0-5 rating
        review_weight: Multiplier on the natural log of the review count
        distance_weight: Penalty per kilometre from the anchor
        top_k: Number of "top picks"
        rest_k: Number of "more places" after the top picks
    """

    rating_weight: float = 2.0
    review_weight: float = 0.5
    distance_weight: float = 0.5
    top_k: int = 3
    rest_k: int = 12


DEFAULT_SCORING_CONFIG = ScoringConfig()
