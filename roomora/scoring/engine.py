"""
Desirability scoring, ranking and filtering.

All functions are pure: they never mutate the candidate lists they receive
and never cache results across anchors.
"""

import math
from typing import List, Optional, Sequence, Tuple

from roomora.candidates.schemas import Candidate, ScoredCandidate
from roomora.scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from roomora.scoring.schemas import BudgetRange
from roomora.shared.geo import distance_km
from roomora.shared.schemas.base import Coordinate


ALL_LOCATIONS = "all"


def desirability_score(
    rating: float,
    review_count: int,
    distance: float,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    """
    Composite score from rating, review volume and distance.

    Formula: rating*2 + ln(max(review_count, 1))*0.5 - distance*0.5
    (weights from config).
    """
    return (
        rating * config.rating_weight
        + math.log(max(review_count, 1)) * config.review_weight
        - distance * config.distance_weight
    )


def score_candidate(
    anchor: Coordinate,
    candidate: Candidate,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> ScoredCandidate:
    distance = distance_km(anchor, candidate.coordinate)
    score = desirability_score(
        candidate.rating, candidate.review_count, distance, config
    )
    return ScoredCandidate.from_candidate(candidate, distance, score)


def rank(
    anchor: Coordinate,
    candidates: Sequence[Candidate],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> List[ScoredCandidate]:
    """
    Score every candidate against the anchor and sort by descending score.

    The sort is stable, so input order breaks ties.

    Args:
        anchor: Reference point for distances
        candidates: Candidates to rank
        config: Scoring weights

    Returns:
        New list of scored candidates, best first
    """
    scored = [score_candidate(anchor, c, config) for c in candidates]
    return sorted(scored, key=lambda s: -s.score)


def partition(
    ranked: Sequence[ScoredCandidate],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> Tuple[List[ScoredCandidate], List[ScoredCandidate]]:
    """
    Split a ranked list into "top picks" and "more places".

    Anything past top_k + rest_k is left out of the view; the input list is
    not modified.

    Returns:
        Tuple of (top picks, more places)
    """
    top = list(ranked[: config.top_k])
    rest = list(ranked[config.top_k : config.top_k + config.rest_k])
    return top, rest


def filter_and_rank(
    candidates: Sequence[Candidate],
    location_filter: Optional[str] = None,
    budget: Optional[BudgetRange] = None,
    anchor: Optional[Coordinate] = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> List[Candidate]:
    """
    Restrict candidates by location and budget, then order them.

    Steps:
    1. Location: case-insensitive substring match on Candidate.location.
       Skipped when an anchor is given (proximity sort) or the filter is "all".
    2. Budget: see BudgetRange.matches().
    3. Order: ascending distance when anchored (results are ScoredCandidates),
       otherwise descending rating.

    An empty result is returned as-is; deciding what to show instead is the
    caller's policy.

    Args:
        candidates: Candidate pool
        location_filter: Place token such as "kathmandu", or "all"
        budget: Optional nightly price range
        anchor: Optional user coordinate enabling proximity sort
        config: Scoring weights used for anchored results

    Returns:
        Filtered, ordered candidates
    """
    results = list(candidates)

    if anchor is None and location_filter and location_filter.lower() != ALL_LOCATIONS:
        needle = location_filter.lower()
        results = [c for c in results if needle in c.location.lower()]

    if budget is not None:
        results = [c for c in results if budget.matches(c.price_per_night)]

    if anchor is not None:
        scored = [score_candidate(anchor, c, config) for c in results]
        return sorted(scored, key=lambda s: s.distance_km)

    return sorted(results, key=lambda c: -c.rating)


def price_span(candidates: Sequence[Candidate]) -> Optional[Tuple[int, int]]:
    """Lowest and highest nightly price, or None for an empty list."""
    if not candidates:
        return None
    prices = [c.price_per_night for c in candidates]
    return min(prices), max(prices)
