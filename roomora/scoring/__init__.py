"""Desirability scoring, ranking, partitioning and filtering."""

from roomora.scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from roomora.scoring.engine import (
    desirability_score,
    filter_and_rank,
    partition,
    price_span,
    rank,
)
from roomora.scoring.schemas import BudgetRange

__all__ = [
    "DEFAULT_SCORING_CONFIG",
    "ScoringConfig",
    "BudgetRange",
    "desirability_score",
    "filter_and_rank",
    "partition",
    "price_span",
    "rank",
]
