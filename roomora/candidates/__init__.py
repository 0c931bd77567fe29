"""
Candidate lodgings: models, the POI-backed source, and fallback data.
"""

from roomora.candidates.schemas import Candidate, ScoredCandidate
from roomora.candidates.source import CandidateSource

__all__ = ["Candidate", "ScoredCandidate", "CandidateSource"]
