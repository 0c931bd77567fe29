"""
Dependencies shared by every node of the conversation graph.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from roomora.candidates.schemas import Candidate
from roomora.conversation.graph.config import DEFAULT_CONFIG, ConversationConfig
from roomora.scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig


@dataclass(frozen=True)
class EngineContext:
    """
    Attributes:
        candidates: Hotel pool the dialogue recommends from
        config: Dialogue thresholds and limits
        scoring_config: Weights for anchored (distance-sorted) results
        copy_client: OpenAI-compatible client for rewording replies, or None
    """

    candidates: Sequence[Candidate]
    config: ConversationConfig = DEFAULT_CONFIG
    scoring_config: ScoringConfig = DEFAULT_SCORING_CONFIG
    copy_client: Optional[Any] = None
