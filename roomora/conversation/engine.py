"""
Conversation engine.

A pure step function over (turn, state): each call runs the compiled graph
once and returns the reply with the next state. The input state is never
modified, so a caller can discard the result of a turn that went stale.
"""

import logging
from typing import Optional, Sequence, Tuple, Union

from roomora.candidates.schemas import Candidate
from roomora.conversation import messages
from roomora.conversation.context import EngineContext
from roomora.conversation.graph.build import create_conversation_graph
from roomora.conversation.graph.config import DEFAULT_CONFIG, ConversationConfig
from roomora.conversation.intents import normalize
from roomora.conversation.schemas import (
    AssistantResponse,
    ConversationState,
    ConversationStep,
    SessionContext,
    TurnInput,
)
from roomora.scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig


logger = logging.getLogger(__name__)


class ConversationEngine:
    """
    Guided hotel-finding dialogue over a fixed candidate pool.

    Args:
        candidates: Hotel pool (usually the curated catalog)
        config: Dialogue thresholds and limits
        scoring_config: Weights for distance-sorted results
        copy_client: OpenAI-compatible client for rewording, or None
    """

    def __init__(
        self,
        candidates: Sequence[Candidate],
        config: ConversationConfig = DEFAULT_CONFIG,
        scoring_config: ScoringConfig = DEFAULT_SCORING_CONFIG,
        copy_client=None,
    ):
        self.context = EngineContext(
            candidates=tuple(candidates),
            config=config,
            scoring_config=scoring_config,
            copy_client=copy_client,
        )
        self._graph = create_conversation_graph(self.context)

    def greeting(self, session: Optional[SessionContext] = None) -> AssistantResponse:
        """Opening message with the location chips."""
        return AssistantResponse(
            text=messages.greeting_text(session.user_name if session else None),
            suggestions=messages.location_suggestions(self.context.candidates),
            intent="greeting",
        )

    def step(
        self,
        turn: Union[TurnInput, str],
        state: ConversationState,
        session: Optional[SessionContext] = None,
    ) -> Tuple[AssistantResponse, ConversationState]:
        """
        Handle one turn.

        Args:
            turn: User action, or plain text
            state: Current session state (left untouched)
            session: Identity and history for this session

        Returns:
            Tuple of (reply, next state)
        """
        if isinstance(turn, str):
            turn = TurnInput(text=turn)

        graph_input = {
            "session_id": session.session_id if session else None,
            "step": state.step.value,
            "selected_location": state.selected_location,
            "budget_range": state.budget_range,
            "last_anchor": state.last_anchor,
            "text": turn.text or "",
            "message": normalize(turn.text),
            "coordinate": turn.coordinate,
            "geolocation_error": turn.geolocation_error,
            "user_name": session.user_name if session else None,
            "history": list(session.history) if session else [],
            "intent": None,
            "target": None,
            "response": None,
        }

        result = self._graph.invoke(graph_input)

        next_state = ConversationState(
            step=ConversationStep(result["step"]),
            selected_location=result.get("selected_location"),
            budget_range=result.get("budget_range"),
            last_anchor=result.get("last_anchor"),
        )
        return result["response"], next_state
