"""
Conversation session: state, history and the stale-turn guard.

A turn is computed against a snapshot of the session state and committed
only if the session has not been reset in the meantime. Each reset bumps
a generation counter; a turn whose ticket carries an older generation is
dropped instead of overwriting the fresh state.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional, Union

from roomora.conversation.engine import ConversationEngine
from roomora.conversation.schemas import (
    AssistantResponse,
    ConversationState,
    SessionContext,
    TurnInput,
)
from roomora.shared.logging import log_state_transition


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnTicket:
    """Issued when a turn starts; carries the generation it was computed for."""

    generation: int


class ConversationSession:
    """
    One traveler's chat.

    Args:
        engine: Shared conversation engine
        session_id: Optional fixed id (random UUID by default)
        user_name: Traveler's name, used in the greeting
    """

    def __init__(
        self,
        engine: ConversationEngine,
        session_id: Optional[str] = None,
        user_name: Optional[str] = None,
    ):
        self.engine = engine
        self.context = SessionContext(
            session_id=session_id or str(uuid.uuid4()),
            user_name=user_name,
        )
        self.state = ConversationState()
        self._generation = 0

    @property
    def session_id(self) -> str:
        return self.context.session_id

    @property
    def turns(self) -> int:
        return sum(1 for m in self.context.history if m["role"] == "user")

    def greeting(self) -> AssistantResponse:
        response = self.engine.greeting(self.context)
        self.context.history.append({"role": "assistant", "content": response.text})
        return response

    def begin_turn(self) -> TurnTicket:
        return TurnTicket(generation=self._generation)

    def commit(
        self,
        ticket: TurnTicket,
        turn: TurnInput,
        response: AssistantResponse,
        next_state: ConversationState,
    ) -> bool:
        """
        Apply a finished turn unless the session was reset since it began.

        Returns:
            True if committed, False if the turn was stale and dropped
        """
        if ticket.generation != self._generation:
            logger.warning(
                f"[session={self.session_id}] Dropping stale turn | "
                f"ticket={ticket.generation}, current={self._generation}"
            )
            return False

        self.state = next_state
        self.context.history.append(
            {"role": "user", "content": turn.text or "[shared location]"}
        )
        self.context.history.append({"role": "assistant", "content": response.text})

        log_state_transition(
            "turn_committed",
            self.state.model_dump(mode="json"),
            session_id=self.session_id,
            details={"intent": response.intent},
        )
        return True

    def reset(self) -> None:
        """Clear state and history; in-flight turns become stale."""
        self._generation += 1
        self.state = ConversationState()
        self.context.history.clear()
        log_state_transition(
            "session_reset",
            self.state.model_dump(mode="json"),
            session_id=self.session_id,
            details={"generation": self._generation},
        )

    def respond(self, turn: Union[TurnInput, str]) -> Optional[AssistantResponse]:
        """
        Run one turn end to end.

        Returns:
            The reply, or None if the session was reset while it ran
        """
        if isinstance(turn, str):
            turn = TurnInput(text=turn)

        ticket = self.begin_turn()
        snapshot = self.context.model_copy(deep=True)
        response, next_state = self.engine.step(turn, self.state, snapshot)

        if not self.commit(ticket, turn, response, next_state):
            return None
        return response
