"""
Restart: clear gathered preferences and return to the location step.
"""

import logging

from roomora.conversation import messages
from roomora.conversation.context import EngineContext
from roomora.conversation.schemas import (
    AssistantResponse,
    ConversationGraphState,
    ConversationStep,
)


logger = logging.getLogger(__name__)


def restart_node(state: ConversationGraphState, context: EngineContext) -> dict:
    session_id = state.get("session_id") or "unknown"
    logger.info(
        f"[session={session_id}] [graph=conversation] [node=restart] "
        f"Clearing preferences | was step={state['step']}"
    )

    return {
        "response": AssistantResponse(
            text=messages.restart_text(),
            suggestions=messages.restart_suggestions(context.candidates),
            intent=state.get("intent"),
        ),
        "step": ConversationStep.LOCATION.value,
        "selected_location": None,
        "budget_range": None,
    }
