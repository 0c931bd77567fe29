"""
Location step: the traveler picks a city (or "all").
"""

import logging

from roomora.conversation import messages
from roomora.conversation.context import EngineContext
from roomora.conversation.intents import find_place
from roomora.conversation.schemas import (
    AssistantResponse,
    ConversationGraphState,
    ConversationStep,
)
from roomora.scoring.engine import ALL_LOCATIONS, filter_and_rank, price_span


logger = logging.getLogger(__name__)


def location_node(state: ConversationGraphState, context: EngineContext) -> dict:
    """
    Record the chosen location and ask for a budget, or re-prompt.

    A recognised location always moves on to the budget step, even when the
    pool has no hotels there; the recommendation step handles the miss.

    Args:
        state: Current graph state
        context: Engine dependencies

    Returns:
        Dict with 'response', plus 'step' and 'selected_location' on a match
    """
    session_id = state.get("session_id") or "unknown"
    _log = f"[session={session_id}] [graph=conversation] [node=location] "

    intent = state.get("intent")
    place = find_place(state["message"]) if intent == "location_match" else None

    if place is None:
        logger.info(f"{_log}Location not recognised, re-prompting")
        return {
            "response": AssistantResponse(
                text=messages.location_prompt_text(),
                suggestions=messages.location_suggestions(context.candidates),
                intent=intent,
            )
        }

    matches = filter_and_rank(context.candidates, location_filter=place)
    label = "Nepal" if place == ALL_LOCATIONS else place.title()
    logger.info(f"{_log}Location set to '{place}' | {len(matches)} hotels")

    return {
        "response": AssistantResponse(
            text=messages.location_selected_text(label, len(matches), price_span(matches)),
            suggestions=messages.budget_suggestions(context.config),
            intent=intent,
        ),
        "step": ConversationStep.BUDGET.value,
        "selected_location": place,
    }
