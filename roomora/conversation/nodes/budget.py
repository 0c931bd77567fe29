"""
Budget step: the traveler picks a price range and gets recommendations.
"""

import logging

from roomora.conversation import messages
from roomora.conversation.context import EngineContext
from roomora.conversation.intents import parse_budget
from roomora.conversation.nodes.recommend import build_recommendations
from roomora.conversation.schemas import (
    AssistantResponse,
    ConversationGraphState,
    ConversationStep,
)


logger = logging.getLogger(__name__)


def budget_node(state: ConversationGraphState, context: EngineContext) -> dict:
    """
    Parse the budget and recommend, or re-prompt with the budget chips.

    Returns:
        Dict with 'response', plus 'step' and 'budget_range' on a match
    """
    session_id = state.get("session_id") or "unknown"
    _log = f"[session={session_id}] [graph=conversation] [node=budget] "

    intent = state.get("intent")
    budget = (
        parse_budget(state["message"], context.config)
        if intent == "budget_match"
        else None
    )

    if budget is None:
        logger.info(f"{_log}Budget not recognised, re-prompting")
        return {
            "response": AssistantResponse(
                text=messages.budget_prompt_text(),
                suggestions=messages.budget_suggestions(context.config),
                intent=intent,
            )
        }

    logger.info(
        f"{_log}Budget set | min={budget.min}, max={budget.max}, any={budget.any}"
    )
    response = build_recommendations(
        context,
        state.get("selected_location"),
        budget,
        state.get("last_anchor"),
        intent,
    )

    return {
        "response": response,
        "step": ConversationStep.RECOMMEND.value,
        "budget_range": budget,
    }
