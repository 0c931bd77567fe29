"""
Geolocation turns: location requests, device fixes and failures.

A device fix goes straight to distance-sorted recommendations, skipping
the location and budget prompts. A failure keeps the session where it is.
"""

import logging

from roomora.conversation import messages
from roomora.conversation.context import EngineContext
from roomora.conversation.nodes.recommend import build_recommendations
from roomora.conversation.schemas import (
    AssistantResponse,
    ConversationGraphState,
    ConversationStep,
)


logger = logging.getLogger(__name__)


def geolocation_node(state: ConversationGraphState, context: EngineContext) -> dict:
    """
    Handle geolocation_denied, geolocation_fix, use_my_location and near_me.

    Args:
        state: Current graph state
        context: Engine dependencies

    Returns:
        Dict with 'response' and any state updates
    """
    session_id = state.get("session_id") or "unknown"
    _log = f"[session={session_id}] [graph=conversation] [node=geolocation] "

    intent = state.get("intent")

    if intent == "geolocation_denied":
        logger.warning(f"{_log}Geolocation failed: {state.get('geolocation_error')}")
        return {
            "response": AssistantResponse(
                text=messages.GEOLOCATION_FAILURE_TEXT,
                suggestions=list(messages.GEOLOCATION_FAILURE_SUGGESTIONS),
                intent=intent,
            )
        }

    anchor = state.get("coordinate") if intent == "geolocation_fix" else None
    if anchor is None and intent == "near_me":
        anchor = state.get("last_anchor")

    if anchor is not None:
        logger.info(
            f"{_log}Recommending near ({anchor.latitude:.4f}, {anchor.longitude:.4f})"
        )
        response = build_recommendations(
            context,
            state.get("selected_location"),
            state.get("budget_range"),
            anchor,
            intent,
        )
        return {
            "response": response,
            "step": ConversationStep.RECOMMEND.value,
            "last_anchor": anchor,
        }

    if intent == "use_my_location":
        logger.info(f"{_log}Requesting device location")
        return {
            "response": AssistantResponse(
                text=messages.request_location_text(),
                suggestions=[messages.SHOW_ALL_HOTELS],
                request_location=True,
                intent=intent,
            )
        }

    logger.info(f"{_log}Nearby requested without a known position")
    return {
        "response": AssistantResponse(
            text=messages.near_me_without_location_text(),
            suggestions=[messages.SHOW_ALL_HOTELS, "Start over"],
            request_location=True,
            intent=intent,
        )
    }
