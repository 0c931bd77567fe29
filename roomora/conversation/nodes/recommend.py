"""
Recommendation node and the shared result builder.

build_recommendations() owns the zero-result policy: a budget miss shows
nothing and offers to drop the budget; any other miss shows a preview of
the unfiltered pool.
"""

import logging
from typing import Optional

from roomora.conversation import messages
from roomora.conversation.context import EngineContext
from roomora.conversation.schemas import (
    AssistantResponse,
    ConversationGraphState,
    ConversationStep,
)
from roomora.scoring.engine import ALL_LOCATIONS, filter_and_rank
from roomora.scoring.schemas import BudgetRange
from roomora.shared.schemas.base import Coordinate


logger = logging.getLogger(__name__)


def build_recommendations(
    context: EngineContext,
    location: Optional[str],
    budget: Optional[BudgetRange],
    anchor: Optional[Coordinate] = None,
    intent: Optional[str] = None,
) -> AssistantResponse:
    """
    Filter and order the pool, then phrase the result.

    Args:
        context: Engine dependencies
        location: Place token or "all"
        budget: Budget range, if one was chosen
        anchor: User coordinate; enables the distance sort
        intent: Rule name to report on the reply

    Returns:
        Reply with at most config.max_results hotels
    """
    config = context.config
    results = filter_and_rank(
        context.candidates,
        location_filter=location,
        budget=budget,
        anchor=anchor,
        config=context.scoring_config,
    )[: config.max_results]

    if results:
        return AssistantResponse(
            text=messages.results_text(len(results), anchored=anchor is not None),
            suggestions=list(messages.RESULT_SUGGESTIONS),
            hotels=results,
            intent=intent,
        )

    if budget is not None and budget.is_restrictive:
        return AssistantResponse(
            text=messages.budget_miss_text(),
            suggestions=["Any budget", "Start over"],
            hotels=[],
            intent=intent,
        )

    return AssistantResponse(
        text=messages.location_miss_text(),
        suggestions=[messages.SHOW_ALL_HOTELS, "Start over"],
        hotels=list(context.candidates[: config.preview_count]),
        intent=intent,
    )


def recommend_node(state: ConversationGraphState, context: EngineContext) -> dict:
    """
    Handle a follow-up at the recommendation step.

    "relax_budget" drops the budget, "widen_location" drops the location
    filter; any other follow-up re-runs the current filters.

    Returns:
        Dict with 'response' and the (possibly loosened) filters
    """
    session_id = state.get("session_id") or "unknown"
    _log = f"[session={session_id}] [graph=conversation] [node=recommend] "

    intent = state.get("intent")
    location = state.get("selected_location")
    budget = state.get("budget_range")

    if intent == "relax_budget":
        budget = BudgetRange(any=True)
    elif intent == "widen_location":
        location = ALL_LOCATIONS

    response = build_recommendations(
        context, location, budget, state.get("last_anchor"), intent
    )
    logger.info(
        f"{_log}{len(response.hotels)} hotels | location={location}, intent={intent}"
    )

    return {
        "response": response,
        "step": ConversationStep.RECOMMEND.value,
        "selected_location": location,
        "budget_range": budget,
    }
