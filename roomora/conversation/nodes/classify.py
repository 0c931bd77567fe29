"""
Classification and routing for the conversation LangGraph workflow.

The classify node picks the transition rule for the turn; the router sends
the turn to the node that rule names.
"""

import logging

from roomora.conversation.context import EngineContext
from roomora.conversation.intents import match_rule
from roomora.conversation.schemas import ConversationGraphState


logger = logging.getLogger(__name__)


def classify_node(state: ConversationGraphState, context: EngineContext) -> dict:
    """
    Match the turn against the rule table.

    Args:
        state: Current graph state
        context: Engine dependencies

    Returns:
        Dict with 'intent' and 'target'
    """
    session_id = state.get("session_id") or "unknown"
    _log = f"[session={session_id}] [graph=conversation] [node=classify] "

    rule = match_rule(state, context.config)
    logger.info(
        f"{_log}Matched rule '{rule.name}' -> {rule.target} | step={state['step']}"
    )
    return {"intent": rule.name, "target": rule.target}


def route_to_target(state: ConversationGraphState) -> str:
    """Conditional edge: follow the target chosen by the classify node."""
    return state["target"]
