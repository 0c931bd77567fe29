"""
Copy node: optional LLM rewording of the locally built reply.

Runs after every step node. The reply's hotels, flags and chips are
already final; the copy service may only change the wording and append
chips. When it fails, the local text stands and the generic chips are
guaranteed.
"""

import logging

from roomora.conversation import messages
from roomora.conversation.context import EngineContext
from roomora.conversation.prompts.builders import build_copy_messages
from roomora.conversation.response_parser import ParseError, parse_copy_response
from roomora.conversation.schemas import ConversationGraphState
from roomora.shared.errors import ProviderUnavailable
from roomora.shared.llm.client import call_llm


logger = logging.getLogger(__name__)


def copy_node(state: ConversationGraphState, context: EngineContext) -> dict:
    """
    Reword the reply through the copy service, if one is configured.

    Args:
        state: Graph state holding the step node's response
        context: Engine dependencies (copy client and limits)

    Returns:
        Dict with the final 'response' (unchanged when the copy service
        is disabled)
    """
    if context.copy_client is None:
        return {"response": state["response"]}

    session_id = state.get("session_id") or "unknown"
    _log = f"[session={session_id}] [graph=conversation] [node=copy] "

    config = context.config
    response = state["response"]

    llm_messages = build_copy_messages(
        context.candidates,
        state.get("history") or [],
        state.get("text") or "",
        response.text,
        config.history_window,
        state.get("user_name"),
    )

    try:
        raw = call_llm(llm_messages, model=config.copy_model, client=context.copy_client)
        text, extra = parse_copy_response(raw)
    except (ProviderUnavailable, ParseError) as e:
        logger.warning(f"{_log}Copy service failed, keeping local text: {e}")
        return {
            "response": response.model_copy(
                update={
                    "suggestions": messages.merge_suggestions(
                        response.suggestions,
                        messages.GENERIC_SUGGESTIONS,
                        config.max_suggestions,
                    )
                }
            )
        }

    logger.info(f"{_log}Reply reworded | {len(extra)} suggested chips")
    return {
        "response": response.model_copy(
            update={
                "text": text,
                "suggestions": messages.merge_suggestions(
                    response.suggestions, extra, config.max_suggestions
                ),
            }
        )
    }
