"""
Conversation engine: a guided dialogue that narrows the hotel catalog by
location and budget, or jumps straight to nearby results from a device fix.
"""

from roomora.conversation.engine import ConversationEngine
from roomora.conversation.schemas import (
    AssistantResponse,
    ConversationState,
    ConversationStep,
    SessionContext,
    TurnInput,
)
from roomora.conversation.session import ConversationSession

__all__ = [
    "ConversationEngine",
    "ConversationSession",
    "AssistantResponse",
    "ConversationState",
    "ConversationStep",
    "SessionContext",
    "TurnInput",
]
