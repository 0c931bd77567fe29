"""Prompt templates and builders for the copy service."""

from roomora.conversation.prompts.templates import (
    COPY_SYSTEM_PROMPT_TEMPLATE,
    COPY_USER_PROMPT_TEMPLATE,
    CopyPromptConfig,
)
from roomora.conversation.prompts.builders import (
    build_copy_messages,
    build_history_messages,
    format_hotel_line,
)

__all__ = [
    "COPY_SYSTEM_PROMPT_TEMPLATE",
    "COPY_USER_PROMPT_TEMPLATE",
    "CopyPromptConfig",
    "build_copy_messages",
    "build_history_messages",
    "format_hotel_line",
]
