"""
Response parser for the copy service.

Splits an LLM reply into display text and the trailing
"[SUGGESTIONS: a, b, c]" block.
"""

import logging
import re
from typing import List, Tuple


logger = logging.getLogger(__name__)


SUGGESTIONS_PATTERN = re.compile(r"\[SUGGESTIONS:\s*(.*?)\]", re.IGNORECASE | re.DOTALL)


class ParseError(Exception):
    """Raised when response parsing fails."""

    pass


def parse_copy_response(raw_response: str) -> Tuple[str, List[str]]:
    """
    Parse a copy-service reply.

    Args:
        raw_response: Raw LLM response string

    Returns:
        Tuple of (text without the suggestions block, suggestion chips)

    Raises:
        ParseError: If no text remains once the suggestions block is removed
    """
    suggestions: List[str] = []
    match = SUGGESTIONS_PATTERN.search(raw_response)
    if match:
        suggestions = [
            s.strip().strip("\"'") for s in match.group(1).split(",") if s.strip()
        ]

    text = SUGGESTIONS_PATTERN.sub("", raw_response).strip()
    if not text:
        raise ParseError(f"Copy response has no text: {raw_response!r}")

    return text, suggestions
