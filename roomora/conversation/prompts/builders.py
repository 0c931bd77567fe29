"""
Prompt builders for the copy service.

These functions turn the candidate pool, the chat history and the draft
reply into the message list sent to the LLM.
"""

from typing import Dict, List, Optional, Sequence

from roomora.candidates.schemas import Candidate
from roomora.conversation.messages import format_npr
from roomora.conversation.prompts.templates import CopyPromptConfig


def format_hotel_line(candidate: Candidate) -> str:
    """
    One database line per hotel.

    Example:
        "Dwarika's Hotel (Battisputali, Kathmandu) - Rs. 32,000/night,
        Rating: 4.9/5, Amenities: Pool, Spa, WiFi"
    """
    amenities = ", ".join(sorted(candidate.amenities)) or "None listed"
    return (
        f"{candidate.name} ({candidate.location or 'Unknown'}) - "
        f"{format_npr(candidate.price_per_night)}/night, "
        f"Rating: {candidate.rating:.1f}/5, Amenities: {amenities}"
    )


def build_history_messages(
    history: Sequence[Dict[str, str]],
    window: int,
) -> List[Dict[str, str]]:
    """Last `window` chat messages, in order, with only role and content."""
    if window <= 0:
        return []
    return [
        {"role": m["role"], "content": m["content"]}
        for m in list(history)[-window:]
        if m.get("role") in ("user", "assistant") and m.get("content")
    ]


def build_copy_messages(
    candidates: Sequence[Candidate],
    history: Sequence[Dict[str, str]],
    user_text: str,
    draft: str,
    window: int,
    user_name: Optional[str] = None,
) -> List[Dict[str, str]]:
    """
    Build the full message list for a copy-service request.

    Args:
        candidates: Hotel pool used as grounding
        history: Prior chat messages
        user_text: The traveler's latest text
        draft: Locally generated reply to reword
        window: Number of prior messages to include
        user_name: Traveler's name, if known

    Returns:
        System prompt, recent history, then the rewrite request
    """
    prompt = CopyPromptConfig(
        hotel_lines=[format_hotel_line(c) for c in candidates],
        user_text=user_text,
        user_name=user_name,
        draft=draft,
    )
    return (
        [{"role": "system", "content": prompt.format_system_prompt()}]
        + build_history_messages(history, window)
        + [{"role": "user", "content": prompt.format_user_prompt()}]
    )
