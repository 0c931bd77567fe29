"""
Locally generated reply copy and suggestion chips.

Every reply the engine produces is built here first; the optional copy
service may later reword the text but never replaces these chips.
"""

from typing import List, Optional, Sequence

from roomora.candidates.schemas import Candidate
from roomora.conversation.graph.config import DEFAULT_CONFIG, ConversationConfig


RESULT_SUGGESTIONS = ["Show more", "Refine search", "Start over"]
GENERIC_SUGGESTIONS = ["Start over", "Show all"]
GEOLOCATION_FAILURE_SUGGESTIONS = ["Search Kathmandu", "Search Pokhara"]

USE_MY_LOCATION = "Use my location"
SHOW_ALL_HOTELS = "Show all hotels"

GEOLOCATION_FAILURE_TEXT = (
    "I couldn't access your location. Please check your browser permissions."
)


def format_npr(amount: int) -> str:
    """Format a nightly price, e.g. 10000 -> "Rs. 10,000"."""
    return f"Rs. {amount:,}"


def count_in(candidates: Sequence[Candidate], place: str) -> int:
    return sum(1 for c in candidates if place in c.location.lower())


def location_suggestions(candidates: Sequence[Candidate]) -> List[str]:
    """Chips offered while waiting for a location choice."""
    return [
        USE_MY_LOCATION,
        f"Kathmandu ({count_in(candidates, 'kathmandu')} hotels)",
        f"Pokhara ({count_in(candidates, 'pokhara')} hotels)",
        SHOW_ALL_HOTELS,
    ]


def restart_suggestions(candidates: Sequence[Candidate]) -> List[str]:
    return [
        f"Kathmandu ({count_in(candidates, 'kathmandu')} hotels)",
        f"Pokhara ({count_in(candidates, 'pokhara')} hotels)",
        f"Chitwan ({count_in(candidates, 'chitwan')} hotels)",
        SHOW_ALL_HOTELS,
    ]


def budget_suggestions(config: ConversationConfig = DEFAULT_CONFIG) -> List[str]:
    return [
        f"Under {format_npr(config.low_threshold)}",
        f"{format_npr(config.low_threshold)} - {config.high_threshold:,}",
        f"Above {format_npr(config.high_threshold)}",
        "Any budget",
    ]


def greeting_text(user_name: Optional[str] = None) -> str:
    hello = f"Hi {user_name}!" if user_name else "Hi!"
    return (
        f"{hello} I'm your Roomora AI assistant. I can help you find the "
        "perfect hotel in Nepal.\n\nWhere would you like to stay? Pick a city "
        "or share your location and I'll find hotels closest to you."
    )


def location_prompt_text() -> str:
    return "Which location interests you? Pick a city, or share your location."


def budget_prompt_text() -> str:
    return "Please select a budget range:"


def restart_text() -> str:
    return "Let's start fresh! Where would you like to stay?"


def location_selected_text(label: str, count: int, span: Optional[tuple]) -> str:
    if span is None:
        return (
            f"I don't have any hotels listed in {label} yet, but let's pick a "
            "budget and I'll suggest our best alternatives.\n\nWhat's your budget?"
        )
    low, high = span
    return (
        f"Great! I found {count} hotels in {label}.\n\n"
        f"Prices range from {format_npr(low)} to {format_npr(high)} per night.\n\n"
        "What's your budget?"
    )


def results_text(count: int, anchored: bool) -> str:
    where = "closest to you" if anchored else "matching your preferences"
    noun = "hotel" if count == 1 else "hotels"
    return f"Found {count} amazing {noun} {where}!"


def budget_miss_text() -> str:
    return (
        "I couldn't find any hotels within that budget. Would you like to see "
        "every price range, or start over?"
    )


def location_miss_text() -> str:
    return "No hotels found matching your exact criteria. Here are our best properties!"


def request_location_text() -> str:
    return "Sure! Share your location and I'll find the hotels closest to you."


def near_me_without_location_text() -> str:
    return "I need your location to find nearby hotels! Please allow location access."


def merge_suggestions(
    primary: Sequence[str],
    extra: Sequence[str],
    limit: int,
) -> List[str]:
    """Primary chips first, then unseen extras, deduplicated and capped."""
    merged: List[str] = []
    for chip in list(primary) + list(extra):
        chip = chip.strip()
        if chip and chip.lower() not in (m.lower() for m in merged):
            merged.append(chip)
    return merged[:limit]
