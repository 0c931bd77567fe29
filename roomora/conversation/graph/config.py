"""
Configuration for the conversation engine.

Centralizes thresholds and limits so the dialogue can be tuned without
modifying the graph wiring or the rule table.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConversationConfig:
    """
    Attributes:
        low_threshold: "Under" budget bound, in NPR
        high_threshold: "Above" budget bound, in NPR
        max_results: Hotels shown per recommendation reply
        preview_count: Unfiltered hotels shown after a location-related miss
        max_suggestions: Upper bound on chips per reply
        history_window: Past chat messages sent to the copy service
        copy_model: Model identifier for the copy service
    """

    low_threshold: int = 10000
    high_threshold: int = 20000

    max_results: int = 6
    preview_count: int = 4
    max_suggestions: int = 6

    history_window: int = 6
    copy_model: str = "gpt-4.1-mini"


DEFAULT_CONFIG = ConversationConfig()
