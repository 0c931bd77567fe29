"""
Intent rules for the conversation engine.

Every turn is matched against an ordered table of transition rules; the
first rule whose step guard and predicate both hold handles the turn.
Restart comes first so it wins at every step. Each step ends with a
catch-all rule, so a recognised step always resolves to some rule.

Matching works on the normalized message (lowercased, whitespace
collapsed) with word-boundary patterns, so "all" does not match "small"
and "pokhara" matches "Pokhara (4 hotels)".
"""

import re
from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, Optional, Sequence

from roomora.conversation.graph.config import DEFAULT_CONFIG, ConversationConfig
from roomora.conversation.schemas import ConversationGraphState, ConversationStep
from roomora.scoring.engine import ALL_LOCATIONS
from roomora.scoring.schemas import BudgetRange


PLACE_TOKENS = ("kathmandu", "pokhara", "chitwan", "lumbini", "nagarkot")

RESTART_PHRASES = ("start over", "start again", "restart", "change location")
USE_LOCATION_PHRASES = ("use my location", "share my location", "my current location")
NEAR_ME_PHRASES = ("near me", "nearby", "closest", "around me")
RELAX_BUDGET_PHRASES = ("any budget", "any price", "ignore budget", "ignore the budget")
ANY_BUDGET_WORDS = ("any", "no limit", "flexible", "doesn't matter", "does not matter")
UNDER_WORDS = ("under", "below", "less than", "cheaper than")
ABOVE_WORDS = ("above", "over", "more than", "luxury")

Predicate = Callable[[ConversationGraphState, ConversationConfig], bool]


def normalize(text: Optional[str]) -> str:
    """Lowercase and collapse whitespace."""
    return " ".join((text or "").lower().split())


def _contains(message: str, phrases: Iterable[str]) -> bool:
    return any(re.search(rf"\b{re.escape(p)}\b", message) for p in phrases)


def find_place(message: str) -> Optional[str]:
    """
    Extract a place token from a normalized message.

    Returns:
        The first known place token mentioned, "all" for "show all"-style
        requests, or None
    """
    for token in PLACE_TOKENS:
        if _contains(message, [token]):
            return token
    if _contains(message, [ALL_LOCATIONS]):
        return ALL_LOCATIONS
    return None


def parse_budget(
    message: str,
    config: ConversationConfig = DEFAULT_CONFIG,
) -> Optional[BudgetRange]:
    """
    Map a normalized message onto one of the budget ranges.

    Recognised forms, checked in order:
    - "under"/"below" ... -> price < low threshold
    - both thresholds mentioned ("10,000 - 20,000", "10k-20k") -> inclusive band
    - "above"/"over" ... -> price > high threshold
    - "any budget", "flexible" ... -> no constraint

    Returns:
        Matching BudgetRange, or None if the message names no budget
    """
    compact = message.replace(",", "")

    def mentions(amount: int) -> bool:
        return _contains(compact, [str(amount), f"{amount // 1000}k"])

    if _contains(message, UNDER_WORDS):
        return BudgetRange(max=config.low_threshold)
    if mentions(config.low_threshold) and mentions(config.high_threshold):
        return BudgetRange(min=config.low_threshold, max=config.high_threshold)
    if _contains(message, ABOVE_WORDS):
        return BudgetRange(min=config.high_threshold)
    if _contains(message, ANY_BUDGET_WORDS):
        return BudgetRange(any=True)
    return None


@dataclass(frozen=True)
class TransitionRule:
    """
    One row of the transition table.

    Attributes:
        name: Intent name reported on the reply
        target: Graph node that handles the turn
        predicate: Test on the turn and current state
        steps: Steps where the rule applies; None means every step
    """

    name: str
    target: str
    predicate: Predicate
    steps: Optional[FrozenSet[str]] = None

    def applies(self, state: ConversationGraphState, config: ConversationConfig) -> bool:
        if self.steps is not None and state["step"] not in self.steps:
            return False
        return self.predicate(state, config)


def _steps(*steps: ConversationStep) -> FrozenSet[str]:
    return frozenset(s.value for s in steps)


def _always(state: ConversationGraphState, config: ConversationConfig) -> bool:
    return True


def _says(phrases: Sequence[str]) -> Predicate:
    def predicate(state: ConversationGraphState, config: ConversationConfig) -> bool:
        return _contains(state["message"], phrases)

    return predicate


def _has_geolocation_error(state, config) -> bool:
    return bool(state.get("geolocation_error"))


def _has_coordinate(state, config) -> bool:
    return state.get("coordinate") is not None


def _names_place(state, config) -> bool:
    return find_place(state["message"]) is not None


def _names_budget(state, config) -> bool:
    return parse_budget(state["message"], config) is not None


LOCATION = _steps(ConversationStep.LOCATION)
BUDGET = _steps(ConversationStep.BUDGET)
RECOMMEND = _steps(ConversationStep.RECOMMEND)

# Highest priority first
RULES = (
    TransitionRule("restart", "restart", _says(RESTART_PHRASES)),
    TransitionRule("geolocation_denied", "geolocation", _has_geolocation_error),
    TransitionRule("geolocation_fix", "geolocation", _has_coordinate),
    TransitionRule(
        "use_my_location", "geolocation", _says(USE_LOCATION_PHRASES), LOCATION
    ),
    TransitionRule("near_me", "geolocation", _says(NEAR_ME_PHRASES)),
    TransitionRule("location_match", "location", _names_place, LOCATION),
    TransitionRule("location_unrecognized", "location", _always, LOCATION),
    TransitionRule("budget_match", "budget", _names_budget, BUDGET),
    TransitionRule("budget_unrecognized", "budget", _always, BUDGET),
    TransitionRule("relax_budget", "recommend", _says(RELAX_BUDGET_PHRASES), RECOMMEND),
    TransitionRule("widen_location", "recommend", _says([ALL_LOCATIONS]), RECOMMEND),
    TransitionRule("refine", "recommend", _always, RECOMMEND),
)

TARGETS = sorted({rule.target for rule in RULES})


def match_rule(
    state: ConversationGraphState,
    config: ConversationConfig = DEFAULT_CONFIG,
    rules: Sequence[TransitionRule] = RULES,
) -> TransitionRule:
    """
    Return the first rule that applies to the turn.

    Raises:
        ValueError: If no rule applies (unknown step)
    """
    for rule in rules:
        if rule.applies(state, config):
            return rule
    raise ValueError(f"No transition rule for step '{state.get('step')}'")
