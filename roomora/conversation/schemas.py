"""
Schemas for the conversation engine.

Defines the graph state for LangGraph, Pydantic models for session state,
turns and replies, and API request/response models.
"""

from enum import Enum
from typing import Dict, List, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny

from roomora.candidates.schemas import Candidate
from roomora.scoring.schemas import BudgetRange
from roomora.shared.schemas.base import Coordinate


# =============================================================================
# Session State
# =============================================================================


class ConversationStep(str, Enum):
    """Stage of the guided dialogue."""

    LOCATION = "location"
    BUDGET = "budget"
    RECOMMEND = "recommend"


class ConversationState(BaseModel):
    """
    Preferences gathered so far in one session.

    Frozen: a turn produces a new state, and the session swaps it in only
    after the reply is complete.
    """

    model_config = ConfigDict(frozen=True)

    step: ConversationStep = Field(default=ConversationStep.LOCATION)
    selected_location: Optional[str] = Field(
        default=None, description="Place token such as 'kathmandu', or 'all'"
    )
    budget_range: Optional[BudgetRange] = Field(default=None)
    last_anchor: Optional[Coordinate] = Field(
        default=None, description="Most recent device coordinate"
    )


class SessionContext(BaseModel):
    """
    Per-session context handed to the engine on every turn.

    Carries identity and history explicitly instead of reading them from
    ambient globals.
    """

    session_id: str
    user_name: Optional[str] = None
    history: List[Dict[str, str]] = Field(
        default_factory=list, description="Chat messages with 'role' and 'content'"
    )


# =============================================================================
# Turns and Replies
# =============================================================================


class TurnInput(BaseModel):
    """
    One user action: free text, a device position fix, or a geolocation failure.
    """

    text: Optional[str] = Field(default=None, description="Typed or chip text")
    coordinate: Optional[Coordinate] = Field(
        default=None, description="Device position after a location request"
    )
    geolocation_error: Optional[str] = Field(
        default=None, description="Reason the device could not produce a fix"
    )


class AssistantResponse(BaseModel):
    """A reply shown in the chat panel."""

    text: str = Field(description="Reply text")
    suggestions: List[str] = Field(
        default_factory=list, description="Clickable suggestion chips"
    )
    hotels: List[SerializeAsAny[Candidate]] = Field(
        default_factory=list, description="Hotel cards to render"
    )
    request_location: bool = Field(
        default=False, description="Ask the device for a position fix"
    )
    intent: Optional[str] = Field(
        default=None, description="Name of the rule that handled the turn"
    )


# =============================================================================
# LangGraph State Schema
# =============================================================================


class ConversationGraphState(TypedDict):
    """
    State schema for one pass through the conversation graph.

    A pass handles exactly one turn: the classify node picks a rule, one
    step node builds the reply and the state updates, and the copy node
    optionally rewrites the reply text.
    """

    # Debug/tracking
    session_id: Optional[str]

    # Session state going in (and coming out, after updates)
    step: str
    selected_location: Optional[str]
    budget_range: Optional[BudgetRange]
    last_anchor: Optional[Coordinate]

    # The turn
    text: str
    message: str  # lowercased, whitespace-collapsed text
    coordinate: Optional[Coordinate]
    geolocation_error: Optional[str]
    user_name: Optional[str]
    history: List[Dict[str, str]]

    # Classification
    intent: Optional[str]
    target: Optional[str]

    # Output
    response: Optional[AssistantResponse]


# =============================================================================
# API Request/Response Models
# =============================================================================


class StartSessionRequest(BaseModel):
    """Request to start a conversation session."""

    user_name: Optional[str] = Field(default=None, description="Traveler's name")


class StartSessionResponse(BaseModel):
    """Response after starting a conversation session."""

    session_id: str
    response: AssistantResponse
    state: ConversationState


class RespondRequest(BaseModel):
    """One turn submitted to an existing session."""

    session_id: str
    text: Optional[str] = None
    coordinate: Optional[Coordinate] = None
    geolocation_error: Optional[str] = None


class RespondResponse(BaseModel):
    """Reply and committed state after a turn."""

    session_id: str
    response: AssistantResponse
    state: ConversationState


class SessionStatusResponse(BaseModel):
    """Status of a conversation session."""

    session_id: str
    exists: bool
    state: Optional[ConversationState] = None
    turns: int = 0
