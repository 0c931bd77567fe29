"""
FastAPI endpoints for the conversation engine.

Provides REST API for starting chat sessions, submitting turns, and
managing session state.
"""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from roomora.candidates.source import CandidateSource
from roomora.conversation.engine import ConversationEngine
from roomora.conversation.graph.config import ConversationConfig
from roomora.conversation.schemas import (
    RespondRequest,
    RespondResponse,
    SessionStatusResponse,
    StartSessionRequest,
    StartSessionResponse,
    TurnInput,
)
from roomora.conversation.session import ConversationSession
from roomora.recommendations.recommendations_api import get_source
from roomora.shared.config import get_settings
from roomora.shared.llm.client import get_cached_client


logger = logging.getLogger(__name__)


# Create router for conversation route
router = APIRouter(prefix="/api/conversation", tags=["conversation"])

# In-memory session storage
_sessions: Dict[str, ConversationSession] = {}

# Engine instance (shared across sessions; it holds no per-session state)
_engine: Optional[ConversationEngine] = None


def get_engine(source: CandidateSource = Depends(get_source)) -> ConversationEngine:
    """Get or create the shared engine over the candidate source's catalog."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = ConversationEngine(
            source.catalog(),
            config=ConversationConfig(copy_model=settings.copy_model),
            copy_client=get_cached_client(),
        )
    return _engine


def _get_session(session_id: str) -> ConversationSession:
    if session_id not in _sessions:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        )
    return _sessions[session_id]


@router.post("/start", response_model=StartSessionResponse)
async def start_session(
    request: Optional[StartSessionRequest] = None,
    engine: ConversationEngine = Depends(get_engine),
) -> StartSessionResponse:
    """
    Start a new chat session.

    Args:
        request: Optional traveler details

    Returns:
        Session ID, greeting and initial state
    """
    user_name = request.user_name if request else None
    session = ConversationSession(engine, user_name=user_name)
    _sessions[session.session_id] = session

    logger.info(f"[session={session.session_id}] Session started")
    return StartSessionResponse(
        session_id=session.session_id,
        response=session.greeting(),
        state=session.state,
    )


@router.post("/respond", response_model=RespondResponse)
def respond(request: RespondRequest) -> RespondResponse:
    """
    Submit one turn: text, a device coordinate, or a geolocation failure.

    Args:
        request: Turn with session ID

    Returns:
        Reply and the committed state
    """
    session = _get_session(request.session_id)

    if (
        not (request.text or "").strip()
        and request.coordinate is None
        and not request.geolocation_error
    ):
        raise HTTPException(
            status_code=422,
            detail="Turn needs text, a coordinate or a geolocation_error",
        )

    turn = TurnInput(
        text=request.text,
        coordinate=request.coordinate,
        geolocation_error=request.geolocation_error,
    )
    response = session.respond(turn)

    if response is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Session {request.session_id} was reset while the turn ran",
        )

    return RespondResponse(
        session_id=session.session_id,
        response=response,
        state=session.state,
    )


@router.post("/session/{session_id}/reset", response_model=SessionStatusResponse)
async def reset_session(session_id: str) -> SessionStatusResponse:
    """Clear a session's preferences and history."""
    session = _get_session(session_id)
    session.reset()
    return SessionStatusResponse(
        session_id=session_id, exists=True, state=session.state, turns=0
    )


@router.get("/session/{session_id}", response_model=SessionStatusResponse)
async def get_session_status(session_id: str) -> SessionStatusResponse:
    """
    Get the status of a chat session.

    Args:
        session_id: Session identifier

    Returns:
        Session state, or exists=False for an unknown id
    """
    if session_id not in _sessions:
        return SessionStatusResponse(session_id=session_id, exists=False)

    session = _sessions[session_id]
    return SessionStatusResponse(
        session_id=session_id,
        exists=True,
        state=session.state,
        turns=session.turns,
    )


@router.delete("/session/{session_id}")
async def delete_session(session_id: str) -> Dict[str, str]:
    """
    Delete a chat session.

    Args:
        session_id: Session identifier

    Returns:
        Confirmation message
    """
    _get_session(session_id)
    del _sessions[session_id]
    return {"message": f"Session {session_id} deleted"}
