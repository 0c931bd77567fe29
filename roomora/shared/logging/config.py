"""
Structured logging configuration.

JSON output for deployments that ship logs to a collector, plus the
conversation state-transition event used by sessions.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# Record attributes promoted to top-level JSON keys when present
CONTEXT_FIELDS = ("event", "session_id", "state_summary", "details")


class StructuredFormatter(logging.Formatter):
    """
    Render log records as one JSON object per line.

    Conversation context attached through ``extra=`` (see CONTEXT_FIELDS)
    is emitted alongside timestamp, level, logger and message.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    logger_name: str = "roomora",
) -> logging.Logger:
    """
    Send the package's logs through the JSON formatter.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional file to mirror the stream output into
        logger_name: Logger to configure; its records stop propagating to root

    Returns:
        The configured logger
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    formatter = StructuredFormatter()
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def summarize_state(state: Dict[str, Any]) -> Dict[str, Any]:
    """Reduce a dumped ConversationState to the fields worth logging."""
    return {
        "step": state.get("step"),
        "selected_location": state.get("selected_location"),
        "budget_range": state.get("budget_range"),
        "has_anchor": state.get("last_anchor") is not None,
    }


def log_state_transition(
    event: str,
    state: Dict[str, Any],
    session_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a conversation state transition.

    Args:
        event: Event name, e.g. "turn_committed" or "session_reset"
        state: ConversationState dumped to a dict
        session_id: Session the transition belongs to
        details: Event-specific context (intent, generation, ...)
        logger: Logger to use; defaults to the package logger
    """
    if logger is None:
        logger = logging.getLogger("roomora")

    logger.info(
        f"State transition: {event}",
        extra={
            "event": event,
            "session_id": session_id,
            "state_summary": summarize_state(state),
            "details": details,
        },
    )
