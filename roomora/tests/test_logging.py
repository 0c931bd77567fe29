"""
Tests for the structured logging helpers.
"""

import json
import logging

from roomora.shared.logging.config import (
    StructuredFormatter,
    log_state_transition,
    summarize_state,
)


def _make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("roomora.test", logging.INFO, "", 0, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    """Tests for JSON rendering."""

    def test_basic_fields(self):
        """Level, logger and the formatted message are emitted."""
        entry = json.loads(StructuredFormatter().format(_make_record()))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "roomora.test"
        assert entry["message"] == "hello world"
        assert "session_id" not in entry

    def test_context_fields_promoted(self):
        """Conversation context on the record becomes top-level keys."""
        record = _make_record(event="session_reset", session_id="s1", details={"generation": 2})
        entry = json.loads(StructuredFormatter().format(record))

        assert entry["event"] == "session_reset"
        assert entry["session_id"] == "s1"
        assert entry["details"] == {"generation": 2}


class TestStateTransition:
    """Tests for log_state_transition."""

    def test_summary(self):
        """Only routing-relevant fields are kept."""
        summary = summarize_state(
            {
                "step": "recommend",
                "selected_location": "pokhara",
                "budget_range": {"min": None, "max": 10000, "any": False},
                "last_anchor": None,
            }
        )
        assert summary == {
            "step": "recommend",
            "selected_location": "pokhara",
            "budget_range": {"min": None, "max": 10000, "any": False},
            "has_anchor": False,
        }

    def test_uses_given_logger(self, caplog):
        """The record carries event, session and details."""
        logger = logging.getLogger("roomora.test.transitions")
        caplog.set_level(logging.INFO, logger="roomora.test.transitions")

        log_state_transition(
            "session_reset", {"step": "location"}, session_id="s9", details={"generation": 1}, logger=logger
        )

        (record,) = caplog.records
        assert record.getMessage() == "State transition: session_reset"
        assert record.event == "session_reset"
        assert record.session_id == "s9"
        assert record.state_summary["step"] == "location"
