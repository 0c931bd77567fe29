"""
Tests for the conversation engine, the copy node and sessions.

The engine runs over the curated catalog with no copy service unless a
test installs a stub client.
"""

import logging
from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError

from roomora.candidates.mock_data import HOTEL_CATALOG
from roomora.candidates.schemas import ScoredCandidate
from roomora.conversation import messages
from roomora.conversation.engine import ConversationEngine
from roomora.conversation.response_parser import ParseError, parse_copy_response
from roomora.conversation.schemas import (
    ConversationState,
    ConversationStep,
    SessionContext,
    TurnInput,
)
from roomora.conversation.session import ConversationSession
from roomora.scoring.schemas import BudgetRange
from roomora.shared.schemas.base import Coordinate


KATHMANDU = Coordinate(latitude=27.7172, longitude=85.3240)


def _make_state(step=ConversationStep.LOCATION, location=None, budget=None, anchor=None):
    return ConversationState(
        step=step, selected_location=location, budget_range=budget, last_anchor=anchor
    )


class _StubCompletions:
    def __init__(self, content=None, error=None, response=None):
        self.content = content
        self.error = error
        self.response = response
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))]
        )


def _make_stub_client(content=None, error=None, response=None):
    completions = _StubCompletions(content=content, error=error, response=response)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


@pytest.fixture
def engine():
    return ConversationEngine(HOTEL_CATALOG)


class TestGreeting:
    """Tests for the opening message."""

    def test_greeting_chips(self, engine):
        """The greeting offers geolocation, the two big cities and 'all'."""
        response = engine.greeting()
        assert response.suggestions == [
            "Use my location",
            "Kathmandu (6 hotels)",
            "Pokhara (4 hotels)",
            "Show all hotels",
        ]
        assert "Roomora" in response.text

    def test_greeting_uses_name(self, engine):
        """A known traveler is greeted by name."""
        response = engine.greeting(SessionContext(session_id="s1", user_name="Asha"))
        assert response.text.startswith("Hi Asha!")


class TestLocationStep:
    """Tests for the location step."""

    def test_location_match(self, engine):
        """A known place records the location and asks for a budget."""
        response, state = engine.step("Kathmandu (6 hotels)", _make_state())

        assert state.step == ConversationStep.BUDGET
        assert state.selected_location == "kathmandu"
        assert "6 hotels in Kathmandu" in response.text
        assert "Rs. 6,500" in response.text
        assert "Rs. 32,000" in response.text
        assert response.suggestions == messages.budget_suggestions()
        assert response.intent == "location_match"

    def test_show_all(self, engine):
        """'Show all hotels' selects every location."""
        response, state = engine.step("Show all hotels", _make_state())
        assert state.selected_location == "all"
        assert f"{len(HOTEL_CATALOG)} hotels in Nepal" in response.text

    def test_unrecognized_reprompts(self, engine):
        """An unknown place keeps the step and offers the same chips."""
        before = _make_state()
        response, state = engine.step("Mars", before)

        assert state == before
        assert response.suggestions == engine.greeting().suggestions
        assert response.intent == "location_unrecognized"

    def test_input_state_untouched(self, engine):
        """step() never modifies the state it was given."""
        before = _make_state()
        engine.step("Pokhara", before)
        assert before.step == ConversationStep.LOCATION
        assert before.selected_location is None


class TestBudgetStep:
    """Tests for the budget step."""

    def test_budget_match_recommends(self, engine):
        """A budget moves to recommendations, filtered and sorted by rating."""
        response, state = engine.step(
            "Under Rs. 10,000", _make_state(ConversationStep.BUDGET, "kathmandu")
        )

        assert state.step == ConversationStep.RECOMMEND
        assert state.budget_range == BudgetRange(max=10000)
        assert [h.id for h in response.hotels] == ["ktm-thamel-eco", "ktm-guest-house"]
        assert response.text == "Found 2 amazing hotels matching your preferences!"
        assert response.suggestions == ["Show more", "Refine search", "Start over"]

    def test_results_capped_at_six(self, engine):
        """At most six hotels are shown, best rated first."""
        response, _ = engine.step("Any budget", _make_state(ConversationStep.BUDGET, "all"))
        assert len(response.hotels) == 6
        assert response.hotels[0].id == "ktm-dwarikas"

    def test_unrecognized_reprompts(self, engine):
        """An unknown budget keeps the step and repeats the budget chips."""
        before = _make_state(ConversationStep.BUDGET, "pokhara")
        response, state = engine.step("cheap-ish?", before)

        assert state == before
        assert response.suggestions == messages.budget_suggestions()

    def test_budget_miss(self, engine):
        """A budget with no matches shows nothing and offers to drop the budget."""
        response, state = engine.step(
            "Above Rs. 20,000", _make_state(ConversationStep.BUDGET, "lumbini")
        )

        assert state.step == ConversationStep.RECOMMEND
        assert response.hotels == []
        assert "within that budget" in response.text
        assert "Any budget" in response.suggestions
        assert "Start over" in response.suggestions

    def test_relax_after_budget_miss(self, engine):
        """'Any budget' after a miss drops the budget and finds the hotels."""
        state = _make_state(ConversationStep.RECOMMEND, "lumbini", BudgetRange(min=20000))
        response, state = engine.step("Any budget", state)

        assert state.budget_range.any is True
        assert {h.id for h in response.hotels} == {"lmb-buddha", "lmb-palace"}

    def test_location_miss_previews_pool(self):
        """A location with nothing in the pool previews the first four candidates."""
        pool = HOTEL_CATALOG[:6]
        engine = ConversationEngine(pool)

        response, _ = engine.step("Any budget", _make_state(ConversationStep.BUDGET, "pokhara"))

        assert response.text == messages.location_miss_text()
        assert [h.id for h in response.hotels] == [c.id for c in pool[:4]]


class TestRecommendStep:
    """Tests for follow-ups at the recommend step."""

    def test_refine_reruns_filters(self, engine):
        """Other input re-runs the current filters."""
        state = _make_state(ConversationStep.RECOMMEND, "pokhara", BudgetRange(any=True))
        response, next_state = engine.step("Show more", state)

        assert next_state == state
        assert len(response.hotels) == 4

    def test_widen_location(self, engine):
        """'Show all' drops the location filter."""
        state = _make_state(ConversationStep.RECOMMEND, "lumbini", BudgetRange(min=20000))
        response, next_state = engine.step("Show all", state)

        assert next_state.selected_location == "all"
        assert {h.id for h in response.hotels} == {
            "ktm-dwarikas",
            "pkr-temple-tree",
            "pkr-pavilions",
            "ctw-barahi-jungle",
        }


class TestRestart:
    """Tests for the restart intent."""

    @pytest.mark.parametrize("step", list(ConversationStep))
    def test_restart_clears_preferences(self, engine, step):
        """Restart returns to the location step from anywhere."""
        state = _make_state(step, "pokhara", BudgetRange(max=10000))
        response, next_state = engine.step("Start over", state)

        assert next_state.step == ConversationStep.LOCATION
        assert next_state.selected_location is None
        assert next_state.budget_range is None
        assert response.suggestions[-1] == "Show all hotels"

    def test_change_location(self, engine):
        """'Change location' is a restart."""
        _, state = engine.step(
            "Change location", _make_state(ConversationStep.BUDGET, "chitwan")
        )
        assert state.step == ConversationStep.LOCATION


class TestGeolocation:
    """Tests for geolocation turns."""

    def test_use_my_location_requests_fix(self, engine):
        """'Use my location' asks the device for a position, without a state change."""
        before = _make_state()
        response, state = engine.step("Use my location", before)

        assert response.request_location is True
        assert state == before

    def test_fix_recommends_by_distance(self, engine):
        """A position fix jumps straight to distance-sorted results."""
        response, state = engine.step(TurnInput(coordinate=KATHMANDU), _make_state())

        assert state.step == ConversationStep.RECOMMEND
        assert state.last_anchor == KATHMANDU
        assert response.text == "Found 6 amazing hotels closest to you!"
        assert all(isinstance(h, ScoredCandidate) for h in response.hotels)
        distances = [h.distance_km for h in response.hotels]
        assert distances == sorted(distances)

    def test_fix_results_serialize_distance(self, engine):
        """Distance-sorted hotels keep their distance when serialized."""
        response, _ = engine.step(TurnInput(coordinate=KATHMANDU), _make_state())
        payload = response.model_dump(mode="json")
        assert "distance_km" in payload["hotels"][0]

    def test_failure_keeps_state(self, engine):
        """A geolocation failure apologizes and offers non-geo chips."""
        before = _make_state(ConversationStep.BUDGET, "pokhara")
        response, state = engine.step(TurnInput(geolocation_error="denied"), before)

        assert state == before
        assert response.text == messages.GEOLOCATION_FAILURE_TEXT
        assert response.suggestions == ["Search Kathmandu", "Search Pokhara"]

    def test_near_me_with_known_anchor(self, engine):
        """'near me' reuses the last anchor."""
        state = _make_state(ConversationStep.RECOMMEND, "pokhara", anchor=KATHMANDU)
        response, _ = engine.step("closest hotels near me", state)

        assert "closest to you" in response.text
        assert "Kathmandu" in response.hotels[0].location

    def test_near_me_without_anchor(self, engine):
        """'near me' without a known position asks for one."""
        before = _make_state(ConversationStep.BUDGET, "pokhara")
        response, state = engine.step("hotels near me", before)

        assert response.request_location is True
        assert state == before


class TestCopyService:
    """Tests for the optional copy node."""

    def test_rewrites_text_and_merges_chips(self):
        """The copy service rewords the text; local chips stay first."""
        client, completions = _make_stub_client(
            "Two lovely Thamel stays under budget! [SUGGESTIONS: Top Rated, Start over]"
        )
        engine = ConversationEngine(HOTEL_CATALOG, copy_client=client)

        response, _ = engine.step(
            "Under Rs. 10,000", _make_state(ConversationStep.BUDGET, "kathmandu")
        )

        assert response.text == "Two lovely Thamel stays under budget!"
        assert response.suggestions == ["Show more", "Refine search", "Start over", "Top Rated"]
        assert [h.id for h in response.hotels] == ["ktm-thamel-eco", "ktm-guest-house"]
        assert len(completions.calls) == 1

    def test_prompt_carries_catalog_history_and_draft(self):
        """The request embeds the catalog, the last six messages and the draft."""
        client, completions = _make_stub_client("Sure thing!")
        engine = ConversationEngine(HOTEL_CATALOG, copy_client=client)
        history = [
            {"role": "user" if i % 2 else "assistant", "content": f"message {i}"}
            for i in range(10)
        ]

        engine.step(
            "Pokhara",
            _make_state(),
            SessionContext(session_id="s1", history=history),
        )

        sent = completions.calls[0]["messages"]
        assert sent[0]["role"] == "system"
        assert "Dwarika's Hotel" in sent[0]["content"]
        assert [m["content"] for m in sent[1:-1]] == [f"message {i}" for i in range(4, 10)]
        assert "Great! I found 4 hotels in Pokhara" in sent[-1]["content"]

    @pytest.mark.parametrize(
        "content, error",
        [
            ("", None),
            ("[SUGGESTIONS: Only, Chips]", None),
            (None, APIConnectionError(request=httpx.Request("POST", "https://copy.test"))),
            (None, RuntimeError("gateway failure")),
        ],
    )
    def test_failure_keeps_local_reply(self, content, error):
        """Any copy failure keeps the local text and adds the generic chips."""
        client, _ = _make_stub_client(content=content, error=error)
        engine = ConversationEngine(HOTEL_CATALOG, copy_client=client)
        local = ConversationEngine(HOTEL_CATALOG)

        response, state = engine.step("Pokhara", _make_state())
        expected, expected_state = local.step("Pokhara", _make_state())

        assert response.text == expected.text
        assert state == expected_state
        assert response.suggestions[: len(expected.suggestions)] == expected.suggestions
        assert "Start over" in response.suggestions
        assert "Show all" in response.suggestions

    @pytest.mark.parametrize(
        "completion",
        [
            SimpleNamespace(choices=[SimpleNamespace(message=None)]),
            SimpleNamespace(choices=[SimpleNamespace()]),
            SimpleNamespace(choices=[]),
            SimpleNamespace(),
        ],
    )
    def test_malformed_completion_keeps_local_reply(self, completion):
        """Completions without a usable message fall back to the local reply."""
        client, _ = _make_stub_client(response=completion)
        engine = ConversationEngine(HOTEL_CATALOG, copy_client=client)
        expected, _ = ConversationEngine(HOTEL_CATALOG).step("Kathmandu", _make_state())

        response, state = engine.step("Kathmandu", _make_state())

        assert response.text == expected.text
        assert state.step == ConversationStep.BUDGET
        assert "Start over" in response.suggestions
        assert "Show all" in response.suggestions


class TestParseCopyResponse:
    """Tests for the parse_copy_response function."""

    def test_splits_text_and_chips(self):
        """The suggestions block is removed from the text and split into chips."""
        text, chips = parse_copy_response(
            'Hello there!\n[SUGGESTIONS: "Kathmandu Hotels", Under Rs. 10000 , Top Rated]'
        )
        assert text == "Hello there!"
        assert chips == ["Kathmandu Hotels", "Under Rs. 10000", "Top Rated"]

    def test_no_block(self):
        """Replies without a block have no chips."""
        assert parse_copy_response("Just text.") == ("Just text.", [])

    def test_only_block_is_error(self):
        """A reply with nothing but chips cannot be shown."""
        with pytest.raises(ParseError):
            parse_copy_response("[SUGGESTIONS: a, b]")


class TestConversationSession:
    """Tests for sessions and the stale-turn guard."""

    def test_respond_commits(self, engine):
        """A turn updates the state and records both sides of the exchange."""
        session = ConversationSession(engine, session_id="s1")
        session.greeting()

        response = session.respond("Pokhara")

        assert response is not None
        assert session.state.step == ConversationStep.BUDGET
        assert [m["role"] for m in session.context.history] == ["assistant", "user", "assistant"]
        assert session.turns == 1

    def test_full_dialogue(self, engine):
        """Location, budget, then a restart."""
        session = ConversationSession(engine)
        session.respond("Chitwan")
        response = session.respond("Rs. 10,000 - 20,000")

        assert [h.id for h in response.hotels] == ["ctw-green-park"]
        assert response.text == "Found 1 amazing hotel matching your preferences!"

        session.respond("Start over")
        assert session.state == ConversationState()

    def test_stale_turn_discarded(self, engine):
        """A turn computed before a reset is not committed."""
        session = ConversationSession(engine)
        session.respond("Pokhara")

        ticket = session.begin_turn()
        turn = TurnInput(text="Any budget")
        response, next_state = engine.step(turn, session.state, session.context)
        session.reset()

        assert session.commit(ticket, turn, response, next_state) is False
        assert session.state == ConversationState()
        assert session.context.history == []

    def test_fresh_ticket_after_reset(self, engine):
        """Turns started after a reset commit normally."""
        session = ConversationSession(engine)
        session.reset()
        assert session.respond("Kathmandu") is not None
        assert session.state.selected_location == "kathmandu"

    def test_commit_logs_transition(self, engine, caplog):
        """Committed turns are logged as state transitions."""
        caplog.set_level(logging.INFO, logger="roomora")
        session = ConversationSession(engine, session_id="s-log")

        session.respond("Pokhara")

        records = [r for r in caplog.records if r.getMessage() == "State transition: turn_committed"]
        assert len(records) == 1
        assert records[0].state_summary["step"] == "budget"
        assert records[0].session_id == "s-log"
        assert records[0].details == {"intent": "location_match"}
