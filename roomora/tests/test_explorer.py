"""
Unit tests for the nearby explorer and its first-fix latch.

The candidate source and route planner are replaced with in-memory fakes.
"""

from typing import List, Optional

import pytest

from roomora.candidates.schemas import Candidate
from roomora.recommendations.explorer import USER_ORIGIN_ID, NearbyExplorer
from roomora.recommendations.latch import FirstFixLatch
from roomora.routing.schemas import RouteOverlay
from roomora.shared.config import Settings
from roomora.shared.errors import GeolocationDenied
from roomora.shared.schemas.base import Coordinate


KATHMANDU = Coordinate(latitude=27.7172, longitude=85.3240)
POKHARA = Coordinate(latitude=28.2096, longitude=83.9856)


def _make_candidates(count: int) -> List[Candidate]:
    return [
        Candidate(
            id=f"h{i}",
            name=f"Hotel {i}",
            coordinate=Coordinate(latitude=27.70 + i * 0.001, longitude=85.31),
            rating=5.0 - i * 0.1,
            review_count=100,
        )
        for i in range(count)
    ]


class _FakeSource:
    def __init__(self, candidates: List[Candidate]):
        self.candidates = candidates
        self.calls = []

    def fetch_near(self, anchor: Coordinate, radius_m: Optional[int] = None):
        self.calls.append((anchor, radius_m))
        return list(self.candidates)


class _FakePlanner:
    def __init__(self, points: List[Coordinate]):
        self.points = points
        self.calls = []

    def overlay(self, origin_id, origin, destination_id, destination):
        self.calls.append((origin_id, origin, destination_id, destination))
        if not self.points:
            return None
        return RouteOverlay(
            origin_id=origin_id, destination_id=destination_id, coordinates=self.points
        )


class _FakeSubscription:
    def __init__(self):
        self.cancelled = 0

    def cancel(self) -> None:
        self.cancelled += 1


def _make_explorer(count: int = 20, points=None):
    source = _FakeSource(_make_candidates(count))
    planner = _FakePlanner([KATHMANDU, POKHARA] if points is None else points)
    explorer = NearbyExplorer(source, planner, settings=Settings())
    return explorer, source, planner


class TestFirstFixLatch:
    """Tests for the FirstFixLatch class."""

    def test_trips_once(self):
        """trip() is True exactly once."""
        latch = FirstFixLatch()
        assert latch.tripped is False
        assert latch.trip() is True
        assert latch.trip() is False
        assert latch.tripped is True

    def test_reset(self):
        """reset() re-arms the latch."""
        latch = FirstFixLatch()
        latch.trip()
        latch.reset()
        assert latch.trip() is True


class TestOnFix:
    """Tests for NearbyExplorer.on_fix."""

    def test_first_fix_loads(self):
        """The first fix fetches with the configured radius and partitions."""
        explorer, source, _ = _make_explorer()

        assert explorer.on_fix(KATHMANDU) is True

        assert source.calls == [(KATHMANDU, 5000)]
        assert explorer.loaded is True
        assert len(explorer.top) == 3
        assert len(explorer.rest) == 12
        assert explorer.position == KATHMANDU

    def test_later_fixes_only_move_position(self):
        """Subsequent fixes update the position without refetching."""
        explorer, source, _ = _make_explorer()
        explorer.on_fix(KATHMANDU)
        moved = Coordinate(latitude=27.72, longitude=85.33)

        assert explorer.on_fix(moved) is False

        assert len(source.calls) == 1
        assert explorer.position == moved

    def test_top_is_best_scored(self):
        """Top picks are the highest-scoring candidates."""
        explorer, _, _ = _make_explorer()
        explorer.on_fix(KATHMANDU)
        scores = [c.score for c in explorer.visible]
        assert scores == sorted(scores, reverse=True)


class TestOnError:
    """Tests for NearbyExplorer.on_error."""

    def test_error_without_position_uses_fallback(self):
        """No fix yet: load around the fallback anchor, once."""
        explorer, source, _ = _make_explorer()

        assert explorer.on_error(GeolocationDenied()) is True
        assert explorer.on_error(GeolocationDenied("timeout")) is False

        assert source.calls == [(Settings().fallback_anchor, 5000)]
        assert explorer.position == KATHMANDU

    def test_error_after_fix_keeps_position(self):
        """A later error does not discard a known position."""
        explorer, source, _ = _make_explorer()
        explorer.on_fix(POKHARA)

        assert explorer.on_error(GeolocationDenied()) is False

        assert explorer.position == POKHARA
        assert len(source.calls) == 1

    def test_fix_after_fallback_does_not_refetch(self):
        """Once the latch tripped through the fallback, a real fix only moves the marker."""
        explorer, source, _ = _make_explorer()
        explorer.on_error(GeolocationDenied())

        assert explorer.on_fix(POKHARA) is False
        assert len(source.calls) == 1
        assert explorer.position == POKHARA


class TestSelection:
    """Tests for selecting candidates and route overlays."""

    def test_select_routes_from_position(self):
        """Selecting a candidate routes from the current position."""
        explorer, _, planner = _make_explorer()
        explorer.on_fix(KATHMANDU)
        target = explorer.top[0]

        overlay = explorer.select(target.id)

        assert explorer.selected == target
        assert overlay == explorer.overlay
        assert overlay.destination_id == target.id
        assert planner.calls == [(USER_ORIGIN_ID, KATHMANDU, target.id, target.coordinate)]

    def test_select_replaces_overlay(self):
        """A new selection discards the previous overlay."""
        explorer, _, _ = _make_explorer()
        explorer.on_fix(KATHMANDU)
        explorer.select(explorer.top[0].id)

        overlay = explorer.select(explorer.rest[0].id)

        assert overlay.destination_id == explorer.rest[0].id

    def test_empty_route_leaves_no_overlay(self):
        """No route from the planner means no overlay."""
        explorer, _, _ = _make_explorer(points=[])
        explorer.on_fix(KATHMANDU)

        assert explorer.select(explorer.top[0].id) is None
        assert explorer.overlay is None
        assert explorer.selected is not None

    def test_unknown_candidate(self):
        """Selecting something not on screen raises KeyError."""
        explorer, _, _ = _make_explorer()
        explorer.on_fix(KATHMANDU)
        with pytest.raises(KeyError):
            explorer.select("missing")

    def test_hidden_candidate_not_selectable(self):
        """Candidates beyond top + rest are not part of the view."""
        explorer, _, _ = _make_explorer(count=20)
        explorer.on_fix(KATHMANDU)
        with pytest.raises(KeyError):
            explorer.select("h19")

    def test_clear_selection(self):
        """Recentering drops the selection and the overlay."""
        explorer, _, _ = _make_explorer()
        explorer.on_fix(KATHMANDU)
        explorer.select(explorer.top[0].id)

        explorer.clear_selection()

        assert explorer.selected is None
        assert explorer.overlay is None


class TestSubscription:
    """Tests for subscription lifecycle."""

    def test_close_cancels_once(self):
        """close() cancels the subscription and is safe to repeat."""
        explorer, _, _ = _make_explorer()
        subscription = _FakeSubscription()
        explorer.start(subscription)

        explorer.close()
        explorer.close()

        assert subscription.cancelled == 1
