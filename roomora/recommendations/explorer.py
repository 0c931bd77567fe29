"""
"Hotels near me" explorer.

Holds the state behind the nearby-hotels view: the live position pushed by
the device geolocation subscription, the ranked top picks and remaining
places, and the route overlay for the selected lodging.
"""

import logging
from typing import List, Optional, Protocol

from roomora.candidates.schemas import ScoredCandidate
from roomora.candidates.source import CandidateSource
from roomora.recommendations.latch import FirstFixLatch
from roomora.routing.planner import RoutePlanner
from roomora.routing.schemas import RouteOverlay
from roomora.scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from roomora.scoring.engine import partition, rank
from roomora.shared.config import Settings, get_settings
from roomora.shared.errors import GeolocationDenied
from roomora.shared.schemas.base import Coordinate


logger = logging.getLogger(__name__)


USER_ORIGIN_ID = "user"


class GeolocationSubscription(Protocol):
    """Handle for a long-lived device geolocation watch."""

    def cancel(self) -> None: ...


class NearbyExplorer:
    """
    Drives the nearby-hotels view.

    Args:
        source: Candidate source
        planner: Route planner
        settings: Runtime settings (radius, fallback anchor)
        scoring_config: Scoring weights and partition sizes
    """

    def __init__(
        self,
        source: CandidateSource,
        planner: RoutePlanner,
        settings: Optional[Settings] = None,
        scoring_config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    ):
        self._source = source
        self._planner = planner
        self._settings = settings or get_settings()
        self._scoring_config = scoring_config
        self._latch = FirstFixLatch()
        self._subscription: Optional[GeolocationSubscription] = None

        self.position: Optional[Coordinate] = None
        self.top: List[ScoredCandidate] = []
        self.rest: List[ScoredCandidate] = []
        self.selected: Optional[ScoredCandidate] = None
        self.overlay: Optional[RouteOverlay] = None

    @property
    def loaded(self) -> bool:
        return self._latch.tripped

    def start(self, subscription: GeolocationSubscription) -> None:
        """Keep the subscription so it can be cancelled on teardown."""
        self._subscription = subscription

    def close(self) -> None:
        """Cancel the geolocation subscription. Safe to call twice."""
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    def on_fix(self, coordinate: Coordinate) -> bool:
        """
        Handle a position fix from the subscription.

        Args:
            coordinate: Device position

        Returns:
            True if this fix triggered the candidate fetch
        """
        self.position = coordinate
        if not self._latch.trip():
            return False
        self.load(coordinate)
        return True

    def on_error(self, error: GeolocationDenied) -> bool:
        """
        Handle a geolocation failure.

        With no position yet, fall back to the configured anchor and fetch
        once; otherwise keep the last known position.

        Returns:
            True if the error triggered a fetch around the fallback anchor
        """
        logger.warning(f"[explorer] Geolocation error: {error.reason}")
        if self.position is not None:
            return False

        self.position = self._settings.fallback_anchor
        if not self._latch.trip():
            return False
        self.load(self.position)
        return True

    def load(self, anchor: Coordinate) -> None:
        """Fetch, rank and partition candidates around the anchor."""
        candidates = self._source.fetch_near(anchor, self._settings.search_radius_m)
        ranked = rank(anchor, candidates, self._scoring_config)
        self.top, self.rest = partition(ranked, self._scoring_config)
        self.selected = None
        self.overlay = None
        logger.info(
            f"[explorer] Loaded {len(candidates)} candidates | "
            f"top={len(self.top)}, rest={len(self.rest)}"
        )

    @property
    def visible(self) -> List[ScoredCandidate]:
        return self.top + self.rest

    def select(self, candidate_id: str) -> Optional[RouteOverlay]:
        """
        Select a displayed candidate and route to it from the current position.

        The previous overlay is discarded. An empty route leaves no overlay.

        Raises:
            KeyError: If the candidate is not in the current view
        """
        candidate = next((c for c in self.visible if c.id == candidate_id), None)
        if candidate is None:
            raise KeyError(candidate_id)

        self.selected = candidate
        self.overlay = None
        if self.position is not None:
            self.overlay = self._planner.overlay(
                USER_ORIGIN_ID, self.position, candidate.id, candidate.coordinate
            )
        return self.overlay

    def clear_selection(self) -> None:
        """Drop the selection and its overlay (recenter on the user)."""
        self.selected = None
        self.overlay = None
