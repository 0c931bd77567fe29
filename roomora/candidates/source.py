"""
Candidate source backed by the Overpass (OpenStreetMap) POI provider.

fetch_near() makes one blocking provider call per request. Failures and
empty answers are converted into the synthetic fallback here, so callers
never see a provider error and (with the fallback enabled) never see an
empty list.
"""

import logging
import random
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from roomora.candidates.mock_data import (
    HOTEL_CATALOG,
    PLACEHOLDER_THUMBNAILS,
    anchor_rng,
    generate_synthetic_candidates,
    synthesize_rating,
    synthesize_review_count,
)
from roomora.candidates.schemas import Candidate
from roomora.shared.config import Settings, get_settings
from roomora.shared.errors import ProviderUnavailable
from roomora.shared.schemas.base import Coordinate


logger = logging.getLogger(__name__)


OVERPASS_QUERY_TEMPLATE = """
[out:json];
(
  node["tourism"="hotel"](around:{radius},{lat},{lon});
  way["tourism"="hotel"](around:{radius},{lat},{lon});
  relation["tourism"="hotel"](around:{radius},{lat},{lon});
);
out center;
"""


def build_overpass_query(anchor: Coordinate, radius_m: int) -> str:
    """Overpass QL for hotels within radius_m of the anchor."""
    return OVERPASS_QUERY_TEMPLATE.format(
        radius=int(radius_m), lat=anchor.latitude, lon=anchor.longitude
    )


def place_from_element(element: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Extract a raw place from an Overpass element.

    Nodes carry lat/lon directly; ways and relations carry them under
    "center" (requested with `out center`).

    Args:
        element: One entry of the Overpass "elements" array

    Returns:
        Dict with id, name, latitude, longitude, location and optional
        rating/review_count, or None if the element is unnamed, unplaced
        or malformed
    """
    tags = element.get("tags")
    if not isinstance(tags, dict):
        return None
    name = tags.get("name")
    if not isinstance(name, str) or not name.strip():
        return None
    name = name.strip()

    center = element.get("center")
    if not isinstance(center, dict):
        center = {}
    latitude = element.get("lat", center.get("lat"))
    longitude = element.get("lon", center.get("lon"))
    if latitude is None or longitude is None or element.get("id") is None:
        return None

    return {
        "id": f"osm-{element.get('type', 'node')}-{element['id']}",
        "name": name,
        "latitude": latitude,
        "longitude": longitude,
        "location": tags.get("addr:city") or tags.get("addr:suburb") or "",
        "rating": None,
        "review_count": None,
    }


def enrich_place(place: Dict[str, Any], rng: random.Random) -> Candidate:
    """
    Turn a raw place into a Candidate, synthesizing missing rating/review data.

    Args:
        place: Raw place from place_from_element()
        rng: Random generator used for synthesized fields

    Returns:
        Fully populated Candidate
    """
    rating = place.get("rating")
    if rating is None:
        rating = synthesize_rating(rng)

    review_count = place.get("review_count")
    if review_count is None:
        review_count = synthesize_review_count(rng)

    return Candidate(
        id=place["id"],
        name=place["name"],
        coordinate=Coordinate(
            latitude=place["latitude"], longitude=place["longitude"]
        ),
        rating=rating,
        review_count=review_count,
        thumbnail=rng.choice(PLACEHOLDER_THUMBNAILS),
        location=place.get("location", ""),
    )


class CandidateSource:
    """
    Adapter over the POI provider with a synthetic fallback.

    Args:
        settings: Runtime settings (defaults to process settings)
        client: Optional httpx client, injected for tests
        catalog: Optional static catalog (defaults to HOTEL_CATALOG)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.Client] = None,
        catalog: Optional[List[Candidate]] = None,
    ):
        self._settings = settings or get_settings()
        self._timeout = httpx.Timeout(self._settings.poi_timeout, connect=5.0)
        self._client = client or httpx.Client(timeout=self._timeout)
        self._catalog = list(catalog) if catalog is not None else list(HOTEL_CATALOG)

    def close(self) -> None:
        self._client.close()

    def catalog(self) -> List[Candidate]:
        """Return the static hotel catalog used by the conversation."""
        return list(self._catalog)

    def fetch_near(
        self, anchor: Coordinate, radius_m: Optional[int] = None
    ) -> List[Candidate]:
        """
        Fetch named lodgings near the anchor.

        Args:
            anchor: Search center
            radius_m: Search radius in metres (defaults to settings)

        Returns:
            Enriched candidates from the provider, or synthetic candidates if
            the provider failed or returned nothing usable. Empty only when
            the synthetic fallback is disabled.
        """
        radius = radius_m or self._settings.search_radius_m
        _log = (
            f"[source=overpass] [anchor={anchor.latitude:.4f},{anchor.longitude:.4f}] "
        )
        rng = anchor_rng(anchor)

        try:
            elements = self._query_provider(anchor, radius)
        except ProviderUnavailable as e:
            logger.warning(f"{_log}Provider call failed: {e.reason}")
            elements = []

        places = [p for p in (place_from_element(el) for el in elements) if p]
        logger.info(
            f"{_log}Provider returned {len(elements)} elements, "
            f"{len(places)} named | radius={radius}m"
        )

        candidates = []
        for place in places:
            try:
                candidates.append(enrich_place(place, rng))
            except ValidationError as e:
                logger.warning(f"{_log}Dropping malformed place {place['id']}: {e}")

        if candidates:
            return candidates

        if not self._settings.synthetic_fallback:
            logger.info(f"{_log}No usable results and synthetic fallback disabled")
            return []

        logger.info(f"{_log}No usable results, serving synthetic candidates")
        return generate_synthetic_candidates(anchor, rng=rng)

    def _query_provider(
        self, anchor: Coordinate, radius_m: int
    ) -> List[Dict[str, Any]]:
        """
        Run the Overpass query.

        Raises:
            ProviderUnavailable: On transport errors, non-2xx responses,
                timeouts or malformed payloads
        """
        query = build_overpass_query(anchor, radius_m)

        try:
            response = self._client.get(
                self._settings.overpass_url,
                params={"data": query},
                timeout=self._timeout,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderUnavailable(
                "overpass", f"HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ProviderUnavailable("overpass", str(e) or type(e).__name__) from e
        except ValueError as e:
            raise ProviderUnavailable("overpass", "malformed JSON") from e

        elements = data.get("elements") if isinstance(data, dict) else None
        if not isinstance(elements, list):
            raise ProviderUnavailable("overpass", "missing elements array")

        return [el for el in elements if isinstance(el, dict)]
