"""
Route planner backed by an OSRM routing service.

route() fails soft: any problem with the provider yields an empty list,
which callers treat as "no overlay".
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from roomora.routing.schemas import RouteOverlay
from roomora.shared.config import Settings, get_settings
from roomora.shared.errors import ProviderUnavailable
from roomora.shared.schemas.base import Coordinate


logger = logging.getLogger(__name__)


def normalize_geometry(coordinates: Any) -> List[Coordinate]:
    """
    Convert GeoJSON [lon, lat] pairs to Coordinates.

    Raises:
        ProviderUnavailable: If the geometry is not a list of numeric pairs
    """
    if not isinstance(coordinates, list):
        raise ProviderUnavailable("osrm", "geometry is not a list")

    points = []
    try:
        for pair in coordinates:
            lon, lat = pair[0], pair[1]
            points.append(Coordinate(latitude=lat, longitude=lon))
    except (TypeError, IndexError, KeyError, ValidationError) as e:
        raise ProviderUnavailable("osrm", f"malformed geometry: {e}") from e

    return points


class RoutePlanner:
    """
    Adapter over the routing service.

    Args:
        settings: Runtime settings (defaults to process settings)
        client: Optional httpx client, injected for tests
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.Client] = None,
    ):
        self._settings = settings or get_settings()
        self._timeout = httpx.Timeout(self._settings.route_timeout, connect=5.0)
        self._client = client or httpx.Client(timeout=self._timeout)

    def close(self) -> None:
        self._client.close()

    def route(self, origin: Coordinate, destination: Coordinate) -> List[Coordinate]:
        """
        Compute a drivable path between two points.

        Args:
            origin: Start of the route
            destination: End of the route

        Returns:
            Waypoints from the first route, latitude first; empty on any failure
        """
        _log = (
            f"[router=osrm] [from={origin.latitude:.4f},{origin.longitude:.4f}] "
            f"[to={destination.latitude:.4f},{destination.longitude:.4f}] "
        )

        try:
            data = self._request_route(origin, destination)
            routes = data.get("routes") or []
            if not routes:
                raise ProviderUnavailable("osrm", "no route returned")
            geometry = (routes[0] or {}).get("geometry") or {}
            points = normalize_geometry(geometry.get("coordinates"))
        except ProviderUnavailable as e:
            logger.warning(f"{_log}No route: {e.reason}")
            return []
        except (AttributeError, KeyError, TypeError) as e:
            logger.warning(f"{_log}No route: malformed response ({e})")
            return []

        logger.info(f"{_log}Route found | waypoints={len(points)}")
        return points

    def overlay(
        self,
        origin_id: str,
        origin: Coordinate,
        destination_id: str,
        destination: Coordinate,
    ) -> Optional[RouteOverlay]:
        """Route wrapped as an overlay, or None when there is nothing to draw."""
        points = self.route(origin, destination)
        if not points:
            return None
        return RouteOverlay(
            origin_id=origin_id, destination_id=destination_id, coordinates=points
        )

    def _request_route(
        self, origin: Coordinate, destination: Coordinate
    ) -> Dict[str, Any]:
        """
        Call the OSRM route endpoint.

        Raises:
            ProviderUnavailable: On transport errors, non-2xx responses,
                timeouts, non-"Ok" codes or malformed JSON
        """
        lonlat = (
            f"{origin.longitude},{origin.latitude};"
            f"{destination.longitude},{destination.latitude}"
        )
        url = f"{self._settings.osrm_url.rstrip('/')}/route/v1/driving/{lonlat}"
        params = {"overview": "full", "geometries": "geojson"}

        try:
            response = self._client.get(url, params=params, timeout=self._timeout)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderUnavailable("osrm", f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ProviderUnavailable("osrm", str(e) or type(e).__name__) from e
        except ValueError as e:
            raise ProviderUnavailable("osrm", "malformed JSON") from e

        if not isinstance(data, dict):
            raise ProviderUnavailable("osrm", "unexpected payload")

        code = data.get("code", "Ok")
        if code != "Ok":
            raise ProviderUnavailable("osrm", f"code={code}")

        return data
