"""
Runtime settings for the recommendation core.

Reads provider endpoints, timeouts, and feature flags from the environment
(a local .env file is honoured) and exposes them as a single dataclass.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from roomora.shared.schemas.base import Coordinate

load_dotenv()


_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """
    Settings shared by the candidate source, route planner and copy service.

    Attributes:
        overpass_url: Overpass API interpreter endpoint (POI provider)
        osrm_url: OSRM base URL (routing provider)
        poi_timeout: Timeout for a single POI query, in seconds
        route_timeout: Timeout for a single routing query, in seconds
        search_radius_m: Default radius for nearby lodging searches
        synthetic_fallback: Serve synthetic candidates when the POI provider
            fails or returns nothing usable
        fallback_latitude: Anchor latitude used when geolocation is denied
        fallback_longitude: Anchor longitude used when geolocation is denied
        copy_api_key: API key for the optional copy service; None disables it
        copy_base_url: OpenAI-compatible base URL for the copy service
        copy_model: Model identifier for the copy service
        copy_timeout: Timeout for a single copy request, in seconds
        log_json: Emit JSON log lines for the roomora logger instead of plain text
    """

    overpass_url: str = "https://overpass-api.de/api/interpreter"
    osrm_url: str = "https://router.project-osrm.org"
    poi_timeout: float = 15.0
    route_timeout: float = 10.0
    search_radius_m: int = 5000

    synthetic_fallback: bool = True

    # Kathmandu
    fallback_latitude: float = 27.7172
    fallback_longitude: float = 85.3240

    copy_api_key: Optional[str] = None
    copy_base_url: Optional[str] = None
    copy_model: str = "gpt-4.1-mini"
    copy_timeout: float = 15.0

    log_json: bool = False

    @property
    def fallback_anchor(self) -> Coordinate:
        return Coordinate(
            latitude=self.fallback_latitude, longitude=self.fallback_longitude
        )

    @property
    def copy_enabled(self) -> bool:
        return bool(self.copy_api_key)


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def load_settings() -> Settings:
    """
    Build settings from ROOMORA_* environment variables.

    Unset variables keep the dataclass defaults.

    Returns:
        Settings populated from the environment
    """
    defaults = Settings()
    return Settings(
        overpass_url=os.environ.get("ROOMORA_OVERPASS_URL", defaults.overpass_url),
        osrm_url=os.environ.get("ROOMORA_OSRM_URL", defaults.osrm_url),
        poi_timeout=float(os.environ.get("ROOMORA_POI_TIMEOUT", defaults.poi_timeout)),
        route_timeout=float(
            os.environ.get("ROOMORA_ROUTE_TIMEOUT", defaults.route_timeout)
        ),
        search_radius_m=int(
            os.environ.get("ROOMORA_SEARCH_RADIUS_M", defaults.search_radius_m)
        ),
        synthetic_fallback=_env_flag(
            "ROOMORA_SYNTHETIC_FALLBACK", defaults.synthetic_fallback
        ),
        fallback_latitude=float(
            os.environ.get("ROOMORA_FALLBACK_LATITUDE", defaults.fallback_latitude)
        ),
        fallback_longitude=float(
            os.environ.get("ROOMORA_FALLBACK_LONGITUDE", defaults.fallback_longitude)
        ),
        copy_api_key=os.environ.get("ROOMORA_COPY_API_KEY") or None,
        copy_base_url=os.environ.get("ROOMORA_COPY_BASE_URL") or None,
        copy_model=os.environ.get("ROOMORA_COPY_MODEL", defaults.copy_model),
        copy_timeout=float(
            os.environ.get("ROOMORA_COPY_TIMEOUT", defaults.copy_timeout)
        ),
        log_json=_env_flag("ROOMORA_LOG_JSON", defaults.log_json),
    )


# Module-level cache, built on first access
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
