"""
Shared infrastructure for all components.

Modules:
- config: Runtime settings and feature flags
- errors: Error taxonomy
- geo: Haversine distance
- llm: Copy-service client
- logging: Structured JSON logging
- schemas: Common base models
"""

from roomora.shared.config import Settings, get_settings, load_settings
from roomora.shared.errors import GeolocationDenied, ProviderUnavailable
from roomora.shared.geo import distance_km
from roomora.shared.logging.config import setup_logging, log_state_transition
from roomora.shared.schemas.base import Coordinate

__all__ = [
    "Settings",
    "get_settings",
    "load_settings",
    "GeolocationDenied",
    "ProviderUnavailable",
    "distance_km",
    "setup_logging",
    "log_state_transition",
    "Coordinate",
]
