"""
Error taxonomy for the recommendation core.

These exceptions never leave the component that raises them: adapters catch
them at the call site and turn them into a local outcome (fallback
candidates, an empty route, the locally written reply).
"""


class RoomoraError(Exception):
    """Base class for recommendation core errors."""

    pass


class ProviderUnavailable(RoomoraError):
    """Raised when an external provider call fails or times out."""

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"{provider} unavailable: {reason}")


class GeolocationDenied(RoomoraError):
    """Raised when the device refuses or fails to produce a position fix."""

    def __init__(self, reason: str = "permission denied"):
        self.reason = reason
        super().__init__(f"Geolocation unavailable: {reason}")
