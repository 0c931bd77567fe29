"""Edge-triggered latch for the first geolocation fix."""


class FirstFixLatch:
    """
    Trips exactly once.

    The geolocation subscription pushes many fixes; only the first one may
    start a candidate fetch. Later fixes only move the displayed position.
    """

    def __init__(self) -> None:
        self._tripped = False

    @property
    def tripped(self) -> bool:
        return self._tripped

    def trip(self) -> bool:
        """Return True on the first call only."""
        if self._tripped:
            return False
        self._tripped = True
        return True

    def reset(self) -> None:
        self._tripped = False
