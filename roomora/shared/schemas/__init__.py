"""Common base models."""

from roomora.shared.schemas.base import Coordinate

__all__ = ["Coordinate"]
