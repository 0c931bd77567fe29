"""
Nearby recommendations: the explorer view state and its first-fix latch.
"""

from roomora.recommendations.explorer import NearbyExplorer
from roomora.recommendations.latch import FirstFixLatch

__all__ = ["NearbyExplorer", "FirstFixLatch"]
