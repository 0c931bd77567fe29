"""
Static and synthetic candidate data.

Holds the curated Nepal hotel catalog used by the conversation and the
deterministic synthetic generator that stands in for the POI provider when
it fails or finds nothing.
"""

import math
import random
from typing import List, Optional

from roomora.candidates.schemas import Candidate
from roomora.shared.schemas.base import Coordinate


SYNTHETIC_COUNT = 10

# Maximum jitter from the anchor, in degrees (~1.1 km of latitude)
SYNTHETIC_JITTER_DEG = 0.01

SYNTHETIC_NAME_POOL = (
    "Everest",
    "Himalaya",
    "Kathmandu",
    "Lakeside",
    "Sunrise",
    "Mountain",
    "Heritage",
    "Royal",
    "Grand",
    "Peace",
)

PLACEHOLDER_THUMBNAILS = (
    "https://images.unsplash.com/photo-1566073771259-6a8506099945?auto=format&fit=crop&w=800&q=80",
    "https://images.unsplash.com/photo-1520250497591-112f2f40a3f4?auto=format&fit=crop&w=800&q=80",
    "https://images.unsplash.com/photo-1551882547-ff40c63fe5fa?auto=format&fit=crop&w=800&q=80",
    "https://images.unsplash.com/photo-1455587734955-080184874463?auto=format&fit=crop&w=800&q=80",
)

# Enrichment bounds for candidates without rating/review data
RATING_RANGE = (3.5, 5.0)
REVIEW_RANGE = (50, 550)


def _hotel(
    hotel_id: str,
    name: str,
    location: str,
    latitude: float,
    longitude: float,
    price: int,
    rating: float,
    reviews: int,
    amenities: List[str],
    thumbnail_index: int,
) -> Candidate:
    return Candidate(
        id=hotel_id,
        name=name,
        coordinate=Coordinate(latitude=latitude, longitude=longitude),
        rating=rating,
        review_count=reviews,
        price_per_night=price,
        amenities=frozenset(amenities),
        thumbnail=PLACEHOLDER_THUMBNAILS[thumbnail_index % len(PLACEHOLDER_THUMBNAILS)],
        location=location,
    )


HOTEL_CATALOG: List[Candidate] = [
    # Kathmandu
    _hotel("ktm-dwarikas", "Dwarika's Hotel", "Battisputali, Kathmandu",
           27.7041, 85.3400, 32000, 4.9, 1250, ["WiFi", "Spa", "Pool", "Restaurant"], 0),
    _hotel("ktm-yak-yeti", "Hotel Yak & Yeti", "Durbar Marg, Kathmandu",
           27.7126, 85.3188, 18500, 4.6, 2140, ["WiFi", "Pool", "Casino", "Restaurant"], 1),
    _hotel("ktm-guest-house", "Kathmandu Guest House", "Thamel, Kathmandu",
           27.7154, 85.3106, 6500, 4.4, 1830, ["WiFi", "Garden", "Restaurant"], 2),
    _hotel("ktm-shanker", "Hotel Shanker", "Lazimpat, Kathmandu",
           27.7200, 85.3194, 14000, 4.3, 980, ["WiFi", "Pool", "Heritage Building"], 3),
    _hotel("ktm-himalaya", "Hotel Himalaya", "Kupondole, Kathmandu",
           27.6868, 85.3170, 12000, 4.2, 760, ["WiFi", "Pool", "Mountain View"], 0),
    _hotel("ktm-thamel-eco", "Thamel Eco Resort", "Thamel, Kathmandu",
           27.7160, 85.3125, 8500, 4.5, 640, ["WiFi", "Rooftop", "Breakfast"], 1),
    # Pokhara
    _hotel("pkr-fish-tail", "Fish Tail Lodge", "Lakeside, Pokhara",
           28.2050, 83.9580, 16000, 4.5, 1100, ["WiFi", "Lake View", "Pool"], 2),
    _hotel("pkr-temple-tree", "Temple Tree Resort & Spa", "Lakeside, Pokhara",
           28.2096, 83.9575, 21000, 4.7, 890, ["WiFi", "Spa", "Pool", "Bar"], 3),
    _hotel("pkr-barahi", "Hotel Barahi", "Lakeside, Pokhara",
           28.2130, 83.9570, 9000, 4.3, 1020, ["WiFi", "Pool", "Breakfast"], 0),
    _hotel("pkr-pavilions", "The Pavilions Himalayas", "Chisapani, Pokhara",
           28.2460, 83.9170, 38000, 4.8, 420, ["Spa", "Organic Farm", "Mountain View"], 1),
    # Chitwan
    _hotel("ctw-barahi-jungle", "Barahi Jungle Lodge", "Andrauli, Chitwan",
           27.5450, 84.2360, 24000, 4.7, 510, ["Safari", "Pool", "Restaurant"], 2),
    _hotel("ctw-green-park", "Green Park Chitwan", "Sauraha, Chitwan",
           27.5790, 84.4960, 11000, 4.4, 730, ["WiFi", "Pool", "Safari"], 3),
    _hotel("ctw-parkland", "Hotel Parkland", "Sauraha, Chitwan",
           27.5780, 84.4940, 5500, 4.1, 450, ["WiFi", "Garden"], 0),
    # Lumbini
    _hotel("lmb-buddha", "Hotel Lumbini Buddha", "Sacred Garden, Lumbini",
           27.4840, 83.2760, 7500, 4.0, 300, ["WiFi", "Restaurant"], 1),
    _hotel("lmb-palace", "Lumbini Palace Resort", "Lumbini",
           27.4710, 83.2750, 13000, 4.3, 380, ["WiFi", "Pool", "Spa"], 2),
    # Nagarkot
    _hotel("ngk-club-himalaya", "Club Himalaya", "Nagarkot",
           27.7170, 85.5200, 15500, 4.4, 690, ["WiFi", "Mountain View", "Pool"], 3),
    _hotel("ngk-country-villa", "Hotel Country Villa", "Nagarkot",
           27.7160, 85.5210, 7000, 4.2, 520, ["WiFi", "Mountain View"], 0),
]


def anchor_rng(anchor: Coordinate) -> random.Random:
    """
    Random generator seeded by the anchor coordinate.

    The same anchor always yields the same sequence, so synthetic and
    enriched data are reproducible per query.
    """
    return random.Random(f"{anchor.latitude:.5f},{anchor.longitude:.5f}")


def synthesize_rating(rng: random.Random) -> float:
    return round(rng.uniform(*RATING_RANGE), 1)


def synthesize_review_count(rng: random.Random) -> int:
    return rng.randrange(*REVIEW_RANGE)


def generate_synthetic_candidates(
    anchor: Coordinate,
    rng: Optional[random.Random] = None,
    count: int = SYNTHETIC_COUNT,
) -> List[Candidate]:
    """
    Generate lodgings scattered around the anchor.

    Offsets are drawn uniformly from a disc of SYNTHETIC_JITTER_DEG, so each
    axis moves by at most that many degrees and every candidate stays within
    roughly 1.1 km of the anchor.

    Args:
        anchor: Point to scatter candidates around
        rng: Random generator (defaults to one seeded by the anchor)
        count: Number of candidates to generate

    Returns:
        List of synthetic candidates with ratings and reviews filled in
    """
    if rng is None:
        rng = anchor_rng(anchor)

    candidates = []
    for i in range(count):
        word = SYNTHETIC_NAME_POOL[i % len(SYNTHETIC_NAME_POOL)]
        radius = SYNTHETIC_JITTER_DEG * math.sqrt(rng.random())
        theta = rng.uniform(0, 2 * math.pi)
        latitude = min(90.0, max(-90.0, anchor.latitude + radius * math.sin(theta)))
        longitude = min(180.0, max(-180.0, anchor.longitude + radius * math.cos(theta)))

        candidates.append(
            Candidate(
                id=f"synthetic-{i}",
                name=f"Hotel {word} View",
                coordinate=Coordinate(latitude=latitude, longitude=longitude),
                rating=synthesize_rating(rng),
                review_count=synthesize_review_count(rng),
                thumbnail=rng.choice(PLACEHOLDER_THUMBNAILS),
                synthetic=True,
            )
        )

    return candidates
