"""Geographic primitives used by the clustering engine.

Only two pieces of geometry are needed: inclusive bounding-box containment and
great-circle distance. Bounds are plain south/west/north/east boxes and never
wrap the antimeridian.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class LatLng:
    """Latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float


@dataclass(frozen=True)
class PixelPoint:
    """A position in projected pixel space (y grows southwards)."""

    x: float
    y: float


@dataclass
class LatLngBounds:
    """
    Axis-aligned geographic box.

    An empty box has ``south > north`` and contains nothing; extending it with
    a single position collapses it onto that position.
    """

    south: float = math.inf
    west: float = math.inf
    north: float = -math.inf
    east: float = -math.inf

    @classmethod
    def from_corners(cls, south_west: LatLng, north_east: LatLng) -> "LatLngBounds":
        bounds = cls()
        bounds.extend(south_west)
        bounds.extend(north_east)
        return bounds

    @classmethod
    def from_points(cls, positions: Iterable[LatLng]) -> "LatLngBounds":
        """Tightest box containing every position in ``positions``."""
        bounds = cls()
        for position in positions:
            bounds.extend(position)
        return bounds

    @property
    def south_west(self) -> LatLng:
        return LatLng(self.south, self.west)

    @property
    def north_east(self) -> LatLng:
        return LatLng(self.north, self.east)

    def is_empty(self) -> bool:
        return self.south > self.north or self.west > self.east

    def center(self) -> Optional[LatLng]:
        if self.is_empty():
            return None
        return LatLng((self.south + self.north) / 2, (self.west + self.east) / 2)

    def contains(self, position: LatLng) -> bool:
        """Inclusive containment test."""
        return (
            self.south <= position.lat <= self.north
            and self.west <= position.lng <= self.east
        )

    def extend(self, position: LatLng) -> "LatLngBounds":
        """Grow the box in place so it contains ``position``; returns self."""
        self.south = min(self.south, position.lat)
        self.north = max(self.north, position.lat)
        self.west = min(self.west, position.lng)
        self.east = max(self.east, position.lng)
        return self

    def union(self, other: "LatLngBounds") -> "LatLngBounds":
        if other.is_empty():
            return self
        self.extend(other.south_west)
        self.extend(other.north_east)
        return self

    def copy(self) -> "LatLngBounds":
        return LatLngBounds(self.south, self.west, self.north, self.east)

    def to_dict(self) -> dict:
        return {
            "south": self.south,
            "west": self.west,
            "north": self.north,
            "east": self.east,
        }


def distance_between_points(p1: Optional[LatLng], p2: Optional[LatLng]) -> float:
    """
    Great-circle distance between two positions in kilometres.

    Uses the haversine formula with a mean Earth radius of 6371 km.
    Returns 0 if either position is missing.
    """
    if p1 is None or p2 is None:
        return 0.0

    d_lat = math.radians(p2.lat - p1.lat)
    d_lng = math.radians(p2.lng - p1.lng)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(p1.lat))
        * math.cos(math.radians(p2.lat))
        * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distances_to_point(position: LatLng, lats: np.ndarray, lngs: np.ndarray) -> np.ndarray:
    """Vectorized haversine distance (km) from ``position`` to each (lat, lng) pair."""
    lat1 = math.radians(position.lat)
    lat2 = np.radians(lats)
    d_lat = lat2 - lat1
    d_lng = np.radians(lngs - position.lng)
    a = np.sin(d_lat / 2) ** 2 + math.cos(lat1) * np.cos(lat2) * np.sin(d_lng / 2) ** 2
    # Rounding can push ``a`` a hair outside [0, 1].
    a = np.clip(a, 0.0, 1.0)
    return EARTH_RADIUS_KM * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
