"""
Unit Tests for Geographic Primitives (markercluster.geo)

Tests bounds containment/extension and great-circle distance.
"""

import math

import numpy as np
import pytest

from markercluster.geo import (
    EARTH_RADIUS_KM,
    LatLng,
    LatLngBounds,
    distance_between_points,
    distances_to_point,
)


# ==============================================================================
# Bounds Tests
# ==============================================================================

class TestLatLngBounds:
    """Test bounding box behaviour."""

    def test_empty_bounds_contains_nothing(self):
        bounds = LatLngBounds()
        assert bounds.is_empty()
        assert not bounds.contains(LatLng(0.0, 0.0))
        assert bounds.center() is None

    def test_contains_is_inclusive(self):
        bounds = LatLngBounds.from_corners(LatLng(0.0, 0.0), LatLng(1.0, 2.0))

        assert bounds.contains(LatLng(0.0, 0.0))
        assert bounds.contains(LatLng(1.0, 2.0))
        assert bounds.contains(LatLng(0.5, 1.0))
        assert not bounds.contains(LatLng(1.0001, 1.0))
        assert not bounds.contains(LatLng(0.5, -0.0001))

    def test_extend_grows_only(self):
        bounds = LatLngBounds.from_corners(LatLng(0.0, 0.0), LatLng(1.0, 1.0))
        bounds.extend(LatLng(0.5, 0.5))
        assert bounds.to_dict() == {"south": 0.0, "west": 0.0, "north": 1.0, "east": 1.0}

        bounds.extend(LatLng(-1.0, 3.0))
        assert bounds.south == -1.0
        assert bounds.east == 3.0

    def test_from_points_is_tight(self):
        bounds = LatLngBounds.from_points(
            [LatLng(1.0, 5.0), LatLng(-2.0, 3.0), LatLng(0.0, 4.0)]
        )
        assert bounds.south_west == LatLng(-2.0, 3.0)
        assert bounds.north_east == LatLng(1.0, 5.0)
        assert bounds.center() == LatLng(-0.5, 4.0)

    def test_copy_is_independent(self):
        bounds = LatLngBounds.from_corners(LatLng(0.0, 0.0), LatLng(1.0, 1.0))
        clone = bounds.copy()
        clone.extend(LatLng(5.0, 5.0))
        assert bounds.north == 1.0

    def test_union(self):
        a = LatLngBounds.from_corners(LatLng(0.0, 0.0), LatLng(1.0, 1.0))
        b = LatLngBounds.from_corners(LatLng(2.0, 2.0), LatLng(3.0, 3.0))
        a.union(b)
        assert a.north_east == LatLng(3.0, 3.0)
        assert a.union(LatLngBounds()).north_east == LatLng(3.0, 3.0)


# ==============================================================================
# Distance Tests
# ==============================================================================

class TestDistance:
    """Test haversine distance."""

    def test_one_degree_on_equator(self):
        d = distance_between_points(LatLng(0.0, 0.0), LatLng(0.0, 1.0))
        assert d == pytest.approx(EARTH_RADIUS_KM * math.pi / 180)

    def test_same_point_is_zero(self):
        p = LatLng(35.6812, 139.7671)
        assert distance_between_points(p, p) == 0.0

    def test_symmetry(self):
        pairs = [
            (LatLng(35.6812, 139.7671), LatLng(35.7148, 139.7967)),
            (LatLng(-33.86, 151.21), LatLng(51.5, -0.12)),
            (LatLng(89.9, 0.0), LatLng(-89.9, 179.0)),
        ]
        for a, b in pairs:
            assert distance_between_points(a, b) == pytest.approx(distance_between_points(b, a))

    def test_missing_point_is_zero(self):
        assert distance_between_points(None, LatLng(1.0, 1.0)) == 0.0
        assert distance_between_points(LatLng(1.0, 1.0), None) == 0.0

    def test_tokyo_station_to_sensoji(self):
        # ~5 km apart
        d = distance_between_points(LatLng(35.6812, 139.7671), LatLng(35.7148, 139.7967))
        assert 4.0 < d < 5.5

    def test_vectorized_matches_scalar(self):
        origin = LatLng(10.0, 10.0)
        others = [LatLng(10.0, 14.5), LatLng(-5.0, 3.0), LatLng(10.0, 10.0)]
        lats = np.array([p.lat for p in others])
        lngs = np.array([p.lng for p in others])

        vectorized = distances_to_point(origin, lats, lngs)

        for value, other in zip(vectorized, others):
            assert value == pytest.approx(distance_between_points(origin, other))
