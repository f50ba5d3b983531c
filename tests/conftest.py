"""
Pytest configuration and shared fixtures for markercluster tests.

This file provides:
- A linear test projection and a fake map view
- Marker factories
- A clusterer factory wired to both
"""

from typing import Callable, List, Optional

import pytest

from markercluster import ClustererOptions, LatLng, LatLngBounds, Marker, SpatialClusterIndex
from markercluster.geo import PixelPoint


# ==============================================================================
# Collaborators
# ==============================================================================

PIXELS_PER_DEGREE = 1000.0


class LinearProjection:
    """Equirectangular projection: 1 degree == 1000 px on both axes."""

    def __init__(self, scale: float = PIXELS_PER_DEGREE):
        self.scale = scale

    def to_pixel(self, position: LatLng) -> PixelPoint:
        return PixelPoint((position.lng + 180.0) * self.scale, (90.0 - position.lat) * self.scale)

    def to_latlng(self, point: PixelPoint) -> LatLng:
        return LatLng(90.0 - point.y / self.scale, point.x / self.scale - 180.0)


class FakeMapView:
    """Viewport with settable bounds/zoom that records fit requests."""

    def __init__(self, bounds: Optional[LatLngBounds] = None, zoom: float = 5):
        self.bounds = bounds or LatLngBounds.from_corners(LatLng(0.0, 0.0), LatLng(20.0, 20.0))
        self.zoom = zoom
        self.fitted: List[LatLngBounds] = []

    def current_bounds(self) -> LatLngBounds:
        return self.bounds.copy()

    def current_zoom(self) -> float:
        return self.zoom

    def fit_to_bounds(self, bounds: LatLngBounds) -> None:
        self.fitted.append(bounds.copy())


class RecordingDisplay:
    """Cluster display that appends every call to a shared event log."""

    def __init__(self, cluster, log: list):
        self.cluster = cluster
        self.log = log
        self.visible = False
        self.removed = False
        self.sums = None
        self.center = None
        self.log.append(("create", id(self)))

    def set_center(self, center):
        self.center = center

    def set_display(self, sums):
        self.sums = sums

    def show(self):
        self.visible = True

    def hide(self):
        self.visible = False

    def remove(self):
        self.removed = True
        self.log.append(("remove", id(self)))


# ==============================================================================
# Fixtures
# ==============================================================================

@pytest.fixture
def projection() -> LinearProjection:
    return LinearProjection()


@pytest.fixture
def map_view() -> FakeMapView:
    return FakeMapView()


@pytest.fixture
def make_marker() -> Callable[..., Marker]:
    """Factory: make_marker(lat, lng, id=None, draggable=False)."""

    def _make(lat: float, lng: float, id: Optional[str] = None, draggable: bool = False) -> Marker:
        return Marker.at(lat, lng, id=id, draggable=draggable)

    return _make


@pytest.fixture
def close_markers(make_marker) -> List[Marker]:
    """Three markers within ~35 px of each other around (10, 10)."""
    return [
        make_marker(10.00, 10.00, id="a"),
        make_marker(10.02, 10.01, id="b"),
        make_marker(10.01, 10.03, id="c"),
    ]


@pytest.fixture
def make_index(map_view, projection) -> Callable[..., SpatialClusterIndex]:
    """Factory building a SpatialClusterIndex on the fake map view."""

    def _make(markers=None, ready: bool = False, **option_kwargs) -> SpatialClusterIndex:
        index = SpatialClusterIndex(
            map_view,
            projection,
            markers=markers,
            options=ClustererOptions(**option_kwargs),
        )
        if ready:
            index.on_add()
        return index

    return _make


@pytest.fixture(autouse=True)
def _clear_profile_env(monkeypatch):
    monkeypatch.delenv("MARKERCLUSTER_PROFILE", raising=False)
