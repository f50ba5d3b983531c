"""Stateless map adapters so the clustering engine can run server-side."""

from __future__ import annotations

import math
from typing import List, Optional

from markercluster.geo import LatLng, LatLngBounds, PixelPoint

TILE_SIZE = 256

# Web Mercator is undefined at the poles
_MAX_SIN_LAT = 0.9999


class WebMercatorProjection:
    """Spherical Web Mercator world pixels at a fixed zoom level."""

    def __init__(self, zoom: float, tile_size: int = TILE_SIZE):
        self.zoom = zoom
        self.scale = tile_size * (2 ** zoom)

    def to_pixel(self, position: LatLng) -> PixelPoint:
        siny = math.sin(math.radians(position.lat))
        siny = min(max(siny, -_MAX_SIN_LAT), _MAX_SIN_LAT)
        x = (position.lng + 180.0) / 360.0 * self.scale
        y = (0.5 - math.log((1 + siny) / (1 - siny)) / (4 * math.pi)) * self.scale
        return PixelPoint(x, y)

    def to_latlng(self, point: PixelPoint) -> LatLng:
        lng = point.x / self.scale * 360.0 - 180.0
        n = math.pi - 2 * math.pi * point.y / self.scale
        lat = math.degrees(math.atan(math.sinh(n)))
        return LatLng(lat, lng)


class StaticMapView:
    """A viewport that never moves; fit requests are recorded, not applied."""

    def __init__(self, bounds: LatLngBounds, zoom: float):
        self._bounds = bounds
        self._zoom = zoom
        self.fitted: List[LatLngBounds] = []

    def current_bounds(self) -> LatLngBounds:
        return self._bounds.copy()

    def current_zoom(self) -> float:
        return self._zoom

    def fit_to_bounds(self, bounds: LatLngBounds) -> None:
        self.fitted.append(bounds.copy())

    @property
    def last_fitted(self) -> Optional[LatLngBounds]:
        return self.fitted[-1] if self.fitted else None
