"""
Collaborator contracts consumed by the clustering engine.

The engine never projects coordinates, draws icons or dispatches UI events on
its own; it talks to whatever map toolkit hosts it through these protocols.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional, Protocol

from .geo import LatLng, LatLngBounds, PixelPoint

if TYPE_CHECKING:
    from .clustering.calculator import ClusterSums


class Projection(Protocol):
    """Converts between geographic and pixel coordinates at the current zoom."""

    def to_pixel(self, position: LatLng) -> PixelPoint:
        ...

    def to_latlng(self, point: PixelPoint) -> LatLng:
        ...


class MapView(Protocol):
    """The viewport the clusters are computed for."""

    def current_bounds(self) -> LatLngBounds:
        ...

    def current_zoom(self) -> float:
        ...

    def fit_to_bounds(self, bounds: LatLngBounds) -> None:
        ...


class MarkerLike(Protocol):
    """A point marker owned by the caller and referenced by the index."""

    position: Optional[LatLng]
    draggable: bool

    def set_visible(self, visible: bool) -> None:
        ...

    def add_drag_end_listener(self, listener: Callable[[], None]) -> None:
        ...

    def remove_drag_end_listener(self, listener: Callable[[], None]) -> None:
        ...


class ClusterDisplay(Protocol):
    """Aggregate icon drawn for a cluster by the rendering layer."""

    def set_center(self, center: LatLng) -> None:
        ...

    def set_display(self, sums: "ClusterSums") -> None:
        ...

    def show(self) -> None:
        ...

    def hide(self) -> None:
        ...

    def remove(self) -> None:
        ...
