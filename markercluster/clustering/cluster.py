"""
A single cluster of markers.

A cluster is seeded with one marker and grows while the index assigns nearby
markers to it. Its admission bounds are the center padded by the grid size in
pixel space; membership is never shrunk, the whole cluster is destroyed and
rebuilt instead.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, List, Optional

from ..geo import LatLng, LatLngBounds
from ..interfaces import ClusterDisplay, MarkerLike

if TYPE_CHECKING:
    from .clusterer import SpatialClusterIndex


class InvalidPointError(ValueError):
    """Raised when a marker has no position."""


def position_of(marker: MarkerLike) -> LatLng:
    """Return the marker's position or raise InvalidPointError."""
    position = getattr(marker, "position", None)
    if position is None:
        raise InvalidPointError(f"Marker {marker!r} has no position")
    return position


class DisplayState(enum.Enum):
    """Outcome of :meth:`Cluster.refresh_display`."""

    MAX_ZOOM = "max_zoom"
    """Zoomed past max zoom: every member shown individually."""

    INDIVIDUAL = "individual"
    """Below the minimum size: icon hidden, members shown individually."""

    AGGREGATE = "aggregate"
    """Aggregate icon shown in place of the members."""


class Cluster:
    """
    Group of markers sharing a geographic neighbourhood.

    Configuration (grid size, minimum size, center averaging) is read from the
    owning index when the cluster is created.
    """

    def __init__(self, index: "SpatialClusterIndex"):
        self._index = index
        self._map_view = index.map_view
        self._grid_size = index.grid_size
        self._min_cluster_size = index.minimum_cluster_size
        self._average_center = index.average_center
        self._center: Optional[LatLng] = None
        self._markers: List[MarkerLike] = []
        self._bounds: Optional[LatLngBounds] = None
        self._display: ClusterDisplay = index.create_display(self)

    @property
    def index(self) -> "SpatialClusterIndex":
        return self._index

    @property
    def center(self) -> Optional[LatLng]:
        return self._center

    @property
    def members(self) -> List[MarkerLike]:
        return self._markers

    @property
    def bounds(self) -> Optional[LatLngBounds]:
        """Admission bounds (center padded by the grid size)."""
        return self._bounds

    @property
    def display(self) -> ClusterDisplay:
        return self._display

    def member_count(self) -> int:
        return len(self._markers)

    def already_has_member(self, marker: MarkerLike) -> bool:
        return any(m is marker for m in self._markers)

    def add_member(self, marker: MarkerLike) -> bool:
        """
        Add a marker to the cluster.

        Returns False if the marker is already a member. Visibility follows
        the minimum cluster size M: below M the new member is shown, at
        exactly M every member is hidden at once, from M on the new member
        is hidden.

        Raises:
            InvalidPointError: If the marker has no position
        """
        if self.already_has_member(marker):
            return False

        position = position_of(marker)
        if self._center is None:
            self._center = position
            self._calculate_bounds()
        elif self._average_center:
            n = len(self._markers) + 1
            lat = (self._center.lat * (n - 1) + position.lat) / n
            lng = (self._center.lng * (n - 1) + position.lng) / n
            self._center = LatLng(lat, lng)
            self._calculate_bounds()

        self._markers.append(marker)

        count = len(self._markers)
        if count < self._min_cluster_size:
            marker.set_visible(True)

        if count == self._min_cluster_size:
            for member in self._markers:
                member.set_visible(False)

        if count >= self._min_cluster_size:
            marker.set_visible(False)

        return True

    def contains_position(self, marker: MarkerLike) -> bool:
        """Whether the marker lies inside the admission bounds (inclusive)."""
        if self._bounds is None:
            return False
        return self._bounds.contains(position_of(marker))

    def compute_bounds(self) -> LatLngBounds:
        """Tightest box around the center and every member."""
        bounds = LatLngBounds()
        if self._center is not None:
            bounds.extend(self._center)
        for marker in self._markers:
            bounds.extend(position_of(marker))
        return bounds

    def refresh_display(self) -> DisplayState:
        """Recompute what is drawn for this cluster at the current zoom."""
        zoom = self._map_view.current_zoom()
        max_zoom = self._index.max_zoom

        if max_zoom is not None and zoom > max_zoom:
            for marker in self._markers:
                marker.set_visible(True)
            self._display.hide()
            return DisplayState.MAX_ZOOM

        if len(self._markers) < self._min_cluster_size:
            self._display.hide()
            return DisplayState.INDIVIDUAL

        num_styles = len(self._index.styles)
        sums = self._index.compute_sums(self._markers, num_styles)
        self._display.set_center(self._center)
        self._display.set_display(sums)
        self._display.show()
        return DisplayState.AGGREGATE

    def destroy(self) -> None:
        """Release the display and drop every member."""
        self._display.remove()
        self._markers.clear()

    def _calculate_bounds(self) -> None:
        bounds = LatLngBounds.from_corners(self._center, self._center)
        self._bounds = self._index.get_extended_bounds(bounds)

    def __repr__(self) -> str:
        return f"Cluster(center={self._center!r}, size={len(self._markers)})"
