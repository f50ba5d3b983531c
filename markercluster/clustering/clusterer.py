"""
Viewport-driven marker clustering.

The index owns the marker pool and the active clusters. A clustering pass:
1. Pads the current viewport by the grid size in pixel space
2. Assigns every unassigned marker inside it to the nearest cluster whose
   bounds admit it, or seeds a new cluster
3. Refreshes each cluster's display state (aggregate icon vs. individual markers)

Assignment is greedy and order-dependent. Nearest-center picks the candidate,
bounds containment decides admission; there is no backtracking.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence

import numpy as np

from ..geo import LatLngBounds, PixelPoint, distance_between_points, distances_to_point
from ..interfaces import ClusterDisplay, MapView, MarkerLike, Projection
from .calculator import Calculator, ClusterSums, default_calculator
from .cluster import Cluster, DisplayState, InvalidPointError, position_of
from .icon import ClusterIcon
from .options import ClustererOptions
from .styles import ClusterStyle

logger = logging.getLogger(__name__)

# Farther than any two points on Earth (km)
_MAX_DISTANCE_KM = 40000.0

IconFactory = Callable[[Cluster], ClusterDisplay]
MaxZoomCallback = Callable[[Cluster], None]


class SpatialClusterIndex:
    """
    Clusters a pool of markers for the current viewport.

    Collaborators are injected: ``map_view`` supplies bounds and zoom,
    ``projection`` converts to and from pixels, ``icon_factory`` builds the
    aggregate icon of each cluster (defaults to a headless ClusterIcon).

    The index stays inert until :meth:`on_add` signals that it is attached to
    a rendering surface.
    """

    def __init__(
        self,
        map_view: MapView,
        projection: Projection,
        markers: Optional[Iterable[MarkerLike]] = None,
        options: Optional[ClustererOptions] = None,
        icon_factory: Optional[IconFactory] = None,
        max_zoom_reached_callback: Optional[MaxZoomCallback] = None,
    ):
        if options is None:
            options = ClustererOptions()

        self._map_view = map_view
        self._projection = projection
        self._markers: List[MarkerLike] = []
        self._clusters: List[Cluster] = []
        self._assigned: Dict[int, bool] = {}
        self._drag_listeners: Dict[int, Callable[[], None]] = {}
        self._ready = False

        self._grid_size = options.grid_size
        self._minimum_cluster_size = options.minimum_cluster_size
        self._max_zoom = options.max_zoom
        self._average_center = options.average_center
        self._styles: List[ClusterStyle] = options.resolved_styles()
        self._calculator: Calculator = default_calculator
        self._icon_factory = icon_factory
        self.max_zoom_reached_callback = max_zoom_reached_callback

        self._warn_if_degenerate_grid()

        if markers:
            self.add_points(markers, no_redraw=True)

    # ------------------------------------------------------------------
    # Collaborators and configuration
    # ------------------------------------------------------------------

    @property
    def map_view(self) -> MapView:
        return self._map_view

    @property
    def projection(self) -> Projection:
        return self._projection

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def grid_size(self) -> int:
        return self._grid_size

    @grid_size.setter
    def grid_size(self, size: int) -> None:
        self._grid_size = size
        self._warn_if_degenerate_grid()

    @property
    def minimum_cluster_size(self) -> int:
        return self._minimum_cluster_size

    @minimum_cluster_size.setter
    def minimum_cluster_size(self, size: int) -> None:
        self._minimum_cluster_size = size

    @property
    def max_zoom(self) -> Optional[float]:
        return self._max_zoom

    @max_zoom.setter
    def max_zoom(self, zoom: Optional[float]) -> None:
        self._max_zoom = zoom

    @property
    def average_center(self) -> bool:
        return self._average_center

    @property
    def styles(self) -> List[ClusterStyle]:
        return self._styles

    def set_styles(self, styles: Sequence[ClusterStyle]) -> None:
        self._styles = list(styles)

    @property
    def markers(self) -> List[MarkerLike]:
        return self._markers

    @property
    def clusters(self) -> List[Cluster]:
        return self._clusters

    @property
    def total_markers(self) -> int:
        return len(self._markers)

    @property
    def total_clusters(self) -> int:
        return len(self._clusters)

    def set_calculator(self, calculator: Calculator) -> None:
        """
        Install the function computing an icon's label and style bucket.

        The calculator receives the member list and the number of styles and
        returns a ClusterSums (or a mapping with ``text`` and ``index``).
        """
        self._calculator = calculator

    def get_calculator(self) -> Calculator:
        return self._calculator

    def compute_sums(self, markers: Sequence[MarkerLike], num_styles: int) -> ClusterSums:
        return ClusterSums.coerce(self._calculator(markers, num_styles))

    def create_display(self, cluster: Cluster) -> ClusterDisplay:
        if self._icon_factory is not None:
            return self._icon_factory(cluster)
        return ClusterIcon(cluster, self._styles, self._grid_size)

    def is_assigned(self, marker: MarkerLike) -> bool:
        return self._assigned.get(id(marker), False)

    # ------------------------------------------------------------------
    # Readiness
    # ------------------------------------------------------------------

    def on_add(self) -> None:
        """Signal that the index is attached to its rendering surface."""
        self.set_ready(True)

    def set_ready(self, ready: bool) -> None:
        # Only the first transition counts.
        if not self._ready:
            self._ready = ready
            self.run_clustering_pass()

    # ------------------------------------------------------------------
    # Marker pool
    # ------------------------------------------------------------------

    def add_point(self, marker: MarkerLike, no_redraw: bool = False) -> None:
        self._push_marker(marker)
        if not no_redraw:
            self.redraw()

    def add_points(self, markers: Iterable[MarkerLike], no_redraw: bool = False) -> None:
        for marker in markers:
            self._push_marker(marker)
        if not no_redraw:
            self.redraw()

    def _push_marker(self, marker: MarkerLike) -> None:
        self._assigned[id(marker)] = False
        if getattr(marker, "draggable", False) and id(marker) not in self._drag_listeners:
            def on_drag_end(marker: MarkerLike = marker) -> None:
                self._assigned[id(marker)] = False
                self.repaint()

            marker.add_drag_end_listener(on_drag_end)
            self._drag_listeners[id(marker)] = on_drag_end
        self._markers.append(marker)

    def remove_point(self, marker: MarkerLike, no_redraw: bool = False) -> bool:
        """
        Remove a marker from the pool.

        Returns:
            True if the marker was in the pool, False otherwise
        """
        index = self._index_of(marker)
        if index == -1:
            return False

        self._release_marker(marker)
        del self._markers[index]

        if not no_redraw:
            self.reset_viewport()
            self.redraw()
        return True

    def remove_points(self, markers: Iterable[MarkerLike], no_redraw: bool = False) -> bool:
        """
        Remove several markers from the pool.

        Positions are collected up front and deleted from the highest down,
        so compaction never shifts an entry that is still to be visited.
        ``markers`` may be the index's own ``markers`` list.

        Returns:
            True if at least one marker was removed
        """
        targets = {id(marker) for marker in list(markers)}
        positions = [i for i, marker in enumerate(self._markers) if id(marker) in targets]

        for i in reversed(positions):
            self._release_marker(self._markers[i])
            del self._markers[i]

        removed = bool(positions)
        if removed and not no_redraw:
            self.reset_viewport()
            self.redraw()
        return removed

    def clear_markers(self) -> None:
        """Destroy every cluster, hide every marker and empty the pool."""
        self.reset_viewport(hide=True)
        for marker in list(self._markers):
            self._release_marker(marker)
        self._markers = []

    def _index_of(self, marker: MarkerLike) -> int:
        for i, m in enumerate(self._markers):
            if m is marker:
                return i
        return -1

    def _release_marker(self, marker: MarkerLike) -> None:
        marker.set_visible(False)
        listener = self._drag_listeners.pop(id(marker), None)
        if listener is not None:
            marker.remove_drag_end_listener(listener)
        self._assigned.pop(id(marker), None)

    # ------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------

    def get_extended_bounds(self, bounds: LatLngBounds) -> LatLngBounds:
        """
        Grow ``bounds`` by the grid size in pixel space.

        The north-east corner moves up and right, the south-west corner down
        and left; both are converted back to lat/lng and the box is extended
        to contain them. A non-positive grid size leaves the box unchanged.
        """
        pad = max(self._grid_size, 0)

        ne_px = self._projection.to_pixel(bounds.north_east)
        sw_px = self._projection.to_pixel(bounds.south_west)

        ne = self._projection.to_latlng(PixelPoint(ne_px.x + pad, ne_px.y - pad))
        sw = self._projection.to_latlng(PixelPoint(sw_px.x - pad, sw_px.y + pad))

        bounds.extend(ne)
        bounds.extend(sw)
        return bounds

    def is_marker_in_bounds(self, marker: MarkerLike, bounds: LatLngBounds) -> bool:
        return bounds.contains(position_of(marker))

    def fit_map_to_markers(self) -> None:
        bounds = LatLngBounds.from_points(
            m.position for m in self._markers if m.position is not None
        )
        self._map_view.fit_to_bounds(bounds)

    def zoom_to_cluster(self, cluster: Cluster) -> None:
        self._map_view.fit_to_bounds(cluster.compute_bounds())

    def reset_viewport(self, hide: bool = False) -> None:
        """Destroy every cluster and mark every marker unassigned."""
        for cluster in self._clusters:
            cluster.destroy()

        for marker in self._markers:
            self._assigned[id(marker)] = False
            if hide:
                marker.set_visible(False)

        self._clusters = []

    def repaint(self) -> None:
        """
        Rebuild every cluster.

        The new clusters are built before the old ones are destroyed so a
        renderer never shows an empty map in between.
        """
        old_clusters = self._clusters
        self._clusters = []
        self.reset_viewport()
        self.redraw()

        for cluster in old_clusters:
            cluster.destroy()

    def redraw(self) -> None:
        self.run_clustering_pass()

    # ------------------------------------------------------------------
    # Clustering
    # ------------------------------------------------------------------

    @staticmethod
    def distance_between_points(p1, p2) -> float:
        """Haversine distance in km; 0 if either point is missing."""
        return distance_between_points(p1, p2)

    def _closest_cluster(self, marker: MarkerLike) -> Optional[Cluster]:
        candidates = [c for c in self._clusters if c.center is not None]
        if not candidates:
            return None

        lats = np.array([c.center.lat for c in candidates], dtype=float)
        lngs = np.array([c.center.lng for c in candidates], dtype=float)
        distances = distances_to_point(position_of(marker), lats, lngs)

        best = int(np.argmin(distances))
        if distances[best] < _MAX_DISTANCE_KM:
            return candidates[best]
        return None

    def _add_to_closest_cluster(self, marker: MarkerLike) -> None:
        cluster = self._closest_cluster(marker)

        if cluster is not None and cluster.contains_position(marker):
            cluster.add_member(marker)
        else:
            cluster = Cluster(self)
            cluster.add_member(marker)
            self._clusters.append(cluster)

        self._assigned[id(marker)] = True

    def run_clustering_pass(self) -> None:
        """
        Cluster every unassigned marker inside the padded viewport.

        No-op until the index is ready. Markers without a position are logged
        and skipped; the rest of the pass continues.
        """
        if not self._ready:
            return

        view = self._map_view.current_bounds()
        bounds = self.get_extended_bounds(
            LatLngBounds.from_corners(view.south_west, view.north_east)
        )

        placed = 0
        skipped = 0
        for marker in self._markers:
            if self._assigned.get(id(marker), False):
                continue
            try:
                if self.is_marker_in_bounds(marker, bounds):
                    self._add_to_closest_cluster(marker)
                    placed += 1
            except InvalidPointError as e:
                skipped += 1
                logger.warning(f"Skipping marker during clustering pass: {e}")

        max_zoom_reported = False
        for cluster in self._clusters:
            state = cluster.refresh_display()
            if state is DisplayState.MAX_ZOOM and not max_zoom_reported:
                max_zoom_reported = True
                if self.max_zoom_reached_callback is not None:
                    self.max_zoom_reached_callback(cluster)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Clustering pass: placed={placed} skipped={skipped} "
                f"clusters={len(self._clusters)} markers={len(self._markers)}"
            )

    def _warn_if_degenerate_grid(self) -> None:
        if self._grid_size <= 0:
            logger.warning(
                f"Grid size {self._grid_size} is not positive; bounds will not be padded"
            )
