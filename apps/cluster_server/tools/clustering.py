"""Run the clustering engine for a single request."""

from __future__ import annotations

import logging
from typing import List, Optional

from markercluster import Marker, SpatialClusterIndex
from markercluster.clustering import ClusterIcon, ClustererOptions
from markercluster.geo import LatLng as GeoLatLng
from markercluster.geo import LatLngBounds

from ..schemas.models import (
    BoundsOut,
    ClusterMarkersRequest,
    ClusterMarkersResponse,
    ClusterOut,
    LatLng,
)
from .viewport import StaticMapView, WebMercatorProjection

logger = logging.getLogger(__name__)


def build_markers(request: ClusterMarkersRequest) -> List[Marker]:
    markers = []
    for item in request.markers:
        position = None
        if item.lat is not None and item.lng is not None:
            position = GeoLatLng(item.lat, item.lng)
        markers.append(Marker(position=position, id=item.id, draggable=item.draggable))
    return markers


def cluster_markers(
    request: ClusterMarkersRequest,
    options: ClustererOptions,
) -> ClusterMarkersResponse:
    """
    Cluster the request's markers for its viewport.

    Args:
        request: Markers and viewport
        options: Clusterer options (profile with request overrides applied)

    Returns:
        ClusterMarkersResponse with one entry per cluster and the ids of
        markers drawn individually
    """
    viewport = request.viewport
    bounds = LatLngBounds.from_corners(
        GeoLatLng(viewport.south_west.lat, viewport.south_west.lng),
        GeoLatLng(viewport.north_east.lat, viewport.north_east.lng),
    )
    map_view = StaticMapView(bounds, viewport.zoom)
    projection = WebMercatorProjection(viewport.zoom)

    reached: List[bool] = []
    markers = build_markers(request)
    index = SpatialClusterIndex(
        map_view,
        projection,
        markers=markers,
        options=options,
        max_zoom_reached_callback=lambda cluster: reached.append(True),
    )
    index.on_add()

    clusters: List[ClusterOut] = []
    for cluster in index.clusters:
        icon: Optional[ClusterIcon] = cluster.display if isinstance(cluster.display, ClusterIcon) else None
        member_bounds = cluster.compute_bounds()
        clusters.append(
            ClusterOut(
                center=LatLng(lat=cluster.center.lat, lng=cluster.center.lng),
                size=cluster.member_count(),
                marker_ids=[m.id for m in cluster.members],
                aggregate=bool(icon and icon.visible),
                text=icon.sums.text if icon and icon.sums else None,
                style_index=icon.sums.index if icon and icon.sums else None,
                style=icon.style.to_dict() if icon and icon.style else None,
                bounds=BoundsOut(**member_bounds.to_dict()),
            )
        )

    logger.info(
        f"Clustered {index.total_markers} markers into {index.total_clusters} clusters "
        f"at zoom {viewport.zoom}"
    )

    return ClusterMarkersResponse(
        clusters=clusters,
        visible_marker_ids=[m.id for m in markers if m.visible],
        total_markers=index.total_markers,
        total_clusters=index.total_clusters,
        max_zoom_reached=bool(reached),
    )
