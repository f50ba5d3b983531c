"""pandas helpers for moving markers and clusters in and out of DataFrames."""

from __future__ import annotations

from typing import Iterable, List

import pandas as pd

from ..clustering.cluster import Cluster
from ..geo import LatLng
from ..marker import Marker


def markers_from_dataframe(df: pd.DataFrame) -> List[Marker]:
    """
    Convert a DataFrame with ``lat``/``lng`` columns into markers.

    Optional columns: ``id`` (stringified) and ``draggable``. Rows with a
    missing coordinate become markers without a position; the clustering pass
    skips them.

    Raises:
        KeyError: If ``lat`` or ``lng`` is missing
    """
    missing = [column for column in ("lat", "lng") if column not in df.columns]
    if missing:
        raise KeyError(f"DataFrame is missing required columns: {', '.join(missing)}")

    markers: List[Marker] = []
    for row in df.itertuples(index=False):
        lat = getattr(row, "lat")
        lng = getattr(row, "lng")
        position = None if pd.isna(lat) or pd.isna(lng) else LatLng(float(lat), float(lng))

        marker_id = getattr(row, "id", None)
        draggable = getattr(row, "draggable", False)
        markers.append(
            Marker(
                position=position,
                id=None if marker_id is None or pd.isna(marker_id) else str(marker_id),
                draggable=bool(draggable) if not pd.isna(draggable) else False,
            )
        )
    return markers


def clusters_to_dataframe(clusters: Iterable[Cluster]) -> pd.DataFrame:
    """One row per cluster with its center, size, member ids and member bounds."""
    columns = [
        "cluster_id", "center_lat", "center_lng", "size",
        "marker_ids", "south", "west", "north", "east",
    ]
    rows = []
    for cluster_id, cluster in enumerate(clusters):
        center = cluster.center
        bounds = cluster.compute_bounds()
        rows.append(
            dict(
                cluster_id=cluster_id,
                center_lat=None if center is None else center.lat,
                center_lng=None if center is None else center.lng,
                size=cluster.member_count(),
                marker_ids=[getattr(m, "id", None) for m in cluster.members],
                south=bounds.south,
                west=bounds.west,
                north=bounds.north,
                east=bounds.east,
            )
        )
    return pd.DataFrame(rows, columns=columns)
