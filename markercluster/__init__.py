"""Marker clustering for map viewports."""

from .clustering import (
    Cluster,
    ClustererOptions,
    ClusterIcon,
    ClusterStyle,
    ClusterSums,
    InvalidPointError,
    SpatialClusterIndex,
    default_calculator,
)
from .geo import LatLng, LatLngBounds, PixelPoint, distance_between_points
from .marker import Marker

__all__ = [
    "Cluster",
    "ClustererOptions",
    "ClusterIcon",
    "ClusterStyle",
    "ClusterSums",
    "InvalidPointError",
    "SpatialClusterIndex",
    "default_calculator",
    "LatLng",
    "LatLngBounds",
    "PixelPoint",
    "distance_between_points",
    "Marker",
]
