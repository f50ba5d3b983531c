"""
markercluster.clustering: Viewport-driven marker clustering engine.

This module provides the cluster index, the cluster type, icon calculators
and the style table.
"""

from .calculator import Calculator, ClusterSums, default_calculator
from .cluster import Cluster, DisplayState, InvalidPointError, position_of
from .clusterer import SpatialClusterIndex
from .icon import ClusterIcon
from .options import ClustererOptions
from .styles import (
    DEFAULT_SIZES,
    ClusterStyle,
    build_default_styles,
    resolve_style,
)

__all__ = [
    # Engine
    "SpatialClusterIndex",
    "Cluster",
    "DisplayState",
    "InvalidPointError",
    "position_of",

    # Configuration
    "ClustererOptions",

    # Display
    "Calculator",
    "ClusterSums",
    "default_calculator",
    "ClusterIcon",
    "ClusterStyle",
    "DEFAULT_SIZES",
    "build_default_styles",
    "resolve_style",
]
