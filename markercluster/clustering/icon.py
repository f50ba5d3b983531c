"""Headless cluster icon: records what a renderer would draw."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence

from ..geo import LatLng
from .calculator import ClusterSums
from .styles import ClusterStyle, resolve_style

if TYPE_CHECKING:
    from .cluster import Cluster


class ClusterIcon:
    """
    Default :class:`~markercluster.interfaces.ClusterDisplay`.

    Keeps the center, sums and resolved style of the aggregate icon so a
    renderer (or a JSON response) can pick them up. Drawing is left to the
    caller.
    """

    def __init__(self, cluster: "Cluster", styles: Sequence[ClusterStyle], padding: int = 0):
        self.cluster = cluster
        self.styles = styles
        self.padding = padding or 0
        self.center: Optional[LatLng] = None
        self.sums: Optional[ClusterSums] = None
        self.style: Optional[ClusterStyle] = None
        self.visible = False
        self.removed = False

    def set_center(self, center: LatLng) -> None:
        self.center = center

    def set_display(self, sums: ClusterSums) -> None:
        self.sums = sums
        self.style = resolve_style(self.styles, sums.index)

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def remove(self) -> None:
        self.hide()
        self.removed = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "center": None if self.center is None else {"lat": self.center.lat, "lng": self.center.lng},
            "text": None if self.sums is None else self.sums.text,
            "index": None if self.sums is None else self.sums.index,
            "style": None if self.style is None else self.style.to_dict(),
            "visible": self.visible,
        }
