"""Concrete marker type for callers that have no marker class of their own."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .geo import LatLng


@dataclass(eq=False)
class Marker:
    """
    A map marker.

    Equality and hashing are by identity, matching how the clustering index
    tracks markers.

    Attributes:
        position: Geographic position, or None if not yet known
        id: Optional caller-side identifier
        draggable: Whether the marker can be dragged (re-clustered on drag end)
        visible: Whether the marker is currently drawn individually
        data: Free-form payload carried along for the caller
    """

    position: Optional[LatLng]
    id: Optional[str] = None
    draggable: bool = False
    visible: bool = False
    data: Dict[str, Any] = field(default_factory=dict)
    _drag_end_listeners: List[Callable[[], None]] = field(
        default_factory=list, repr=False
    )

    @classmethod
    def at(cls, lat: float, lng: float, **kwargs: Any) -> "Marker":
        return cls(position=LatLng(lat, lng), **kwargs)

    def set_visible(self, visible: bool) -> None:
        self.visible = visible

    def add_drag_end_listener(self, listener: Callable[[], None]) -> None:
        self._drag_end_listeners.append(listener)

    def remove_drag_end_listener(self, listener: Callable[[], None]) -> None:
        if listener in self._drag_end_listeners:
            self._drag_end_listeners.remove(listener)

    def drag_to(self, position: LatLng) -> None:
        """Move the marker and notify drag-end listeners."""
        self.position = position
        for listener in list(self._drag_end_listeners):
            listener()
