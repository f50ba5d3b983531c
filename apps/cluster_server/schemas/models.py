"""Pydantic models for the marker clustering server."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class LatLng(BaseModel):
    """Simple latitude/longitude container."""

    lat: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    lng: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")


class MarkerIn(BaseModel):
    """A marker submitted for clustering."""

    id: str
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)
    draggable: bool = False


class Viewport(BaseModel):
    """The visible map region and zoom level."""

    north_east: LatLng = Field(..., alias="northEast")
    south_west: LatLng = Field(..., alias="southWest")
    zoom: float = Field(..., ge=0, le=30)

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _check_corners(self) -> "Viewport":
        if self.south_west.lat > self.north_east.lat:
            raise ValueError("southWest latitude must not exceed northEast latitude")
        if self.south_west.lng > self.north_east.lng:
            raise ValueError("Viewports crossing the antimeridian are not supported")
        return self


class ClusterOptionOverrides(BaseModel):
    grid_size: Optional[int] = Field(default=None, alias="gridSize")
    minimum_cluster_size: Optional[int] = Field(default=None, ge=1, alias="minimumClusterSize")
    max_zoom: Optional[float] = Field(default=None, alias="maxZoom")
    average_center: Optional[bool] = Field(default=None, alias="averageCenter")

    model_config = {"populate_by_name": True}


class ClusterMarkersRequest(BaseModel):
    markers: List[MarkerIn]
    viewport: Viewport
    profile: Optional[str] = Field(default=None, description="Clusterer profile name")
    options: Optional[ClusterOptionOverrides] = None


class BoundsOut(BaseModel):
    south: float
    west: float
    north: float
    east: float


class ClusterOut(BaseModel):
    """One cluster as the rendering layer needs it."""

    center: LatLng
    size: int
    marker_ids: List[str] = Field(default_factory=list, alias="markerIds")
    aggregate: bool = Field(..., description="Whether the aggregate icon is shown")
    text: Optional[str] = None
    style_index: Optional[int] = Field(default=None, alias="styleIndex")
    style: Optional[Dict[str, Any]] = None
    bounds: BoundsOut

    model_config = {"populate_by_name": True}


class ClusterMarkersResponse(BaseModel):
    clusters: List[ClusterOut]
    visible_marker_ids: List[str] = Field(default_factory=list, alias="visibleMarkerIds")
    total_markers: int = Field(..., alias="totalMarkers")
    total_clusters: int = Field(..., alias="totalClusters")
    max_zoom_reached: bool = Field(False, alias="maxZoomReached")

    model_config = {"populate_by_name": True}
