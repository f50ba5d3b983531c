"""Clusterer configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .styles import (
    DEFAULT_IMAGE_EXTENSION,
    DEFAULT_IMAGE_PATH,
    ClusterStyle,
    build_default_styles,
)


@dataclass
class ClustererOptions:
    """Configuration for a :class:`~markercluster.clustering.SpatialClusterIndex`."""

    grid_size: int = 60
    """Padding (pixels) applied to viewport and cluster bounds."""

    minimum_cluster_size: int = 2
    """Member count at which members are hidden behind an aggregate icon."""

    max_zoom: Optional[float] = 22
    """Zoom level above which clustering is disabled. None = no limit."""

    average_center: bool = False
    """Whether a cluster's center is the running mean of its members."""

    image_path: str = DEFAULT_IMAGE_PATH
    """Prefix of the default icon images."""

    image_extension: str = DEFAULT_IMAGE_EXTENSION
    """Extension of the default icon images."""

    styles: List[ClusterStyle] = field(default_factory=list)
    """Style table. Empty = default table built from image_path."""

    def resolved_styles(self) -> List[ClusterStyle]:
        """Configured styles, or the default table when none are configured."""
        if self.styles:
            return list(self.styles)
        return build_default_styles(self.image_path, self.image_extension)

    def with_overrides(self, **overrides: Any) -> "ClustererOptions":
        """Return a copy with every non-None override applied."""
        data = dict(self.__dict__)
        data["styles"] = list(self.styles)
        for key, value in overrides.items():
            if value is not None:
                data[key] = value
        return ClustererOptions(**data)

    @classmethod
    def from_profile(cls, profile: Mapping[str, Any]) -> "ClustererOptions":
        """
        Build options from a loaded YAML profile.

        Reads the ``clusterer`` section; unknown keys are ignored and missing
        keys keep their defaults.

        Args:
            profile: Profile dictionary as returned by ConfigLoader

        Returns:
            ClustererOptions
        """
        section: Dict[str, Any] = dict(profile.get("clusterer") or {})
        defaults = cls()

        styles = [ClusterStyle.from_dict(item) for item in section.get("styles") or []]
        max_zoom = section.get("max_zoom", defaults.max_zoom)

        return cls(
            grid_size=section.get("grid_size", defaults.grid_size),
            minimum_cluster_size=section.get(
                "minimum_cluster_size", defaults.minimum_cluster_size
            ),
            max_zoom=max_zoom,
            average_center=bool(section.get("average_center", defaults.average_center)),
            image_path=section.get("image_path", defaults.image_path),
            image_extension=section.get("image_extension", defaults.image_extension),
            styles=styles,
        )
