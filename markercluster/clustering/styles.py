"""
Cluster icon style table.

A style table is an ordered list of :class:`ClusterStyle`. The calculator picks
a 1-based bucket; :func:`resolve_style` maps it onto the table.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

DEFAULT_IMAGE_PATH = "../images/m"
DEFAULT_IMAGE_EXTENSION = "png"

# Icon edge lengths (px) of the bundled m1..m5 images
DEFAULT_SIZES: Tuple[int, ...] = (53, 56, 66, 78, 90)


@dataclass
class ClusterStyle:
    """
    Visual descriptor for one cluster icon bucket.

    Attributes:
        url: Icon image url
        height: Icon height in pixels
        width: Icon width in pixels
        anchor: Label text anchor (y, x) inside the icon
        text_color: Label color
        text_size: Label font size
        background_position: CSS background position ("x y")
        icon_anchor: Icon anchor (x, y) relative to the cluster center
    """

    url: str
    height: int
    width: int
    anchor: Optional[Tuple[int, int]] = None
    text_color: Optional[str] = None
    text_size: Optional[int] = None
    background_position: Optional[str] = None
    icon_anchor: Optional[Tuple[int, int]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClusterStyle":
        """Build a style from a config mapping (snake_case or camelCase keys)."""
        aliases = {
            "textColor": "text_color",
            "textSize": "text_size",
            "backgroundPosition": "background_position",
            "iconAnchor": "icon_anchor",
        }
        kwargs = {aliases.get(key, key): value for key, value in data.items()}
        for key in ("anchor", "icon_anchor"):
            if kwargs.get(key) is not None:
                kwargs[key] = tuple(kwargs[key])
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_default_styles(
    image_path: str = DEFAULT_IMAGE_PATH,
    image_extension: str = DEFAULT_IMAGE_EXTENSION,
    sizes: Sequence[int] = DEFAULT_SIZES,
) -> List[ClusterStyle]:
    """One style per size: ``{image_path}{n}.{image_extension}``, square icons."""
    return [
        ClusterStyle(
            url=f"{image_path}{i + 1}.{image_extension}",
            height=size,
            width=size,
        )
        for i, size in enumerate(sizes)
    ]


def resolve_style(styles: Sequence[ClusterStyle], index: int) -> Optional[ClusterStyle]:
    """
    Look up the style for a calculator bucket.

    Buckets are 1-based; the index is shifted down by one and clamped to
    ``[0, len(styles) - 1]``. Returns None for an empty table.
    """
    if not styles:
        return None
    position = max(0, index - 1)
    position = min(len(styles) - 1, position)
    return styles[position]
