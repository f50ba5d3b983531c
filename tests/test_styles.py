"""
Unit Tests for Calculators and Style Tables

Tests the default calculator buckets, style clamping, default style
generation and the headless cluster icon.
"""

import pytest

from markercluster import LatLng, Marker
from markercluster.clustering import (
    ClusterIcon,
    ClusterStyle,
    ClusterSums,
    build_default_styles,
    default_calculator,
    resolve_style,
)


def _markers(n):
    return [Marker.at(0.0, 0.0) for _ in range(n)]


# ==============================================================================
# Calculator Tests
# ==============================================================================

class TestDefaultCalculator:
    """Test bucket = number of decimal digits of the member count."""

    @pytest.mark.parametrize(
        "count,expected_index",
        [(0, 0), (1, 1), (9, 1), (10, 2), (99, 2), (100, 3), (12345, 5)],
    )
    def test_bucket_by_digits(self, count, expected_index):
        sums = default_calculator(_markers(count), num_styles=5)
        assert sums.index == expected_index
        assert sums.text == str(count)

    def test_bucket_capped_at_num_styles(self):
        assert default_calculator(_markers(1000), num_styles=2).index == 2
        assert default_calculator(_markers(3), num_styles=0).index == 0

    def test_coerce_mapping(self):
        assert ClusterSums.coerce({"text": 7, "index": "2"}) == ClusterSums(text="7", index=2)

    def test_coerce_passthrough(self):
        sums = ClusterSums(text="x", index=1)
        assert ClusterSums.coerce(sums) is sums


# ==============================================================================
# Style Table Tests
# ==============================================================================

class TestStyles:
    """Test default styles and bucket lookup."""

    def test_default_styles(self):
        styles = build_default_styles()
        assert [s.url for s in styles] == [f"../images/m{i}.png" for i in range(1, 6)]
        assert [(s.width, s.height) for s in styles] == [
            (53, 53), (56, 56), (66, 66), (78, 78), (90, 90),
        ]

    def test_custom_image_path(self):
        styles = build_default_styles("/static/c", "svg", sizes=(10,))
        assert styles == [ClusterStyle(url="/static/c1.svg", height=10, width=10)]

    @pytest.mark.parametrize(
        "index,expected",
        [(-3, "m1"), (0, "m1"), (1, "m1"), (2, "m2"), (5, "m5"), (6, "m5"), (100, "m5")],
    )
    def test_resolve_style_clamps(self, index, expected):
        style = resolve_style(build_default_styles(), index)
        assert style.url == f"../images/{expected}.png"

    def test_resolve_style_empty_table(self):
        assert resolve_style([], 3) is None

    def test_style_from_camel_case_mapping(self):
        style = ClusterStyle.from_dict(
            {
                "url": "a.png",
                "height": 40,
                "width": 42,
                "textColor": "white",
                "textSize": 12,
                "iconAnchor": [20, 21],
                "anchor": [8, 0],
            }
        )
        assert style.text_color == "white"
        assert style.text_size == 12
        assert style.icon_anchor == (20, 21)
        assert style.anchor == (8, 0)


# ==============================================================================
# Cluster Icon Tests
# ==============================================================================

class TestClusterIcon:
    """Test the headless display collaborator."""

    def test_lifecycle(self):
        icon = ClusterIcon(cluster=None, styles=build_default_styles(), padding=60)
        assert icon.padding == 60
        assert not icon.visible

        icon.set_center(LatLng(1.0, 2.0))
        icon.set_display(ClusterSums(text="12", index=2))
        icon.show()

        data = icon.to_dict()
        assert data["center"] == {"lat": 1.0, "lng": 2.0}
        assert data["text"] == "12"
        assert data["index"] == 2
        assert data["style"]["url"] == "../images/m2.png"
        assert data["visible"] is True

        icon.remove()
        assert icon.removed
        assert not icon.visible

    def test_empty_icon_to_dict(self):
        data = ClusterIcon(cluster=None, styles=[]).to_dict()
        assert data == {"center": None, "text": None, "index": None, "style": None, "visible": False}
