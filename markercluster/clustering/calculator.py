"""Calculators map a cluster's members to the label and style bucket of its icon."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence, Union

from ..interfaces import MarkerLike


@dataclass(frozen=True)
class ClusterSums:
    """Display state of an aggregate icon."""

    text: str
    """Label drawn on the icon."""

    index: int
    """1-based style bucket (clamped by the display layer)."""

    @classmethod
    def coerce(cls, value: Union["ClusterSums", Mapping[str, Any]]) -> "ClusterSums":
        """Accept calculator output as ClusterSums or a ``{"text", "index"}`` mapping."""
        if isinstance(value, ClusterSums):
            return value
        return cls(text=str(value["text"]), index=int(value["index"]))


Calculator = Callable[[Sequence[MarkerLike], int], Union[ClusterSums, Mapping[str, Any]]]


def default_calculator(markers: Sequence[MarkerLike], num_styles: int) -> ClusterSums:
    """
    Bucket by order of magnitude of the member count.

    The bucket is the number of decimal digits in the count (1-9 -> 1,
    10-99 -> 2, ...), capped at ``num_styles``. The label is the count.
    """
    count = len(markers)
    index = 0
    dv = count
    while dv != 0:
        dv //= 10
        index += 1

    index = min(index, num_styles)
    return ClusterSums(text=str(count), index=index)
