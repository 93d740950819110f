# pixel_mask/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

import numpy as np
from numpy.typing import DTypeLike, NDArray

from .constants import FLOAT_CHANNEL_RANGE

# Basic aliases

ChannelScalar = Union[int, float, np.number]

PixelArray = NDArray[np.generic]  # (rows, cols, channels)
ValidMask = NDArray[np.bool_]  # (rows, cols)

# Value objects


@dataclass(frozen=True)
class BBox:
    """Axis-aligned raster region; max_x / max_y are exclusive."""

    min_x: int
    min_y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"bbox size must be non-negative, got {self.width}x{self.height}"
            )

    @property
    def max_x(self) -> int:
        return self.min_x + self.width

    @property
    def max_y(self) -> int:
        return self.min_y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def contains(self, col: int, row: int) -> bool:
        return self.min_x <= col < self.max_x and self.min_y <= row < self.max_y

    def contains_bbox(self, other: "BBox") -> bool:
        return (
            self.min_x <= other.min_x
            and self.min_y <= other.min_y
            and other.max_x <= self.max_x
            and other.max_y <= self.max_y
        )

    def split_rows(self, parts: int) -> List["BBox"]:
        """Partition into ~parts contiguous horizontal strips, top to bottom."""
        parts = max(1, int(parts))
        step = max(1, (self.height + parts - 1) // parts)
        strips: List[BBox] = []
        for start in range(0, self.height, step):
            end = min(start + step, self.height)
            strips.append(BBox(self.min_x, self.min_y + start, self.width, end - start))
        return strips


# Small helpers


def channel_range(dtype: DTypeLike) -> Tuple[ChannelScalar, ChannelScalar]:
    """
    Numeric (min, max) used to encode invalid / valid in a validity channel.

    Integer dtypes use their full range, floating dtypes the unit interval,
    bool (False, True).
    """
    dt = np.dtype(dtype)
    if dt == np.bool_:
        return (False, True)
    if np.issubdtype(dt, np.integer):
        info = np.iinfo(dt)
        return (dt.type(info.min), dt.type(info.max))
    if np.issubdtype(dt, np.floating):
        lo, hi = FLOAT_CHANNEL_RANGE
        return (dt.type(lo), dt.type(hi))
    raise TypeError(f"unsupported channel dtype: {dt}")


def as_channel_dtype(dtype: DTypeLike) -> np.dtype:
    """Normalise and validate a channel element dtype."""
    dt = np.dtype(dtype)
    channel_range(dt)
    return dt


def full_bbox(cols: int, rows: int) -> BBox:
    return BBox(0, 0, int(cols), int(rows))


__all__ = [
    # aliases / types
    "ChannelScalar",
    "PixelArray",
    "ValidMask",
    # value objects
    "BBox",
    # helpers
    "channel_range",
    "as_channel_dtype",
    "full_bbox",
]
