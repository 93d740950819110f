# pixel_mask/reduce.py
from __future__ import annotations

"""
Reductions over masked pixels and blocks.

Note: mean_channel_value() returns 0.0 for an invalid pixel, which cannot be
told apart from a real zero mean. Check valid() first when that matters.
"""

import numpy as np

from .masked_block import MaskedBlock
from .masked_pixel import MaskedPixel


def mean_channel_value(pixel: MaskedPixel) -> float:
    """Mean of the base channels; 0.0 when invalid."""
    if not pixel.valid():
        return 0.0
    n = pixel.channel_count
    accum = 0.0
    for i in range(n):
        accum += float(pixel[i])
    return accum / n


def is_transparent(pixel: MaskedPixel) -> bool:
    return not pixel.valid()


def mean_channel_values(block: MaskedBlock) -> np.ndarray:
    """Per-pixel mean of base channels, float64 (rows, cols); 0.0 where invalid."""
    means = block.values.astype(np.float64).mean(axis=2)
    return np.where(block.valid, means, 0.0)


def valid_fraction(block: MaskedBlock) -> float:
    total = block.rows * block.cols
    if total == 0:
        return 0.0
    return block.valid_count / float(total)


__all__ = [
    "mean_channel_value",
    "is_transparent",
    "mean_channel_values",
    "valid_fraction",
]
