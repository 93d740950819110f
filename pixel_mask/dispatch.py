# pixel_mask/dispatch.py
from __future__ import annotations

"""
Elementwise dispatch over masked pixels.

Exports:
  apply_unary(func, a)                  -> MaskedPixel
  apply_binary(func, a, b)              -> MaskedPixel
  apply_unary_in_place(func, a)         -> a
  apply_binary_in_place(func, a, b)     -> a
  apply_unary_block(func, block)        -> MaskedBlock
  apply_binary_block(func, a, b)        -> MaskedBlock

Rules:
  - Every operand valid: func runs once per base channel and the result
    is valid.
  - Any operand invalid: the result is the default pixel (zero, invalid);
    base values are not carried over. In-place forms reset the target.
  - Binary forms on differing channel counts raise ChannelCountMismatch
    before touching anything.

Per-pixel funcs take and return channel scalars. In-place funcs return the
new channel value, which is written back into the target. Block funcs take
whole channel arrays, so numpy-aware callables (lambda x, y: x + y,
np.maximum, ...) work for both.
"""

from typing import Any, Callable, List

import numpy as np

from .errors import ChannelCountMismatch, ViewShapeMismatch
from .masked_block import MaskedBlock
from .masked_pixel import MaskedPixel
from .pixel_types import Pixel, PixelKind

UnaryFunc = Callable[[Any], Any]
BinaryFunc = Callable[[Any, Any], Any]


def _check_channel_counts(left: int, right: int) -> None:
    if left != right:
        raise ChannelCountMismatch(left, right)


def _build_valid(kind: PixelKind, results: List[Any]) -> MaskedPixel:
    # numpy picks the result dtype from what func produced
    return MaskedPixel(Pixel(kind, np.asarray(results)))


# Per-pixel


def apply_unary(func: UnaryFunc, a: MaskedPixel) -> MaskedPixel:
    if not a.valid():
        return MaskedPixel.default(a.kind, a.dtype)
    return _build_valid(a.kind, [func(a[i]) for i in range(a.channel_count)])


def apply_binary(func: BinaryFunc, a: MaskedPixel, b: MaskedPixel) -> MaskedPixel:
    _check_channel_counts(a.channel_count, b.channel_count)
    if not (a.valid() and b.valid()):
        return MaskedPixel.default(a.kind, a.dtype)
    return _build_valid(a.kind, [func(a[i], b[i]) for i in range(a.channel_count)])


def apply_unary_in_place(func: UnaryFunc, a: MaskedPixel) -> MaskedPixel:
    if not a.valid():
        a.reset()
        return a
    updated = [func(a[i]) for i in range(a.channel_count)]
    for i, value in enumerate(updated):
        a[i] = value
    return a


def apply_binary_in_place(func: BinaryFunc, a: MaskedPixel, b: MaskedPixel) -> MaskedPixel:
    _check_channel_counts(a.channel_count, b.channel_count)
    if not (a.valid() and b.valid()):
        a.reset()
        return a
    # compute every channel before writing so a raising func leaves `a` intact
    updated = [func(a[i], b[i]) for i in range(a.channel_count)]
    for i, value in enumerate(updated):
        a[i] = value
    return a


# Block-level


def _block_result(raw: Any, like: MaskedBlock, valid: np.ndarray) -> MaskedBlock:
    values = np.asarray(raw)
    expected = like.values.shape
    if values.shape != expected:
        raise ViewShapeMismatch(
            f"block func returned shape {values.shape}, expected {expected}"
        )
    return MaskedBlock(values, valid, like.kind)


def apply_unary_block(func: UnaryFunc, block: MaskedBlock) -> MaskedBlock:
    # invalid positions hold zeros; silence warnings func raises on them
    with np.errstate(all="ignore"):
        raw = func(block.values)
    return _block_result(raw, block, block.valid)


def apply_binary_block(func: BinaryFunc, a: MaskedBlock, b: MaskedBlock) -> MaskedBlock:
    _check_channel_counts(a.channel_count, b.channel_count)
    if a.shape != b.shape:
        raise ViewShapeMismatch(f"block shape mismatch: {a.shape} vs {b.shape}")
    valid = a.valid & b.valid
    with np.errstate(all="ignore"):
        raw = func(a.values, b.values)
    return _block_result(raw, a, valid)


__all__ = [
    "UnaryFunc",
    "BinaryFunc",
    "apply_unary",
    "apply_binary",
    "apply_unary_in_place",
    "apply_binary_in_place",
    "apply_unary_block",
    "apply_binary_block",
]
