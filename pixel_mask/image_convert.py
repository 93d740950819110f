# pixel_mask/image_convert.py
from __future__ import annotations

"""
In-memory bridge between Pillow images and views / blocks. No file access.

Exports:
- view_from_image(image)                    -> ArrayView
- image_from_array(values, kind)            -> PIL.Image
- image_from_block(block, replacement=None) -> PIL.Image
- alpha_from_block(block)                   -> PIL.Image (mode "L", 255 valid / 0 invalid)
"""

from typing import Optional

import numpy as np
from PIL import Image

from .constants import KIND_TO_PIL_MODE, PIL_FALLBACK_MODE, PIL_MODE_TO_KIND
from .core_types import PixelArray
from .errors import ViewShapeMismatch
from .image_view import ArrayView
from .masked_block import MaskedBlock
from .pixel_types import PixelKind, pixel_kind
from .utils import warn
from .views import PixelLike, coerce_pixel


def view_from_image(image: Image.Image) -> ArrayView:
    """Wrap a Pillow image. Modes without a matching kind are converted to RGBA."""
    im = image
    if im.mode not in PIL_MODE_TO_KIND:
        warn(f"image mode {im.mode} has no pixel kind; converting to {PIL_FALLBACK_MODE}")
        im = im.convert(PIL_FALLBACK_MODE)
    kind = pixel_kind(PIL_MODE_TO_KIND[im.mode])
    arr = np.array(im, dtype=np.uint8)
    if arr.ndim == 2:
        arr = arr[..., None]
    return ArrayView(arr, kind)


def image_from_array(values: PixelArray, kind: PixelKind) -> Image.Image:
    """uint8 (rows, cols, channels) -> Pillow image in the mode matching kind."""
    arr = np.asarray(values)
    if arr.dtype != np.uint8:
        raise TypeError(f"expected uint8 channels, got {arr.dtype}")
    if arr.ndim == 2:
        arr = arr[..., None]
    if arr.ndim != 3 or arr.shape[2] != kind.channel_count:
        raise ViewShapeMismatch(
            f"{kind.name} image needs (rows, cols, {kind.channel_count}), got {arr.shape}"
        )
    mode = KIND_TO_PIL_MODE.get(kind.name)
    if mode is None:
        raise ValueError(f"no Pillow mode for pixel kind {kind.name!r}")
    rows, cols = int(arr.shape[0]), int(arr.shape[1])
    return Image.frombytes(mode, (cols, rows), np.ascontiguousarray(arr).tobytes())


def image_from_block(block: MaskedBlock, replacement: Optional[PixelLike] = None) -> Image.Image:
    if replacement is None:
        fill = np.zeros(block.channel_count, dtype=block.dtype)
    else:
        fill = np.asarray(
            coerce_pixel(replacement, block.kind, "replacement", dtype=block.dtype).values
        )
    values = np.where(block.valid[..., None], block.values, fill).astype(block.dtype)
    return image_from_array(values, block.kind)


def alpha_from_block(block: MaskedBlock) -> Image.Image:
    alpha = np.where(block.valid, 255, 0).astype(np.uint8)
    return Image.frombytes("L", (block.cols, block.rows), alpha.tobytes())


__all__ = [
    "view_from_image",
    "image_from_array",
    "image_from_block",
    "alpha_from_block",
]
