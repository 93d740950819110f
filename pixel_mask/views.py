# pixel_mask/views.py
from __future__ import annotations

"""
Mask / unmask views.

Functions:
  create_mask(view, nodata=None)        -> MaskView
  apply_mask(view, replacement=None)    -> UnmaskView

MaskView turns a plain source into a masked one: a source pixel equal to the
no-data sentinel (exact channel-wise compare) becomes the default invalid
pixel, anything else a valid pixel wrapping the source value. Without a
sentinel every pixel is valid.

UnmaskView goes back: valid pixels give their base value, invalid pixels
the replacement (zero pixel by default).

Neither view buffers. prerasterize() forwards to the source, so region
preparation composes through a chain of views, and disjoint regions can be
evaluated from different threads.
"""

from typing import Optional, Sequence, Union

import numpy as np

from .core_types import BBox, ChannelScalar, PixelArray
from .errors import ViewShapeMismatch
from .image_view import ImageView
from .masked_block import MaskedBlock
from .masked_pixel import MaskedPixel
from .pixel_types import Pixel, PixelKind

PixelLike = Union[Pixel, Sequence[ChannelScalar], np.ndarray]


def coerce_pixel(
    value: PixelLike, kind: PixelKind, label: str, dtype: Optional[np.dtype] = None
) -> Pixel:
    """
    Sentinel / replacement as a Pixel of the view's kind. Without a dtype the
    value keeps its own, so a sentinel is compared exactly as given. With a
    dtype, values that do not survive the cast unchanged raise ValueError.
    """
    arr = value.values if isinstance(value, Pixel) else np.asarray(value)
    if arr.size != kind.channel_count:
        raise ViewShapeMismatch(
            f"{label} has {arr.size} channels, view has {kind.channel_count}"
        )
    if dtype is not None:
        cast = arr.astype(dtype)
        same = cast == arr
        if np.issubdtype(arr.dtype, np.floating):
            same |= np.isnan(arr) & np.isnan(cast)
        if not np.all(same):
            raise ValueError(
                f"{label} {arr.reshape(-1).tolist()} does not fit {np.dtype(dtype).name} channels"
            )
    return Pixel(kind, arr, dtype=dtype)


def _as_block_array(raw: PixelArray) -> PixelArray:
    arr = np.asarray(raw)
    return arr[..., None] if arr.ndim == 2 else arr


class MaskView(ImageView):
    masked = True

    def __init__(self, source: ImageView, nodata: Optional[PixelLike] = None) -> None:
        if source.masked:
            raise TypeError("MaskView needs a plain pixel source, got a masked view")
        self._source = source
        self._nodata: Optional[Pixel] = None
        if nodata is not None:
            self.set_nodata_value(nodata)

    def set_nodata_value(self, value: PixelLike) -> None:
        self._nodata = coerce_pixel(value, self.pixel_kind, "no-data value")

    @property
    def nodata(self) -> Optional[Pixel]:
        return None if self._nodata is None else self._nodata.copy()

    @property
    def source(self) -> ImageView:
        return self._source

    @property
    def cols(self) -> int:
        return self._source.cols

    @property
    def rows(self) -> int:
        return self._source.rows

    @property
    def planes(self) -> int:
        return self._source.planes

    @property
    def pixel_kind(self) -> PixelKind:
        return self._source.pixel_kind

    @property
    def dtype(self) -> np.dtype:
        return self._source.dtype

    def __call__(self, col: int, row: int, plane: int = 0) -> MaskedPixel:
        px = self._source(col, row, plane)
        if self._nodata is not None and np.array_equal(px.values, self._nodata.values):
            return MaskedPixel.default(self.pixel_kind, self.dtype)
        return MaskedPixel(px)

    def prerasterize(self, bbox: BBox) -> "MaskView":
        return MaskView(self._source.prerasterize(bbox), self._nodata)

    def rasterize(self, bbox: Optional[BBox] = None, plane: int = 0) -> MaskedBlock:
        region = self.resolve_bbox(bbox)
        src = _as_block_array(self._source.rasterize(region, plane))
        if self._nodata is None:
            valid = np.ones(src.shape[:2], dtype=bool)
        else:
            valid = ~np.all(src == self._nodata.values, axis=-1)
        return MaskedBlock(src, valid, self.pixel_kind)

    def __repr__(self) -> str:
        return f"MaskView({self._source!r}, nodata={self._nodata!r})"


class UnmaskView(ImageView):
    masked = False

    def __init__(self, source: ImageView, replacement: Optional[PixelLike] = None) -> None:
        if not source.masked:
            raise TypeError("UnmaskView needs a masked source, got a plain view")
        self._source = source
        if replacement is None:
            self._replacement = source.pixel_kind.zeros(source.dtype)
        else:
            self._replacement = coerce_pixel(
                replacement, source.pixel_kind, "replacement", dtype=source.dtype
            )

    @property
    def replacement(self) -> Pixel:
        return self._replacement.copy()

    @property
    def source(self) -> ImageView:
        return self._source

    @property
    def cols(self) -> int:
        return self._source.cols

    @property
    def rows(self) -> int:
        return self._source.rows

    @property
    def planes(self) -> int:
        return self._source.planes

    @property
    def pixel_kind(self) -> PixelKind:
        return self._source.pixel_kind

    @property
    def dtype(self) -> np.dtype:
        return self._source.dtype

    def __call__(self, col: int, row: int, plane: int = 0) -> Pixel:
        px = self._source(col, row, plane)
        if px.valid():
            return px.child()
        return self._replacement.copy()

    def prerasterize(self, bbox: BBox) -> "UnmaskView":
        return UnmaskView(self._source.prerasterize(bbox), self._replacement)

    def rasterize(self, bbox: Optional[BBox] = None, plane: int = 0) -> PixelArray:
        region = self.resolve_bbox(bbox)
        block = self._source.rasterize(region, plane)
        fill = np.asarray(self._replacement.values).astype(block.dtype)
        return np.where(block.valid[..., None], block.values, fill).astype(block.dtype)

    def __repr__(self) -> str:
        return f"UnmaskView({self._source!r}, replacement={self._replacement!r})"


def create_mask(view: ImageView, nodata: Optional[PixelLike] = None) -> MaskView:
    return MaskView(view, nodata)


def apply_mask(view: ImageView, replacement: Optional[PixelLike] = None) -> UnmaskView:
    return UnmaskView(view, replacement)


__all__ = [
    "PixelLike",
    "coerce_pixel",
    "MaskView",
    "UnmaskView",
    "create_mask",
    "apply_mask",
]
