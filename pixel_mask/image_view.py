# pixel_mask/image_view.py
from __future__ import annotations

"""
Lazy image views.

A view knows its size and computes pixels on demand. Evaluation is two-phase:
  prerasterize(bbox) -> a view ready to produce that region
  rasterize(bbox, plane) -> the region's pixels

Plain views rasterize to an ndarray (rows, cols, channels); masked views
(masked = True) produce MaskedPixel per coordinate and MaskedBlock per region.

Exports:
  ImageView : base class, per-pixel fallback for rasterize()
  ArrayView : numpy-backed source
"""

from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from .core_types import BBox, PixelArray, as_channel_dtype, full_bbox
from .errors import ViewShapeMismatch
from .masked_block import MaskedBlock
from .masked_pixel import MaskedPixel
from .pixel_types import Pixel, PixelKind, kind_for_channels

RasterResult = Union[PixelArray, MaskedBlock]


class ImageView:
    """Base for lazy pixel sources. Subclasses provide size, kind and __call__."""

    masked: bool = False

    @property
    def cols(self) -> int:
        raise NotImplementedError

    @property
    def rows(self) -> int:
        raise NotImplementedError

    @property
    def planes(self) -> int:
        return 1

    @property
    def pixel_kind(self) -> PixelKind:
        raise NotImplementedError

    @property
    def dtype(self) -> np.dtype:
        return self.pixel_kind.dtype

    def bbox(self) -> BBox:
        return full_bbox(self.cols, self.rows)

    def __call__(self, col: int, row: int, plane: int = 0) -> Union[Pixel, MaskedPixel]:
        raise NotImplementedError

    # -- bounds --------------------------------------------------------------

    def check_coord(self, col: int, row: int, plane: int = 0) -> None:
        if not (0 <= col < self.cols and 0 <= row < self.rows):
            raise IndexError(f"pixel ({col}, {row}) outside {self.cols}x{self.rows} view")
        if not 0 <= plane < self.planes:
            raise IndexError(f"plane {plane} outside 0..{self.planes - 1}")

    def resolve_bbox(self, bbox: Optional[BBox] = None) -> BBox:
        """Full view when bbox is None; a region outside the view raises ValueError."""
        full = self.bbox()
        if bbox is None:
            return full
        if not full.contains_bbox(bbox):
            raise ValueError(f"region {bbox} is outside the {self.cols}x{self.rows} view")
        return bbox

    # -- two-phase evaluation ------------------------------------------------

    def prerasterize(self, bbox: BBox) -> "ImageView":
        self.resolve_bbox(bbox)
        return self

    def rasterize(self, bbox: Optional[BBox] = None, plane: int = 0) -> RasterResult:
        """Per-pixel fallback; subclasses with array access override this."""
        region = self.resolve_bbox(bbox)
        view = self.prerasterize(region)
        n = self.pixel_kind.channel_count
        values = np.zeros((region.height, region.width, n), dtype=self.dtype)
        valid = np.ones((region.height, region.width), dtype=bool)
        for r in range(region.height):
            for c in range(region.width):
                px = view(region.min_x + c, region.min_y + r, plane)
                if isinstance(px, MaskedPixel):
                    valid[r, c] = px.valid()
                    px = px.child()
                values[r, c] = px.values
        if self.masked:
            return MaskedBlock(values, valid, self.pixel_kind)
        return values


class ArrayView(ImageView):
    """
    numpy-backed source.

    data shapes:
      (rows, cols)                    one channel
      (rows, cols, channels)
      (planes, rows, cols, channels)

    The array is wrapped read-only without copying.
    """

    def __init__(self, data: NDArray[np.generic], kind: Optional[PixelKind] = None) -> None:
        arr = np.asarray(data)
        if arr.ndim == 2:
            arr = arr[None, :, :, None]
        elif arr.ndim == 3:
            arr = arr[None, ...]
        elif arr.ndim != 4:
            raise ViewShapeMismatch(f"unsupported array shape {arr.shape}")
        as_channel_dtype(arr.dtype)

        channels = int(arr.shape[3])
        if kind is None:
            kind = kind_for_channels(channels)
        elif kind.channel_count != channels:
            raise ViewShapeMismatch(
                f"{kind.name} expects {kind.channel_count} channels, array has {channels}"
            )

        view = arr.view()
        view.setflags(write=False)
        self._data = view
        self._kind = kind

    @property
    def cols(self) -> int:
        return int(self._data.shape[2])

    @property
    def rows(self) -> int:
        return int(self._data.shape[1])

    @property
    def planes(self) -> int:
        return int(self._data.shape[0])

    @property
    def pixel_kind(self) -> PixelKind:
        return self._kind

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def __call__(self, col: int, row: int, plane: int = 0) -> Pixel:
        self.check_coord(col, row, plane)
        return Pixel(self._kind, self._data[plane, row, col])

    def rasterize(self, bbox: Optional[BBox] = None, plane: int = 0) -> PixelArray:
        region = self.resolve_bbox(bbox)
        if not 0 <= plane < self.planes:
            raise IndexError(f"plane {plane} outside 0..{self.planes - 1}")
        return self._data[plane, region.min_y : region.max_y, region.min_x : region.max_x]

    def __repr__(self) -> str:
        return (
            f"ArrayView({self._kind.name}, {self.cols}x{self.rows}x{self.planes}, "
            f"dtype={self.dtype})"
        )


__all__ = ["RasterResult", "ImageView", "ArrayView"]
