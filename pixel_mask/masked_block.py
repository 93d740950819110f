# pixel_mask/masked_block.py
from __future__ import annotations

"""
MaskedBlock: a rasterised region of masked pixels.

Layout:
  values : (rows, cols, channels) array of the channel dtype
  valid  : (rows, cols) bool array

Invalid positions always hold zeros, so a block compares equal to the
per-pixel evaluation of the same region. Both arrays are read-only.
"""

from typing import Optional, Sequence, Tuple

import numpy as np
from numpy.typing import DTypeLike

from .core_types import PixelArray, ValidMask, as_channel_dtype, channel_range
from .errors import ViewShapeMismatch
from .masked_pixel import MaskedPixel
from .pixel_types import Pixel, PixelKind, kind_for_channels


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


class MaskedBlock:
    __slots__ = ("_values", "_valid", "_kind")

    def __init__(
        self,
        values: PixelArray,
        valid: ValidMask,
        kind: Optional[PixelKind] = None,
    ) -> None:
        vals = np.asarray(values)
        if vals.ndim == 2:
            vals = vals[..., None]
        if vals.ndim != 3:
            raise ViewShapeMismatch(
                f"block values must be (rows, cols, channels), got shape {vals.shape}"
            )
        as_channel_dtype(vals.dtype)

        mask = np.asarray(valid, dtype=bool)
        if mask.shape != vals.shape[:2]:
            raise ViewShapeMismatch(
                f"validity shape {mask.shape} does not match values {vals.shape[:2]}"
            )

        if kind is None:
            kind = kind_for_channels(vals.shape[2])
        elif kind.channel_count != vals.shape[2]:
            raise ViewShapeMismatch(
                f"{kind.name} expects {kind.channel_count} channels, block has {vals.shape[2]}"
            )

        out = vals.copy()
        out[~mask] = 0
        self._values = _readonly(out)
        self._valid = _readonly(mask.copy())
        self._kind = kind

    @classmethod
    def invalid(
        cls, kind: PixelKind, rows: int, cols: int, dtype: Optional[DTypeLike] = None
    ) -> "MaskedBlock":
        dt = kind.dtype if dtype is None else dtype
        return cls(
            np.zeros((rows, cols, kind.channel_count), dtype=dt),
            np.zeros((rows, cols), dtype=bool),
            kind,
        )

    @classmethod
    def from_array(cls, arr: PixelArray, kind: Optional[PixelKind] = None) -> "MaskedBlock":
        """
        Parse (rows, cols, channels + 1) with the validity channel last.
        Validity values other than the dtype's min / max raise ValueError.
        """
        a = np.asarray(arr)
        if a.ndim != 3 or a.shape[2] < 2:
            raise ViewShapeMismatch(
                f"expected (rows, cols, channels + 1) array, got shape {a.shape}"
            )
        lo, hi = channel_range(a.dtype)
        flag = a[..., -1]
        is_hi = flag == hi
        if not np.all(is_hi | (flag == lo)):
            raise ValueError(f"validity channel holds values other than {lo} / {hi}")
        return cls(a[..., :-1], is_hi, kind)

    @staticmethod
    def concatenate_rows(blocks: Sequence["MaskedBlock"]) -> "MaskedBlock":
        """Stack blocks top to bottom; all must share kind, width and dtype."""
        if not blocks:
            raise ValueError("nothing to concatenate")
        first = blocks[0]
        for b in blocks[1:]:
            if b.kind != first.kind or b.cols != first.cols:
                raise ViewShapeMismatch("blocks differ in kind or width")
        values = np.concatenate([b.values for b in blocks], axis=0)
        valid = np.concatenate([b.valid for b in blocks], axis=0)
        return MaskedBlock(values, valid, first.kind)

    @property
    def values(self) -> PixelArray:
        return self._values

    @property
    def valid(self) -> ValidMask:
        return self._valid

    @property
    def kind(self) -> PixelKind:
        return self._kind

    @property
    def dtype(self) -> np.dtype:
        return self._values.dtype

    @property
    def channel_count(self) -> int:
        return self._kind.channel_count

    @property
    def shape(self) -> Tuple[int, int]:
        return (int(self._values.shape[0]), int(self._values.shape[1]))

    @property
    def rows(self) -> int:
        return self.shape[0]

    @property
    def cols(self) -> int:
        return self.shape[1]

    @property
    def valid_count(self) -> int:
        return int(np.count_nonzero(self._valid))

    def pixel(self, col: int, row: int) -> MaskedPixel:
        rows, cols = self.shape
        if not (0 <= col < cols and 0 <= row < rows):
            raise IndexError(f"pixel ({col}, {row}) outside {cols}x{rows} block")
        if not self._valid[row, col]:
            return MaskedPixel.default(self._kind, self.dtype)
        return MaskedPixel(Pixel(self._kind, self._values[row, col]))

    def validity_channel(self) -> np.ndarray:
        lo, hi = channel_range(self.dtype)
        return np.where(self._valid, hi, lo).astype(self.dtype)

    def as_array(self) -> PixelArray:
        return np.concatenate([self._values, self.validity_channel()[..., None]], axis=2)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MaskedBlock):
            return NotImplemented
        return (
            self._kind == other._kind
            and bool(np.array_equal(self._valid, other._valid))
            and bool(np.array_equal(self._values, other._values))
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows, cols = self.shape
        return (
            f"MaskedBlock({self._kind.name}, {cols}x{rows}, dtype={self.dtype}, "
            f"valid={self.valid_count}/{rows * cols})"
        )


__all__ = ["MaskedBlock"]
