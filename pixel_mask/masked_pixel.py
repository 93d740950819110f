# pixel_mask/masked_pixel.py
from __future__ import annotations

"""
MaskedPixel: a base pixel plus a validity flag.

Any arithmetic that touches an invalid operand produces an invalid,
zero-valued result. Validity is held as a boolean; the numeric encoding
(dtype max for valid, min for invalid, see core_types.channel_range) is
what the extra channel slot reads and writes.
"""

import operator
from typing import Any, Callable, Optional

import numpy as np
from numpy.typing import DTypeLike

from .core_types import ChannelScalar, channel_range
from .errors import ChannelIndexOutOfRange, InvalidScalarConversion, ViewShapeMismatch
from .pixel_types import Pixel, PixelKind

PixelConverter = Callable[[Pixel], Pixel]


class MaskedPixel:
    """
    A base pixel with one extra validity channel.

    Built from a Pixel the result is always valid. Use MaskedPixel.default()
    for the zero, invalid value.

    Channel index i in [0, channel_count) addresses base channel i; index
    channel_count addresses the validity channel. Anything else raises
    ChannelIndexOutOfRange.
    """

    __slots__ = ("_child", "_valid")

    def __init__(self, child: Pixel) -> None:
        if not isinstance(child, Pixel):
            raise TypeError(f"MaskedPixel wraps a Pixel, got {type(child).__name__}")
        self._child = child.copy()
        self._valid = True

    @classmethod
    def default(cls, kind: PixelKind, dtype: Optional[DTypeLike] = None) -> "MaskedPixel":
        """Zero base value, invalid."""
        out = cls(kind.zeros(dtype))
        out._valid = False
        return out

    @classmethod
    def from_channels(
        cls, kind: PixelKind, *values: ChannelScalar, dtype: Optional[DTypeLike] = None
    ) -> "MaskedPixel":
        return cls(kind(*values, dtype=dtype))

    # -- validity ------------------------------------------------------------

    def valid(self) -> bool:
        return self._valid

    def validate(self) -> None:
        self._valid = True

    def invalidate(self) -> None:
        """Mark invalid. The base value is left as it is."""
        self._valid = False

    def reset(self) -> None:
        """Zero the base value and mark invalid."""
        self._child = self._child.kind.zeros(self._child.dtype)
        self._valid = False

    def validity_channel(self) -> ChannelScalar:
        lo, hi = channel_range(self.dtype)
        return hi if self._valid else lo

    # -- structure -----------------------------------------------------------

    @property
    def kind(self) -> PixelKind:
        return self._child.kind

    @property
    def dtype(self) -> np.dtype:
        return self._child.dtype

    @property
    def channel_count(self) -> int:
        return self._child.channel_count

    def child(self) -> Pixel:
        return self._child.copy()

    def channel(self, index: int) -> ChannelScalar:
        i = operator.index(index)
        n = self.channel_count
        if i == n:
            return self.validity_channel()
        if 0 <= i < n:
            return self._child[i]
        raise ChannelIndexOutOfRange(i, n)

    def set_channel(self, index: int, value: ChannelScalar) -> None:
        i = operator.index(index)
        n = self.channel_count
        if i == n:
            lo, hi = channel_range(self.dtype)
            if value == hi:
                self._valid = True
            elif value == lo:
                self._valid = False
            else:
                raise ValueError(
                    f"validity channel takes {lo} (invalid) or {hi} (valid), got {value}"
                )
            return
        if 0 <= i < n:
            self._child[i] = value
            return
        raise ChannelIndexOutOfRange(i, n)

    __getitem__ = channel
    __setitem__ = set_channel

    def __len__(self) -> int:
        # base channels plus the validity channel
        return self.channel_count + 1

    # -- conversion ----------------------------------------------------------

    def scalar(self) -> ChannelScalar:
        if self.channel_count != 1:
            raise InvalidScalarConversion(self.channel_count)
        return self._child[0]

    def __float__(self) -> float:
        return float(self.scalar())

    def __int__(self) -> int:
        return int(self.scalar())

    def convert(self, converter: PixelConverter, kind: Optional[PixelKind] = None) -> "MaskedPixel":
        return convert_masked(self, kind=kind, converter=converter)

    def astype(self, dtype: DTypeLike) -> "MaskedPixel":
        return convert_masked(self, dtype=dtype)

    def copy(self) -> "MaskedPixel":
        out = MaskedPixel(self._child)
        out._valid = self._valid
        return out

    # -- comparison / formatting ---------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MaskedPixel):
            return NotImplemented
        return self._valid == other._valid and self._child == other._child

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        flag = "valid" if self._valid else "invalid"
        return f"MaskedPixel({flag}, {self._child!r})"

    # -- arithmetic ----------------------------------------------------------

    def _binary(self, other: Any, func: Callable[[Any, Any], Any], reflected: bool = False) -> Any:
        from .dispatch import apply_binary, apply_unary

        if isinstance(other, Pixel):
            other = MaskedPixel(other)
        if isinstance(other, MaskedPixel):
            if reflected:
                return apply_binary(func, other, self)
            return apply_binary(func, self, other)
        if np.isscalar(other):
            if reflected:
                return apply_unary(lambda x: func(other, x), self)
            return apply_unary(lambda x: func(x, other), self)
        return NotImplemented

    def _inplace(self, other: Any, func: Callable[[Any, Any], Any]) -> Any:
        from .dispatch import apply_binary_in_place, apply_unary_in_place

        if isinstance(other, Pixel):
            other = MaskedPixel(other)
        if isinstance(other, MaskedPixel):
            return apply_binary_in_place(func, self, other)
        if np.isscalar(other):
            return apply_unary_in_place(lambda x: func(x, other), self)
        return NotImplemented

    def __add__(self, other: Any) -> "MaskedPixel":
        return self._binary(other, operator.add)

    def __radd__(self, other: Any) -> "MaskedPixel":
        return self._binary(other, operator.add, reflected=True)

    def __sub__(self, other: Any) -> "MaskedPixel":
        return self._binary(other, operator.sub)

    def __rsub__(self, other: Any) -> "MaskedPixel":
        return self._binary(other, operator.sub, reflected=True)

    def __mul__(self, other: Any) -> "MaskedPixel":
        return self._binary(other, operator.mul)

    def __rmul__(self, other: Any) -> "MaskedPixel":
        return self._binary(other, operator.mul, reflected=True)

    def __truediv__(self, other: Any) -> "MaskedPixel":
        return self._binary(other, operator.truediv)

    def __rtruediv__(self, other: Any) -> "MaskedPixel":
        return self._binary(other, operator.truediv, reflected=True)

    def __iadd__(self, other: Any) -> "MaskedPixel":
        return self._inplace(other, operator.add)

    def __isub__(self, other: Any) -> "MaskedPixel":
        return self._inplace(other, operator.sub)

    def __imul__(self, other: Any) -> "MaskedPixel":
        return self._inplace(other, operator.mul)

    def __itruediv__(self, other: Any) -> "MaskedPixel":
        return self._inplace(other, operator.truediv)

    def __neg__(self) -> "MaskedPixel":
        from .dispatch import apply_unary

        return apply_unary(operator.neg, self)

    def __abs__(self) -> "MaskedPixel":
        from .dispatch import apply_unary

        return apply_unary(abs, self)


def convert_masked(
    pixel: MaskedPixel,
    kind: Optional[PixelKind] = None,
    dtype: Optional[DTypeLike] = None,
    converter: Optional[PixelConverter] = None,
) -> MaskedPixel:
    """
    Validity-preserving conversion.

    An invalid source gives the default (zero, invalid) pixel of the target
    kind and dtype; a valid source gives a valid pixel holding the converted
    base value. Without a converter the base channels are relabelled to
    `kind`, which must have the same channel count. A converter's output
    must be of the target kind (the source kind unless `kind` is given).
    """
    dst_kind = pixel.kind if kind is None else kind
    if converter is None and dst_kind.channel_count != pixel.channel_count:
        raise ViewShapeMismatch(
            f"cannot relabel {pixel.kind.name} as {dst_kind.name} without a converter"
        )

    if not pixel.valid():
        if dtype is not None:
            dst_dtype = dtype
        elif converter is not None:
            # same element type a valid source would convert to
            dst_dtype = converter(pixel.kind.zeros(pixel.dtype)).dtype
        else:
            dst_dtype = pixel.dtype
        return MaskedPixel.default(dst_kind, dst_dtype)

    if converter is None:
        child = Pixel(dst_kind, pixel.child().values)
    else:
        child = converter(pixel.child())
        if child.kind != dst_kind:
            raise ViewShapeMismatch(
                f"converter produced {child.kind.name}, expected {dst_kind.name}"
            )
    if dtype is not None:
        child = child.astype(dtype)
    return MaskedPixel(child)


__all__ = ["MaskedPixel", "PixelConverter", "convert_masked"]
