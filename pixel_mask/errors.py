# pixel_mask/errors.py
"""
Error hierarchy for masked-pixel contract violations.

Every error here signals a caller bug: raised at the point of violation,
never retried. An invalid operand is not an error; it yields an invalid
result. Each class also derives from the matching builtin so code that
catches IndexError / ValueError / TypeError / KeyError keeps working.
"""

from __future__ import annotations


class PixelMaskError(Exception):
    """Base exception for all pixel_mask errors."""


class ChannelIndexOutOfRange(PixelMaskError, IndexError):
    """Channel index outside [0, channel_count]."""

    def __init__(self, index: int, channel_count: int) -> None:
        self.index = index
        self.channel_count = channel_count
        super().__init__(
            f"channel index {index} out of range for {channel_count}-channel pixel "
            f"(valid: 0..{channel_count}, where {channel_count} is the validity channel)"
        )


class ChannelCountMismatch(PixelMaskError, ValueError):
    """Binary operation on operands with different channel counts."""

    def __init__(self, left: int, right: int) -> None:
        self.left = left
        self.right = right
        super().__init__(f"channel count mismatch: {left} vs {right}")


class InvalidScalarConversion(PixelMaskError, TypeError):
    """Scalar down-conversion of a multi-channel masked pixel."""

    def __init__(self, channel_count: int) -> None:
        self.channel_count = channel_count
        super().__init__(
            f"cannot convert a {channel_count}-channel masked pixel to a scalar"
        )


class UnknownPixelKind(PixelMaskError, KeyError):
    """Registry lookup for a kind that was never registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"unknown pixel kind: {self.name!r}"


class ViewShapeMismatch(PixelMaskError, ValueError):
    """Pixel, block or view whose shape does not fit where it is used."""


__all__ = [
    "PixelMaskError",
    "ChannelIndexOutOfRange",
    "ChannelCountMismatch",
    "InvalidScalarConversion",
    "UnknownPixelKind",
    "ViewShapeMismatch",
]
