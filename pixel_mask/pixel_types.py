# pixel_mask/pixel_types.py
from __future__ import annotations

"""
Pixel kinds and the base pixel value type.

Exports:
  PixelKind               : immutable registry entry (name, channel names, default dtype)
  Pixel                   : base pixel value, 1-D numpy channel storage
  register_pixel_kind(...) -> PixelKind
  pixel_kind(name)        -> PixelKind, raises UnknownPixelKind
  vector_kind(n)          -> PixelKind named "vector<n>"
  kind_for_channels(n)    -> default kind for an n-channel array
  GRAY, GRAYA, RGB, RGBA, HSV, XYZ, LUV : built-in kinds

Notes:
  Kinds are registered once, at import for the built-ins, and never change
  afterwards. Code that operates on pixels only ever asks a kind for its
  channel count; adding a kind needs no changes elsewhere.
"""

import operator
import threading
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import DTypeLike, NDArray

from .constants import BUILTIN_PIXEL_KINDS, VECTOR_DEFAULT_DTYPE, VECTOR_KIND_PREFIX
from .core_types import ChannelScalar, as_channel_dtype
from .errors import ChannelIndexOutOfRange, UnknownPixelKind, ViewShapeMismatch


@dataclass(frozen=True)
class PixelKind:
    """Registry entry: a named channel layout with a default element dtype."""

    name: str
    channel_names: Tuple[str, ...]
    default_dtype: str

    @property
    def channel_count(self) -> int:
        return len(self.channel_names)

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.default_dtype)

    def index_of(self, channel_name: str) -> int:
        try:
            return self.channel_names.index(channel_name)
        except ValueError:
            raise KeyError(
                f"{self.name} has no channel {channel_name!r}; "
                f"channels are {', '.join(self.channel_names)}"
            ) from None

    def zeros(self, dtype: Optional[DTypeLike] = None) -> "Pixel":
        dt = self.dtype if dtype is None else dtype
        return Pixel(self, np.zeros(self.channel_count, dtype=dt))

    def __call__(self, *values: ChannelScalar, dtype: Optional[DTypeLike] = None) -> "Pixel":
        """Build a pixel of this kind, e.g. RGB(10, 20, 30, dtype=np.uint8)."""
        if len(values) == 1 and not np.isscalar(values[0]):
            return Pixel(self, values[0], dtype=dtype)
        return Pixel(self, values, dtype=dtype)

    def __repr__(self) -> str:
        return f"PixelKind({self.name}, channels={self.channel_count}, dtype={self.default_dtype})"


class Pixel:
    """
    Base pixel: channel_count numeric channels of one dtype.

    A mutable value: copied freely, compared channel-wise, not hashable.
    Indexing outside [0, channel_count) raises ChannelIndexOutOfRange.
    """

    __slots__ = ("_kind", "_values")

    def __init__(
        self,
        kind: PixelKind,
        values: Sequence[ChannelScalar] | NDArray[np.generic],
        dtype: Optional[DTypeLike] = None,
    ) -> None:
        if dtype is None:
            dtype = values.dtype if isinstance(values, np.ndarray) else kind.dtype
        dt = as_channel_dtype(dtype)
        arr = np.array(values, dtype=dt).reshape(-1)
        if arr.size != kind.channel_count:
            raise ViewShapeMismatch(
                f"{kind.name} expects {kind.channel_count} channels, got {arr.size}"
            )
        self._kind = kind
        self._values = arr

    @property
    def kind(self) -> PixelKind:
        return self._kind

    @property
    def channel_count(self) -> int:
        return self._kind.channel_count

    @property
    def dtype(self) -> np.dtype:
        return self._values.dtype

    @property
    def values(self) -> NDArray[np.generic]:
        """Read-only copy of the channel array."""
        out = self._values.copy()
        out.setflags(write=False)
        return out

    def _check_index(self, index: int) -> int:
        i = operator.index(index)
        if i < 0 or i >= self.channel_count:
            raise ChannelIndexOutOfRange(i, self.channel_count)
        return i

    def __getitem__(self, index: int) -> np.generic:
        return self._values[self._check_index(index)]

    def __setitem__(self, index: int, value: ChannelScalar) -> None:
        self._values[self._check_index(index)] = value

    def __len__(self) -> int:
        return self.channel_count

    def __iter__(self) -> Iterator[np.generic]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pixel):
            return NotImplemented
        return self._kind == other._kind and bool(
            np.array_equal(self._values, other._values)
        )

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> "Pixel":
        return Pixel(self._kind, self._values, dtype=self.dtype)

    def astype(self, dtype: DTypeLike) -> "Pixel":
        return Pixel(self._kind, self._values, dtype=dtype)

    def to_tuple(self) -> Tuple[ChannelScalar, ...]:
        return tuple(self._values.tolist())

    def __repr__(self) -> str:
        return f"{self._kind.name}({', '.join(str(v) for v in self._values.tolist())})"


# Registry

_REGISTRY: Dict[str, PixelKind] = {}
_REGISTRY_LOCK = threading.Lock()


def register_pixel_kind(
    name: str, channel_names: Sequence[str], default_dtype: DTypeLike
) -> PixelKind:
    """
    Register a pixel kind. Re-registering an identical definition returns the
    existing entry; a conflicting one raises ValueError.
    """
    if not channel_names:
        raise ValueError("a pixel kind needs at least one channel")
    kind = PixelKind(
        name=name,
        channel_names=tuple(channel_names),
        default_dtype=as_channel_dtype(default_dtype).name,
    )
    with _REGISTRY_LOCK:
        existing = _REGISTRY.get(name)
        if existing is not None:
            if existing != kind:
                raise ValueError(f"pixel kind {name!r} already registered as {existing!r}")
            return existing
        _REGISTRY[name] = kind
    return kind


def pixel_kind(name: str) -> PixelKind:
    try:
        return _REGISTRY[name]
    except KeyError:
        raise UnknownPixelKind(name) from None


def registered_kinds() -> List[str]:
    return sorted(_REGISTRY)


def vector_kind(channels: int, default_dtype: DTypeLike = VECTOR_DEFAULT_DTYPE) -> PixelKind:
    """N-channel vector kind, registered on first use."""
    n = int(channels)
    if n < 1:
        raise ValueError(f"vector kind needs at least one channel, got {n}")
    name = f"{VECTOR_KIND_PREFIX}{n}"
    with _REGISTRY_LOCK:
        existing = _REGISTRY.get(name)
    if existing is not None:
        return existing
    return register_pixel_kind(name, tuple(f"c{i}" for i in range(n)), default_dtype)


def kind_for_channels(channels: int) -> PixelKind:
    """Default kind for an array with this many channels."""
    defaults = {1: "gray", 2: "graya", 3: "rgb", 4: "rgba"}
    name = defaults.get(int(channels))
    if name is None:
        return vector_kind(channels)
    return pixel_kind(name)


for _name, _channels, _dtype in BUILTIN_PIXEL_KINDS:
    register_pixel_kind(_name, _channels, _dtype)

GRAY = pixel_kind("gray")
GRAYA = pixel_kind("graya")
RGB = pixel_kind("rgb")
RGBA = pixel_kind("rgba")
HSV = pixel_kind("hsv")
XYZ = pixel_kind("xyz")
LUV = pixel_kind("luv")


__all__ = [
    "PixelKind",
    "Pixel",
    "register_pixel_kind",
    "pixel_kind",
    "registered_kinds",
    "vector_kind",
    "kind_for_channels",
    "GRAY",
    "GRAYA",
    "RGB",
    "RGBA",
    "HSV",
    "XYZ",
    "LUV",
]
