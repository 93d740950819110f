# pixel_mask/__init__.py
"""
pixel_mask package.

Purpose:
  Masked pixels (a base pixel plus a validity flag), elementwise dispatch that
  propagates validity through arithmetic, and lazy views that mask a plain
  source by a no-data sentinel and unmask it again.

Public API:
  Pixel, PixelKind       : base pixel value and its registry entry.
  RGB, RGBA, GRAY, ...   : built-in pixel kinds; vector_kind(n) for N channels.
  MaskedPixel            : base pixel + validity.
  MaskedBlock            : rasterised region of masked pixels.
  apply_unary / apply_binary (+ _in_place, _block) : elementwise dispatch.
  ArrayView              : numpy-backed lazy source.
  create_mask / apply_mask : MaskView / UnmaskView adapters.
  rasterize              : region evaluation, optionally threaded.
  mean_channel_value     : mean of valid channels (0.0 when invalid).
  errors                 : ChannelIndexOutOfRange, ChannelCountMismatch, ...

Quick start:
  import numpy as np
  from pixel_mask import ArrayView, create_mask, apply_mask, rasterize

  src = ArrayView(np.array([[[0, 0, 0], [10, 20, 30]]], dtype=np.uint8))
  masked = create_mask(src, (0, 0, 0))
  rasterize(apply_mask(masked, (255, 255, 255)))
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import constants
from . import core_types
from . import errors
from . import utils

from .core_types import BBox, channel_range
from .errors import (
    ChannelCountMismatch,
    ChannelIndexOutOfRange,
    InvalidScalarConversion,
    PixelMaskError,
    UnknownPixelKind,
    ViewShapeMismatch,
)
from .pixel_types import (
    GRAY,
    GRAYA,
    HSV,
    LUV,
    RGB,
    RGBA,
    XYZ,
    Pixel,
    PixelKind,
    kind_for_channels,
    pixel_kind,
    register_pixel_kind,
    registered_kinds,
    vector_kind,
)
from .masked_pixel import MaskedPixel, convert_masked
from .masked_block import MaskedBlock
from .dispatch import (
    apply_binary,
    apply_binary_block,
    apply_binary_in_place,
    apply_unary,
    apply_unary_block,
    apply_unary_in_place,
)
from .image_view import ArrayView, ImageView
from .views import MaskView, UnmaskView, apply_mask, create_mask
from .reduce import (
    is_transparent,
    mean_channel_value,
    mean_channel_values,
    valid_fraction,
)
from .rasterize import rasterize
from .image_convert import (
    alpha_from_block,
    image_from_array,
    image_from_block,
    view_from_image,
)

__all__ = [
    "__version__",
    # namespaces
    "constants",
    "core_types",
    "errors",
    "utils",
    # types
    "BBox",
    "channel_range",
    "Pixel",
    "PixelKind",
    "MaskedPixel",
    "MaskedBlock",
    "ImageView",
    "ArrayView",
    "MaskView",
    "UnmaskView",
    # kinds
    "GRAY",
    "GRAYA",
    "RGB",
    "RGBA",
    "HSV",
    "XYZ",
    "LUV",
    "pixel_kind",
    "register_pixel_kind",
    "registered_kinds",
    "vector_kind",
    "kind_for_channels",
    # errors
    "PixelMaskError",
    "ChannelIndexOutOfRange",
    "ChannelCountMismatch",
    "InvalidScalarConversion",
    "UnknownPixelKind",
    "ViewShapeMismatch",
    # operations
    "convert_masked",
    "apply_unary",
    "apply_binary",
    "apply_unary_in_place",
    "apply_binary_in_place",
    "apply_unary_block",
    "apply_binary_block",
    "create_mask",
    "apply_mask",
    "rasterize",
    "mean_channel_value",
    "mean_channel_values",
    "is_transparent",
    "valid_fraction",
    # Pillow bridge
    "view_from_image",
    "image_from_array",
    "image_from_block",
    "alpha_from_block",
]
