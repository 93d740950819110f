# pixel_mask/constants.py
"""
Global defaults and tunables used across the project.

- Channel dtypes per built-in pixel kind
- Validity encoding range for floating channels
- Parallel rasterisation thresholds
- Pillow mode table
"""
from __future__ import annotations

from typing import Dict, List, Tuple

# =========================
# Channel element defaults
# =========================

# Floating channels encode validity as 0.0 (invalid) / 1.0 (valid).
FLOAT_CHANNEL_RANGE: Tuple[float, float] = (0.0, 1.0)

# (name, channel names, default dtype name)
BUILTIN_PIXEL_KINDS: List[Tuple[str, Tuple[str, ...], str]] = [
    ("gray", ("v",), "uint8"),
    ("graya", ("v", "a"), "uint8"),
    ("rgb", ("r", "g", "b"), "uint8"),
    ("rgba", ("r", "g", "b", "a"), "uint8"),
    ("hsv", ("h", "s", "v"), "float32"),
    ("xyz", ("x", "y", "z"), "float32"),
    ("luv", ("l", "u", "v"), "float32"),
]

VECTOR_KIND_PREFIX = "vector"
VECTOR_DEFAULT_DTYPE = "float64"

# =========================
# Rasterisation
# =========================

# Regions shorter than this are evaluated on the calling thread.
RASTER_MIN_PARALLEL_ROWS = 64

# Strips per worker; >1 smooths out uneven per-row cost.
RASTER_STRIPS_PER_WORKER = 2

# =========================
# Pillow bridge
# =========================

# Pillow mode -> pixel kind name
PIL_MODE_TO_KIND: Dict[str, str] = {
    "L": "gray",
    "LA": "graya",
    "RGB": "rgb",
    "RGBA": "rgba",
    "HSV": "hsv",
}

# pixel kind name -> Pillow mode
KIND_TO_PIL_MODE: Dict[str, str] = {
    "gray": "L",
    "graya": "LA",
    "rgb": "RGB",
    "rgba": "RGBA",
    "hsv": "HSV",
}

# Modes without a direct kind are converted to this before wrapping.
PIL_FALLBACK_MODE = "RGBA"
