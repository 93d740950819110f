# pixel_mask/rasterize.py
from __future__ import annotations

"""
Region evaluation for lazy views, optionally spread over threads.

rasterize(view, bbox=None, *, plane=0, workers=1, debug=False)
  -> ndarray (rows, cols, channels) for plain views
  -> MaskedBlock for masked views

The parallel path splits the region into row strips, evaluates each strip
through view.prerasterize(strip).rasterize(strip) on a ThreadPoolExecutor
and stacks the strips back in order. Output matches the serial path.
workers=None uses utils.default_workers().
"""

import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

import numpy as np

from .constants import RASTER_MIN_PARALLEL_ROWS, RASTER_STRIPS_PER_WORKER
from .core_types import BBox
from .image_view import ImageView, RasterResult
from .masked_block import MaskedBlock
from .utils import (
    debug_log,
    default_workers,
    format_bbox,
    format_seconds_compact,
    print_config_line,
)


def _rasterize_region(view: ImageView, region: BBox, plane: int) -> RasterResult:
    return view.prerasterize(region).rasterize(region, plane)


def _stack_strips(parts: Sequence[RasterResult]) -> RasterResult:
    if isinstance(parts[0], MaskedBlock):
        return MaskedBlock.concatenate_rows(parts)  # type: ignore[arg-type]
    return np.concatenate([np.asarray(p) for p in parts], axis=0)


def rasterize(
    view: ImageView,
    bbox: Optional[BBox] = None,
    *,
    plane: int = 0,
    workers: Optional[int] = 1,
    debug: bool = False,
) -> RasterResult:
    region = view.resolve_bbox(bbox)
    if region.is_empty:
        raise ValueError(f"cannot rasterize an empty region {region}")
    if not 0 <= plane < view.planes:
        raise IndexError(f"plane {plane} outside 0..{view.planes - 1}")

    t0 = time.perf_counter()
    n_workers = default_workers() if workers is None else max(1, int(workers))
    if n_workers <= 1 or region.height < RASTER_MIN_PARALLEL_ROWS:
        n_workers = 1
        strips = [region]
        result = _rasterize_region(view, region, plane)
    else:
        strips = region.split_rows(n_workers * RASTER_STRIPS_PER_WORKER)
        with ThreadPoolExecutor(max_workers=n_workers) as ex:
            futs = [ex.submit(_rasterize_region, view, s, plane) for s in strips]
            parts: List[RasterResult] = [fu.result() for fu in futs]
        result = _stack_strips(parts)

    if debug:
        print_config_line(
            "rasterize",
            [
                ("Region", format_bbox(region.min_x, region.min_y, region.width, region.height)),
                ("Workers", n_workers),
                ("Strips", len(strips)),
                ("Masked", view.masked),
            ],
        )
        debug_log(f"rasterize took {format_seconds_compact(time.perf_counter() - t0)}")
    return result


__all__ = ["rasterize"]
