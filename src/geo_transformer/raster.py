from typing import Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from geo_transformer.transformer import GeoTransformer, PixelOffset
from geo_transformer.types import RasterSize, as_raster_size

# Floored values at or past this magnitude do not fit in int64
_INT64_LIMIT = float(2**63)


def coordinates_to_pixels(
    transformer: GeoTransformer,
    xs: ArrayLike,
    ys: ArrayLike,
) -> tuple[NDArray[np.int64], NDArray[np.int64]]:
    """
    Convert arrays of world coordinates to (cols, rows) pixel index arrays.

    Same floor semantics as `GeoTransformer.coordinate_to_pixel`: nothing is
    clipped and indices may be negative.

    Raises:
        ValueError: If any coordinate is non-finite
        OverflowError: If a pixel index does not fit in int64
    """
    x, y = np.broadcast_arrays(
        np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64)
    )
    inv = transformer.inv_geotransform
    fx = inv[0] + inv[1] * x + inv[2] * y
    fy = inv[3] + inv[4] * x + inv[5] * y

    if not (np.isfinite(fx).all() and np.isfinite(fy).all()):
        raise ValueError("Coordinates must be finite")

    cols = np.floor(fx)
    rows = np.floor(fy)
    for floored in (cols, rows):
        if ((floored >= _INT64_LIMIT) | (floored < -_INT64_LIMIT)).any():
            raise OverflowError("Pixel index out of int64 range")

    return cols.astype(np.int64), rows.astype(np.int64)


def pixels_to_coordinates(
    transformer: GeoTransformer,
    cols: ArrayLike,
    rows: ArrayLike,
    *,
    offset: PixelOffset = "ul",
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Convert arrays of pixel indices to (xs, ys) world coordinate arrays.

    Returns:
        Upper-left cell corners by default, cell centers with offset="center".
    """
    c, r = np.broadcast_arrays(
        np.asarray(cols, dtype=np.float64), np.asarray(rows, dtype=np.float64)
    )
    match offset:
        case "ul":
            pass
        case "center":
            c = c + 0.5
            r = r + 0.5
        case _:
            raise ValueError(f"Invalid offset: {offset}")

    a, b, cc, d, e, f = transformer.geotransform
    return a + b * c + cc * r, d + e * c + f * r


def pixels_in_raster_mask(
    cols: ArrayLike,
    rows: ArrayLike,
    size: RasterSize | Iterable[int],
) -> NDArray[np.bool_]:
    """Boolean mask of pixels that refer to actual cells of the raster."""
    raster_size = as_raster_size(size)
    c, r = np.broadcast_arrays(np.asarray(cols), np.asarray(rows))
    return (c >= 0) & (c < raster_size.width) & (r >= 0) & (r < raster_size.height)
