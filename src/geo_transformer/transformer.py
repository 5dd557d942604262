from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, field
from typing import Iterable, Literal, Sequence

from rasterio.transform import Affine

from geo_transformer.constants import GEOTRANSFORM_LENGTH
from geo_transformer.errors import InvalidGeoTransformError, SingularTransformError
from geo_transformer.types import (
    Coordinate,
    GeoTransformTuple,
    Pixel,
    RasterSize,
    Rect,
    as_coordinate,
    as_pixel,
    as_raster_size,
)

PixelOffset = Literal["ul", "center"]
BoundsCorners = Literal["all", "diagonal"]


def _coerce_geotransform(geotransform: Sequence[float]) -> GeoTransformTuple:
    try:
        values = tuple(float(v) for v in geotransform)
    except (TypeError, ValueError) as e:
        raise InvalidGeoTransformError(f"Geotransform must contain numbers: {e}") from e

    if len(values) != GEOTRANSFORM_LENGTH:
        raise InvalidGeoTransformError(
            f"Geotransform must have {GEOTRANSFORM_LENGTH} elements, got {len(values)}"
        )
    return values  # type: ignore[return-value]


def invert_geotransform(geotransform: Sequence[float]) -> GeoTransformTuple:
    """
    Invert a GDAL geotransform.

    Given (a, b, c, d, e, f) mapping pixel to world space:

        x = a + b * col + c * row
        y = d + e * col + f * row

    returns the coefficients (a', b', c', d', e', f') of the inverse mapping
    from world space back to fractional pixel space.

    Raises:
        InvalidGeoTransformError: If the geotransform is not six numbers or its
            origin is non-finite
        SingularTransformError: If the determinant b*f - c*e is zero or non-finite,
            or the inverse coefficients overflow
    """
    a, b, c, d, e, f = _coerce_geotransform(geotransform)

    det = b * f - c * e
    if det == 0.0 or not math.isfinite(det):
        raise SingularTransformError()
    if not (math.isfinite(a) and math.isfinite(d)):
        raise InvalidGeoTransformError(f"Geotransform origin must be finite: ({a}, {d})")

    inv_b = f / det
    inv_c = -c / det
    inv_e = -e / det
    inv_f = b / det
    inv_a = -(inv_b * a + inv_c * d)
    inv_d = -(inv_e * a + inv_f * d)

    inverse = (inv_a, inv_b, inv_c, inv_d, inv_e, inv_f)
    # A subnormal determinant can overflow the division
    if not all(math.isfinite(v) for v in inverse):
        raise SingularTransformError()
    return inverse


@dataclass(frozen=True)
class GeoTransformer:
    """
    Maps between world coordinates and pixel indices of a raster.

    Holds the GDAL geotransform and its precomputed inverse. Pixel (0, 0) maps
    to the upper-left corner of the upper-left cell, not its center.
    """

    geotransform: GeoTransformTuple
    inv_geotransform: GeoTransformTuple = field(init=False, repr=False)

    def __post_init__(self) -> None:
        geotransform = _coerce_geotransform(self.geotransform)
        object.__setattr__(self, "geotransform", geotransform)
        object.__setattr__(self, "inv_geotransform", invert_geotransform(geotransform))

    @classmethod
    def from_gdal(cls, geotransform: Sequence[float]) -> GeoTransformer:
        return cls(_coerce_geotransform(geotransform))

    @classmethod
    def from_affine(cls, affine: Affine) -> GeoTransformer:
        """Build from a rasterio/affine `Affine`, e.g. `dataset.transform`."""
        return cls(affine.to_gdal())

    def to_gdal(self) -> GeoTransformTuple:
        return self.geotransform

    def to_affine(self) -> Affine:
        return Affine.from_gdal(*self.geotransform)

    @property
    def origin(self) -> Coordinate:
        return Coordinate(self.geotransform[0], self.geotransform[3])

    @property
    def is_rectilinear(self) -> bool:
        """True when the transform has no rotation or shear terms."""
        return self.geotransform[2] == 0.0 and self.geotransform[4] == 0.0

    @property
    def resolution(self) -> tuple[float, float]:
        """Pixel (width, height) in world units, always positive."""
        _, b, c, _, e, f = self.geotransform
        return math.hypot(b, e), math.hypot(c, f)

    def coordinate_to_fractional_pixel(
        self, coordinate: Coordinate | Iterable[float]
    ) -> tuple[float, float]:
        """Apply the inverse transform without flooring."""
        c = as_coordinate(coordinate)
        inv = self.inv_geotransform
        return (
            inv[0] + inv[1] * c.x + inv[2] * c.y,
            inv[3] + inv[4] * c.x + inv[5] * c.y,
        )

    def coordinate_to_pixel(self, coordinate: Coordinate | Iterable[float]) -> Pixel:
        """
        Convert a world coordinate to the pixel containing it.

        Coordinates outside the raster envelope produce pixel indices outside
        the raster, possibly negative. Nothing is clipped; check with
        `RasterSize.contains` or `coordinate_in_raster` before indexing.

        Flooring is exact only in real arithmetic. A world point computed from
        a pixel corner with `pixel_to_coordinate` can land a rounding error
        below that corner and floor to the previous column or row, e.g. (10, 20)
        coming back as (10, 19). Use `coordinate_to_fractional_pixel` when a
        round-trip must be compared within a tolerance.

        Raises:
            ValueError: If the coordinate is NaN
            OverflowError: If the coordinate is infinite
        """
        fx, fy = self.coordinate_to_fractional_pixel(coordinate)
        return Pixel(math.floor(fx), math.floor(fy))

    def pixel_to_coordinate(
        self, pixel: Pixel | Iterable[int], *, offset: PixelOffset = "ul"
    ) -> Coordinate:
        """
        Convert a pixel index to a world coordinate.

        Args:
            pixel: (col, row) index; values outside the raster extrapolate.
            offset: "ul" for the upper-left corner of the cell (GDAL convention),
                "center" for the cell center.

        Raises:
            ValueError: If the offset is invalid
        """
        p = as_pixel(pixel)
        match offset:
            case "ul":
                col, row = p.col, p.row
            case "center":
                col, row = p.col + 0.5, p.row + 0.5
            case _:
                raise ValueError(f"Invalid offset: {offset}")

        a, b, c, d, e, f = self.geotransform
        return Coordinate(a + b * col + c * row, d + e * col + f * row)

    def bounds_from_size(
        self,
        size: RasterSize | Iterable[int],
        *,
        corners: BoundsCorners = "all",
    ) -> Rect:
        """
        Compute the world-space bounding rectangle of a raster.

        Args:
            size: (width, height) of the raster in pixels.
            corners: "all" maps the four raster corners, which is correct for
                rotated and sheared transforms. "diagonal" maps only (0, 0) and
                (width, height), which is only correct for rectilinear transforms.

        Raises:
            ValueError: If corners is invalid or the size is negative
        """
        raster_size = as_raster_size(size)
        match corners:
            case "all":
                pixels: tuple[Pixel, ...] = raster_size.corners()
            case "diagonal":
                if not self.is_rectilinear:
                    warnings.warn(
                        "Diagonal-corner bounds of a rotated geotransform "
                        "underestimate the raster extent; use corners='all'",
                        stacklevel=2,
                    )
                pixels = (Pixel(0, 0), Pixel(raster_size.width, raster_size.height))
            case _:
                raise ValueError(f"Invalid corners: {corners}")

        return Rect.from_coordinates(*(self.pixel_to_coordinate(p) for p in pixels))

    def coordinate_in_raster(
        self,
        coordinate: Coordinate | Iterable[float],
        size: RasterSize | Iterable[int],
    ) -> bool:
        return as_raster_size(size).contains(self.coordinate_to_pixel(coordinate))
