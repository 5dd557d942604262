from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Iterable, TypeAlias

GeoTransformTuple: TypeAlias = tuple[float, float, float, float, float, float]
RasterBounds: TypeAlias = tuple[float, float, float, float]


@dataclass(frozen=True)
class Coordinate:
    """A point in world space (map units of the raster's CRS)."""

    x: float
    y: float

    def __add__(self, other: Coordinate) -> Coordinate:
        return Coordinate(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Coordinate) -> Coordinate:
        return Coordinate(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Pixel:
    """
    A (column, row) index into a raster grid.

    Indices are signed: a world point left of or above the raster origin maps
    to negative values rather than wrapping around.
    """

    col: int
    row: int


@dataclass(frozen=True)
class RasterSize:
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Raster size must be non-negative, got {self.width}x{self.height}"
            )

    def contains(self, pixel: Pixel | tuple[int, int]) -> bool:
        """Return True if the pixel refers to an actual cell of the raster."""
        p = as_pixel(pixel)
        return 0 <= p.col < self.width and 0 <= p.row < self.height

    def corners(self) -> tuple[Pixel, Pixel, Pixel, Pixel]:
        """Pixel-space corners: upper-left, upper-right, lower-left, lower-right."""
        return (
            Pixel(0, 0),
            Pixel(self.width, 0),
            Pixel(0, self.height),
            Pixel(self.width, self.height),
        )


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned world-space rectangle.

    Invariant: min.x <= max.x and min.y <= max.y. Use `Rect.from_coordinates`
    to build one from arbitrary corners.
    """

    min: Coordinate
    max: Coordinate

    def __post_init__(self) -> None:
        if self.min.x > self.max.x or self.min.y > self.max.y:
            raise ValueError(
                f"Rect corners out of order: min={self.min}, max={self.max}"
            )

    @classmethod
    def from_coordinates(cls, *coordinates: Coordinate) -> Rect:
        if not coordinates:
            raise ValueError("At least one coordinate is required")
        xs = [c.x for c in coordinates]
        ys = [c.y for c in coordinates]
        return cls(Coordinate(min(xs), min(ys)), Coordinate(max(xs), max(ys)))

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    def contains(self, coordinate: Coordinate | tuple[float, float]) -> bool:
        c = as_coordinate(coordinate)
        return self.min.x <= c.x <= self.max.x and self.min.y <= c.y <= self.max.y

    def intersects(self, other: Rect) -> bool:
        # Touching edges count as intersecting
        return (
            self.min.x <= other.max.x
            and self.max.x >= other.min.x
            and self.min.y <= other.max.y
            and self.max.y >= other.min.y
        )

    def to_bounds(self) -> RasterBounds:
        """Return (left, bottom, right, top), the order rasterio uses."""
        return self.min.x, self.min.y, self.max.x, self.max.y


def as_coordinate(value: Coordinate | Iterable[float]) -> Coordinate:
    if isinstance(value, Coordinate):
        return value
    x, y = value
    return Coordinate(float(x), float(y))


def as_pixel(value: Pixel | Iterable[int]) -> Pixel:
    if isinstance(value, Pixel):
        return value
    col, row = value
    # operator.index rejects floats instead of silently truncating them
    return Pixel(operator.index(col), operator.index(row))


def as_raster_size(value: RasterSize | Iterable[int]) -> RasterSize:
    if isinstance(value, RasterSize):
        return value
    width, height = value
    return RasterSize(operator.index(width), operator.index(height))
