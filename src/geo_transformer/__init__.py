"""Geo-Transformer: map between world coordinates and raster pixel indices.

Wraps a GDAL-style six-element geotransform and its precomputed inverse.
Built for feeding geotransforms read from GeoTIFF metadata straight into
point lookups and raster bounds calculations.
"""

from geo_transformer.errors import (
    GeoTransformError,
    InvalidGeoTransformError,
    SingularTransformError,
)
from geo_transformer.raster import (
    coordinates_to_pixels,
    pixels_in_raster_mask,
    pixels_to_coordinates,
)
from geo_transformer.transformer import GeoTransformer, invert_geotransform
from geo_transformer.types import Coordinate, Pixel, RasterSize, Rect

__version__ = "0.1.0"

__all__ = [
    # Transformer
    "GeoTransformer",
    "invert_geotransform",
    # Vectorised mapping
    "coordinates_to_pixels",
    "pixels_to_coordinates",
    "pixels_in_raster_mask",
    # Value types
    "Coordinate",
    "Pixel",
    "RasterSize",
    "Rect",
    # Errors
    "GeoTransformError",
    "InvalidGeoTransformError",
    "SingularTransformError",
    # Version
    "__version__",
]
