import pytest
from rasterio.transform import from_origin

from geo_transformer import GeoTransformer, RasterSize

# Geotransform and size of the small.tiff fixture (EPSG:4326, 52x45 pixels)
SMALL_GEOTRANSFORM = (11.3610659, 0.32552653, 0.0, 46.2520256, 0.0, -0.31223954)
SMALL_SIZE = RasterSize(52, 45)

# Rotated and sheared, positive determinant
ROTATED_GEOTRANSFORM = (100.0, 0.5, 0.1, 200.0, 0.2, 0.4)


def make_test_transformer(
    *,
    west: float = 0.0,
    north: float = 100.0,
    xsize: float = 1.0,
    ysize: float = 1.0,
) -> GeoTransformer:
    """
    Build a north-up GeoTransformer the way rasterio describes a GeoTIFF grid.

    Goes through `rasterio.transform.from_origin` so tests exercise the same
    Affine a rasterio dataset would hand us.
    """
    return GeoTransformer.from_affine(from_origin(west, north, xsize, ysize))


@pytest.fixture
def small_transformer() -> GeoTransformer:
    return GeoTransformer.from_gdal(SMALL_GEOTRANSFORM)


@pytest.fixture
def small_size() -> RasterSize:
    return SMALL_SIZE


@pytest.fixture
def rotated_transformer() -> GeoTransformer:
    return GeoTransformer.from_gdal(ROTATED_GEOTRANSFORM)


@pytest.fixture
def create_test_transformer():
    return make_test_transformer
