import numpy as np
import pytest

from geo_transformer import (
    GeoTransformer,
    Pixel,
    coordinates_to_pixels,
    pixels_in_raster_mask,
    pixels_to_coordinates,
)

# -----------------------------------------------------------------------------
# World -> pixel arrays
# -----------------------------------------------------------------------------


def test_coordinates_to_pixels_matches_scalar(small_transformer):
    xs = np.array([11.3610659, 20.0, 0.0, 28.0])
    ys = np.array([32.2012463, 40.0, 0.0, 46.0])

    cols, rows = coordinates_to_pixels(small_transformer, xs, ys)

    expected = [small_transformer.coordinate_to_pixel((x, y)) for x, y in zip(xs, ys)]
    assert [Pixel(int(c), int(r)) for c, r in zip(cols, rows)] == expected
    assert cols.dtype == np.int64
    assert rows.dtype == np.int64


def test_coordinates_to_pixels_keeps_negative_indices(small_transformer):
    cols, rows = coordinates_to_pixels(small_transformer, [0.0], [0.0])

    assert cols[0] == -35
    assert rows[0] == 148


def test_coordinates_to_pixels_broadcasts(create_test_transformer):
    transformer = create_test_transformer(west=0.0, north=10.0)

    cols, rows = coordinates_to_pixels(transformer, [0.5, 1.5, 2.5], 9.5)

    np.testing.assert_array_equal(cols, [0, 1, 2])
    np.testing.assert_array_equal(rows, [0, 0, 0])


def test_coordinates_to_pixels_rejects_nan(small_transformer):
    with pytest.raises(ValueError, match="finite"):
        coordinates_to_pixels(small_transformer, [np.nan], [0.0])


def test_coordinates_to_pixels_out_of_int64_range_raises():
    # 1e-12 wide pixels put x=1e7 at column 1e19, past the int64 maximum
    transformer = GeoTransformer.from_gdal((0.0, 1e-12, 0.0, 0.0, 0.0, -1.0))

    with pytest.raises(OverflowError, match="int64"):
        coordinates_to_pixels(transformer, [1e7], [0.0])
    with pytest.raises(OverflowError, match="int64"):
        coordinates_to_pixels(transformer, [-1e7], [0.0])

    # The scalar mapper returns Python ints, which have no fixed width
    assert transformer.coordinate_to_pixel((1e7, 0.0)).col > np.iinfo(np.int64).max


# -----------------------------------------------------------------------------
# Pixel -> world arrays
# -----------------------------------------------------------------------------


def test_pixels_to_coordinates_matches_scalar(rotated_transformer):
    cols = np.array([0, 10, 30])
    rows = np.array([0, 20, 40])

    xs, ys = pixels_to_coordinates(rotated_transformer, cols, rows)

    for x, y, c, r in zip(xs, ys, cols, rows):
        coordinate = rotated_transformer.pixel_to_coordinate((int(c), int(r)))
        assert x == coordinate.x
        assert y == coordinate.y


def test_pixels_to_coordinates_origin_is_exact(small_transformer):
    xs, ys = pixels_to_coordinates(small_transformer, [0], [0])

    assert xs[0] == 11.3610659
    assert ys[0] == 46.2520256


def test_pixels_to_coordinates_center(create_test_transformer):
    transformer = create_test_transformer(west=0.0, north=10.0, xsize=2.0, ysize=2.0)

    xs, ys = pixels_to_coordinates(transformer, [0, 1], [0, 1], offset="center")

    np.testing.assert_allclose(xs, [1.0, 3.0])
    np.testing.assert_allclose(ys, [9.0, 7.0])


def test_pixels_to_coordinates_invalid_offset(small_transformer):
    with pytest.raises(ValueError, match="Invalid offset"):
        pixels_to_coordinates(small_transformer, [0], [0], offset="lr")  # type: ignore[arg-type]


# -----------------------------------------------------------------------------
# Inside-raster mask
# -----------------------------------------------------------------------------


def test_pixels_in_raster_mask(small_size):
    cols = np.array([0, 51, 52, -1, 10])
    rows = np.array([0, 44, 0, 0, 45])

    mask = pixels_in_raster_mask(cols, rows, small_size)

    np.testing.assert_array_equal(mask, [True, True, False, False, False])
    assert mask.dtype == np.bool_


def test_mask_filters_mapped_coordinates(small_transformer, small_size):
    bounds = small_transformer.bounds_from_size(small_size)
    xs = np.array([bounds.min.x, bounds.max.x, 20.0])
    ys = np.array([bounds.min.y, bounds.max.y, 40.0])

    cols, rows = coordinates_to_pixels(small_transformer, xs, ys)
    mask = pixels_in_raster_mask(cols, rows, (52, 45))

    # The east edge is one column past the raster
    np.testing.assert_array_equal(mask, [True, False, True])
