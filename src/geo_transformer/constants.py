"""Constants for geotransform layout."""

# GDAL geotransform layout: (a, b, c, d, e, f)
GEOTRANSFORM_LENGTH = 6
