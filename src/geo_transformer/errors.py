"""Errors raised while building a GeoTransformer."""


class GeoTransformError(ValueError):
    """Base error for geotransform problems."""


class InvalidGeoTransformError(GeoTransformError):
    """Geotransform has the wrong shape or non-finite components."""


class SingularTransformError(GeoTransformError):
    """Geotransform determinant is zero or non-finite, so it has no inverse."""

    def __init__(self, message: str = "could not invert geotransform") -> None:
        super().__init__(message)
