"""Exceptions raised for invalid search setups."""


class ObjectSearchError(ValueError):
    """Base error for searches that cannot run as configured."""


class UnsupportedModeError(ObjectSearchError):
    """Raised for an unknown color mode, combine mode or backend."""


class SearchBoundsError(ObjectSearchError):
    """Raised when the search rectangle would place the object outside the field."""


class ImageFormatError(ObjectSearchError):
    """Raised when an image is not a multi-channel pixel grid."""


class ChannelMismatchError(ObjectSearchError):
    """Raised when per-channel planes or distance buffers do not line up."""


class DegenerateDistanceError(ObjectSearchError):
    """Raised when distances cannot be normalized because max <= min."""
