"""Object Search - Locate a reference image inside a larger image by exhaustive L1 comparison."""

from .channels import extract_planes, normalize_plane, to_grayscale
from .combine import combine_distances
from .config import Backend, ColorMode, CombineMode, SearchConfig
from .distance import compute_distances
from .errors import (
    ChannelMismatchError,
    DegenerateDistanceError,
    ImageFormatError,
    ObjectSearchError,
    SearchBoundsError,
    UnsupportedModeError,
)
from .hits import find_hits
from .indexing import IndexMapper
from .models import DistanceMap, Hit, Rectangle
from .progress import ProgressSink, TextProgress, TqdmProgress
from .search import ObjectSearcher, search

__version__ = "0.1.0"

__all__ = [
    "Backend",
    "ChannelMismatchError",
    "ColorMode",
    "CombineMode",
    "DegenerateDistanceError",
    "DistanceMap",
    "Hit",
    "ImageFormatError",
    "IndexMapper",
    "ObjectSearchError",
    "ObjectSearcher",
    "ProgressSink",
    "Rectangle",
    "SearchBoundsError",
    "SearchConfig",
    "TextProgress",
    "TqdmProgress",
    "UnsupportedModeError",
    "combine_distances",
    "compute_distances",
    "extract_planes",
    "find_hits",
    "normalize_plane",
    "search",
    "to_grayscale",
]
