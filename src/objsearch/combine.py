"""Merging of per-channel distance maps."""

from collections.abc import Sequence

import numpy as np

from .config import CombineMode
from .errors import ChannelMismatchError, UnsupportedModeError
from .models import DistanceMap


def combine_distances(maps: Sequence[DistanceMap], mode: CombineMode = "max") -> DistanceMap:
    """Combine per-channel distances into one map.

    The extrema of the result are always recomputed over the combined
    buffer, whatever the mode.

    Args:
        maps: One DistanceMap per channel, all of the same length
        mode: "max" (worst channel dominates), "mean" or "min"

    Returns:
        Combined DistanceMap

    Raises:
        ChannelMismatchError: If maps is empty or lengths differ
        UnsupportedModeError: If mode is unknown
    """
    if not maps:
        msg = "No channel distances to combine"
        raise ChannelMismatchError(msg)
    lengths = {len(m) for m in maps}
    if len(lengths) != 1:
        msg = f"Channel distance buffers have mismatched lengths: {sorted(lengths)}"
        raise ChannelMismatchError(msg)

    stacked = np.stack([m.values for m in maps])
    if mode == "max":
        combined = stacked.max(axis=0)
    elif mode == "mean":
        combined = stacked.mean(axis=0)
    elif mode == "min":
        combined = stacked.min(axis=0)
    else:
        msg = f"Unknown combine mode: {mode}"
        raise UnsupportedModeError(msg)

    return DistanceMap.from_values(combined)
