"""Hit extraction with tolerance filtering and non-maximum suppression."""

import numpy as np

from .errors import DegenerateDistanceError
from .indexing import IndexMapper
from .models import Hit


def find_hits(  # noqa: PLR0913
    distances: np.ndarray,
    min_value: float,
    max_value: float,
    tolerance: float,
    min_separation: int,
    mapper: IndexMapper,
) -> list[Hit]:
    """Turn a distance buffer into a ranked list of de-duplicated hits.

    Distances equal to min_value score 0 and distances equal to max_value
    score 1. Offsets scoring strictly below tolerance become candidates.
    Candidates are visited in buffer order; a candidate closer than
    min_separation (Chebyshev) to an accepted hit replaces it if its score
    is better and is dropped otherwise.

    Args:
        distances: Flat distance buffer, indexed by mapper
        min_value: Distance mapped to score 0
        max_value: Distance mapped to score 1
        tolerance: Exclusive upper bound on accepted scores
        min_separation: Merge radius; <= 0 disables merging
        mapper: Index mapping of the search rectangle

    Returns:
        Hits sorted by ascending score, discovery order breaking ties

    Raises:
        DegenerateDistanceError: If max_value <= min_value
    """
    if max_value <= min_value:
        msg = f"Cannot normalize distances: max ({max_value}) <= min ({min_value})"
        raise DegenerateDistanceError(msg)

    scores = (distances - min_value) / (max_value - min_value)

    hits: list[Hit] = []
    for i in np.flatnonzero(scores < tolerance):
        candidate = Hit(location=mapper.coords(int(i)), score=float(scores[i]))
        for j, accepted in enumerate(hits):
            if candidate.distance(accepted) < min_separation:
                # Same detection; keep the better score
                if candidate.score < accepted.score:
                    hits[j] = candidate
                break
        else:
            hits.append(candidate)

    # sorted() is stable
    return sorted(hits, key=lambda h: h.score)
