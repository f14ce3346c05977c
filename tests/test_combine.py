"""
Unit tests for per-channel distance combination.
"""

import numpy as np
import pytest

from objsearch import (
    ChannelMismatchError,
    DistanceMap,
    UnsupportedModeError,
    combine_distances,
)


def make_map(values: list[float]) -> DistanceMap:
    """Create a DistanceMap from plain values."""
    return DistanceMap.from_values(np.array(values, dtype=np.float64))


class TestCombineDistances:
    """Test combine modes and extrema tracking."""

    def test_max_takes_worst_channel(self):
        """Test that max-combine keeps the largest distance per index."""
        combined = combine_distances([make_map([0.0, 3.0, 1.0]), make_map([2.0, 1.0, 1.0])])

        np.testing.assert_array_equal(combined.values, [2.0, 3.0, 1.0])

    def test_extrema_recomputed_from_combined(self):
        """Test that min/max come from the combined buffer, not the channels."""
        combined = combine_distances(
            [make_map([0.0, 3.0, 1.0]), make_map([2.0, 1.0, 1.0])], mode="max"
        )

        # the channel minimum 0.0 does not survive max-combine
        assert combined.min_value == 1.0
        assert combined.max_value == 3.0

    def test_single_channel_passthrough(self):
        """Test that one channel combines to itself."""
        source = make_map([4.0, 2.0, 9.0])

        combined = combine_distances([source])

        np.testing.assert_array_equal(combined.values, source.values)
        assert (combined.min_value, combined.max_value) == (2.0, 9.0)

    def test_mean_mode(self):
        """Test per-index mean."""
        combined = combine_distances(
            [make_map([0.0, 4.0]), make_map([2.0, 0.0]), make_map([4.0, 2.0])], mode="mean"
        )

        np.testing.assert_allclose(combined.values, [2.0, 2.0])
        assert combined.min_value == pytest.approx(2.0)
        assert combined.max_value == pytest.approx(2.0)

    def test_min_mode(self):
        """Test per-index minimum with recomputed extrema."""
        combined = combine_distances(
            [make_map([5.0, 1.0, 8.0]), make_map([3.0, 6.0, 7.0])], mode="min"
        )

        np.testing.assert_array_equal(combined.values, [3.0, 1.0, 7.0])
        assert (combined.min_value, combined.max_value) == (1.0, 7.0)

    def test_mismatched_lengths(self):
        """Test that channels of different lengths are rejected."""
        with pytest.raises(ChannelMismatchError):
            combine_distances([make_map([1.0, 2.0]), make_map([1.0, 2.0, 3.0])])

    def test_no_channels(self):
        """Test that an empty channel list is rejected."""
        with pytest.raises(ChannelMismatchError):
            combine_distances([])

    def test_unknown_mode(self):
        """Test that an unknown combine mode is rejected."""
        with pytest.raises(UnsupportedModeError):
            combine_distances([make_map([1.0])], mode="median")  # type: ignore[arg-type]

    def test_inputs_untouched(self):
        """Test that combining does not modify the channel buffers."""
        a = make_map([1.0, 5.0])
        b = make_map([3.0, 2.0])

        combine_distances([a, b])

        np.testing.assert_array_equal(a.values, [1.0, 5.0])
        np.testing.assert_array_equal(b.values, [3.0, 2.0])
