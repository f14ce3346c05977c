"""
Unit tests for progress sinks.
"""

import io

import numpy as np
import pytest

from objsearch import Rectangle, TextProgress, TqdmProgress, compute_distances
from objsearch.progress import ChannelProgress, ProgressSink, create_progress


class TestTextProgress:
    """Test the carriage-return text format."""

    def test_scan_output_format(self):
        """Test the exact text written for a four-column scan."""
        stream = io.StringIO()

        compute_distances(np.zeros((6, 6)), np.ones((3, 3)), Rectangle.from_size(4, 2),
                          progress=TextProgress(stream))

        assert stream.getvalue() == (
            "\n"
            "\r25.00% complete"
            "\r50.00% complete"
            "\r75.00% complete"
            "\r100.00% complete"
            "\n"
        )

    def test_fractional_percent(self):
        """Test two-decimal formatting."""
        stream = io.StringIO()
        sink = TextProgress(stream)

        sink.update(100.0 / 3)

        assert stream.getvalue() == "\r33.33% complete"


class TestTqdmProgress:
    """Test the tqdm-backed sink."""

    def test_bar_lifecycle(self):
        """Test that the bar is created, advanced and closed."""
        sink = TqdmProgress(file=io.StringIO())

        sink.start()
        assert sink.bar is not None
        sink.update(50.0)
        assert sink.bar.n == 50.0
        sink.finish()

        assert sink.bar is None

    def test_update_before_start_ignored(self):
        """Test that updates without a bar are no-ops."""
        sink = TqdmProgress(file=io.StringIO())
        sink.update(10.0)
        assert sink.bar is None

    def test_is_progress_sink(self):
        """Test that both sinks satisfy the protocol."""
        assert isinstance(TqdmProgress(), ProgressSink)
        assert isinstance(TextProgress(io.StringIO()), ProgressSink)


class TestCreateProgress:
    """Test resolution of the progress argument."""

    def test_none_disables_progress(self):
        """Test that no sink means no progress."""
        assert create_progress(None) is None

    def test_stream_wrapped_in_text_progress(self):
        """Test that a writable stream becomes a TextProgress."""
        stream = io.StringIO()

        sink = create_progress(stream)

        assert isinstance(sink, TextProgress)
        assert sink.stream is stream

    def test_sink_passed_through(self):
        """Test that an existing sink is used as-is."""
        sink = TqdmProgress()
        assert create_progress(sink) is sink

    def test_rejects_other_objects(self):
        """Test that arbitrary objects are rejected."""
        with pytest.raises(TypeError):
            create_progress(42)  # type: ignore[arg-type]


class TestChannelProgress:
    """Test mapping of per-channel progress into the whole search."""

    def test_updates_scaled_into_channel_share(self):
        """Test that channel c of n covers [c/n, (c+1)/n] of the total."""
        stream = io.StringIO()
        total = TextProgress(stream)

        ChannelProgress(total, 1, 4).update(50.0)
        ChannelProgress(total, 3, 4).update(100.0)

        assert stream.getvalue() == "\r37.50% complete\r100.00% complete"

    def test_start_and_finish_left_to_owner(self):
        """Test that the wrapper never starts or finishes the wrapped sink."""
        stream = io.StringIO()
        sink = ChannelProgress(TextProgress(stream), 0, 3)

        sink.start()
        sink.finish()

        assert stream.getvalue() == ""
