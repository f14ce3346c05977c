"""Progress sinks for long-running distance scans."""

from __future__ import annotations

from typing import IO, Protocol, runtime_checkable

from tqdm import tqdm


@runtime_checkable
class ProgressSink(Protocol):
    """Protocol defining the interface for scan progress receivers."""

    def start(self) -> None:
        """Called once before the first column is scanned."""
        ...

    def update(self, percent: float) -> None:
        """Report completion so far.

        Args:
            percent: Completed share of the search rectangle, 0-100.
                Successive values never decrease and the last one is 100.
        """
        ...

    def finish(self) -> None:
        """Called once after the last column is scanned."""
        ...


class TextProgress:
    """Writes carriage-return percentage updates to a text stream."""

    def __init__(self, stream: IO[str]):
        """Initialize text progress.

        Args:
            stream: Writable text stream (e.g. sys.stderr)
        """
        self.stream = stream

    def start(self) -> None:
        self.stream.write("\n")

    def update(self, percent: float) -> None:
        self.stream.write(f"\r{percent:.2f}% complete")

    def finish(self) -> None:
        self.stream.write("\n")
        self.stream.flush()


class TqdmProgress:
    """Progress bar backed by tqdm, counting percent points."""

    def __init__(self, desc: str = "Scanning offsets", **tqdm_kwargs):
        """Initialize tqdm progress.

        Args:
            desc: Bar description
            **tqdm_kwargs: Extra keyword arguments passed to tqdm
        """
        self.desc = desc
        self.tqdm_kwargs = tqdm_kwargs
        self.bar: tqdm | None = None

    def start(self) -> None:
        self.bar = tqdm(total=100.0, desc=self.desc, unit="%", **self.tqdm_kwargs)

    def update(self, percent: float) -> None:
        if self.bar is None:
            return
        self.bar.n = percent
        self.bar.refresh()

    def finish(self) -> None:
        if self.bar is not None:
            self.bar.close()
            self.bar = None


class ChannelProgress:
    """Maps one channel's scan into its share of a multi-channel search.

    start() and finish() are left to the owner of the wrapped sink, so a
    search reports a single cycle however many channels it scans.
    """

    def __init__(self, sink: ProgressSink, channel: int, channels: int):
        """Initialize channel progress.

        Args:
            sink: Sink receiving the whole search's progress
            channel: Index of the channel being scanned
            channels: Number of channels in the search
        """
        self.sink = sink
        self.channel = channel
        self.channels = channels

    def start(self) -> None:
        pass

    def update(self, percent: float) -> None:
        self.sink.update((self.channel + percent / 100.0) / self.channels * 100.0)

    def finish(self) -> None:
        pass


def create_progress(progress: ProgressSink | IO[str] | None) -> ProgressSink | None:
    """Factory function to resolve the progress argument of a search.

    Args:
        progress: A ProgressSink, a writable text stream, or None

    Returns:
        Sink to report to, or None when progress is disabled

    Raises:
        TypeError: If progress is neither a sink nor writable
    """
    if progress is None:
        return None
    if isinstance(progress, ProgressSink):
        return progress
    if hasattr(progress, "write"):
        return TextProgress(progress)
    msg = f"Unsupported progress sink: {type(progress).__name__}"
    raise TypeError(msg)
