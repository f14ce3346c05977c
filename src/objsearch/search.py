#!/usr/bin/env python3
"""Object search entry points."""

from __future__ import annotations

import logging
from typing import IO, Any

import numpy.typing as npt

from .channels import check_color_image, extract_planes
from .combine import combine_distances
from .config import Backend, ColorMode, CombineMode, SearchConfig
from .distance import check_placement, compute_distances
from .hits import find_hits
from .indexing import IndexMapper
from .models import Hit, Rectangle
from .progress import ChannelProgress, ProgressSink, create_progress

logger = logging.getLogger(__name__)


class ObjectSearcher:
    """Finds occurrences of an object image inside a field image."""

    def __init__(self, cfg: SearchConfig | None = None):
        """Initialize searcher.

        Args:
            cfg: Search configuration (defaults to SearchConfig())

        Raises:
            ObjectSearchError: If the configuration is invalid
        """
        self.cfg = cfg if cfg is not None else SearchConfig()
        self.cfg.validate()

    def search(
        self,
        field: npt.NDArray[Any],
        obj: npt.NDArray[Any],
        search_rect: Rectangle | None = None,
        progress: ProgressSink | IO[str] | None = None,
    ) -> list[Hit]:
        """Search field for obj.

        Hits are at the top-left corner of the detected object, score below
        the configured tolerance, and lie at least min_separation pixels
        (Chebyshev) from each other.

        Args:
            field: Image to scan (H x W x C, C >= 3)
            obj: Reference image (h x w x C, C >= 3)
            search_rect: Top-left offsets to test (None = every valid offset)
            progress: ProgressSink, writable text stream, or None

        Returns:
            Hits sorted by ascending score

        Raises:
            ObjectSearchError: If the inputs cannot be searched
        """
        cfg = self.cfg
        check_color_image(field, "field")
        check_color_image(obj, "object")
        if search_rect is None:
            search_rect = Rectangle.valid_offsets(field.shape, obj.shape)
        check_placement(field.shape, obj.shape, search_rect)

        logger.info(f"Searching {obj.shape[1]}x{obj.shape[0]} object over "
                    f"{search_rect.width}x{search_rect.height} offsets "
                    f"(color={cfg.color_mode}, combine={cfg.combine_mode})")

        planes = extract_planes(field, obj, cfg.color_mode)
        sink = create_progress(progress)

        # per-channel field-object distances, in channel order
        if sink is not None:
            sink.start()
        channel_maps = []
        for c, (field_plane, object_plane) in enumerate(planes):
            channel_sink = ChannelProgress(sink, c, len(planes)) if sink is not None else None
            channel_maps.append(
                compute_distances(field_plane, object_plane, search_rect,
                                  progress=channel_sink, num_workers=cfg.num_workers,
                                  backend=cfg.backend)
            )
        if sink is not None:
            sink.finish()

        combined = combine_distances(channel_maps, cfg.combine_mode)

        hits = find_hits(
            combined.values,
            combined.min_value,
            combined.max_value,
            cfg.tolerance,
            cfg.min_separation,
            IndexMapper(search_rect),
        )
        logger.info(f"Found {len(hits)} hits below tolerance {cfg.tolerance}")
        return hits


def search(  # noqa: PLR0913
    field: npt.NDArray[Any],
    obj: npt.NDArray[Any],
    search_rect: Rectangle | None = None,
    tolerance: float = 0.2,
    min_separation: int = 10,
    progress: ProgressSink | IO[str] | None = None,
    color_mode: ColorMode = "gray",
    combine_mode: CombineMode = "max",
    num_workers: int | None = None,
    backend: Backend = "threads",
) -> list[Hit]:
    """Return hits for occurrences of obj in field.

    Convenience wrapper building a SearchConfig and running ObjectSearcher.

    Args:
        field: Image to scan (H x W x C, C >= 3)
        obj: Reference image (h x w x C, C >= 3)
        search_rect: Top-left offsets to test (None = every valid offset)
        tolerance: Exclusive upper bound on normalized score, in (0, 1]
        min_separation: Chebyshev radius below which hits merge
        progress: ProgressSink, writable text stream, or None
        color_mode: Channel extraction mode
        combine_mode: Per-channel combination mode
        num_workers: Parallel workers (None = CPU count)
        backend: Distance scan backend

    Returns:
        Hits sorted by ascending score
    """
    cfg = SearchConfig(
        tolerance=tolerance,
        min_separation=min_separation,
        color_mode=color_mode,
        combine_mode=combine_mode,
        backend=backend,
        num_workers=num_workers,
    )
    return ObjectSearcher(cfg).search(field, obj, search_rect, progress)
