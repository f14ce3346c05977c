#!/usr/bin/env python3
"""Brute-force L1 distance scan of an object over a field."""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor

import numba
import numpy as np
from numba import njit, prange

from .config import Backend
from .errors import SearchBoundsError, UnsupportedModeError
from .indexing import IndexMapper
from .models import DistanceMap, Rectangle
from .progress import ProgressSink

logger = logging.getLogger(__name__)

# numba parallel kernels must not be launched from several threads at once
_JIT_LOCK = threading.Lock()


def check_placement(field_shape: tuple[int, ...], object_shape: tuple[int, ...],
                    rect: Rectangle) -> None:
    """Verify that every offset in rect keeps the object inside the field.

    Args:
        field_shape: Field plane shape (height, width)
        object_shape: Object plane shape (height, width)
        rect: Candidate top-left offsets

    Raises:
        SearchBoundsError: If rect is empty or any placement leaves the field
    """
    if rect.is_empty():
        msg = f"Search rectangle has no area: {rect}"
        raise SearchBoundsError(msg)

    field_h, field_w = field_shape[:2]
    object_h, object_w = object_shape[:2]
    if (rect.min_x < 0 or rect.min_y < 0
            or rect.max_x - 1 + object_w > field_w
            or rect.max_y - 1 + object_h > field_h):
        msg = (f"Search rectangle ({rect.min_x},{rect.min_y})-({rect.max_x},{rect.max_y}) "
               f"places the {object_w}x{object_h} object outside the "
               f"{field_w}x{field_h} field")
        raise SearchBoundsError(msg)


def _sad_at(field: np.ndarray, obj: np.ndarray, u: int, v: int) -> float:
    """Sum of absolute differences between obj and the field patch at (u, v)."""
    h, w = obj.shape
    return float(np.abs(field[v:v + h, u:u + w] - obj).sum())


def _fill_offset(field: np.ndarray, obj: np.ndarray, u: int, v: int,
                 out: np.ndarray, i: int) -> None:
    out[i] = _sad_at(field, obj, u, v)


@njit(parallel=True, cache=True)
def _sad_column_jit(field, obj, u, v0, rows, out, base, stride):  # noqa: PLR0913
    """JIT-compiled L1 distances for one column of offsets.

    Args:
        field: Field plane (H, W)
        obj: Object plane (h, w)
        u: Column (x offset) being scanned
        v0: First row (y offset) of the column
        rows: Number of rows in the column
        out: Flat distance buffer
        base: Buffer index of (u, v0)
        stride: Buffer index step between consecutive rows
    """
    h, w = obj.shape
    for k in prange(rows):  # Parallel loop
        v = v0 + k
        total = 0.0
        for y in range(h):
            for x in range(w):
                total += abs(field[v + y, u + x] - obj[y, x])
        out[base + k * stride] = total


def _report(sink: ProgressSink | None, done: int, total: int) -> None:
    if sink is not None:
        sink.update(done / total * 100.0)


def _scan_threads(field: np.ndarray, obj: np.ndarray, mapper: IndexMapper,
                  out: np.ndarray, sink: ProgressSink | None, num_workers: int) -> None:
    rect = mapper.rect
    with ThreadPoolExecutor(max_workers=num_workers) as executor:
        for done, u in enumerate(range(rect.min_x, rect.max_x), start=1):
            # One task per row; each writes its own slot of out
            futures = [
                executor.submit(_fill_offset, field, obj, u, v, out, mapper.offset(u, v))
                for v in range(rect.min_y, rect.max_y)
            ]
            # Column barrier (re-raises worker errors)
            for future in futures:
                future.result()
            _report(sink, done, rect.width)


def _scan_numba(field: np.ndarray, obj: np.ndarray, mapper: IndexMapper,
                out: np.ndarray, sink: ProgressSink | None, num_workers: int) -> None:
    rect = mapper.rect
    numba.set_num_threads(min(num_workers, numba.config.NUMBA_NUM_THREADS))
    for done, u in enumerate(range(rect.min_x, rect.max_x), start=1):
        with _JIT_LOCK:
            _sad_column_jit(field, obj, u, rect.min_y, rect.height, out,
                            mapper.offset(u, rect.min_y), mapper.width)
        _report(sink, done, rect.width)


def compute_distances(  # noqa: PLR0913
    field_plane: np.ndarray,
    object_plane: np.ndarray,
    search_rect: Rectangle,
    progress: ProgressSink | None = None,
    num_workers: int | None = None,
    backend: Backend = "threads",
) -> DistanceMap:
    """Compute the L1 distance between object and field at every offset.

    The scan runs column by column over search_rect. Each column is
    computed in parallel and completes before the next one starts, at which
    point progress is reported.

    Args:
        field_plane: Normalized single-channel field (H, W)
        object_plane: Normalized single-channel object (h, w)
        search_rect: Top-left offsets to test
        progress: Optional sink receiving percent-complete updates
        num_workers: Parallel workers (None = CPU count)
        backend: "threads" for a thread pool, "numba" for the JIT kernel

    Returns:
        DistanceMap ordered by IndexMapper(search_rect)

    Raises:
        SearchBoundsError: If any placement leaves the field
        UnsupportedModeError: If backend is unknown
    """
    check_placement(field_plane.shape, object_plane.shape, search_rect)

    if backend == "threads":
        scan = _scan_threads
    elif backend == "numba":
        scan = _scan_numba
    else:
        msg = f"Unknown backend: {backend}"
        raise UnsupportedModeError(msg)

    workers = num_workers if num_workers is not None else (os.cpu_count() or 1)
    logger.debug(f"Scanning {search_rect.width}x{search_rect.height} offsets "
                 f"with {backend} backend ({workers} workers)")

    field = np.ascontiguousarray(field_plane, dtype=np.float64)
    obj = np.ascontiguousarray(object_plane, dtype=np.float64)
    mapper = IndexMapper(search_rect)
    out = np.zeros(len(mapper), dtype=np.float64)

    if progress is not None:
        progress.start()
    scan(field, obj, mapper, out, progress, workers)
    if progress is not None:
        progress.finish()

    return DistanceMap.from_values(out)
