#!/usr/bin/env python3
"""Configuration dataclasses for objsearch package."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args

from .errors import ObjectSearchError, UnsupportedModeError

# Type aliases
ColorMode = Literal["gray", "rgb"]
CombineMode = Literal["max", "mean", "min"]
Backend = Literal["threads", "numba"]


@dataclass
class SearchConfig:
    """Parameters shared by every offset of one object search."""

    # Acceptance Settings
    tolerance: float = 0.2  # Exclusive upper bound on normalized score
    min_separation: int = 10  # Chebyshev radius below which hits merge

    # Channel Settings
    color_mode: ColorMode = "gray"
    combine_mode: CombineMode = "max"

    # Execution Settings
    backend: Backend = "threads"
    num_workers: int | None = None  # None = os.cpu_count()

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ObjectSearchError: If a numeric parameter is out of range.
            UnsupportedModeError: If a mode selector is unknown.
        """
        if not 0.0 < self.tolerance <= 1.0:
            msg = f"tolerance must be in (0,1], got {self.tolerance}"
            raise ObjectSearchError(msg)
        if self.min_separation < 0:
            msg = f"min_separation must be >= 0, got {self.min_separation}"
            raise ObjectSearchError(msg)
        if self.num_workers is not None and self.num_workers < 1:
            msg = f"num_workers must be positive, got {self.num_workers}"
            raise ObjectSearchError(msg)
        if self.color_mode not in get_args(ColorMode):
            msg = f"Unknown color mode: {self.color_mode}"
            raise UnsupportedModeError(msg)
        if self.combine_mode not in get_args(CombineMode):
            msg = f"Unknown combine mode: {self.combine_mode}"
            raise UnsupportedModeError(msg)
        if self.backend not in get_args(Backend):
            msg = f"Unknown backend: {self.backend}"
            raise UnsupportedModeError(msg)
