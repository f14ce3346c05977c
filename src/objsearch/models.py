"""Pydantic models for type-safe data structures."""

from collections.abc import Iterator

import numpy as np
import numpy.typing as npt
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import SearchBoundsError


class Rectangle(BaseModel):
    """Axis-aligned integer rectangle with exclusive max corner.

    Attributes:
        min_x: Left edge (inclusive).
        min_y: Top edge (inclusive).
        max_x: Right edge (exclusive).
        max_y: Bottom edge (exclusive).
    """
    model_config = ConfigDict(frozen=True)

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @model_validator(mode="after")
    def check_corners(self) -> "Rectangle":
        if self.max_x < self.min_x or self.max_y < self.min_y:
            msg = (f"Rectangle corners out of order: ({self.min_x},{self.min_y})-"
                   f"({self.max_x},{self.max_y})")
            raise ValueError(msg)
        return self

    @classmethod
    def from_size(cls, width: int, height: int, x: int = 0, y: int = 0) -> "Rectangle":
        """Build a rectangle from its top-left corner and size."""
        return cls(min_x=x, min_y=y, max_x=x + width, max_y=y + height)

    @classmethod
    def valid_offsets(
        cls, field_shape: tuple[int, ...], object_shape: tuple[int, ...]
    ) -> "Rectangle":
        """Largest rectangle of top-left offsets keeping the object inside the field.

        Args:
            field_shape: Field array shape, (height, width, ...).
            object_shape: Object array shape, (height, width, ...).

        Returns:
            Rectangle anchored at (0, 0).

        Raises:
            SearchBoundsError: If the object is larger than the field.
        """
        field_h, field_w = field_shape[:2]
        object_h, object_w = object_shape[:2]
        if object_w > field_w or object_h > field_h:
            msg = (f"Object ({object_w}x{object_h}) is larger than "
                   f"field ({field_w}x{field_h})")
            raise SearchBoundsError(msg)
        return cls.from_size(field_w - object_w + 1, field_h - object_h + 1)

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def area(self) -> int:
        return self.width * self.height

    def is_empty(self) -> bool:
        return self.area == 0

    def contains(self, x: int, y: int) -> bool:
        """Whether (x, y) lies inside the rectangle."""
        return self.min_x <= x < self.max_x and self.min_y <= y < self.max_y

    def points(self) -> Iterator[tuple[int, int]]:
        """Iterate (x, y) pairs in row-major order."""
        for y in range(self.min_y, self.max_y):
            for x in range(self.min_x, self.max_x):
                yield x, y


class Hit(BaseModel):
    """A detected occurrence of the object in the field.

    Attributes:
        location: (x, y) of the object's top-left corner in the field.
        score: Normalized distance between 0.0 and 1.0 (lower is a better match).
    """
    model_config = ConfigDict(frozen=True)

    location: tuple[int, int]
    score: float = Field(ge=0.0, le=1.0)

    @property
    def x(self) -> int:
        return self.location[0]

    @property
    def y(self) -> int:
        return self.location[1]

    def distance(self, other: "Hit") -> int:
        """Larger of the x- and y-distances between two hits."""
        return max(abs(self.x - other.x), abs(self.y - other.y))


class DistanceMap(BaseModel):
    """L1 distances for every offset of a search rectangle.

    Attributes:
        values: Flat float64 array indexed by IndexMapper offsets.
        min_value: Smallest distance in values.
        max_value: Largest distance in values.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    values: np.ndarray
    min_value: float
    max_value: float

    @classmethod
    def from_values(cls, values: npt.NDArray[np.float64]) -> "DistanceMap":
        """Wrap a finished buffer, computing its extrema and freezing it."""
        values.setflags(write=False)
        return cls(values=values, min_value=float(values.min()),
                   max_value=float(values.max()))

    def __len__(self) -> int:
        return len(self.values)
