"""Mapping between search-rectangle coordinates and flat buffer indices."""

from .models import Rectangle


class IndexMapper:
    """Row-major index mapping over a search rectangle.

    ``offset`` and ``coords`` are exact inverses for every point inside the
    rectangle. Points outside it are not checked.
    """

    def __init__(self, rect: Rectangle):
        """Initialize mapper.

        Args:
            rect: Search rectangle whose top-left corner maps to index 0
        """
        self.rect = rect
        self.width = rect.width

    def __len__(self) -> int:
        return self.rect.area

    def offset(self, x: int, y: int) -> int:
        """Buffer index of (x, y)."""
        return (x - self.rect.min_x) + self.width * (y - self.rect.min_y)

    def coords(self, i: int) -> tuple[int, int]:
        """(x, y) of buffer index i."""
        return self.rect.min_x + i % self.width, self.rect.min_y + i // self.width
