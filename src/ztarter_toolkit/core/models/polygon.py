"""
Module: polygon

Purpose:
    Provides the Vertex, Polygon and PolygonRecord dataclasses. A Polygon
    is a normalized boundary shape (minimum x and y moved to 0) that
    remembers the bounding-box size of its original coordinates.

Key Functions:
    - Polygon.from_points(points): Capture bounds, then normalize
    - Polygon.translated(dx, dy): Offset copy used during assembly
    - Polygon.area: width * height, the store's sort key

Dependencies:
    - numpy: Bounding-box reduction over vertex arrays
    - dataclasses (std)

Used By:
    - extractor.polygons
    - store.polygon_store, store.persistence
    - builder.assembler, builder.output.preview
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple, Union

import numpy as np

from .identifier import Identifier

PointLike = Union["Vertex", Tuple[float, float], Sequence[float]]


@dataclass(frozen=True, slots=True)
class Vertex:
    """A 2D point in level coordinates."""

    x: float
    y: float

    def translated(self, dx: float, dy: float) -> Vertex:
        """Return this vertex offset by (dx, dy)."""
        return Vertex(self.x + dx, self.y + dy)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


def _as_array(points: Iterable[PointLike]) -> np.ndarray:
    """Convert vertices or (x, y) pairs to an (N, 2) float64 array."""
    rows = [p.as_tuple() if isinstance(p, Vertex) else (p[0], p[1]) for p in points]
    return np.asarray(rows, dtype=np.float64).reshape(-1, 2)


def _to_vertices(array: np.ndarray) -> tuple[Vertex, ...]:
    return tuple(Vertex(float(x), float(y)) for x, y in array)


@dataclass(frozen=True, slots=True)
class Polygon:
    """
    Normalized polygon with cached original bounding-box size (immutable).

    Vertex order defines the boundary and is preserved. `width` and
    `height` always describe the bounding box of the coordinates the
    polygon was built from, so translating or normalizing never
    changes them.

    Attributes:
        vertices: Boundary vertices in order
        width: Bounding-box width of the original coordinates
        height: Bounding-box height of the original coordinates

    Invariants:
        - width >= 0 and height >= 0
        - Built via from_points: min x == 0.0 and min y == 0.0

    Example:
        >>> p = Polygon.from_points([(10, 5), (14, 5), (14, 8)])
        >>> (p.width, p.height)
        (4.0, 3.0)
        >>> p.vertices[0]
        Vertex(x=0.0, y=0.0)
    """

    vertices: tuple[Vertex, ...]
    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate polygon on construction."""
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Polygon size must be non-negative: {self.width} x {self.height}"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_points(cls, points: Iterable[PointLike]) -> Polygon:
        """
        Build a normalized polygon from raw level coordinates.

        The bounding box is measured first, then every vertex is shifted
        so the minimum x and y become 0.

        Args:
            points: Vertices or (x, y) pairs in boundary order

        Returns:
            Normalized Polygon

        Raises:
            ValueError: If points is empty
        """
        array = _as_array(points)
        if len(array) == 0:
            raise ValueError("Polygon needs at least one vertex")

        lower = array.min(axis=0)
        upper = array.max(axis=0)
        width, height = (float(v) for v in upper - lower)

        return cls(_to_vertices(array - lower), width, height)

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def area(self) -> float:
        """Bounding-box area (width * height)."""
        return self.width * self.height

    def __len__(self) -> int:
        return len(self.vertices)

    # ─────────────────────────────────────────────────────────────────────────
    # Transformations
    # ─────────────────────────────────────────────────────────────────────────

    def translated(self, dx: float, dy: float) -> Polygon:
        """
        Return a copy offset by (dx, dy).

        Width and height are carried over unchanged.

        Args:
            dx: Horizontal offset
            dy: Vertical offset

        Returns:
            New Polygon; self is not modified
        """
        return Polygon(
            tuple(v.translated(dx, dy) for v in self.vertices),
            self.width,
            self.height,
        )

    def as_array(self) -> np.ndarray:
        """Vertices as an (N, 2) float64 array."""
        return _as_array(self.vertices)


@dataclass(frozen=True, slots=True)
class PolygonRecord:
    """
    A polygon tagged with the level it came from.

    Attributes:
        source: Identifier of the originating level file
        polygon: The normalized polygon
    """

    source: Identifier
    polygon: Polygon

    @property
    def area(self) -> float:
        return self.polygon.area
