"""
Module: level

Purpose:
    Boundary types between the toolkit and the game's level file codec.
    The toolkit never parses the native level format itself; a LevelFormat
    implementation is injected wherever levels are read or written.

Key Classes:
    - LevelShape: One boundary shape of a level (vertices + grass flag)
    - LevelGeometry: Ordered shapes of a level
    - LevelFormat: Protocol for codecs (load/save)

Dependencies:
    - dataclasses (std)
    - typing (std)

Used By:
    - extractor.polygons, extractor.pipeline
    - builder.assembler, builder.output.writer
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from .polygon import Polygon, Vertex


@dataclass(frozen=True, slots=True)
class LevelShape:
    """
    A boundary shape as stored in a level file.

    Attributes:
        vertices: Boundary vertices in file order
        is_grass: True for terrain/ground shapes, which extraction drops
    """

    vertices: tuple[Vertex, ...]
    is_grass: bool = False

    @classmethod
    def from_polygon(cls, polygon: Polygon) -> LevelShape:
        return cls(polygon.vertices, is_grass=False)


@dataclass(frozen=True, slots=True)
class LevelGeometry:
    """Ordered boundary shapes of one level."""

    shapes: tuple[LevelShape, ...] = ()

    def __len__(self) -> int:
        return len(self.shapes)


@runtime_checkable
class LevelFormat(Protocol):
    """
    Level file codec.

    Implementations raise LevelLoadError / LevelSaveError (from
    ztarter_toolkit.core.errors) when a file cannot be parsed or written.
    OSError raised by an implementation is treated the same way.
    """

    def load(self, path: Path) -> LevelGeometry:
        ...

    def save(self, path: Path, geometry: LevelGeometry) -> None:
        ...
