"""
Core Models Package

Immutable data models shared by every stage of the toolkit.

All models in this package are frozen dataclasses, so they can be used
as dict keys or set members and are never mutated while a store is
being merged or sampled.
"""

from .identifier import Identifier, IDENTIFIER_CAPACITY
from .polygon import Vertex, Polygon, PolygonRecord
from .level import LevelShape, LevelGeometry, LevelFormat

__all__ = [
    "Identifier",
    "IDENTIFIER_CAPACITY",
    "Vertex",
    "Polygon",
    "PolygonRecord",
    "LevelShape",
    "LevelGeometry",
    "LevelFormat",
]
