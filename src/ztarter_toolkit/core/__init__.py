"""
Core Package

Data models shared by extraction, the polygon store and the level builder,
plus the exception hierarchy used across the toolkit.
"""

from .errors import (
    ZtarterError,
    IdentifierOverflowError,
    LevelLoadError,
    LevelSaveError,
    StoreIOError,
    CorruptStoreError,
    EmptyStoreError,
    LevelWriteError,
)

__all__ = [
    "ZtarterError",
    "IdentifierOverflowError",
    "LevelLoadError",
    "LevelSaveError",
    "StoreIOError",
    "CorruptStoreError",
    "EmptyStoreError",
    "LevelWriteError",
]
