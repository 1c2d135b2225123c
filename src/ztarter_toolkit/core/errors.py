"""
Module: core.errors

Purpose:
    Exception hierarchy for the toolkit. Every error raised on purpose by
    the library derives from ZtarterError so callers can catch the family
    in one place.

Key Classes:
    - ZtarterError: Base class
    - IdentifierOverflowError: Strict identifier exceeded capacity
    - LevelLoadError / LevelSaveError: Raised by level format codecs
    - StoreIOError: Filesystem failure while reading or writing a store
    - CorruptStoreError: Persisted store could not be decoded
    - EmptyStoreError: Generation requested against a store with no polygons
    - LevelWriteError: Generated level or its sidecar failed to write

Used By:
    - All subpackages
"""


class ZtarterError(Exception):
    """Base class for toolkit errors."""
    pass


class IdentifierOverflowError(ZtarterError, ValueError):
    """Identifier text exceeds the fixed byte capacity (strict mode only)."""
    pass


class LevelLoadError(ZtarterError):
    """Level format could not parse a level file."""
    pass


class LevelSaveError(ZtarterError):
    """Level format could not write a level file."""
    pass


class StoreIOError(ZtarterError):
    """Filesystem error while reading, writing or scanning for a store."""
    pass


class CorruptStoreError(ZtarterError):
    """Persisted store blob does not decode into a valid store."""
    pass


class EmptyStoreError(ZtarterError):
    """Level generation requested against a store with no polygon records."""
    pass


class LevelWriteError(ZtarterError):
    """A generated level or its metadata sidecar failed to write."""
    pass
