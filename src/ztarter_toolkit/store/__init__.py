"""
Module: store

Purpose:
    Deduplicated polygon store: merge semantics, area ordering and the
    binary snapshot format used to carry a store between sessions.

Key Functions:
    - save_store(), load_store(), load_stores(): Snapshot files
    - encode_store(), decode_store(): Snapshot bytes

Key Classes:
    - PolygonStore: Record collection + ingested source set
    - MergeReport: Outcome of a merge
"""

from .polygon_store import PolygonStore, MergeReport
from .persistence import (
    encode_store,
    decode_store,
    save_store,
    load_store,
    load_stores,
)

__all__ = [
    "PolygonStore",
    "MergeReport",
    "encode_store",
    "decode_store",
    "save_store",
    "load_store",
    "load_stores",
]
