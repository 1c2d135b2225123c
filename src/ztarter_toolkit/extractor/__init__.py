"""
Module: extractor

Purpose:
    Polygon extraction from parsed levels and best-effort ingestion of a
    directory of level files into a PolygonStore.

Key Functions:
    - extract(): Normalized polygons of one level
    - extract_records(): Source-tagged polygons of one level
    - ingest_directory(): Build a store from a directory

Key Classes:
    - IngestConfig: Ingestion settings
    - IngestResult: Store + failed identifiers
    - IngestProgress: Running counters for progress reporting
"""

from .config import IngestConfig
from .polygons import extract, extract_records
from .pipeline import ingest_directory, discover_levels, IngestResult, IngestProgress

__all__ = [
    "IngestConfig",
    "extract",
    "extract_records",
    "ingest_directory",
    "discover_levels",
    "IngestResult",
    "IngestProgress",
]
