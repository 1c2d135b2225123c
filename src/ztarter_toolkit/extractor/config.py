"""
Module: extractor.config

Purpose:
    Configuration dataclass for directory ingestion.

Key Classes:
    - IngestConfig: Which directory entries count as level files

Dependencies:
    - dataclasses: For frozen dataclass support

Used By:
    - extractor.pipeline: ingest_directory()
"""

from dataclasses import dataclass

from ztarter_toolkit.core.models.identifier import DEFAULT_LEVEL_SUFFIX


@dataclass(frozen=True)
class IngestConfig:
    """
    Configuration for directory ingestion.

    Attributes:
        suffix: File extension of level files, including the dot.
            Matched case-sensitively (default ".lev").
        strict_identifiers: Reject file names longer than the identifier
            capacity instead of truncating them (default False).
    """
    suffix: str = DEFAULT_LEVEL_SUFFIX
    strict_identifiers: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.suffix.startswith(".") or len(self.suffix) < 2:
            raise ValueError(f"suffix must look like '.ext': {self.suffix!r}")
