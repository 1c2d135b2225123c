"""
Module: extractor.pipeline

Purpose:
    Build a PolygonStore from a directory of level files. Each level is
    loaded through the injected LevelFormat, its polygons extracted and
    appended to the store. Ingestion is best-effort: a level the codec
    rejects is recorded as failed, a file whose name does not fit an
    Identifier in strict mode is skipped, and the scan continues.

Key Functions:
    - ingest_directory(): Main entry point
    - discover_levels(): Find level files in a directory

Key Classes:
    - IngestResult: Store + failed identifiers
    - IngestProgress: Running counters passed to the progress callback

Dependencies:
    - core.models: LevelFormat, Identifier
    - extractor.polygons: extract_records()
    - store.polygon_store: PolygonStore

Used By:
    - cli: --from-directory
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from ztarter_toolkit.core.errors import IdentifierOverflowError, LevelLoadError, StoreIOError
from ztarter_toolkit.core.models import Identifier, LevelFormat
from ztarter_toolkit.store.polygon_store import PolygonStore

from .config import IngestConfig
from .polygons import extract_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestProgress:
    """
    Running counters after each processed level file.

    Attributes:
        loaded: Level files loaded successfully so far
        failed: Level files the codec rejected so far
        polygons: Polygon records in the store so far
    """
    loaded: int
    failed: int
    polygons: int


ProgressCallback = Callable[[IngestProgress], None]


@dataclass(frozen=True)
class IngestResult:
    """
    Result of ingesting a directory (immutable).

    Attributes:
        store: Store built from the loaded levels
        failed: Identifiers of level files that failed to load, in scan order
        loaded: Number of level files that loaded successfully
        skipped: Names of level files whose name is too long for an
            Identifier (strict mode only), in scan order
    """
    store: PolygonStore
    failed: List[Identifier]
    loaded: int = 0
    skipped: List[str] = field(default_factory=list)


def _no_progress(progress: IngestProgress) -> None:
    pass


def discover_levels(directory: Path, suffix: str) -> List[Path]:
    """
    Find level files directly inside a directory.

    Args:
        directory: Directory to scan (not recursive)
        suffix: Level file extension, matched case-sensitively

    Returns:
        Matching regular files sorted by name

    Raises:
        StoreIOError: If the directory cannot be listed
    """
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        raise StoreIOError(f"Failed to list {directory}: {e}") from e
    return [p for p in entries if p.suffix == suffix and p.is_file()]


def ingest_directory(
    directory: Path,
    level_format: LevelFormat,
    *,
    config: Optional[IngestConfig] = None,
    progress: Optional[ProgressCallback] = None,
) -> IngestResult:
    """
    Load every level file in a directory into a new store.

    Pipeline, per level file:
    1. Load geometry through `level_format`
    2. Extract normalized non-grass polygons
    3. Tag them with the file's Identifier and append to the store
    4. Mark the Identifier as ingested

    A level the codec rejects is added to `failed`, its Identifier is
    still marked as ingested, and the scan moves on. With
    `config.strict_identifiers`, a file whose name exceeds the Identifier
    capacity is logged, added to `skipped` and never loaded.

    Args:
        directory: Directory containing level files
        level_format: Codec used to parse each level
        config: Optional ingestion configuration
        progress: Called with running counters after each level file

    Returns:
        IngestResult with the store, failed identifiers and skipped names

    Raises:
        StoreIOError: If the directory cannot be listed
    """
    config = config or IngestConfig()
    progress = progress or _no_progress
    directory = Path(directory)

    store = PolygonStore()
    failed: List[Identifier] = []
    skipped: List[str] = []
    loaded = 0

    logger.info(f"Loading all levels from {directory}")

    for path in discover_levels(directory, config.suffix):
        try:
            source = Identifier.from_text(path.name, strict=config.strict_identifiers)
        except IdentifierOverflowError as e:
            logger.warning(f"Skipping {path.name}: {e}")
            skipped.append(path.name)
            continue

        try:
            geometry = level_format.load(path)
        except (LevelLoadError, OSError) as e:
            logger.warning(f"Failed to load {path.name}: {e}")
            failed.append(source)
            store.add_source(source, [])
        else:
            count = store.add_source(source, extract_records(geometry, source))
            loaded += 1
            logger.debug(f"Loaded {path.name}: {count} polygons")
        progress(IngestProgress(loaded, len(failed), len(store)))

    logger.info(
        f"Loaded {loaded} levels ({len(failed)} failed), {len(store)} polygons"
    )
    if failed:
        logger.warning(f"Corrupt levels: {', '.join(str(f) for f in failed)}")
    if skipped:
        logger.warning(f"Skipped levels with over-long names: {', '.join(skipped)}")

    return IngestResult(store, failed, loaded, skipped)
