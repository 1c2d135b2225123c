"""
Module: builder.controller

Purpose:
    Orchestrate generation of a numbered batch of levels.
    Sort → Generate → Write (→ Preview) for each level.

Key Functions:
    - generate_levels(): Main entry point for a batch

Key Classes:
    - BatchResult: Paths and provenance of the written levels

Dependencies:
    - builder.assembler: generate()
    - builder.output: Level, sidecar and preview writing

Used By:
    - cli: --generate
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ztarter_toolkit.core.errors import EmptyStoreError
from ztarter_toolkit.core.models import Identifier, LevelFormat
from ztarter_toolkit.store.polygon_store import PolygonStore

from .assembler import generate
from .config import BatchConfig
from .output.preview import save_preview
from .output.writer import GeneratedLevelFiles, write_generated_level

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchResult:
    """
    Result of generating a batch (immutable).

    Attributes:
        files: Files written for each level, in generation order
        sources: Provenance of each level, in generation order
        previews: Preview images written (empty unless enabled)
        seconds: Wall-clock time spent
    """
    files: tuple[GeneratedLevelFiles, ...]
    sources: tuple[tuple[Identifier, ...], ...]
    previews: tuple[Path, ...] = ()
    seconds: float = 0.0

    @property
    def level_paths(self) -> list[Path]:
        return [f.level_path for f in self.files]


def generate_levels(
    store: PolygonStore,
    level_format: LevelFormat,
    config: BatchConfig,
    *,
    rng: Optional[random.Random] = None,
) -> BatchResult:
    """
    Generate and write a batch of numbered levels.

    The store is sorted by area first (if it is not already), so the
    anchor polygon of each level is biased toward large shapes.

    Args:
        store: Working store to sample from
        level_format: Codec used to write levels
        config: Batch configuration
        rng: Random source (default: random.Random(config.seed))

    Returns:
        BatchResult describing the written levels

    Raises:
        EmptyStoreError: If the store has no records
        LevelWriteError: If a level or its sidecar fails to write

    Example:
        >>> config = BatchConfig(output_dir=Path("out"), level_name="abc", amount=3)
        >>> result = generate_levels(store, level_format, config)
        >>> [p.name for p in result.level_paths]
        ['abc00001.lev', 'abc00002.lev', 'abc00003.lev']
    """
    if store.is_empty:
        raise EmptyStoreError("There are no polygons in the store. Skipping level generation.")

    start_time = time.perf_counter()
    rng = rng if rng is not None else random.Random(config.seed)

    if not store.is_sorted_by_area:
        logger.info("Sorting the store by polygon area.")
        store.sort_by_area()

    if config.amount:
        logger.info(f"Generating {config.amount} levels in {config.output_dir}:")
        config.output_dir.mkdir(parents=True, exist_ok=True)

    files = []
    sources = []
    previews = []

    for i in range(config.amount):
        destination = config.output_dir / config.file_name(i).as_text()
        level = generate(store, rng, config=config.assembly)
        files.append(write_generated_level(level, destination, level_format))
        sources.append(level.sources)
        if config.write_previews:
            previews.append(save_preview(level, destination.with_name(destination.name + ".png")))

    elapsed = time.perf_counter() - start_time
    logger.debug(f"Generated {len(files)} levels in {elapsed:.2f}s")

    return BatchResult(tuple(files), tuple(sources), tuple(previews), elapsed)
