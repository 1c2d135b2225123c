"""
Module: builder.assembler

Purpose:
    Assemble a new level from polygons sampled out of a PolygonStore.
    A size-biased anchor polygon is placed first, followed by a random
    number of further polygons laid out left to right with no gap.

Key Functions:
    - generate(): Main entry point for assembling one level

Key Classes:
    - GeneratedLevel: Composed geometry + provenance

Algorithm:
    1. Draw the polygon count (normal, mean 7, std 4, at least 1)
    2. Draw the anchor index near the large end of the area order
       (mean 5/6 of the store, std 1/6)
    3. Place the anchor at x = 0; the cursor advances by its width
    4. Draw every other index around the middle (mean 1/2, std 1/6),
       place it at the cursor and advance by its width
    5. Return geometry and the source of each placed polygon

Dependencies:
    - random (std): Injected random.Random
    - builder.sampling: Count and index draws
    - store.polygon_store: PolygonStore

Used By:
    - builder.controller: generate_levels()
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from ztarter_toolkit.core.errors import EmptyStoreError
from ztarter_toolkit.core.models import (
    Identifier,
    LevelGeometry,
    LevelShape,
    Polygon,
)
from ztarter_toolkit.store.polygon_store import PolygonStore

from .config import AssemblyConfig
from .sampling import draw_index, draw_polygon_count

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedLevel:
    """
    A freshly assembled level (immutable).

    Attributes:
        polygons: Placed polygons, already translated into position
        sources: Source identifier of each placed polygon, in placement order
        offsets: X-translation applied to each placed polygon

    Invariants:
        - len(polygons) == len(sources) == len(offsets) >= 1
        - offsets[0] == 0 and offsets[i] == sum of widths of polygons[:i]
    """

    polygons: tuple[Polygon, ...]
    sources: tuple[Identifier, ...]
    offsets: tuple[float, ...]

    @property
    def geometry(self) -> LevelGeometry:
        """Level geometry handed to the level format for writing."""
        return LevelGeometry(tuple(LevelShape.from_polygon(p) for p in self.polygons))

    @property
    def total_width(self) -> float:
        """Horizontal extent of the laid out polygons."""
        return self.offsets[-1] + self.polygons[-1].width

    def source_names(self) -> List[str]:
        """Source identifiers as text, in placement order."""
        return [s.as_text() for s in self.sources]

    def __len__(self) -> int:
        return len(self.polygons)


def generate(
    store: PolygonStore,
    rng: Optional[random.Random] = None,
    *,
    config: Optional[AssemblyConfig] = None,
) -> GeneratedLevel:
    """
    Assemble one level from a store.

    Indices refer to the store's records in ascending area order, so the
    anchor is biased toward large polygons. An unsorted store is read
    through a sorted view; the store itself is not modified.

    Args:
        store: Store to sample from
        rng: Random source (default: random.Random(config.seed))
        config: Sampling parameters

    Returns:
        GeneratedLevel with at least one polygon

    Raises:
        EmptyStoreError: If the store has no records

    Example:
        >>> level = generate(store, random.Random(42))
        >>> len(level.sources) == len(level.polygons)
        True
    """
    if store.is_empty:
        raise EmptyStoreError("There are no polygons in the store")

    config = config or AssemblyConfig()
    rng = rng if rng is not None else random.Random(config.seed)

    records = store.area_ordered()
    size = len(records)
    spread = config.spread(size)

    count = draw_polygon_count(rng, config.count_mean, config.count_std)

    polygons: List[Polygon] = []
    sources: List[Identifier] = []
    offsets: List[float] = []
    x = 0.0

    for i in range(count):
        mean = config.anchor_mean(size) if i == 0 else config.body_mean(size)
        index = draw_index(rng, size, mean, spread, max_draws=config.max_draws)
        record = records[index]

        polygons.append(record.polygon.translated(x, 0.0))
        sources.append(record.source)
        offsets.append(x)
        x += record.polygon.width

    logger.debug(f"Assembled level from {count} polygons, width {x:.2f}")
    return GeneratedLevel(tuple(polygons), tuple(sources), tuple(offsets))
