"""
Module: extractor.polygons

Purpose:
    Turn one parsed level into normalized, source-tagged polygons.
    Grass (terrain) shapes are dropped; every other shape becomes a
    Polygon whose bounds are measured before normalization.

Key Functions:
    - extract(): LevelGeometry -> list of Polygon
    - extract_records(): LevelGeometry + source -> list of PolygonRecord

Used By:
    - extractor.pipeline: Directory ingestion
"""

from __future__ import annotations

import logging
from typing import List

from ztarter_toolkit.core.models import (
    Identifier,
    LevelGeometry,
    Polygon,
    PolygonRecord,
)

logger = logging.getLogger(__name__)


def extract(geometry: LevelGeometry) -> List[Polygon]:
    """
    Extract normalized polygons from a level.

    Args:
        geometry: Parsed level

    Returns:
        One Polygon per non-grass shape, in level order. Empty when the
        level has no eligible shapes.
    """
    polygons: List[Polygon] = []
    for index, shape in enumerate(geometry.shapes):
        if shape.is_grass:
            continue
        if not shape.vertices:
            logger.debug(f"Skipping shape {index}: no vertices")
            continue
        polygons.append(Polygon.from_points(shape.vertices))
    return polygons


def extract_records(geometry: LevelGeometry, source: Identifier) -> List[PolygonRecord]:
    """Extract polygons and tag each with `source`."""
    return [PolygonRecord(source, polygon) for polygon in extract(geometry)]
