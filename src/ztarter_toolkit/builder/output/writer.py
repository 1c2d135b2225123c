"""
Module: builder.output.writer

Purpose:
    Write a generated level through the level format and its provenance
    sidecar (<level>.meta.json) beside it.

Key Functions:
    - write_generated_level(): Main entry point
    - metadata_path(): Sidecar path for a level path

Key Classes:
    - GeneratedLevelFiles: Paths written for one level

Dependencies:
    - core.utils.files: Atomic JSON writes

Used By:
    - builder.controller: generate_levels()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ztarter_toolkit.core.errors import LevelSaveError, LevelWriteError
from ztarter_toolkit.core.models import LevelFormat
from ztarter_toolkit.core.utils import atomic_write_json

from ..assembler import GeneratedLevel

logger = logging.getLogger(__name__)

METADATA_SUFFIX = ".meta.json"


@dataclass(frozen=True)
class GeneratedLevelFiles:
    """
    Files written for one generated level.

    Attributes:
        level_path: Level file written by the level format
        metadata_path: JSON sidecar listing the sources
    """
    level_path: Path
    metadata_path: Path


def metadata_path(level_path: Path) -> Path:
    """Sidecar path for a level: the level path with ".meta.json" appended."""
    return level_path.with_name(level_path.name + METADATA_SUFFIX)


def write_generated_level(
    level: GeneratedLevel,
    destination: Path,
    level_format: LevelFormat,
) -> GeneratedLevelFiles:
    """
    Write a generated level and its metadata sidecar.

    The level is written first. If the sidecar then fails, the level
    file is left in place.

    Args:
        level: Level to write
        destination: Level file path
        level_format: Codec used to write the level

    Returns:
        GeneratedLevelFiles with both paths

    Raises:
        LevelWriteError: If either the level or the sidecar fails to write
    """
    destination = Path(destination)
    sidecar = metadata_path(destination)

    try:
        level_format.save(destination, level.geometry)
    except (LevelSaveError, OSError) as e:
        raise LevelWriteError(f"Failed to write level {destination}: {e}") from e

    try:
        atomic_write_json(level.source_names(), sidecar)
    except OSError as e:
        raise LevelWriteError(f"Failed to write metadata {sidecar}: {e}") from e

    logger.info(f"{destination} {sidecar.name}")
    return GeneratedLevelFiles(destination, sidecar)
