"""
Module: builder

Purpose:
    Level building pipeline: samples polygons from a PolygonStore,
    lays them out into new levels and writes them with provenance
    sidecars.

Key Functions:
    - generate(): Assemble one level
    - write_generated_level(): Write a level + sidecar
    - generate_levels(): Numbered batch generation

Key Classes:
    - AssemblyConfig: Sampling parameters
    - BatchConfig: Batch naming and output
    - GeneratedLevel: Assembled geometry + provenance
    - BatchResult: Written batch
"""

from .config import AssemblyConfig, BatchConfig
from .assembler import generate, GeneratedLevel
from .output import write_generated_level, GeneratedLevelFiles
from .controller import generate_levels, BatchResult

__all__ = [
    # Config
    "AssemblyConfig",
    "BatchConfig",
    # Assembly
    "generate",
    "GeneratedLevel",
    # Output
    "write_generated_level",
    "GeneratedLevelFiles",
    # Controller
    "generate_levels",
    "BatchResult",
]
