"""
Module: builder.output

Purpose:
    Output generation for assembled levels: the level file and its
    provenance sidecar, plus an optional PNG preview.

Key Functions:
    - write_generated_level(): Level + .meta.json sidecar
    - save_preview(): PNG preview of a level

Dependencies:
    - PIL: Preview drawing
"""

from .writer import write_generated_level, metadata_path, GeneratedLevelFiles
from .preview import render_preview, save_preview

__all__ = [
    "write_generated_level",
    "metadata_path",
    "GeneratedLevelFiles",
    "render_preview",
    "save_preview",
]
