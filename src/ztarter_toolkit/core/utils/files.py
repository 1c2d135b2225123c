"""
Module: core.utils.files

Purpose:
    Atomic file writes via a temporary file in the destination directory
    followed by Path.replace(), so readers never see a half-written store
    or sidecar. The temporary file is removed if anything fails.

Key Functions:
    - atomic_write_bytes(): Write a binary blob
    - atomic_write_json(): Write a JSON document

Used By:
    - store.persistence: Store snapshots
    - builder.output.writer: Metadata sidecars
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import IO, Any, Callable, Optional


def _atomic_write(path: Path, write: Callable[[IO], None], *, binary: bool, suffix: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)

    temp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb" if binary else "w",
            suffix=suffix,
            dir=path.parent,
            delete=False,
            encoding=None if binary else "utf-8",
        ) as f:
            temp_path = Path(f.name)
            write(f)

        # Use replace() instead of rename() for Windows compatibility
        temp_path.replace(path)
    except Exception:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise


def atomic_write_bytes(data: bytes, path: Path) -> None:
    """Write bytes atomically using temp file."""
    _atomic_write(path, lambda f: f.write(data), binary=True, suffix=".tmp")


def atomic_write_json(data: Any, path: Path) -> None:
    """Write JSON atomically using temp file."""
    def write(f: IO) -> None:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")

    _atomic_write(path, write, binary=False, suffix=".json")
