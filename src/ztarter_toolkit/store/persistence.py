"""
Module: store.persistence

Purpose:
    Binary snapshot format for PolygonStore. A snapshot holds every record,
    the ingested source set and the optional tag; stores are always written
    and read whole.

Key Functions:
    - encode_store() / decode_store(): bytes <-> PolygonStore
    - save_store(): Atomic write of a snapshot
    - load_store(): Read and decode a snapshot
    - load_stores(): Load several snapshots merged into one store

Format (little-endian):
    magic "ZTDB", version u16,
    record count u32, records (identifier, width f64, height f64,
        vertex count u32, vertex pairs f64 f64),
    source count u32, identifiers sorted by bytes,
    tag flag u8, tag length u32 + UTF-8 bytes.
    An identifier is a u8 length followed by IDENTIFIER_CAPACITY bytes,
    zero padded.

Dependencies:
    - struct (std)
    - core.utils.files: Atomic writes

Used By:
    - cli: --from-database, --to-database
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import Iterable, List, Optional

from ztarter_toolkit.core.errors import CorruptStoreError, StoreIOError
from ztarter_toolkit.core.models import (
    IDENTIFIER_CAPACITY,
    Identifier,
    Polygon,
    PolygonRecord,
    Vertex,
)
from ztarter_toolkit.core.utils import atomic_write_bytes

from .polygon_store import PolygonStore

logger = logging.getLogger(__name__)

MAGIC = b"ZTDB"
FORMAT_VERSION = 1

_HEADER = struct.Struct("<4sH")
_COUNT = struct.Struct("<I")
_FLAG = struct.Struct("<B")
_IDENTIFIER = struct.Struct(f"<B{IDENTIFIER_CAPACITY}s")
_SIZE = struct.Struct("<dd")
_VERTEX = struct.Struct("<dd")


# ─────────────────────────────────────────────────────────────────────────────
# Encoding
# ─────────────────────────────────────────────────────────────────────────────

def _pack_identifier(identifier: Identifier) -> bytes:
    # struct pads "s" fields with zero bytes
    return _IDENTIFIER.pack(len(identifier.raw), identifier.raw)


def encode_store(store: PolygonStore) -> bytes:
    """
    Encode a store as a binary snapshot.

    Sources are written in byte order so equal stores encode to equal bytes.

    Args:
        store: Store to encode

    Returns:
        Snapshot bytes
    """
    parts: List[bytes] = [_HEADER.pack(MAGIC, FORMAT_VERSION)]

    parts.append(_COUNT.pack(len(store.records)))
    for record in store.records:
        polygon = record.polygon
        parts.append(_pack_identifier(record.source))
        parts.append(_SIZE.pack(polygon.width, polygon.height))
        parts.append(_COUNT.pack(len(polygon.vertices)))
        parts.extend(_VERTEX.pack(v.x, v.y) for v in polygon.vertices)

    sources = sorted(store.sources)
    parts.append(_COUNT.pack(len(sources)))
    parts.extend(_pack_identifier(s) for s in sources)

    if store.tag is None:
        parts.append(_FLAG.pack(0))
    else:
        tag = store.tag.encode("utf-8")
        parts.append(_FLAG.pack(1))
        parts.append(_COUNT.pack(len(tag)))
        parts.append(tag)

    return b"".join(parts)


# ─────────────────────────────────────────────────────────────────────────────
# Decoding
# ─────────────────────────────────────────────────────────────────────────────

class _Reader:
    """Cursor over a snapshot blob; every read failure is CorruptStoreError."""

    def __init__(self, data: bytes):
        self._data = data
        self._offset = 0

    def unpack(self, fmt: struct.Struct) -> tuple:
        try:
            values = fmt.unpack_from(self._data, self._offset)
        except struct.error as e:
            raise CorruptStoreError(
                f"Truncated store data at byte {self._offset}"
            ) from e
        self._offset += fmt.size
        return values

    def take(self, length: int) -> bytes:
        end = self._offset + length
        if end > len(self._data):
            raise CorruptStoreError(f"Truncated store data at byte {self._offset}")
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def count(self) -> int:
        return self.unpack(_COUNT)[0]

    def identifier(self) -> Identifier:
        length, padded = self.unpack(_IDENTIFIER)
        if length > IDENTIFIER_CAPACITY:
            raise CorruptStoreError(f"Identifier length out of range: {length}")
        try:
            return Identifier.from_bytes(padded[:length], strict=True)
        except ValueError as e:
            raise CorruptStoreError(f"Invalid identifier bytes: {padded!r}") from e

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset


def decode_store(data: bytes) -> PolygonStore:
    """
    Decode a binary snapshot.

    Args:
        data: Snapshot bytes produced by encode_store()

    Returns:
        Decoded PolygonStore

    Raises:
        CorruptStoreError: If data is not a valid snapshot
    """
    reader = _Reader(data)

    magic, version = reader.unpack(_HEADER)
    if magic != MAGIC:
        raise CorruptStoreError(f"Not a polygon store (magic {magic!r})")
    if version != FORMAT_VERSION:
        raise CorruptStoreError(f"Unsupported store version: {version}")

    records: List[PolygonRecord] = []
    for _ in range(reader.count()):
        source = reader.identifier()
        width, height = reader.unpack(_SIZE)
        vertex_count = reader.count()
        if vertex_count * _VERTEX.size > reader.remaining:
            raise CorruptStoreError(f"Vertex count out of range: {vertex_count}")
        vertices = tuple(Vertex(*reader.unpack(_VERTEX)) for _ in range(vertex_count))
        try:
            polygon = Polygon(vertices, width, height)
        except ValueError as e:
            raise CorruptStoreError(str(e)) from e
        records.append(PolygonRecord(source, polygon))

    sources = {reader.identifier() for _ in range(reader.count())}

    tag: Optional[str] = None
    (has_tag,) = reader.unpack(_FLAG)
    if has_tag == 1:
        try:
            tag = reader.take(reader.count()).decode("utf-8")
        except UnicodeDecodeError as e:
            raise CorruptStoreError("Store tag is not valid UTF-8") from e
    elif has_tag != 0:
        raise CorruptStoreError(f"Invalid tag flag: {has_tag}")

    if reader.remaining:
        raise CorruptStoreError(f"{reader.remaining} trailing bytes after store data")

    try:
        store = PolygonStore(records, sources, tag)
    except ValueError as e:
        raise CorruptStoreError(str(e)) from e

    if all(a.area <= b.area for a, b in zip(records, records[1:])):
        store.sort_by_area()
    return store


# ─────────────────────────────────────────────────────────────────────────────
# Files
# ─────────────────────────────────────────────────────────────────────────────

def save_store(store: PolygonStore, path: Path) -> None:
    """
    Write a store snapshot, replacing any existing file.

    Args:
        store: Store to persist
        path: Destination file

    Raises:
        StoreIOError: If the file cannot be written
    """
    path = Path(path)
    data = encode_store(store)
    try:
        atomic_write_bytes(data, path)
    except OSError as e:
        raise StoreIOError(f"Failed to write store to {path}: {e}") from e
    logger.info(f"Wrote {len(store)} polygons from {len(store.sources)} levels to {path}")


def load_store(path: Path) -> PolygonStore:
    """
    Read a store snapshot.

    Args:
        path: Snapshot file

    Returns:
        Decoded PolygonStore

    Raises:
        StoreIOError: If the file cannot be read
        CorruptStoreError: If the file is not a valid snapshot
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise StoreIOError(f"Failed to read store from {path}: {e}") from e

    try:
        store = decode_store(data)
    except CorruptStoreError as e:
        raise CorruptStoreError(f"{path}: {e}") from e

    label = store.tag if store.tag is not None else "untagged store"
    logger.info(f"Loaded {label} from {path} ({len(store)} polygons)")
    return store


def load_stores(paths: Iterable[Path]) -> PolygonStore:
    """
    Load several snapshots and merge them in order into one store.

    Earlier snapshots win when two contain the same source. A snapshot
    that cannot be read or decoded is logged and skipped.

    Args:
        paths: Snapshot files

    Returns:
        Merged PolygonStore (untagged)
    """
    merged = PolygonStore()
    for path in paths:
        try:
            store = load_store(path)
        except (StoreIOError, CorruptStoreError) as e:
            logger.warning(f"Skipping store: {e}")
            continue
        merged.merge(store)
    return merged
