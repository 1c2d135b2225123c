import json
import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import ztarter_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from ztarter_toolkit.core.errors import LevelLoadError, LevelSaveError
from ztarter_toolkit.core.models import (
    Identifier,
    LevelGeometry,
    LevelShape,
    Polygon,
    PolygonRecord,
    Vertex,
)
from ztarter_toolkit.store import PolygonStore


class JsonLevelFormat:
    """
    Test level codec storing shapes as JSON.

    File layout: {"shapes": [{"vertices": [[x, y], ...], "grass": bool}, ...]}
    Anything else raises LevelLoadError.
    """

    def __init__(self):
        self.saved: dict[Path, LevelGeometry] = {}

    def load(self, path: Path) -> LevelGeometry:
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
            shapes = tuple(
                LevelShape(
                    tuple(Vertex(float(x), float(y)) for x, y in shape["vertices"]),
                    bool(shape.get("grass", False)),
                )
                for shape in data["shapes"]
            )
        except (ValueError, KeyError, TypeError) as e:
            raise LevelLoadError(f"{path}: {e}") from e
        return LevelGeometry(shapes)

    def save(self, path: Path, geometry: LevelGeometry) -> None:
        path = Path(path)
        if not path.parent.exists():
            raise LevelSaveError(f"No such directory: {path.parent}")
        payload = {
            "shapes": [
                {"vertices": [[v.x, v.y] for v in s.vertices], "grass": s.is_grass}
                for s in geometry.shapes
            ]
        }
        path.write_text(json.dumps(payload), encoding="utf-8")
        self.saved[path] = geometry


def write_level(path: Path, shapes: list[tuple[list[tuple[float, float]], bool]]) -> Path:
    """Write a level file readable by JsonLevelFormat."""
    payload = {
        "shapes": [
            {"vertices": [list(v) for v in vertices], "grass": grass}
            for vertices, grass in shapes
        ]
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def square(x: float, y: float, size: float) -> list[tuple[float, float]]:
    return [(x, y), (x + size, y), (x + size, y + size), (x, y + size)]


def make_record(source: str, width: float, height: float) -> PolygonRecord:
    """Record with an axis-aligned rectangle polygon."""
    polygon = Polygon.from_points([(0, 0), (width, 0), (width, height), (0, height)])
    return PolygonRecord(Identifier.from_text(source), polygon)


def make_store(*records: PolygonRecord, empty_sources: tuple[str, ...] = (), tag=None) -> PolygonStore:
    store = PolygonStore(tag=tag)
    for record in records:
        store.add_source(record.source, [record])
    for name in empty_sources:
        store.add_source(Identifier.from_text(name), [])
    return store


@pytest.fixture
def level_format() -> JsonLevelFormat:
    return JsonLevelFormat()


@pytest.fixture
def sample_store() -> PolygonStore:
    """Store with five records of increasing area from three sources."""
    return make_store(
        make_record("a.lev", 1, 1),
        make_record("a.lev", 2, 2),
        make_record("b.lev", 3, 3),
        make_record("c.lev", 4, 1),
        make_record("c.lev", 5, 5),
        tag="sample",
    )


@pytest.fixture
def record():
    """Factory: record(source, width, height) -> PolygonRecord."""
    return make_record


@pytest.fixture
def store_of():
    """Factory: store_of(*records, empty_sources=(), tag=None) -> PolygonStore."""
    return make_store


@pytest.fixture
def level_file():
    """Factory: level_file(path, shapes) -> path of a JsonLevelFormat level."""
    return write_level


@pytest.fixture
def ident():
    """Shorthand for Identifier.from_text."""
    return Identifier.from_text
