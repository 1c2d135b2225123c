"""
Unit tests for extractor.polygons.
"""

import pytest

from ztarter_toolkit.core.models import Identifier, LevelGeometry, LevelShape, Vertex
from ztarter_toolkit.extractor import extract, extract_records


def shape(points, grass=False) -> LevelShape:
    return LevelShape(tuple(Vertex(x, y) for x, y in points), grass)


@pytest.fixture
def mixed_level() -> LevelGeometry:
    """Two regular shapes around one grass shape."""
    return LevelGeometry((
        shape([(-5, -5), (5, -5), (5, 5), (-5, 5)]),
        shape([(0, 0), (100, 0), (100, 1)], grass=True),
        shape([(20, 30), (26, 30), (23, 34)]),
    ))


class TestExtract:
    """Tests for extract()."""

    def test_extract_when_grass_present_then_dropped(self, mixed_level):
        polygons = extract(mixed_level)

        assert len(polygons) == 2

    def test_extract_normalizes_every_polygon(self, mixed_level):
        for polygon in extract(mixed_level):
            assert min(v.x for v in polygon.vertices) == 0.0
            assert min(v.y for v in polygon.vertices) == 0.0

    def test_extract_keeps_pre_normalization_size(self, mixed_level):
        first, second = extract(mixed_level)

        assert (first.width, first.height) == (10.0, 10.0)
        assert (second.width, second.height) == (6.0, 4.0)

    def test_extract_keeps_level_order(self, mixed_level):
        first, second = extract(mixed_level)

        assert len(first) == 4
        assert len(second) == 3

    def test_extract_when_only_grass_then_empty(self):
        level = LevelGeometry((shape([(0, 0), (1, 0), (1, 1)], grass=True),))

        assert extract(level) == []

    def test_extract_when_no_shapes_then_empty(self):
        assert extract(LevelGeometry()) == []

    def test_extract_when_shape_has_no_vertices_then_skipped(self):
        level = LevelGeometry((LevelShape(()), shape([(0, 0), (1, 1)])))

        assert len(extract(level)) == 1


def test_extract_records_tags_source(mixed_level):
    source = Identifier.from_text("qwquu001.lev")

    records = extract_records(mixed_level, source)

    assert len(records) == 2
    assert all(r.source == source for r in records)
