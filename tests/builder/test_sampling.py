"""
Unit tests for builder.sampling.
"""

import random

import pytest

from ztarter_toolkit.builder.sampling import draw_index, draw_polygon_count


class FixedRandom:
    """Returns queued normalvariate samples in order."""

    def __init__(self, *samples):
        self.samples = list(samples)
        self.calls = 0

    def normalvariate(self, mu, sigma):
        self.calls += 1
        return self.samples.pop(0)


class TestDrawPolygonCount:
    """Tests for draw_polygon_count()."""

    @pytest.mark.parametrize("sample, expected", [
        (-3.2, 1),
        (0.99, 1),
        (1.0, 1),
        (6.9, 6),
        (12.01, 12),
    ])
    def test_count_truncates_and_floors_at_one(self, sample, expected):
        assert draw_polygon_count(FixedRandom(sample), 7.0, 4.0) == expected

    def test_count_always_positive(self):
        rng = random.Random(1)

        counts = [draw_polygon_count(rng, 7.0, 4.0) for _ in range(500)]

        assert min(counts) >= 1


class TestDrawIndex:
    """Tests for draw_index()."""

    def test_index_rejects_out_of_range_samples(self):
        rng = FixedRandom(-0.5, 10.0, 7.3, 2.0)

        assert draw_index(rng, 10, 5.0, 1.0) == 7
        assert rng.calls == 3

    def test_index_upper_bound_is_exclusive(self):
        rng = FixedRandom(10.0, 9.999)

        assert draw_index(rng, 10, 5.0, 1.0) == 9

    def test_index_always_in_range(self):
        rng = random.Random(3)

        for size in (1, 2, 7, 100):
            for _ in range(200):
                assert 0 <= draw_index(rng, size, size * 5 / 6, size / 6) < size

    def test_index_when_draws_exhausted_then_clamped_low(self):
        rng = random.Random(0)

        assert draw_index(rng, 5, -1000.0, 1.0, max_draws=10) == 0

    def test_index_when_draws_exhausted_then_clamped_high(self):
        rng = random.Random(0)

        assert draw_index(rng, 5, 1000.0, 1.0, max_draws=10) == 4

    def test_index_when_size_zero_then_raises(self):
        with pytest.raises(ValueError):
            draw_index(random.Random(0), 0, 0.0, 1.0)

    def test_anchor_distribution_favours_upper_end(self):
        rng = random.Random(11)
        size = 60

        draws = [draw_index(rng, size, size * 5 / 6, size / 6) for _ in range(2000)]

        assert sum(draws) / len(draws) > size / 2
