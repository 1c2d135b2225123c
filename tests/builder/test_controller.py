"""
Tests for batch generation.
"""

import json
import random
from pathlib import Path

import pytest

from ztarter_toolkit.builder import BatchConfig, generate_levels
from ztarter_toolkit.core.errors import EmptyStoreError, IdentifierOverflowError
from ztarter_toolkit.store import PolygonStore


class TestGenerateLevels:
    """Tests for generate_levels()."""

    def test_generate_levels_names_files_sequentially(self, sample_store, level_format, tmp_path):
        config = BatchConfig(output_dir=tmp_path, level_name="abc", name_pad=3, amount=3, seed=1)

        result = generate_levels(sample_store, level_format, config)

        assert [p.name for p in result.level_paths] == ["abc001.lev", "abc002.lev", "abc003.lev"]
        assert all(p.exists() for p in result.level_paths)

    def test_generate_levels_honours_offset_and_default_pad(self, sample_store, level_format, tmp_path):
        config = BatchConfig(output_dir=tmp_path, number_offset=10, amount=1, seed=1)

        result = generate_levels(sample_store, level_format, config)

        assert result.level_paths[0].name == "L0000010.lev"

    def test_generate_levels_writes_matching_sidecars(self, sample_store, level_format, tmp_path):
        config = BatchConfig(output_dir=tmp_path, amount=2, seed=3)

        result = generate_levels(sample_store, level_format, config)

        for files, sources in zip(result.files, result.sources):
            data = json.loads(files.metadata_path.read_text(encoding="utf-8"))
            assert data == [s.as_text() for s in sources]

    def test_generate_levels_sorts_store(self, store_of, record, level_format, tmp_path):
        store = store_of(record("a.lev", 5, 5), record("b.lev", 1, 1))

        generate_levels(store, level_format, BatchConfig(output_dir=tmp_path, amount=1, seed=0))

        assert store.is_sorted_by_area

    def test_generate_levels_is_reproducible(self, sample_store, level_format, tmp_path):
        config_a = BatchConfig(output_dir=tmp_path / "a", amount=3, seed=42)
        config_b = BatchConfig(output_dir=tmp_path / "b", amount=3, seed=42)

        first = generate_levels(sample_store, level_format, config_a)
        second = generate_levels(sample_store, level_format, config_b)

        assert first.sources == second.sources

    def test_generate_levels_with_previews(self, sample_store, level_format, tmp_path):
        config = BatchConfig(output_dir=tmp_path, amount=1, seed=0, write_previews=True)

        result = generate_levels(sample_store, level_format, config)

        assert len(result.previews) == 1
        assert result.previews[0].name == "L0000001.lev.png"
        assert result.previews[0].exists()

    def test_generate_levels_when_amount_zero_then_nothing_written(self, sample_store, level_format, tmp_path):
        result = generate_levels(sample_store, level_format, BatchConfig(output_dir=tmp_path / "out"))

        assert result.files == ()
        assert not (tmp_path / "out").exists()

    def test_generate_levels_when_store_empty_then_raises(self, level_format, tmp_path):
        with pytest.raises(EmptyStoreError):
            generate_levels(PolygonStore(), level_format, BatchConfig(output_dir=tmp_path, amount=1))
        assert list(tmp_path.iterdir()) == []

    def test_generate_levels_uses_given_rng(self, sample_store, level_format, tmp_path):
        config = BatchConfig(output_dir=tmp_path, amount=2)

        first = generate_levels(sample_store, level_format, config, rng=random.Random(5))
        second = generate_levels(sample_store, level_format, config, rng=random.Random(5))

        assert first.sources == second.sources


class TestBatchConfig:
    """Validation of BatchConfig."""

    def test_file_name_uses_suffix(self):
        config = BatchConfig(level_name="x", name_pad=2, suffix=".lvl")

        assert config.file_name(0).as_text() == "x01.lvl"

    @pytest.mark.parametrize("kwargs", [
        {"amount": -1},
        {"number_offset": -1},
        {"name_pad": 0},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ValueError):
            BatchConfig(**kwargs)

    def test_default_output_dir(self):
        assert BatchConfig().output_dir == Path(".")

    def test_file_names_at_capacity_are_accepted(self):
        config = BatchConfig(level_name="abcd", name_pad=4, amount=3)

        assert [config.file_name(i).as_text() for i in range(3)] == [
            "abcd0001.lev", "abcd0002.lev", "abcd0003.lev",
        ]

    def test_when_name_would_lose_suffix_then_rejected(self):
        with pytest.raises(IdentifierOverflowError):
            BatchConfig(level_name="abcdefghij", amount=12)

    def test_when_widest_number_overflows_then_rejected(self):
        # "abcdefg9.lev" fits, "abcdefg10.lev" does not
        BatchConfig(level_name="abcdefg", name_pad=1, amount=9)

        with pytest.raises(IdentifierOverflowError):
            BatchConfig(level_name="abcdefg", name_pad=1, amount=10)

    def test_overflow_is_a_value_error(self):
        with pytest.raises(ValueError):
            BatchConfig(level_name="abcdefghijk", amount=12)


class TestBatchFileNames:
    """Generated batches never share or truncate file names."""

    def test_generate_levels_near_capacity_writes_distinct_files(self, sample_store, level_format, tmp_path):
        config = BatchConfig(output_dir=tmp_path, level_name="abcdefg", name_pad=1, amount=9, seed=4)

        result = generate_levels(sample_store, level_format, config)

        names = [p.name for p in result.level_paths]
        assert len(set(names)) == 9
        assert all(name.endswith(".lev") for name in names)
        assert len(list(tmp_path.glob("*.lev"))) == 9
