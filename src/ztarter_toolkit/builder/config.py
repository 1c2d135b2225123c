"""
Module: builder.config

Purpose:
    Configuration dataclasses for level assembly and batch generation.
    Immutable configuration with validation on construction.

Key Classes:
    - AssemblyConfig: Distribution parameters for one generated level
    - BatchConfig: Naming, numbering and output of a batch of levels

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - builder.assembler: generate()
    - builder.controller: generate_levels()
    - cli
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ztarter_toolkit.core.models.identifier import DEFAULT_LEVEL_SUFFIX, Identifier


@dataclass(frozen=True)
class AssemblyConfig:
    """
    Sampling parameters for assembling one level (immutable).

    Polygon indices are drawn from normal distributions whose mean and
    standard deviation are fractions of the store size, so the same
    config works for any store.

    Attributes:
        count_mean: Mean of the polygon count distribution
        count_std: Standard deviation of the polygon count distribution
        anchor_mean_ratio: Anchor index mean as a fraction of store size
        body_mean_ratio: Mean index of the remaining polygons, same units
        spread_ratio: Index standard deviation as a fraction of store size
        max_draws: Rejection-sampling attempts before clamping into range
        seed: Seed used when no RNG is passed to generate()

    Invariants:
        - count_std >= 0 and spread_ratio > 0
        - 0 <= anchor_mean_ratio <= 1 and 0 <= body_mean_ratio <= 1
        - max_draws >= 1

    Example:
        >>> config = AssemblyConfig(seed=7)
        >>> config.anchor_mean(60), config.spread(60)
        (50.0, 10.0)
    """

    count_mean: float = 7.0
    count_std: float = 4.0
    anchor_mean_ratio: float = 5.0 / 6.0
    body_mean_ratio: float = 0.5
    spread_ratio: float = 1.0 / 6.0
    max_draws: int = 1000
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.count_std < 0:
            raise ValueError(f"count_std must be non-negative: {self.count_std}")
        if self.spread_ratio <= 0:
            raise ValueError(f"spread_ratio must be positive: {self.spread_ratio}")
        for name in ("anchor_mean_ratio", "body_mean_ratio"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1]: {value}")
        if self.max_draws < 1:
            raise ValueError(f"max_draws must be at least 1: {self.max_draws}")

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    def anchor_mean(self, size: int) -> float:
        return size * self.anchor_mean_ratio

    def body_mean(self, size: int) -> float:
        return size * self.body_mean_ratio

    def spread(self, size: int) -> float:
        return size * self.spread_ratio


@dataclass(frozen=True)
class BatchConfig:
    """
    Configuration for generating a numbered batch of levels (immutable).

    Level i (0-based) is written as
    output_dir / f"{level_name}{i + number_offset:0{pad}d}{suffix}".

    Attributes:
        output_dir: Directory receiving the levels
        level_name: File name prefix (e.g. "abc" for abc001.lev)
        name_pad: Digits in the level number (None = fill to 8 characters)
        number_offset: Number of the first level
        amount: How many levels to generate
        seed: RNG seed for the whole batch (None = system entropy)
        suffix: Level file extension
        write_previews: Also write a PNG preview beside each level
        assembly: Sampling parameters for each level

    Invariants:
        - Every file name of the batch fits an Identifier untruncated;
          the last (widest) number is checked on construction

    Example:
        >>> config = BatchConfig(level_name="abc", name_pad=3, amount=2)
        >>> config.file_name(0).as_text()
        'abc001.lev'
    """

    output_dir: Path = Path(".")
    level_name: str = "L"
    name_pad: Optional[int] = None
    number_offset: int = 1
    amount: int = 0
    seed: Optional[int] = None
    suffix: str = DEFAULT_LEVEL_SUFFIX
    write_previews: bool = False
    assembly: AssemblyConfig = field(default_factory=AssemblyConfig)

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.amount < 0:
            raise ValueError(f"amount must be non-negative: {self.amount}")
        if self.number_offset < 0:
            raise ValueError(f"number_offset must be non-negative: {self.number_offset}")
        if self.name_pad is not None and self.name_pad < 1:
            raise ValueError(f"name_pad must be positive: {self.name_pad}")
        if self.amount:
            # Widest number is last; raises IdentifierOverflowError on overflow
            self.file_name(self.amount - 1)

    @property
    def pad(self) -> int:
        """Effective digit count for level numbers."""
        if self.name_pad is not None:
            return self.name_pad
        return Identifier.default_pad(self.level_name)

    def file_name(self, index: int) -> Identifier:
        """
        Identifier of the index-th level of the batch (0-based).

        Raises:
            IdentifierOverflowError: If the name does not fit an Identifier
        """
        return Identifier.from_format(
            self.level_name, self.pad, index + self.number_offset, self.suffix, strict=True
        )
