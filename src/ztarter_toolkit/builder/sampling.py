"""
Module: builder.sampling

Purpose:
    Random draws used by the assembler: how many polygons a level gets
    and which store index each polygon comes from. Index draws use
    rejection sampling from a normal distribution, bounded by a maximum
    number of attempts.

Key Functions:
    - draw_polygon_count(): Polygon count, at least 1
    - draw_index(): Store index in [0, size)

Dependencies:
    - random (std): Seeded random.Random instances

Used By:
    - builder.assembler: generate()
"""

from __future__ import annotations

import logging
import random

logger = logging.getLogger(__name__)


def draw_polygon_count(rng: random.Random, mean: float, std: float) -> int:
    """
    Draw the number of polygons for one level.

    Samples below 1.0 give 1; other samples are truncated toward zero.

    Args:
        rng: Random source
        mean: Distribution mean
        std: Distribution standard deviation

    Returns:
        Polygon count >= 1
    """
    sample = rng.normalvariate(mean, std)
    if sample < 1.0:
        return 1
    return int(sample)


def draw_index(
    rng: random.Random,
    size: int,
    mean: float,
    std: float,
    *,
    max_draws: int = 1000,
) -> int:
    """
    Draw a store index by rejection sampling a normal distribution.

    Samples are redrawn until one lands in [0, size), which is then
    truncated to an integer. After `max_draws` rejected samples the last
    one is clamped into range instead.

    Args:
        rng: Random source
        size: Number of records to choose from
        mean: Distribution mean, in index units
        std: Distribution standard deviation, in index units
        max_draws: Attempts before falling back to clamping

    Returns:
        Index in [0, size)

    Raises:
        ValueError: If size < 1
    """
    if size < 1:
        raise ValueError(f"size must be at least 1: {size}")

    sample = mean
    for _ in range(max_draws):
        sample = rng.normalvariate(mean, std)
        if 0.0 <= sample < size:
            return int(sample)

    clamped = min(max(int(sample), 0), size - 1)
    logger.warning(
        f"Index sampling found nothing in [0, {size}) after {max_draws} draws "
        f"(mean={mean:.2f}, std={std:.2f}); clamped {sample:.2f} to {clamped}"
    )
    return clamped
