"""Sorting domain state: a fixed-length list of bar heights."""

import random
from typing import List, Optional

import config


def random_values(
    length: int = config.ARRAY_LENGTH,
    low: int = config.VALUE_MIN,
    high: int = config.VALUE_MAX,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """`length` ints drawn uniformly from [low, high] inclusive."""
    if length < 0:
        raise ValueError(f"Array length must be non-negative, got {length}")
    if low > high:
        raise ValueError(f"Empty value range [{low}, {high}]")
    rng = rng or random.Random()
    return [rng.randint(low, high) for _ in range(length)]
