"""Randomness helpers shared by the board generator.

Every helper takes an optional ``rng`` so a seeded ``random.Random`` can be
threaded through a whole generation run. When omitted, the module-level
``random`` functions are used.
"""
import random
from typing import List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")


def shuffled_copy(values: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """
    Return a shuffled copy of the given values (Fisher-Yates).

    Args:
        values: The values to shuffle. Left untouched.
        rng: Random source.

    Returns:
        A new list with the same values in random order.
    """
    rng = rng or random
    result = list(values)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randrange(i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def pick_random(values: Sequence[T], rng: Optional[random.Random] = None) -> Optional[T]:
    """Pick a uniformly random element, or None if the sequence is empty."""
    if not values:
        return None
    rng = rng or random
    return values[rng.randrange(len(values))]


def get_random_int(min_value: int, max_value: int, rng: Optional[random.Random] = None) -> int:
    """Get a random integer between min_value and max_value (inclusive)."""
    if max_value < min_value:
        raise ValueError(f"min ({min_value}) greater than max ({max_value})")
    rng = rng or random
    return rng.randint(min_value, max_value)


def get_random_with_percentage(
    values: Sequence[Tuple[T, float]],
    rng: Optional[random.Random] = None,
) -> T:
    """
    Pick a value from a list of (value, percentage) pairs.

    Args:
        values: Pairs of value and percentage chance. Percentages must sum to 100.
        rng: Random source.

    Returns:
        The chosen value.

    Raises:
        ValueError: If the list is empty or the percentages do not sum to 100.
    """
    if not values:
        raise ValueError("Cannot pick from an empty list of values")
    total = sum(weight for _, weight in values)
    if abs(total - 100) > 1e-9:
        raise ValueError(f"The sum of all percentages must be 100 (got {total})")

    rng = rng or random
    roll = rng.random() * 100
    cumulative = 0.0
    for value, weight in values:
        cumulative += weight
        if roll < cumulative:
            return value
    return values[-1][0]
