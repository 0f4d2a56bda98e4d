from __future__ import annotations

import random
from typing import List, MutableSequence, Optional, TypeVar

T = TypeVar("T")


def fisher_yates(items: MutableSequence[T], rng: Optional[random.Random] = None) -> MutableSequence[T]:
    """Shuffle *items* in place (Fisher–Yates, walking from the end) and return it."""
    rand = rng if rng is not None else random
    for i in range(len(items) - 1, 0, -1):
        j = rand.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def shuffled_range(size: int, rng: Optional[random.Random] = None) -> List[int]:
    """Return a random permutation of ``1..size``."""
    numbers = list(range(1, size + 1))
    fisher_yates(numbers, rng)
    return numbers
