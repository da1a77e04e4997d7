"""Filling views with reproducible pseudo-random values."""

from __future__ import annotations

import random
from itertools import product

from mdview.view import MDSpan

__all__ = ["DEFAULT_SEED", "fill_random"]

#: Seed used when none is given.
DEFAULT_SEED = 1234

_LOW = 0
_HIGH = 127


def fill_random(view: MDSpan, seed: int = DEFAULT_SEED) -> None:
    """Fill every element of ``view`` with an integer in ``[0, 127]``.

    Elements are visited in index order, last index fastest, so views with
    the same extents receive the same logical values for the same seed,
    whatever their layout.
    """
    rng = random.Random(seed)
    for index in product(*(range(size) for size in view.extents)):
        view[index] = rng.randint(_LOW, _HIGH)