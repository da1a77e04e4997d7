"""Box-stencil sums over three-dimensional views and flat buffers."""

from __future__ import annotations

import operator
from collections.abc import Callable, MutableSequence, Sequence
from itertools import product
from typing import Any

from mdview.view import MDSpan

__all__ = [
    "DEFAULT_DELTA",
    "first_touch_3d",
    "stencil_3d",
    "stencil_3d_raw_right",
    "stencil_3d_raw_left",
    "stencil_bytes",
]

#: Half-width of the stencil window used when none is given.
DEFAULT_DELTA = 1


def _as_count(value: object, what: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"{what} must be an integer, not bool")
    try:
        count = operator.index(value)
    except TypeError:
        raise TypeError(f"{what} must be an integer, got {value!r}") from None
    if count < 0:
        raise ValueError(f"{what} must be non-negative, got {count}")
    return count


def _check_rank_3(view: MDSpan, name: str) -> None:
    if view.rank() != 3:
        raise ValueError(f"{name} must have rank 3, got rank {view.rank()}")


def _window(delta: int) -> tuple[tuple[int, int, int], ...]:
    side = range(-delta, delta + 1)
    return tuple(product(side, repeat=3))


def _interior(sizes: Sequence[int], delta: int):
    return product(*(range(delta, size - delta) for size in sizes))


def first_touch_3d(view: MDSpan) -> None:
    """Set every element of the rank-3 ``view`` to zero."""
    _check_rank_3(view, "view")
    for index in product(*(range(size) for size in view.extents)):
        view[index] = 0


def stencil_3d(s: MDSpan, o: MDSpan, delta: int = DEFAULT_DELTA) -> None:
    """Write into ``o`` the sum of each interior element's box neighbourhood in ``s``.

    The box spans ``delta`` indices on each side of every dimension; elements
    closer than ``delta`` to a border of ``s`` are left unchanged in ``o``.
    """
    d = _as_count(delta, "delta")
    _check_rank_3(s, "s")
    _check_rank_3(o, "o")
    window = _window(d)
    for i, j, k in _interior(tuple(s.extents), d):
        o[i, j, k] = sum(s[i + di, j + dj, k + dk] for di, dj, dk in window)


def _raw_stencil(
    s: Sequence[Any],
    o: MutableSequence[Any],
    sizes: tuple[int, int, int],
    delta: int,
    flat: Callable[[int, int, int], int],
) -> None:
    needed = sizes[0] * sizes[1] * sizes[2]
    for name, buffer in (("s", s), ("o", o)):
        if len(buffer) < needed:
            raise ValueError(
                f"{name} holds {len(buffer)} elements, {needed} are needed"
            )
    window = _window(delta)
    for i, j, k in _interior(sizes, delta):
        o[flat(i, j, k)] = sum(
            s[flat(i + di, j + dj, k + dk)] for di, dj, dk in window
        )


def stencil_3d_raw_right(
    s: Sequence[Any],
    o: MutableSequence[Any],
    x: int,
    y: int,
    z: int,
    delta: int = DEFAULT_DELTA,
) -> None:
    """Box-stencil sum over flat row-major ``x`` by ``y`` by ``z`` buffers."""
    x, y, z = (_as_count(v, n) for v, n in ((x, "x"), (y, "y"), (z, "z")))
    d = _as_count(delta, "delta")
    _raw_stencil(s, o, (x, y, z), d, lambda i, j, k: k + j * z + i * z * y)


def stencil_3d_raw_left(
    s: Sequence[Any],
    o: MutableSequence[Any],
    x: int,
    y: int,
    z: int,
    delta: int = DEFAULT_DELTA,
) -> None:
    """Box-stencil sum over flat column-major ``x`` by ``y`` by ``z`` buffers."""
    x, y, z = (_as_count(v, n) for v, n in ((x, "x"), (y, "y"), (z, "z")))
    d = _as_count(delta, "delta")
    _raw_stencil(s, o, (x, y, z), d, lambda i, j, k: k * x * y + j * x + i)


def stencil_bytes(
    x: int, y: int, z: int, delta: int, itemsize: int, iterations: int
) -> int:
    """Bytes read by ``iterations`` stencil sweeps, as the benchmarks count them."""
    d = _as_count(delta, "delta")
    sizes = [_as_count(v, n) for v, n in ((x, "x"), (y, "y"), (z, "z"))]
    if any(size < d for size in sizes):
        raise ValueError(f"every size must be at least delta {d}, got {sizes}")
    inner = (sizes[0] - d) * (sizes[1] - d) * (sizes[2] - d)
    window = (2 * d + 1) ** 3
    return inner * window * _as_count(itemsize, "itemsize") * _as_count(
        iterations, "iterations"
    )