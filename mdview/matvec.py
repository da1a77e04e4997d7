"""Dense matrix-vector products over views and flat buffers."""

from __future__ import annotations

import operator
from collections.abc import Callable, MutableSequence, Sequence
from itertools import product
from typing import Any

from mdview.view import MDSpan

__all__ = [
    "DEFAULT_REPEATS",
    "first_touch",
    "matvec",
    "matvec_accumulate",
    "matvec_raw_left",
    "matvec_raw_right",
    "matvec_bytes",
]

#: Number of accumulated products per sweep used when none is given.
DEFAULT_REPEATS = 10


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


def _check_operands(a: MDSpan, x: MDSpan, y: MDSpan) -> None:
    if a.rank() != 2:
        raise ValueError(f"a must have rank 2, got rank {a.rank()}")
    for name, vector in (("x", x), ("y", y)):
        if vector.rank() != 1:
            raise ValueError(f"{name} must have rank 1, got rank {vector.rank()}")
    if x.extent(0) != a.extent(1):
        raise ValueError(
            f"x has {x.extent(0)} elements but a has {a.extent(1)} columns"
        )
    if y.extent(0) != a.extent(0):
        raise ValueError(f"y has {y.extent(0)} elements but a has {a.extent(0)} rows")


def _row_product(a: MDSpan, x: MDSpan, i: int) -> Any:
    return sum(a[i, j] * x[j] for j in range(a.extent(1)))


def first_touch(view: MDSpan) -> None:
    """Set every element of ``view`` to zero."""
    for index in product(*(range(size) for size in view.extents)):
        view[index] = 0


def matvec(a: MDSpan, x: MDSpan, y: MDSpan) -> None:
    """Store the product of the rank-2 view ``a`` and the vector ``x`` into ``y``."""
    _check_operands(a, x, y)
    for i in range(a.extent(0)):
        y[i] = _row_product(a, x, i)


def matvec_accumulate(
    a: MDSpan, x: MDSpan, y: MDSpan, repeats: int = DEFAULT_REPEATS
) -> None:
    """Add the product of ``a`` and ``x`` to ``y``, ``repeats`` times over."""
    count = _as_count(repeats, "repeats")
    _check_operands(a, x, y)
    for _ in range(count):
        for i in range(a.extent(0)):
            y[i] += _row_product(a, x, i)


def _raw_matvec(
    a: Sequence[Any],
    x: Sequence[Any],
    y: MutableSequence[Any],
    n: int,
    m: int,
    flat: Callable[[int, int], int],
) -> None:
    for name, buffer, needed in (("a", a, n * m), ("x", x, m), ("y", y, n)):
        if len(buffer) < needed:
            raise ValueError(f"{name} holds {len(buffer)} elements, {needed} are needed")
    for i in range(n):
        y[i] = sum(a[flat(i, j)] * x[j] for j in range(m))


def matvec_raw_left(
    a: Sequence[Any], x: Sequence[Any], y: MutableSequence[Any], n: int, m: int
) -> None:
    """Product of a flat column-major ``n`` by ``m`` matrix with ``x``, stored in ``y``."""
    n = _as_count(n, "n")
    m = _as_count(m, "m")
    _raw_matvec(a, x, y, n, m, lambda i, j: i + j * n)


def matvec_raw_right(
    a: Sequence[Any], x: Sequence[Any], y: MutableSequence[Any], n: int, m: int
) -> None:
    """Product of a flat row-major ``n`` by ``m`` matrix with ``x``, stored in ``y``."""
    n = _as_count(n, "n")
    m = _as_count(m, "m")
    _raw_matvec(a, x, y, n, m, lambda i, j: i * m + j)


def matvec_bytes(
    n: int, m: int, itemsize: int, repeats: int, iterations: int
) -> int:
    """Bytes moved by ``iterations`` sweeps of ``repeats`` products, as the benchmarks count them."""
    n = _as_count(n, "n")
    m = _as_count(m, "m")
    elements = 2 * n * m + 2 * n
    return (
        _as_count(repeats, "repeats")
        * elements
        * _as_count(itemsize, "itemsize")
        * _as_count(iterations, "iterations")
    )