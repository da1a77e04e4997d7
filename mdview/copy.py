"""Element-wise copies between views and between flat buffers."""

from __future__ import annotations

import operator
from collections.abc import MutableSequence, Sequence
from typing import Any

from mdview.view import MDSpan

__all__ = ["copy_2d", "raw_copy_1d", "raw_copy_2d", "copy_bytes"]


def _as_count(value: object, what: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"{what} must be an integer, not bool")
    count = operator.index(value)
    if count < 0:
        raise ValueError(f"{what} must be non-negative, got {count}")
    return count


def copy_2d(src: MDSpan, dest: MDSpan) -> None:
    """Copy every element of the rank-2 view ``src`` to the same index of ``dest``."""
    for name, view in (("src", src), ("dest", dest)):
        if view.rank() != 2:
            raise ValueError(f"{name} must have rank 2, got rank {view.rank()}")
    for i in range(src.extent(0)):
        for j in range(src.extent(1)):
            dest[i, j] = src[i, j]


def _copy_prefix(src: Sequence[Any], dest: MutableSequence[Any], count: int) -> None:
    if count > len(src):
        raise IndexError(f"cannot read {count} elements from a source of {len(src)}")
    if count > len(dest):
        raise IndexError(f"cannot write {count} elements to a destination of {len(dest)}")
    dest[:count] = src[:count]


def raw_copy_1d(src: Sequence[Any], dest: MutableSequence[Any], size: int) -> None:
    """Copy the first ``size`` elements of ``src`` into ``dest``."""
    _copy_prefix(src, dest, _as_count(size, "size"))


def raw_copy_2d(src: Sequence[Any], dest: MutableSequence[Any], x: int, y: int) -> None:
    """Copy an ``x`` by ``y`` row-major block from ``src`` into ``dest``."""
    _copy_prefix(src, dest, _as_count(x, "x") * _as_count(y, "y"))


def copy_bytes(count: int, itemsize: int, iterations: int) -> int:
    """Bytes moved by copying ``count`` items of ``itemsize`` bytes ``iterations`` times."""
    return (
        _as_count(count, "count")
        * _as_count(itemsize, "itemsize")
        * _as_count(iterations, "iterations")
    )