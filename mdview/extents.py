"""Extents of a multidimensional index space, mixing static and runtime sizes."""

from __future__ import annotations

import operator
from collections.abc import Iterator, Sequence
from typing import Optional

#: Marker for an extent whose size is only known at runtime.
DYNAMIC_EXTENT = None

__all__ = ["DYNAMIC_EXTENT", "Extents", "dextents"]


def _as_size(value: object, what: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"{what} must be an integer, not bool")
    try:
        size = operator.index(value)
    except TypeError:
        raise TypeError(f"{what} must be an integer, got {value!r}") from None
    if size < 0:
        raise ValueError(f"{what} must be non-negative, got {size}")
    return size


class Extents:
    """The sizes of each dimension of a multidimensional index space.

    ``static_extents`` gives one entry per dimension: a non-negative integer
    for a size fixed up front, or ``DYNAMIC_EXTENT`` for one supplied at
    construction.  The remaining arguments are either the dynamic sizes only,
    all sizes, a single sequence of either, or another ``Extents`` of the same
    rank to convert from.  With no values, dynamic sizes default to zero.
    """

    __slots__ = ("_static", "_dynamic")

    def __init__(self, static_extents: Sequence[Optional[int]], *args: object) -> None:
        self._static: tuple[Optional[int], ...] = tuple(
            None if s is DYNAMIC_EXTENT else _as_size(s, "static extent")
            for s in static_extents
        )
        if len(args) == 1 and isinstance(args[0], Extents):
            values: Sequence[object] = self._values_from(args[0])
        elif len(args) == 1 and isinstance(args[0], Sequence) and not isinstance(args[0], str):
            values = tuple(args[0])
        else:
            values = args
        self._dynamic: tuple[int, ...] = self._store(values)

    def _values_from(self, other: Extents) -> tuple[int, ...]:
        if other.rank() != self.rank():
            raise ValueError(
                f"cannot convert extents of rank {other.rank()} to rank {self.rank()}"
            )
        for r, (mine, theirs) in enumerate(zip(self._static, other.static_extents)):
            if mine is not None and theirs is not None and mine != theirs:
                raise ValueError(
                    f"incompatible static extents in dimension {r}: {mine} and {theirs}"
                )
        return tuple(other)

    def _store(self, values: Sequence[object]) -> tuple[int, ...]:
        sizes = tuple(_as_size(v, "extent") for v in values)
        rank_dynamic = self.rank_dynamic()
        if len(sizes) == rank_dynamic:
            return sizes
        if len(sizes) == self.rank():
            for r, (static, size) in enumerate(zip(self._static, sizes)):
                if static is not None and static != size:
                    raise ValueError(
                        f"extent {size} in dimension {r} does not match static extent {static}"
                    )
            return tuple(
                size for static, size in zip(self._static, sizes) if static is None
            )
        if not sizes:
            return (0,) * rank_dynamic
        raise ValueError(
            f"invalid number of values: got {len(sizes)}, expected "
            f"{rank_dynamic} or {self.rank()}"
        )

    @property
    def static_extents(self) -> tuple[Optional[int], ...]:
        """The static description, ``DYNAMIC_EXTENT`` where sizes are runtime."""
        return self._static

    def rank(self) -> int:
        """Number of dimensions."""
        return len(self._static)

    def rank_dynamic(self) -> int:
        """Number of dimensions whose size is given at runtime."""
        return sum(1 for s in self._static if s is None)

    def _check_rank_index(self, r: int) -> int:
        r = operator.index(r)
        if not 0 <= r < self.rank():
            raise IndexError(f"dimension {r} out of range for rank {self.rank()}")
        return r

    def extent(self, r: int) -> int:
        """Size of dimension ``r``."""
        r = self._check_rank_index(r)
        static = self._static[r]
        if static is not None:
            return static
        position = sum(1 for s in self._static[:r] if s is None)
        return self._dynamic[position]

    def static_extent(self, r: int) -> Optional[int]:
        """Static size of dimension ``r``, or ``DYNAMIC_EXTENT``."""
        return self._static[self._check_rank_index(r)]

    def __iter__(self) -> Iterator[int]:
        dynamic = iter(self._dynamic)
        for static in self._static:
            yield next(dynamic) if static is None else static

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Extents):
            return NotImplemented
        return self.rank() == other.rank() and tuple(self) == tuple(other)

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        statics = ", ".join("dyn" if s is None else str(s) for s in self._static)
        return f"Extents(<{statics}>, {tuple(self)})"


def dextents(rank: int, *args: object) -> Extents:
    """Extents of the given rank with every dimension dynamic."""
    rank = _as_size(rank, "rank")
    return Extents((DYNAMIC_EXTENT,) * rank, *args)