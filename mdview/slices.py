"""Slice specifiers and the extents they select from a multidimensional index space."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Union

from mdview.extents import DYNAMIC_EXTENT, Extents

__all__ = [
    "Constant",
    "FullExtent",
    "FULL_EXTENT",
    "StridedSlice",
    "first_of",
    "last_of",
    "stride_of",
    "submdspan_extents",
]


class Constant(int):
    """An integer whose value is fixed up front.

    Slicing with constants keeps the resulting sizes static; arithmetic on a
    constant gives a plain ``int``.
    """

    def __new__(cls, value: int) -> Constant:
        if isinstance(value, bool):
            raise TypeError("a constant must be an integer, not bool")
        return super().__new__(cls, operator.index(value))

    def __repr__(self) -> str:
        return f"Constant({int(self)})"


@dataclass(frozen=True)
class FullExtent:
    """Selects every index of a dimension."""

    def __repr__(self) -> str:
        return "FULL_EXTENT"


FULL_EXTENT = FullExtent()


def _check_integral(value: object, what: str) -> None:
    if isinstance(value, bool):
        raise TypeError(f"{what} must be an integer, not bool")
    try:
        operator.index(value)
    except TypeError:
        raise TypeError(f"{what} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class StridedSlice:
    """Selects indices ``offset, offset + stride, ...`` spanning ``extent`` indices."""

    offset: int
    extent: int
    stride: int

    def __post_init__(self) -> None:
        _check_integral(self.offset, "offset")
        _check_integral(self.extent, "extent")
        _check_integral(self.stride, "stride")


Slice = Union[int, FullExtent, tuple, StridedSlice]


def _is_range(spec: object) -> bool:
    if isinstance(spec, tuple):
        if len(spec) != 2:
            raise TypeError(f"a range slice needs two bounds, got {spec!r}")
        _check_integral(spec[0], "range start")
        _check_integral(spec[1], "range end")
        return True
    return False


def _is_index(spec: object) -> bool:
    if isinstance(spec, (StridedSlice, FullExtent, tuple)):
        return False
    _check_integral(spec, "slice")
    return True


def first_of(slice: Slice) -> int:  # noqa: A002
    """The first index a slice selects."""
    if isinstance(slice, StridedSlice):
        return slice.offset
    if isinstance(slice, FullExtent):
        return Constant(0)
    if _is_range(slice):
        return slice[0]
    _check_integral(slice, "slice")
    return slice


def last_of(k: int, extents: Extents, slice: Slice) -> int:  # noqa: A002
    """The end bound of a slice over dimension ``k`` of ``extents``.

    For a strided slice this is its extent.
    """
    if isinstance(slice, StridedSlice):
        return slice.extent
    if isinstance(slice, FullExtent):
        static = extents.static_extent(k)
        if static is DYNAMIC_EXTENT:
            return extents.extent(k)
        return Constant(static)
    if _is_range(slice):
        return slice[1]
    _check_integral(slice, "slice")
    return slice


def stride_of(slice: Slice) -> int:  # noqa: A002
    """The step between selected indices; one for anything but a strided slice."""
    if isinstance(slice, StridedSlice):
        return slice.stride
    return Constant(1)


def _strided_count(extent: int, stride: int) -> int:
    extent = operator.index(extent)
    stride = operator.index(stride)
    if extent <= 0:
        return 0
    if stride <= 0:
        raise ValueError(f"stride must be positive for a non-empty strided slice, got {stride}")
    return 1 + (extent - 1) // stride


def submdspan_extents(extents: Extents, *slices: Slice) -> Extents:
    """The extents selected from ``extents`` by one slice per dimension.

    Integer slices remove their dimension.  Ranges, full extents and strided
    slices keep it; its size stays static when the bounds are constants.
    """
    if len(slices) != extents.rank():
        raise ValueError(
            f"expected {extents.rank()} slice specifiers, got {len(slices)}"
        )
    new_static: list = []
    new_values: list[int] = []
    for k, spec in enumerate(slices):
        if isinstance(spec, StridedSlice):
            count = _strided_count(spec.extent, spec.stride)
            both_constant = isinstance(spec.extent, Constant) and isinstance(
                spec.stride, Constant
            )
            new_static.append(count if both_constant else DYNAMIC_EXTENT)
            new_values.append(count)
        elif _is_index(spec):
            continue
        else:
            first = first_of(spec)
            last = last_of(k, extents, spec)
            size = operator.index(last) - operator.index(first)
            if size < 0:
                raise ValueError(
                    f"slice {spec!r} in dimension {k} ends before it starts"
                )
            both_constant = isinstance(first, Constant) and isinstance(last, Constant)
            new_static.append(size if both_constant else DYNAMIC_EXTENT)
            new_values.append(size)
    return Extents(tuple(new_static), *new_values)