"""Layout mappings from multidimensional indices to offsets, and their sub-mappings."""

from __future__ import annotations

import enum
import math
import operator
from collections.abc import Sequence
from dataclasses import dataclass
from itertools import accumulate
from typing import Optional, Union

from mdview.extents import Extents
from mdview.slices import (
    FullExtent,
    StridedSlice,
    first_of,
    stride_of,
    submdspan_extents,
)

__all__ = ["Layout", "Mapping", "MappingOffset", "submdspan_mapping"]


class Layout(enum.Enum):
    """How a mapping lays out its elements in memory."""

    LEFT = "left"
    """Column-major: the first index varies fastest."""
    RIGHT = "right"
    """Row-major: the last index varies fastest."""
    STRIDE = "stride"
    """Arbitrary non-negative stride per dimension."""


def _as_stride(value: object) -> int:
    if isinstance(value, bool):
        raise TypeError("a stride must be an integer, not bool")
    try:
        stride = operator.index(value)
    except TypeError:
        raise TypeError(f"a stride must be an integer, got {value!r}") from None
    if stride < 0:
        raise ValueError(f"a stride must be non-negative, got {stride}")
    return stride


def _packed_strides(sizes: tuple[int, ...], layout: Layout) -> tuple[int, ...]:
    if not sizes:
        return ()
    if layout is Layout.LEFT:
        return tuple(accumulate(sizes[:-1], operator.mul, initial=1))
    backwards = accumulate(reversed(sizes[1:]), operator.mul, initial=1)
    return tuple(reversed(tuple(backwards)))


class Mapping:
    """Maps a multidimensional index to an offset into a flat buffer.

    ``LEFT`` and ``RIGHT`` layouts compute their strides from the extents;
    a ``STRIDE`` layout takes one explicit stride per dimension.
    """

    __slots__ = ("_extents", "_layout", "_strides")

    def __init__(
        self,
        extents: Extents,
        layout: Union[Layout, str] = Layout.RIGHT,
        strides: Optional[Sequence[int]] = None,
    ) -> None:
        if not isinstance(extents, Extents):
            raise TypeError(f"extents must be an Extents, got {extents!r}")
        layout = Layout(layout)
        if layout is Layout.STRIDE:
            if strides is None:
                raise ValueError("a strided layout needs one stride per dimension")
            stride_values = tuple(_as_stride(s) for s in strides)
            if len(stride_values) != extents.rank():
                raise ValueError(
                    f"expected {extents.rank()} strides, got {len(stride_values)}"
                )
        else:
            if strides is not None:
                raise ValueError(f"the {layout.value} layout computes its own strides")
            stride_values = _packed_strides(tuple(extents), layout)
        self._extents = extents
        self._layout = layout
        self._strides = stride_values

    @property
    def extents(self) -> Extents:
        """The index space this mapping covers."""
        return self._extents

    @property
    def layout(self) -> Layout:
        """The layout policy of this mapping."""
        return self._layout

    def _offset(self, indices: Sequence[object]) -> int:
        if len(indices) != self._extents.rank():
            raise TypeError(
                f"expected {self._extents.rank()} indices, got {len(indices)}"
            )
        return sum(operator.index(i) * s for i, s in zip(indices, self._strides))

    def __call__(self, *indices: int) -> int:
        """The buffer offset of the element at ``indices``."""
        values = tuple(operator.index(i) for i in indices)
        if len(values) != self._extents.rank():
            raise TypeError(
                f"expected {self._extents.rank()} indices, got {len(values)}"
            )
        for r, (i, size) in enumerate(zip(values, self._extents)):
            if not 0 <= i < size:
                raise IndexError(f"index {i} out of range for dimension {r} of size {size}")
        return self._offset(values)

    def stride(self, r: int) -> int:
        """Distance in the buffer between neighbouring indices of dimension ``r``."""
        r = operator.index(r)
        if not 0 <= r < self._extents.rank():
            raise IndexError(f"dimension {r} out of range for rank {self._extents.rank()}")
        return self._strides[r]

    def strides(self) -> tuple[int, ...]:
        """All strides, one per dimension."""
        return self._strides

    def required_span_size(self) -> int:
        """Number of buffer elements needed to hold every mapped index."""
        sizes = tuple(self._extents)
        if any(size == 0 for size in sizes):
            return 0
        return 1 + sum((size - 1) * s for size, s in zip(sizes, self._strides))

    def is_exhaustive(self) -> bool:
        """Whether every offset below the required span size is reached."""
        if self._layout is not Layout.STRIDE:
            return True
        return self.required_span_size() == math.prod(self._extents)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        if (
            self._layout is not other._layout
            and Layout.STRIDE not in (self._layout, other._layout)
        ):
            return False
        return self._extents == other._extents and self._strides == other._strides

    def __hash__(self) -> int:
        return hash((self._extents, self._strides))

    def __repr__(self) -> str:
        return (
            f"Mapping({self._extents!r}, {self._layout.name}, strides={self._strides})"
        )


@dataclass(frozen=True)
class MappingOffset:
    """A sub-mapping together with the buffer offset where it starts."""

    mapping: Mapping
    offset: int


def _keeps_dimension(slice_: object) -> bool:
    return isinstance(slice_, (FullExtent, tuple, StridedSlice))


def _preserves_layout(layout: Layout, sub_rank: int, slices: tuple) -> bool:
    if sub_rank == 0:
        return True
    if layout is Layout.LEFT:
        boundary = sub_rank - 1
    else:
        boundary = len(slices) - sub_rank

    def compatible(idx: int, slice_: object) -> bool:
        if isinstance(slice_, FullExtent):
            return True
        if idx == boundary and isinstance(slice_, tuple):
            return True
        return idx > boundary if layout is Layout.LEFT else idx < boundary

    return all(compatible(idx, s) for idx, s in enumerate(slices))


def submdspan_mapping(mapping: Mapping, *slices: object) -> MappingOffset:
    """The mapping selected from ``mapping`` by one slice per dimension.

    A left or right layout is kept when the selection stays contiguous in
    that layout; otherwise the result has a strided layout.
    """
    sub_extents = submdspan_extents(mapping.extents, *slices)
    if mapping.layout is not Layout.STRIDE and _preserves_layout(
        mapping.layout, sub_extents.rank(), slices
    ):
        sub_mapping = Mapping(sub_extents, mapping.layout)
    else:
        sub_strides = [
            mapping.stride(k) * operator.index(stride_of(s))
            for k, s in enumerate(slices)
            if _keeps_dimension(s)
        ]
        sub_mapping = Mapping(sub_extents, Layout.STRIDE, sub_strides)
    offset = mapping._offset(tuple(first_of(s) for s in slices))
    return MappingOffset(sub_mapping, offset)