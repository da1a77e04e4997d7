"""A non-owning multidimensional view over a flat buffer."""

from __future__ import annotations

import math
from collections.abc import MutableSequence
from typing import Any, Optional, Union

from mdview.accessor import DataHandle, DefaultAccessor
from mdview.extents import Extents
from mdview.mapping import Mapping, submdspan_mapping

__all__ = ["MDSpan", "swap", "submdspan"]


class MDSpan:
    """A view of a buffer as a multidimensional array.

    ``data`` is a data handle, a mutable sequence (viewed from its start) or
    ``None`` for a null view.  ``mapping`` is a ``Mapping`` or an ``Extents``,
    the latter laid out row-major.
    """

    __slots__ = ("_data", "_mapping", "_accessor")

    def __init__(
        self,
        data: Union[DataHandle, MutableSequence[Any], None, Any],
        mapping: Union[Mapping, Extents],
        accessor: Optional[Any] = None,
    ) -> None:
        if isinstance(mapping, Extents):
            mapping = Mapping(mapping)
        elif not isinstance(mapping, Mapping):
            raise TypeError(f"mapping must be a Mapping or Extents, got {mapping!r}")
        if data is None or isinstance(data, MutableSequence):
            data = DataHandle(data)
        self._data = data
        self._mapping = mapping
        self._accessor = DefaultAccessor() if accessor is None else accessor

    @property
    def data_handle(self) -> Any:
        """Handle to the first element of the view."""
        return self._data

    @property
    def mapping(self) -> Mapping:
        """The layout mapping of the view."""
        return self._mapping

    @property
    def accessor(self) -> Any:
        """The accessor that reads elements through the data handle."""
        return self._accessor

    @property
    def extents(self) -> Extents:
        """The index space of the view."""
        return self._mapping.extents

    def _position(self, indices: object) -> int:
        if not isinstance(indices, tuple):
            indices = (indices,)
        return self._mapping(*indices)

    def __getitem__(self, indices: object) -> Any:
        return self._accessor.access(self._data, self._position(indices))

    def __setitem__(self, indices: object, value: Any) -> None:
        self._accessor.offset(self._data, self._position(indices))[0] = value

    def extent(self, r: int) -> int:
        """Size of dimension ``r``."""
        return self._mapping.extents.extent(r)

    def rank(self) -> int:
        """Number of dimensions."""
        return self._mapping.extents.rank()

    def rank_dynamic(self) -> int:
        """Number of dimensions whose size is given at runtime."""
        return self._mapping.extents.rank_dynamic()

    def size(self) -> int:
        """Number of elements in the view."""
        return math.prod(self._mapping.extents)

    def __repr__(self) -> str:
        return f"MDSpan({self._data!r}, {self._mapping!r})"


def swap(a: MDSpan, b: MDSpan) -> None:
    """Exchange the data handles, mappings and accessors of two views."""
    if not isinstance(a, MDSpan) or not isinstance(b, MDSpan):
        raise TypeError("swap needs two MDSpan views")
    for name in MDSpan.__slots__:
        first, second = getattr(a, name), getattr(b, name)
        setattr(a, name, second)
        setattr(b, name, first)


def submdspan(src: MDSpan, *slices: object) -> MDSpan:
    """The view selected from ``src`` by one slice specifier per dimension."""
    sub = submdspan_mapping(src.mapping, *slices)
    accessor = src.accessor
    policy = getattr(accessor, "offset_policy", type(accessor))
    sub_accessor = accessor if isinstance(accessor, policy) else policy(accessor)
    return MDSpan(accessor.offset(src.data_handle, sub.offset), sub.mapping, sub_accessor)