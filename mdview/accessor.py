"""Pointer-like data handles and the default element accessor."""

from __future__ import annotations

import operator
from collections.abc import MutableSequence
from dataclasses import dataclass
from typing import Any, ClassVar, Optional

__all__ = ["DataHandle", "DefaultAccessor"]


@dataclass(frozen=True, eq=False)
class DataHandle:
    """A position inside a buffer: the buffer itself and an offset into it.

    Two handles are equal when they refer to the same buffer object at the
    same offset.  A handle with no buffer is a null handle.
    """

    buffer: Optional[MutableSequence[Any]]
    offset: int = 0

    def _position(self, i: int) -> int:
        if self.buffer is None:
            raise ValueError("cannot dereference a null data handle")
        i = operator.index(i)
        position = self.offset + i
        if i < 0 or position < 0:
            raise IndexError(f"negative index {i} from offset {self.offset}")
        return position

    def __add__(self, i: int) -> DataHandle:
        return DataHandle(self.buffer, self.offset + operator.index(i))

    def __getitem__(self, i: int) -> Any:
        return self.buffer[self._position(i)]

    def __setitem__(self, i: int, value: Any) -> None:
        self.buffer[self._position(i)] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataHandle):
            return NotImplemented
        return self.buffer is other.buffer and self.offset == other.offset

    def __hash__(self) -> int:
        return hash((id(self.buffer), self.offset))


@dataclass(frozen=True)
class DefaultAccessor:
    """Reads elements directly from a data handle, offsetting by plain addition."""

    offset_policy: ClassVar[type]

    def offset(self, p: DataHandle, i: int) -> DataHandle:
        """The handle ``i`` elements past ``p``."""
        return p + i

    def access(self, p: DataHandle, i: int) -> Any:
        """The element ``i`` positions past ``p``."""
        return p[i]


DefaultAccessor.offset_policy = DefaultAccessor