"""A first-in first-out queue of samples.

Items are appended at the tail and consumed from the head.  Space can be
reserved at the tail (filled with zeros) and then written through item
assignment; indices are always relative to the oldest unread item.
"""

from __future__ import annotations

from typing import Iterable, Iterator, overload

__all__ = ["Fifo", "FIFO_MIN"]

FIFO_MIN = 0x4000
"""Number of consumed items tolerated at the head before storage is compacted."""


class Fifo:
    """Queue of floats with cheap appends at the tail and reads at the head."""

    def __init__(self) -> None:
        self._data: list[float] = []
        self._begin = 0

    def __len__(self) -> int:
        return len(self._data) - self._begin

    def __iter__(self) -> Iterator[float]:
        return iter(self.view())

    def __repr__(self) -> str:
        return f"Fifo({self.view()!r})"

    @overload
    def __getitem__(self, index: int) -> float: ...

    @overload
    def __getitem__(self, index: slice) -> list[float]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self.view()[index]
        return self._data[self._begin + self._position(index)]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            positions = range(*index.indices(len(self)))
            values = list(value)
            if len(values) != len(positions):
                raise ValueError(
                    f"cannot assign {len(values)} items to a slice of {len(positions)}"
                )
            for pos, item in zip(positions, values):
                self._data[self._begin + pos] = item
            return
        self._data[self._begin + self._position(index)] = value

    def _position(self, index: int) -> int:
        size = len(self)
        if index < 0:
            index += size
        if not 0 <= index < size:
            raise IndexError("fifo index out of range")
        return index

    def _check_count(self, n: int) -> None:
        if n < 0:
            raise ValueError(f"item count must not be negative, not {n}")
        if n > len(self):
            raise ValueError(f"cannot take {n} items from a fifo holding {len(self)}")

    def _compact(self) -> None:
        if self._begin == len(self._data):
            self.clear()
        elif self._begin > FIFO_MIN:
            del self._data[:self._begin]
            self._begin = 0

    def clear(self) -> None:
        """Drop every item."""
        self._data.clear()
        self._begin = 0

    def reserve(self, n: int) -> int:
        """Append ``n`` zeros and return the index of the first of them."""
        if n < 0:
            raise ValueError(f"item count must not be negative, not {n}")
        self._compact()
        position = len(self)
        self._data.extend([0.0] * n)
        return position

    def write(self, items: Iterable[float]) -> int:
        """Append ``items`` and return the index of the first of them."""
        self._compact()
        position = len(self)
        self._data.extend(items)
        return position

    def read(self, n: int) -> list[float]:
        """Remove and return the ``n`` oldest items."""
        self._check_count(n)
        start = self._begin
        self._begin += n
        return self._data[start:start + n]

    def discard(self, n: int) -> None:
        """Remove the ``n`` oldest items without returning them."""
        self._check_count(n)
        self._begin += n

    def view(self) -> list[float]:
        """Return a copy of the unread items, oldest first."""
        return self._data[self._begin:]

    def trim_to(self, n: int) -> None:
        """Keep only the ``n`` oldest items."""
        self._check_count(n)
        del self._data[self._begin + n:]

    def trim_by(self, n: int) -> None:
        """Remove the ``n`` newest items."""
        self._check_count(n)
        self.trim_to(len(self) - n)