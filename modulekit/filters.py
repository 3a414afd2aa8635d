"""Allow/deny list representation with explicit absence.

A `FilterList` is either unrestricted (the document did not mention the list)
or restricted to a possibly empty tuple of entries. Whether an empty restricted
list excludes everything is decided by the caller: platform allow lists do,
every other allow list treats emptiness like absence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FilterList(Generic[T]):
    entries: tuple[T, ...] | None = None

    @classmethod
    def unrestricted(cls) -> "FilterList[T]":
        return cls(None)

    @classmethod
    def of(cls, *entries: T) -> "FilterList[T]":
        return cls(tuple(entries))

    @classmethod
    def coerce(cls, value: Any) -> "FilterList[Any]":
        if value is None:
            return cls(None)
        if isinstance(value, FilterList):
            return value
        if isinstance(value, (str, bytes)):
            raise TypeError("FilterList entries must be an iterable of values, not a string")
        return cls(tuple(value))

    @property
    def is_restricted(self) -> bool:
        return self.entries is not None

    @property
    def has_entries(self) -> bool:
        return bool(self.entries)

    def map(self, fn: Callable[[T], Any]) -> "FilterList[Any]":
        if self.entries is None:
            return FilterList(None)
        return FilterList(tuple(fn(entry) for entry in self.entries))

    def __contains__(self, value: object) -> bool:
        return self.entries is not None and value in self.entries

    def __iter__(self) -> Iterator[T]:
        return iter(self.entries or ())

    def __len__(self) -> int:
        return len(self.entries or ())

    def rejects(self, value: object, *, empty_restricts: bool) -> bool:
        """Return True if this list, used as an allow list, excludes `value`."""

        if self.entries is None:
            return False
        if not self.entries and not empty_restricts:
            return False
        return value not in self.entries
