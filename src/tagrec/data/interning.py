from __future__ import annotations
from typing import Dict, Generic, Hashable, List, Optional, TypeVar

T = TypeVar("T", bound=Hashable)


class InternTable(Generic[T]):
    """
    Bidirectional value <-> dense ID map with an occurrence counter per ID.

    IDs are assigned in first-seen order. Counters only move when the caller
    says counting is enabled, so IDs stay stable past a count limit.
    """

    def __init__(self) -> None:
        self._items: List[T] = []
        self._index: Dict[T, int] = {}
        self._counts: List[int] = []

    def intern_and_count(self, value: T, counting_enabled: bool = True) -> int:
        idx = self._index.get(value)
        if idx is None:
            self._items.append(value)
            self._counts.append(1 if counting_enabled else 0)
            idx = len(self._items) - 1
            self._index[value] = idx
        elif counting_enabled:
            self._counts[idx] += 1
        return idx

    def get_id(self, value: T) -> Optional[int]:
        return self._index.get(value)

    def value_of(self, idx: int) -> T:
        return self._items[idx]

    @property
    def items(self) -> List[T]:
        return self._items

    @property
    def counts(self) -> List[int]:
        return self._counts

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, value: object) -> bool:
        return value in self._index

    def __repr__(self) -> str:
        return f"InternTable(size={len(self)})"
