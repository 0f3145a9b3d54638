from __future__ import annotations
from typing import Dict, Iterator, List, Optional

from tagrec.data.schema import Event


class EventStore:
    """
    Ordered corpus of committed events. Index = commit order.
    Training data is a prefix, the held-out sample is the remaining suffix.
    """

    def __init__(self, events: Optional[List[Event]] = None) -> None:
        self._events: List[Event] = list(events) if events else []

    def append(self, event: Event) -> None:
        self._events.append(event)

    def prefix(self, n: int) -> List[Event]:
        """Training slice: events[0:n]."""
        return self._events[:max(0, n)]

    def suffix(self, n: int) -> List[Event]:
        """Test slice: events[n:]."""
        return self._events[max(0, n):]

    def truncate(self, start: int, end: Optional[int] = None) -> None:
        """Replace the contents with the sub-range [start, end)."""
        self._events = self._events[start:end]

    def total_tag_assignments(self, count_limit: int = 0) -> int:
        events = self._events if count_limit == 0 else self._events[:count_limit]
        return sum(len(e.tag_ids) for e in events)

    def unique_test_users(self, train_size: int) -> List[int]:
        # first-seen order within the test slice
        return list(dict.fromkeys(e.user_id for e in self.suffix(train_size)))

    def resources_of_test_users(self, train_size: int) -> Dict[int, List[int]]:
        out: Dict[int, List[int]] = {}
        for e in self.suffix(train_size):
            out.setdefault(e.user_id, []).append(e.resource_id)
        return out

    @property
    def events(self) -> List[Event]:
        return self._events

    def __len__(self) -> int:
        return len(self._events)

    def __getitem__(self, i):
        return self._events[i]

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)
