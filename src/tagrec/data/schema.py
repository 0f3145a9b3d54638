from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

class Axis(str, Enum):
    USER = "user"
    RESOURCE = "resource"

@dataclass(frozen=True)
class Event:
    """
    One user tagging one resource at one timestamp.
    All references are dense IDs from the interning tables.
    """
    user_id: int
    resource_id: int
    timestamp: str  # digits only, or empty
    rating: Optional[float]
    tag_ids: Tuple[int, ...]
    category_ids: Tuple[int, ...] = ()

    def key(self, axis: Axis) -> int:
        return self.user_id if axis is Axis.USER else self.resource_id

@dataclass(frozen=True)
class ParsedRecord:
    """
    Fields of one well-formed input line, before interning.
    """
    user: str
    resource: str
    timestamp: str
    tags: List[str]
    categories: List[str]
    rating: Optional[float] = None

# (tag_id, score) pairs, best first
RankedList = List[Tuple[int, float]]
