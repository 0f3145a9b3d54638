from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple
import numpy as np

from tagrec.data.schema import Axis, Event

# math.exp overflows a double just above 709.78
MAX_EXP_ARG = 709.0


def exp_denominator(counts: Dict[int, int]) -> Tuple[float, float]:
    """
    Returns (denom, shift) with denom = sum(exp(count - shift)).

    shift is 0 unless the sum could overflow a double (largest count above
    MAX_EXP_ARG - log(n)), in which case every term is scaled by
    exp(-max_count). Weights are unchanged by the shift.
    """
    if not counts:
        return 0.0, 0.0
    arr = np.fromiter(counts.values(), dtype=np.float64, count=len(counts))
    top = float(arr.max())
    shift = top if top > MAX_EXP_ARG - math.log(arr.size) else 0.0
    return float(np.sum(np.exp(arr - shift))), shift


@dataclass
class TagDistribution:
    """
    Tag-ID -> occurrence count for one user or one resource,
    with its exp-weighting denominator cached.
    """
    counts: Dict[int, int] = field(default_factory=dict)
    denom: float = 0.0
    shift: float = 0.0

    @classmethod
    def from_counts(cls, counts: Dict[int, int]) -> "TagDistribution":
        denom, shift = exp_denominator(counts)
        return cls(counts=counts, denom=denom, shift=shift)

    def weight(self, count: int) -> float:
        # exp(count) / sum_t exp(count_t)
        return math.exp(count - self.shift) / self.denom

    def __len__(self) -> int:
        return len(self.counts)


def count_tags(events: Iterable[Event], axis: Axis) -> Dict[int, Dict[int, int]]:
    counts: Dict[int, Dict[int, int]] = {}
    for e in events:
        c = counts.setdefault(e.key(axis), {})
        # every occurrence counts, duplicates within an event included
        for t in e.tag_ids:
            c[t] = c.get(t, 0) + 1
    return counts


def build_distributions(events: Iterable[Event], axis: Axis) -> Dict[int, TagDistribution]:
    """
    Group training tag assignments by user (Axis.USER) or resource (Axis.RESOURCE).
    """
    return {k: TagDistribution.from_counts(c) for k, c in count_tags(events, axis).items()}
