from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field
from typing import List

from tagrec.data.schema import Event, RankedList
from tagrec.data.store import EventStore
from tagrec.model.language_model import REC_LIMIT, LanguageModel, build_language_model, score_tags

logger = logging.getLogger(__name__)


@dataclass
class TimingReport:
    training_ms: float
    test_ms: float
    n_test: int

    @property
    def average_test_ms(self) -> float:
        return self.test_ms / self.n_test if self.n_test else 0.0

    @property
    def total_ms(self) -> float:
        return self.training_ms + self.test_ms

    def to_text(self) -> str:
        return (
            f"Full training time: {self.training_ms:.3f}\n"
            f"Full test time: {self.test_ms:.3f}\n"
            f"Average test time: {self.average_test_ms:.6f}\n"
            f"Total time: {self.total_ms:.3f}\n"
        )

    def to_dict(self) -> dict:
        return {
            "training_ms": self.training_ms,
            "test_ms": self.test_ms,
            "average_test_ms": self.average_test_ms,
            "total_ms": self.total_ms,
            "n_test": self.n_test,
        }


@dataclass
class LMRun:
    """
    Output of one train/test evaluation.
    predictions[i] belongs to test_events[i].
    """
    model: LanguageModel
    train_size: int
    test_events: List[Event]
    predictions: List[RankedList]
    timing: TimingReport
    notes: List[str] = field(default_factory=list)


def split_sizes(n_events: int, sample_size: int):
    """
    Returns (train_size, test_start).

    With no held-out sample the whole corpus is both training and test set.
    """
    if sample_size < 0 or sample_size > n_events:
        raise ValueError(f"sample_size must be in [0, {n_events}], got {sample_size}")
    train_size = n_events - sample_size
    test_start = 0 if train_size == n_events else train_size
    return train_size, test_start


def run_language_model(
    store: EventStore,
    sample_size: int,
    beta: float,
    user_based: bool = True,
    res_based: bool = True,
    sorting: bool = True,
    top_k: int = REC_LIMIT,
) -> LMRun:
    train_size, test_start = split_sizes(len(store), sample_size)

    t0 = time.perf_counter()
    model = build_language_model(store.prefix(train_size), beta, user_based, res_based)
    training_ms = (time.perf_counter() - t0) * 1000.0

    test_events = store.suffix(test_start)
    t0 = time.perf_counter()
    predictions = [
        score_tags(model, e.user_id, e.resource_id, top_k=top_k, sorting=sorting)
        for e in test_events
    ]
    test_ms = (time.perf_counter() - t0) * 1000.0

    timing = TimingReport(training_ms=training_ms, test_ms=test_ms, n_test=len(test_events))
    logger.info(
        "LM train=%d test=%d beta=%.1f: training %.1f ms, test %.1f ms (avg %.4f ms)",
        train_size, len(test_events), beta, timing.training_ms, timing.test_ms, timing.average_test_ms,
    )

    notes = []
    if not user_based and not res_based:
        notes.append("both user and resource branches disabled; predictions are empty")
    return LMRun(
        model=model,
        train_size=train_size,
        test_events=test_events,
        predictions=predictions,
        timing=timing,
        notes=notes,
    )


def predictions_to_tag_ids(run: LMRun) -> List[List[int]]:
    return [[tag for tag, _ in ranked] for ranked in run.predictions]
