from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple
import numpy as np
import matplotlib.pyplot as plt

from tagrec.data.reader import TaggingLogReader
from tagrec.data.schema import Event


@dataclass
class DiagnosticsSummary:
    n_events: int
    n_users: int
    n_resources: int
    n_tags: int
    n_categories: int
    n_tag_assignments: int
    mean_tags_per_event: float
    mean_events_per_user: float
    n_train: int
    n_test: int
    cold_start_user_rate: float
    cold_start_resource_rate: float


def cold_start_rates(train: List[Event], test: List[Event]) -> Tuple[float, float]:
    """
    Share of test events whose user (resource) never occurs in the training slice.
    Those events get no contribution from the corresponding branch.
    """
    if not test:
        return 0.0, 0.0
    train_users = {e.user_id for e in train}
    train_res = {e.resource_id for e in train}
    cold_u = sum(1 for e in test if e.user_id not in train_users)
    cold_r = sum(1 for e in test if e.resource_id not in train_res)
    return cold_u / len(test), cold_r / len(test)


def plot_tag_rank_frequency(tag_counts: np.ndarray, outpath: Path, title: str = "Tag rank-frequency") -> None:
    outpath.parent.mkdir(parents=True, exist_ok=True)

    freq = np.sort(tag_counts[tag_counts > 0])[::-1]
    plt.figure()
    if freq.size:
        plt.loglog(np.arange(1, freq.size + 1), freq, marker=".", linestyle="none")
    plt.xlabel("tag rank")
    plt.ylabel("assignments (counted events)")
    plt.title(title)
    plt.tight_layout()
    plt.savefig(outpath, dpi=160)
    plt.close()


def plot_events_per_user(events: List[Event], outpath: Path, title: str = "Events per user") -> None:
    outpath.parent.mkdir(parents=True, exist_ok=True)

    per_user = np.bincount(np.array([e.user_id for e in events], dtype=np.int64)) if events else np.zeros(0)
    plt.figure()
    plt.hist(per_user[per_user > 0], bins=60)
    plt.xlabel("events per user")
    plt.ylabel("number of users")
    plt.title(title)
    plt.tight_layout()
    plt.savefig(outpath, dpi=160)
    plt.close()


def plot_tags_per_event(events: List[Event], outpath: Path, title: str = "Tags per event") -> None:
    outpath.parent.mkdir(parents=True, exist_ok=True)

    sizes = np.array([len(e.tag_ids) for e in events], dtype=np.int32)
    plt.figure()
    if sizes.size:
        plt.bar(*np.unique(sizes, return_counts=True))
    plt.xlabel("tags per event")
    plt.ylabel("number of events")
    plt.title(title)
    plt.tight_layout()
    plt.savefig(outpath, dpi=160)
    plt.close()


def run_diagnostics(
    reader: TaggingLogReader,
    train_size: int,
    figs_dir: Path,
    test_start: Optional[int] = None,
) -> DiagnosticsSummary:
    """
    Produces 3 diagnostic figures + returns summary stats.

    The test slice starts at test_start (default: train_size), matching
    split_sizes() in the evaluation driver.
    """
    store = reader.store
    events = store.events
    train = store.prefix(train_size)
    test = store.suffix(train_size if test_start is None else test_start)

    n_events = len(events)
    n_users = len(reader.users)
    cold_u, cold_r = cold_start_rates(train, test)

    plot_tag_rank_frequency(
        np.array(reader.tags.counts, dtype=np.int64),
        figs_dir / "tag_rank_frequency.png",
        title="Tag rank-frequency (log-log)",
    )
    plot_events_per_user(events, figs_dir / "events_per_user.png")
    plot_tags_per_event(events, figs_dir / "tags_per_event.png")

    return DiagnosticsSummary(
        n_events=n_events,
        n_users=n_users,
        n_resources=len(reader.resources),
        n_tags=len(reader.tags),
        n_categories=len(reader.categories),
        n_tag_assignments=reader.tag_assignments_count(),
        mean_tags_per_event=float(np.mean([len(e.tag_ids) for e in events])) if n_events else 0.0,
        mean_events_per_user=n_events / n_users if n_users else 0.0,
        n_train=len(train),
        n_test=len(test),
        cold_start_user_rate=cold_u,
        cold_start_resource_rate=cold_r,
    )
