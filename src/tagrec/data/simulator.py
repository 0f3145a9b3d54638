from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Union
import numpy as np

from tagrec.data.reader import DELIMITER

def _softmax(x: np.ndarray) -> np.ndarray:
    x = x - np.max(x)
    ex = np.exp(x)
    return ex / (np.sum(ex) + 1e-12)

def _zipf_weights(n: int, s: float) -> np.ndarray:
    w = 1.0 / np.power(np.arange(1, n + 1, dtype=np.float64), s)
    return w / w.sum()

def format_line(user: str, resource: str, ts: str, tags: List[str], categories: List[str], rating: Optional[float] = None) -> str:
    fields = [user, resource, ts, ",".join(tags), ",".join(categories)]
    if rating is not None:
        fields.append(f"{rating:.1f}")
    return '"' + DELIMITER.join(fields) + '"'

def simulate_log(cfg: dict) -> List[str]:
    """
    Synthetic Wikipedia-like tagging log.

    Every resource has one topic; tags are drawn from the resource topic with
    Zipf popularity, resources from the user's preferred topics. Lines are in
    the reader's input format.
    """
    seed = int(cfg["seed"])
    rng = np.random.RandomState(seed)

    scfg = cfg["sim"]
    n_users = int(scfg["n_users"])
    n_resources = int(scfg["n_resources"])
    n_tags = int(scfg["n_tags"])
    n_topics = int(scfg["n_topics"])
    n_categories = int(scfg.get("n_categories", n_topics))
    n_events = int(scfg["n_events"])
    max_tags = int(scfg.get("max_tags_per_event", 5))
    zipf_s = float(scfg.get("tag_zipf_s", 1.1))
    taste_temp = float(scfg.get("taste_temperature", 1.0))
    rating_frac = float(scfg.get("rating_frac", 0.0))
    start_ts = int(scfg.get("start_ts", 1_200_000_000))

    # ---- topics for tags / resources ----
    tag_topic = rng.randint(0, n_topics, size=n_tags)
    res_topic = rng.randint(0, n_topics, size=n_resources)
    res_cat = rng.randint(0, n_categories, size=n_resources)

    tags_by_topic = [np.where(tag_topic == t)[0] for t in range(n_topics)]
    res_by_topic = [np.where(res_topic == t)[0] for t in range(n_topics)]
    all_tags = np.arange(n_tags)
    all_res = np.arange(n_resources)

    # ---- user tastes and activity ----
    taste = np.stack([_softmax(rng.normal(size=n_topics) / taste_temp) for _ in range(n_users)])
    activity = rng.lognormal(mean=0.0, sigma=1.0, size=n_users)
    activity = activity / activity.sum()

    timestamps = np.sort(rng.randint(0, 365 * 24 * 3600, size=n_events)) + start_ts

    lines: List[str] = []
    for i in range(n_events):
        u = int(rng.choice(n_users, p=activity))
        topic = int(rng.choice(n_topics, p=taste[u]))

        pool_res = res_by_topic[topic] if res_by_topic[topic].size else all_res
        r = int(rng.choice(pool_res))

        pool_tags = tags_by_topic[int(res_topic[r])]
        if pool_tags.size == 0:
            pool_tags = all_tags
        k = int(rng.randint(1, max_tags + 1))
        # with replacement: the same tag may be assigned twice in one event
        picked = rng.choice(pool_tags, size=k, replace=True, p=_zipf_weights(pool_tags.size, zipf_s))

        rating = float(rng.randint(1, 11)) / 2.0 if rng.rand() < rating_frac else None
        lines.append(format_line(
            user=f"u{u}",
            resource=f"r{r}",
            ts=str(int(timestamps[i])),
            tags=[f"tag{int(t)}" for t in picked],
            categories=[f"cat{int(res_cat[r])}"],
            rating=rating,
        ))
    return lines

def write_log(lines: List[str], path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
