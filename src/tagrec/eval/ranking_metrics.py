from __future__ import annotations
from typing import Dict, List, Sequence
import numpy as np

from tagrec.data.schema import Event

def _dcg(rels: np.ndarray) -> float:
    # rels are 0/1
    if rels.size == 0:
        return 0.0
    discounts = 1.0 / np.log2(np.arange(2, rels.size + 2))
    return float(np.sum(rels * discounts))

def ndcg_at_k(y_true: Sequence[int], ranked_ids: List[int], k: int) -> float:
    """
    Ideal ranking puts every relevant tag first, capped at k.
    """
    if k <= 0:
        return 0.0
    yset = set(y_true)
    topk = ranked_ids[:k]
    rels = np.array([1.0 if t in yset else 0.0 for t in topk], dtype=np.float32)
    dcg = _dcg(rels)
    idcg = _dcg(np.ones(min(len(yset), k), dtype=np.float32))
    return 0.0 if idcg == 0.0 else dcg / idcg

def precision_at_k(y_true: Sequence[int], ranked_ids: List[int], k: int) -> float:
    topk = ranked_ids[:k]
    if not topk:
        return 0.0
    yset = set(y_true)
    return float(sum(1 for t in topk if t in yset) / len(topk))

def recall_at_k(y_true: Sequence[int], ranked_ids: List[int], k: int) -> float:
    yset = set(y_true)
    if len(yset) == 0:
        return 0.0
    topk = set(ranked_ids[:k])
    return float(len(yset & topk) / len(yset))

def f1_at_k(y_true: Sequence[int], ranked_ids: List[int], k: int) -> float:
    p = precision_at_k(y_true, ranked_ids, k)
    r = recall_at_k(y_true, ranked_ids, k)
    return 0.0 if p + r == 0.0 else 2.0 * p * r / (p + r)

def mrr_at_k(y_true: Sequence[int], ranked_ids: List[int], k: int) -> float:
    yset = set(y_true)
    for i, t in enumerate(ranked_ids[:k], start=1):
        if t in yset:
            return 1.0 / i
    return 0.0

def map_at_k(y_true: Sequence[int], ranked_ids: List[int], k: int) -> float:
    yset = set(y_true)
    if len(yset) == 0:
        return 0.0
    hits = 0
    s = 0.0
    for i, t in enumerate(ranked_ids[:k], start=1):
        if t in yset:
            hits += 1
            s += hits / i
    return s / min(len(yset), k)

METRICS = {
    "precision": precision_at_k,
    "recall": recall_at_k,
    "f1": f1_at_k,
    "mrr": mrr_at_k,
    "map": map_at_k,
    "ndcg": ndcg_at_k,
}

def evaluate_predictions(events: List[Event], predictions: List[List[int]], k_list: List[int]) -> Dict[str, float]:
    """
    Mean of each metric over test events; predictions[i] is the ranked tag-ID list for events[i].
    """
    if len(events) != len(predictions):
        raise ValueError(f"{len(events)} events but {len(predictions)} predictions")
    out = {}
    for k in k_list:
        vals: Dict[str, List[float]] = {name: [] for name in METRICS}
        for e, ranked in zip(events, predictions):
            if not e.tag_ids:
                continue
            for name, fn in METRICS.items():
                vals[name].append(fn(e.tag_ids, ranked, k))
        for name in METRICS:
            out[f"{name}@{k}"] = float(np.mean(vals[name])) if vals[name] else 0.0
    out["n_eval_events"] = int(sum(1 for e in events if e.tag_ids))
    return out
