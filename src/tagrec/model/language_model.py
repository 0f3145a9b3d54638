from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from tagrec.data.schema import Axis, Event, RankedList
from tagrec.model.distributions import TagDistribution, build_distributions

REC_LIMIT = 10


@dataclass
class LanguageModel:
    """
    Per-user and per-resource tag distributions from a training slice.
    beta is the weight of the user branch; the resource branch gets 1 - beta.
    """
    beta: float
    user_based: bool = True
    res_based: bool = True
    user_dists: Dict[int, TagDistribution] = field(default_factory=dict)
    res_dists: Dict[int, TagDistribution] = field(default_factory=dict)


def _check_blend(blend: float) -> float:
    if not 0.0 <= blend <= 1.0:
        raise ValueError(f"blend must be in [0, 1], got {blend}")
    return blend


def build_language_model(
    train_events: List[Event],
    beta: float,
    user_based: bool = True,
    res_based: bool = True,
) -> LanguageModel:
    model = LanguageModel(beta=_check_blend(beta), user_based=user_based, res_based=res_based)
    if user_based:
        model.user_dists = build_distributions(train_events, Axis.USER)
    if res_based:
        model.res_dists = build_distributions(train_events, Axis.RESOURCE)
    return model


def rank_scores(scores: Dict[int, float], top_k: int = REC_LIMIT) -> RankedList:
    """
    Descending score; equal scores fall back to ascending tag ID.
    """
    return sorted(scores.items(), key=lambda x: (-x[1], x[0]))[:top_k]


def score_tags(
    model: LanguageModel,
    user_id: int,
    resource_id: int,
    blend: Optional[float] = None,
    top_k: int = REC_LIMIT,
    sorting: bool = True,
) -> RankedList:
    """
    score(t) = blend * exp(c_u(t)) / sum_u + (1 - blend) * exp(c_r(t)) / sum_r

    IDs without a training distribution contribute nothing. Without sorting
    the full score map is returned, user tags first, then resource-only tags.
    """
    w = model.beta if blend is None else _check_blend(blend)
    scores: Dict[int, float] = {}

    if model.user_based:
        dist = model.user_dists.get(user_id)
        if dist is not None:
            for tag, count in dist.counts.items():
                scores[tag] = w * dist.weight(count)

    if model.res_based:
        dist = model.res_dists.get(resource_id)
        if dist is not None:
            for tag, count in dist.counts.items():
                scores[tag] = scores.get(tag, 0.0) + (1.0 - w) * dist.weight(count)

    if sorting:
        return rank_scores(scores, top_k)
    return list(scores.items())
