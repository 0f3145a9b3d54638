from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Sequence, Union

from tagrec.data.interning import InternTable
from tagrec.data.schema import Event
from tagrec.eval.driver import TimingReport

logger = logging.getLogger(__name__)


def prediction_file_stem(filename: str, user_based: bool, res_based: bool, beta: int) -> str:
    """
    <filename>_mp_ur_<beta>, or _mp_u_ / _mp_r_ when one branch is off.
    """
    suffix = "_mp_ur_"
    if not user_based:
        suffix = "_mp_r_"
    elif not res_based:
        suffix = "_mp_u_"
    return f"{filename}{suffix}{beta}"


def format_prediction(
    event: Event,
    predicted: Sequence[int],
    users: InternTable[str],
    resources: InternTable[str],
    tags: InternTable[str],
) -> str:
    real = ",".join(tags.value_of(t) for t in event.tag_ids)
    pred = ",".join(tags.value_of(t) for t in predicted)
    return f"{users.value_of(event.user_id)}-{resources.value_of(event.resource_id)}|{real}|{pred}"


def write_predictions(
    path: Union[str, Path],
    test_events: List[Event],
    predictions: List[List[int]],
    users: InternTable[str],
    resources: InternTable[str],
    tags: InternTable[str],
) -> Path:
    """
    One line per test event: user-resource|real tags|predicted tags.
    """
    if len(test_events) != len(predictions):
        raise ValueError(f"{len(test_events)} events but {len(predictions)} predictions")
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for e, pred in zip(test_events, predictions):
            f.write(format_prediction(e, pred, users, resources, tags) + "\n")
    logger.info("Wrote %d predictions to %s", len(predictions), path)
    return path


def write_timing(path: Union[str, Path], timing: TimingReport) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(timing.to_text(), encoding="utf-8")
    return path
