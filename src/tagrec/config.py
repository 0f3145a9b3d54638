from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Union
import yaml

from tagrec.model.language_model import REC_LIMIT


def load_config(path: Union[str, Path]) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"config {path} must be a YAML mapping")
    return cfg


@dataclass(frozen=True)
class LMConfig:
    log_path: str
    count_limit: int = 0
    stemming: bool = False
    beta: int = 5  # 0..10, blend = beta / 10
    user_based: bool = True
    res_based: bool = True
    sample_size: int = 0
    top_k: int = REC_LIMIT
    sorting: bool = True

    @property
    def blend(self) -> float:
        return self.beta / 10.0

    @classmethod
    def from_cfg(cls, cfg: dict, require_branch: bool = False) -> "LMConfig":
        dcfg = cfg.get("data", {})
        lcfg = cfg.get("lm", {})
        out = cls(
            log_path=str(dcfg["log_path"]),
            count_limit=int(dcfg.get("count_limit", 0)),
            stemming=bool(dcfg.get("stemming", False)),
            beta=int(lcfg.get("beta", 5)),
            user_based=bool(lcfg.get("user_based", True)),
            res_based=bool(lcfg.get("res_based", True)),
            sample_size=int(lcfg.get("sample_size", 0)),
            top_k=int(lcfg.get("top_k", REC_LIMIT)),
            sorting=bool(lcfg.get("sorting", True)),
        )
        out.validate(require_branch)
        return out

    def validate(self, require_branch: bool = False) -> None:
        if not 0 <= self.beta <= 10:
            raise ValueError(f"lm.beta must be an integer in 0..10, got {self.beta}")
        if self.count_limit < 0:
            raise ValueError("data.count_limit must be >= 0")
        if self.sample_size < 0:
            raise ValueError("lm.sample_size must be >= 0")
        if self.top_k <= 0:
            raise ValueError("lm.top_k must be > 0")
        if require_branch and not (self.user_based or self.res_based):
            raise ValueError("at least one of lm.user_based / lm.res_based must be enabled")
