"""
Engine tunables.

Defaults live on the dataclass; `EngineSettings.from_env()` overrides them
from WORDDUEL_* environment variables (optionally loaded from a dotenv file).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from dotenv import dotenv_values

ENV_PREFIX = "WORDDUEL_"


@dataclass(frozen=True)
class EngineSettings:
    # Boss reveals the secret once this many candidates (or fewer) remain.
    boss_reveal_window: int = 3

    # Hard searches only the candidate pool at or below this size.
    candidate_only_limit: int = 200

    # Cap on Hard's guess pool when searching the dictionary (None = all of it).
    hard_pool_cap: Optional[int] = None

    # Opener: how many dictionary words get a full entropy pass, and how
    # many of the best survive into the rotation.
    opener_pool_cap: int = 400
    opener_top_n: int = 10

    # Wall-clock budget for Hard/Boss before falling back to Medium (None = wait).
    hard_budget_s: Optional[float] = None

    background_workers: int = 1
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "EngineSettings":
        # process environment wins over the dotenv file
        env = dict(dotenv_values(env_file)) if env_file else {}
        env.update(os.environ)
        overrides = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            overrides[f.name] = _coerce(f.name, raw, getattr(cls, f.name))
        return replace(cls(), **overrides)


def _coerce(name: str, raw: str, default):
    if name in ("hard_pool_cap",):
        return None if raw.lower() == "none" else int(raw)
    if name in ("hard_budget_s",):
        return None if raw.lower() == "none" else float(raw)
    if isinstance(default, int):
        return int(raw)
    return raw
