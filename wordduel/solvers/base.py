from __future__ import annotations
import random
from typing import Dict, List, Optional, Type

from wordduel.config import EngineSettings

# ---- Global solver registry ----
REGISTRY: Dict[str, Type["BaseSolver"]] = {}


def register(cls: Type["BaseSolver"]) -> Type["BaseSolver"]:
    """
    Decorator: @register on a solver class adds it to REGISTRY by its `id`.
    """
    sid = getattr(cls, "id", None)
    if not sid:
        raise ValueError(f"{cls.__name__} must define a non-empty `id`")
    if sid in REGISTRY:
        raise ValueError(f"Duplicate solver id: {sid}")
    REGISTRY[sid] = cls
    return cls


# ---- Base class that solvers inherit ----
class BaseSolver:
    """
    A guess-selection strategy.

    `next_guess(state)` receives a dict with:
      - "turn":       1-based turn number for the side being played
      - "N":          word length
      - "candidates": words still consistent with the history (tuple, in
                      dictionary order, never empty)
      - "dictionary": the full guess universe for the round
      - "history":    list of GuessRecords committed so far (both sides)
      - "secret":     only present for the boss solver
    """
    id = "base"
    name = "Base"
    version = "0.0.0"

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or EngineSettings()
        self.N: int = 5
        self.dictionary: List[str] = []
        self.rng = random.Random()

    def reset(self, *, dictionary: List[str], N: int, seed: int | None = None) -> None:
        self.dictionary = list(dictionary)
        self.N = int(N)
        if seed is not None:
            self.rng.seed(seed)

    def next_guess(self, state: dict) -> str:
        raise NotImplementedError("Override in subclass")
