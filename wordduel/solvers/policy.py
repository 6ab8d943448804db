"""
Difficulty tiers and the tier -> solver mapping.

The mapping is stateless: tiers never change on their own. The caller
escalates after the opponent is defeated (Easy -> Medium -> Hard -> Boss)
and starts a new session with the new tier.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from wordduel.config import EngineSettings
from .base import BaseSolver, REGISTRY


class DifficultyTier(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    BOSS = "boss"

    def escalate(self) -> "DifficultyTier":
        order = list(DifficultyTier)
        i = order.index(self)
        return order[min(i + 1, len(order) - 1)]


TIER_SOLVERS: Dict[DifficultyTier, str] = {
    DifficultyTier.EASY: "random_consistent",
    DifficultyTier.MEDIUM: "positional_freq",
    DifficultyTier.HARD: "entropy",
    DifficultyTier.BOSS: "boss",
}

# Tiers whose solver runs the entropy search (subject to the wall-clock budget)
ENTROPY_TIERS = frozenset({DifficultyTier.HARD, DifficultyTier.BOSS})


class DifficultyPolicy:
    """Builds (and keeps) one solver instance per tier for a round."""

    def __init__(self, *, dictionary, N: int, seed: Optional[int] = None,
                 settings: Optional[EngineSettings] = None):
        self.settings = settings or EngineSettings()
        self.dictionary = list(dictionary)
        self.N = N
        self.seed = seed
        self._solvers: Dict[DifficultyTier, BaseSolver] = {}

    def solver_for(self, tier: DifficultyTier) -> BaseSolver:
        tier = DifficultyTier(tier)
        solver = self._solvers.get(tier)
        if solver is None:
            solver = REGISTRY[TIER_SOLVERS[tier]](self.settings)
            solver.reset(dictionary=self.dictionary, N=self.N, seed=self.seed)
            self._solvers[tier] = solver
        return solver

    def choose(self, tier: DifficultyTier, state: dict) -> str:
        """Run the tier's solver. Only Boss ever sees the secret."""
        tier = DifficultyTier(tier)
        if tier is not DifficultyTier.BOSS and "secret" in state:
            state = {k: v for k, v in state.items() if k != "secret"}
        return self.solver_for(tier).next_guess(state)
