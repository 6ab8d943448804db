"""
Random Consistent solver (Easy tier).

Strategy:
  - Choose uniformly at random from the CURRENT candidate set (words still
    consistent with all feedback so far).

Notes:
  - Deterministic across runs with the same seed (via BaseSolver.rng).
  - The candidate set is never empty here: the session raises
    EmptyCandidatePool before a solver is ever asked.
"""

from __future__ import annotations

from typing import Sequence
from .base import BaseSolver, register


@register
class RandomConsistentSolver(BaseSolver):
    id = "random_consistent"
    name = "Random Consistent"
    version = "1.1.0"

    def next_guess(self, state: dict) -> str:
        """
        Pick any candidate uniformly at random (seeded RNG).

        Args:
            state: solver state; only "candidates" is read.

        Returns:
            A single lowercase guess string of length N.
        """
        candidates: Sequence[str] = state["candidates"]
        i = self.rng.randrange(len(candidates))
        return candidates[i]
