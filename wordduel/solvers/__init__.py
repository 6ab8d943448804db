from __future__ import annotations
from typing import List, Optional

from wordduel.config import EngineSettings
from .base import BaseSolver, REGISTRY, register

from . import random_consistent  # noqa: F401
from . import positional_freq  # noqa: F401
from . import entropy  # noqa: F401
from . import boss  # noqa: F401

from .entropy import EntropyRanker, entropy_of_guess
from .opener import OpenerBook, get_opener_book
from .policy import DifficultyTier, DifficultyPolicy


def create_solver(solver_id: str, settings: Optional[EngineSettings] = None) -> BaseSolver:
    """
    Factory: instantiate a registered solver by id.
    """
    try:
        cls = REGISTRY[solver_id]
    except KeyError as e:
        raise ValueError(
            f"Unknown solver id: {solver_id}. Available: {sorted(REGISTRY.keys())}") from e
    return cls(settings)


def get_solver_ids() -> List[str]:
    """
    Return all registered solver ids (sorted for stable CLI help).
    """
    return sorted(REGISTRY.keys())


__all__ = [
    "BaseSolver", "REGISTRY", "register", "create_solver", "get_solver_ids",
    "EntropyRanker", "entropy_of_guess", "OpenerBook", "get_opener_book",
    "DifficultyTier", "DifficultyPolicy",
]
