from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import InvalidPattern, LengthMismatch
from .scoring import FeedbackPattern, is_solved


class Player(str, Enum):
    PLAYER = "player"
    OPPONENT = "opponent"


@dataclass(frozen=True)
class GuessRecord:
    """One scored guess. Created once per submitted row and never mutated."""
    guess: str
    pattern: FeedbackPattern
    turn_owner: Player

    def __post_init__(self):
        if len(self.guess) != len(self.pattern):
            raise LengthMismatch(len(self.guess), len(self.pattern), self.pattern)
        if set(self.pattern) - {"G", "Y", "-"}:
            raise InvalidPattern(self.pattern)

    @property
    def solved(self) -> bool:
        return is_solved(self.pattern)
