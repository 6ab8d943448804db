"""
Candidate filtering given accumulated constraints.

Given:
  - a pool of words (the round's dictionary, or a previous survivor list)
  - a ConstraintSet folded from the history so far

Return:
  - the words consistent with ALL feedback seen so far, in input order.

CandidatePool keeps the survivors between turns so each new constraint set
only re-checks the previous survivors instead of the whole dictionary.
Constraints only ever tighten, so the result is the same as a full rescan.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .constraints import ConstraintSet
from .errors import EmptyCandidatePool


def filter_candidates(words: Iterable[str], constraints: ConstraintSet) -> List[str]:
    """
    Keep only words that satisfy `constraints`.

    Returns:
      List[str] of consistent candidates (order preserved as in `words`).
    """
    allows = constraints.allows
    return [w for w in words if allows(w)]


class CandidatePool:
    """Dictionary plus the current survivors for one round."""

    def __init__(self, dictionary: Sequence[str], constraints: ConstraintSet):
        self.dictionary: Tuple[str, ...] = tuple(dictionary)
        self.constraints = constraints
        self._words: Tuple[str, ...] = tuple(filter_candidates(self.dictionary, constraints))
        if not self._words:
            raise EmptyCandidatePool(
                f"no dictionary word satisfies the constraints "
                f"({len(self.dictionary)} words checked)")

    @property
    def words(self) -> Tuple[str, ...]:
        """Immutable snapshot of the survivors, safe to hand to background work."""
        return self._words

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return word in self._words

    def __iter__(self):
        return iter(self._words)

    def refined(self, constraints: ConstraintSet) -> "CandidatePool":
        """
        Return a new pool for tighter `constraints`, filtering only the
        current survivors. Raises EmptyCandidatePool if nothing survives;
        `self` is left unchanged either way.
        """
        survivors = tuple(filter_candidates(self._words, constraints))
        if not survivors:
            raise EmptyCandidatePool(
                f"constraints eliminate all {len(self._words)} remaining candidates")
        pool = object.__new__(CandidatePool)
        pool.dictionary = self.dictionary
        pool.constraints = constraints
        pool._words = survivors
        return pool
