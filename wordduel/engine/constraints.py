"""
Constraint tracking from game history.

Given:
  - a history of scored guesses (GuessRecord, or plain (guess, pattern) pairs)
  - target word length N

Produce:
  - a ConstraintSet that every still-possible secret must satisfy.

Rules per scored guess:
  - 'G' fixes the letter at that position.
  - 'Y' forbids the letter at that position and raises the letter's minimum
    count to the number of 'G'/'Y' marks it got in this guess.
  - '-' forbids the letter at that position. If the same guess has no 'G'/'Y'
    for the letter, its maximum count drops to 0; if it does (repeated
    letters), the maximum is capped at that confirmed count instead.

Every rule is a set-union, max or min, so folding the same history twice
gives the same result as folding it once.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

from .alphabet import Alphabet, LATIN
from .errors import LengthMismatch
from .records import GuessRecord

# History items are GuessRecords or (guess, pattern) tuples.
HistoryItem = Union[GuessRecord, Tuple[str, str]]


@dataclass(frozen=True)
class ConstraintSet:
    length: int
    exact: Tuple[Optional[str], ...]
    forbidden_at: Tuple[FrozenSet[str], ...]
    min_count: Dict[str, int]
    max_count: Dict[str, int]

    @classmethod
    def empty(cls, N: int) -> "ConstraintSet":
        return cls(
            length=N,
            exact=(None,) * N,
            forbidden_at=(frozenset(),) * N,
            min_count={},
            max_count={},
        )

    def allows(self, word: str) -> bool:
        """True if `word` satisfies every exact, forbidden and count constraint."""
        if len(word) != self.length:
            return False

        for i, ch in enumerate(word):
            fixed = self.exact[i]
            if fixed is not None and ch != fixed:
                return False
            if ch in self.forbidden_at[i]:
                return False

        if self.min_count or self.max_count:
            counts = Counter(word)
            for ch, lo in self.min_count.items():
                if counts[ch] < lo:
                    return False
            for ch, hi in self.max_count.items():
                if counts[ch] > hi:
                    return False
        return True

    def is_contradictory(self) -> bool:
        """Cheap check for constraints no word can satisfy."""
        for ch, lo in self.min_count.items():
            if ch in self.max_count and lo > self.max_count[ch]:
                return True
        fixed_counts = Counter(ch for ch in self.exact if ch is not None)
        for ch, n in fixed_counts.items():
            if self.max_count.get(ch, n) < n:
                return True
        for i, ch in enumerate(self.exact):
            if ch is not None and ch in self.forbidden_at[i]:
                return True
        required = sum(self.min_count.values())
        return required > self.length

    def possible_letters(self, alphabet: Alphabet = LATIN) -> List[FrozenSet[str]]:
        """
        Letters still possible at each position.

        A fixed position yields a singleton. Otherwise it is the alphabet
        minus letters forbidden there, minus letters whose maximum count is
        already used up by fixed positions (this covers fully absent letters).
        """
        fixed_counts = Counter(ch for ch in self.exact if ch is not None)
        exhausted = {ch for ch, hi in self.max_count.items() if fixed_counts[ch] >= hi}
        base = alphabet.letter_set - exhausted

        out: List[FrozenSet[str]] = []
        for i in range(self.length):
            fixed = self.exact[i]
            if fixed is not None:
                out.append(frozenset(fixed))
            else:
                out.append(frozenset(base - self.forbidden_at[i]))
        return out


def _unpack(item: HistoryItem) -> Tuple[str, str]:
    if isinstance(item, GuessRecord):
        return item.guess, item.pattern
    guess, pattern = item
    return guess, pattern


def apply(record: HistoryItem, into: ConstraintSet) -> ConstraintSet:
    """Return a new ConstraintSet with one more scored guess folded in."""
    guess, pattern = _unpack(record)
    if len(guess) != into.length:
        raise LengthMismatch(into.length, len(guess), guess)
    if len(pattern) != into.length:
        raise LengthMismatch(into.length, len(pattern), pattern)

    exact = list(into.exact)
    forbidden = [set(s) for s in into.forbidden_at]
    min_count = dict(into.min_count)
    max_count = dict(into.max_count)

    guessed: Counter = Counter()
    confirmed: Counter = Counter()
    for i, (ch, mark) in enumerate(zip(guess, pattern)):
        guessed[ch] += 1
        if mark == "G":
            exact[i] = ch
            confirmed[ch] += 1
        elif mark == "Y":
            forbidden[i].add(ch)
            confirmed[ch] += 1
        else:
            forbidden[i].add(ch)

    for ch, k in guessed.items():
        r = confirmed[ch]
        if r > 0:
            min_count[ch] = max(min_count.get(ch, 0), r)
        if r < k:
            # at least one '-' for this letter: the secret holds exactly r of them
            max_count[ch] = min(max_count.get(ch, r), r)

    return ConstraintSet(
        length=into.length,
        exact=tuple(exact),
        forbidden_at=tuple(frozenset(s) for s in forbidden),
        min_count=min_count,
        max_count=max_count,
    )


def fold(history: Iterable[HistoryItem], N: int) -> ConstraintSet:
    """Fold a whole history into one ConstraintSet."""
    cs = ConstraintSet.empty(N)
    for item in history:
        cs = apply(item, cs)
    return cs
