"""
Positional Letter Frequency (Medium tier).

Idea:
  Build per-position histograms and a letter-presence histogram from the
  CURRENT candidate set. Score each candidate by its expected number of
  matches on the next turn:
      sum over positions of counts[pos][word[pos]]           (exact hits)
    + PRESENT_WEIGHT * sum over distinct letters of present[ch] (letter hits)
  minus a small penalty per repeated letter.

Only candidates are scored, so every Medium guess could be the answer.
That is cheaper and deliberately weaker than the entropy search.

Fast: O(|candidates|*N) to build + O(|candidates|*N) to score.
"""

from __future__ import annotations
from collections import Counter
from typing import List, Sequence
from .base import BaseSolver, register


@register
class PositionalFreqSolver(BaseSolver):
    id = "positional_freq"
    name = "Positional Letter Frequency"
    version = "1.1.0"

    PRESENT_WEIGHT = 0.5
    DUPLICATE_PENALTY = 0.25  # subtract this per repeated letter instance beyond the first

    def _build_pos_counts(self, candidates: Sequence[str]) -> List[Counter]:
        counts = [Counter() for _ in range(self.N)]
        for w in candidates:
            for i, ch in enumerate(w):
                counts[i][ch] += 1
        return counts

    def _build_presence(self, candidates: Sequence[str]) -> Counter:
        present = Counter()
        for w in candidates:
            present.update(set(w))
        return present

    def _score_word(self, w: str, pos_counts: List[Counter], present: Counter) -> float:
        s = 0.0
        seen = set()
        for i, ch in enumerate(w):
            s += pos_counts[i][ch]
            if ch in seen:
                s -= self.DUPLICATE_PENALTY
            else:
                seen.add(ch)
                s += self.PRESENT_WEIGHT * present[ch]
        return s

    def next_guess(self, state: dict) -> str:
        candidates: Sequence[str] = state["candidates"]
        self.N = state.get("N", self.N)

        pos_counts = self._build_pos_counts(candidates)
        present = self._build_presence(candidates)

        best_score = None
        best: List[str] = []
        for w in candidates:
            s = self._score_word(w, pos_counts, present)
            if best_score is None or s > best_score:
                best_score = s; best = [w]
            elif s == best_score:
                best.append(w)

        return best[self.rng.randrange(len(best))]
