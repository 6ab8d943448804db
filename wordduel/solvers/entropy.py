"""
Entropy ranking (expected information gain) and the Hard-tier solver.

Main idea:
  - For each candidate guess g, partition CURRENT candidates by the feedback
    pattern score(secret=c, guess=g).
  - Compute Shannon entropy H over the bucket sizes; pick g with max H.
Tie-break (deterministic):
  - a guess that could itself be the answer first, then dictionary order.

Cost is O(|guess pool| * |candidates|) scorings, so the session runs this
off the interactive path (see session.background).

Acceleration (Hard only, opt-in via settings.hard_pool_cap):
  - Pre-rank the dictionary by DISTINCT letter-frequency score w.r.t. the
    CURRENT candidates, keep the top-K, and always include top candidate words.
"""

from __future__ import annotations
from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from .base import BaseSolver, register
from wordduel.engine import score as score_fn  # canonical scoring
from wordduel.engine.errors import EmptyCandidatePool


def partition(guess: str, candidates: Iterable[str]) -> Dict[str, int]:
    """Bucket sizes of `candidates` keyed by the pattern `guess` would get."""
    buckets: Dict[str, int] = defaultdict(int)
    # localize for speed
    _score = score_fn
    for secret in candidates:
        buckets[_score(secret, guess)] += 1
    return buckets


def entropy_of_sizes(sizes: Iterable[int]) -> float:
    """Shannon entropy in bits of a partition given its bucket sizes."""
    # sorted so equal partitions always sum in the same order (exact float ties)
    arr = np.sort(np.fromiter(sizes, dtype=np.float64))
    n = arr.sum()
    if n <= 0:
        return 0.0
    p = arr / n
    return float(-(p * np.log2(p)).sum())


def entropy_of_guess(guess: str, candidates: Sequence[str]) -> float:
    if len(candidates) <= 1:
        return 0.0
    return entropy_of_sizes(partition(guess, candidates).values())


def distinct_letter_score(w: str, counts: Dict[str, int]) -> int:
    """Sum of per-letter counts with duplicates in the word counted once."""
    s, seen = 0, set()
    for ch in w:
        if ch not in seen:
            s += counts.get(ch, 0)
            seen.add(ch)
    return s


class EntropyRanker:
    """Scores guesses by the entropy of the partition they induce."""

    # At or below this many candidates every guess is equally (un)informative:
    # just play a candidate.
    DIRECT_PICK_LIMIT = 2

    def rank(self, guess_pool: Sequence[str], candidates: Sequence[str]) -> List[Tuple[str, float]]:
        """
        All of `guess_pool` (deduplicated, first occurrence wins) as
        (word, entropy_bits), best first.
        """
        cand_set = set(candidates)
        scored = []
        seen = set()
        for idx, g in enumerate(guess_pool):
            if g in seen:
                continue
            seen.add(g)
            scored.append((g, entropy_of_guess(g, candidates), idx))
        scored.sort(key=lambda t: (-t[1], t[0] not in cand_set, t[2]))
        return [(g, h) for g, h, _ in scored]

    def best_guesses(self, guess_pool: Sequence[str], candidates: Sequence[str],
                     top_n: int = 1) -> List[str]:
        if not candidates:
            raise EmptyCandidatePool("cannot rank guesses against an empty candidate pool")
        if len(candidates) <= self.DIRECT_PICK_LIMIT:
            return list(candidates)[:top_n]
        pool = guess_pool or candidates
        return [g for g, _ in self.rank(pool, candidates)[:top_n]]


@register
class EntropySolver(BaseSolver):
    id = "entropy"
    name = "Entropy (Expected Information Gain)"
    version = "2.0.0"

    # Also include up to this many top candidate words when the pool is capped
    # (so we don't miss an obvious answer late in the game)
    INCLUDE_TOP_CANDIDATES = 100

    def __init__(self, settings=None):
        super().__init__(settings)
        self.ranker = EntropyRanker()

    def select_pool(self, candidates: Sequence[str], dictionary: Sequence[str]) -> Sequence[str]:
        """
        Choose which words to evaluate with entropy:
          - Small candidate set: just the candidates.
          - Otherwise the dictionary, optionally capped to the top-K words by
            distinct-letter coverage of the current candidates.
        """
        if len(candidates) <= self.settings.candidate_only_limit or not dictionary:
            return candidates

        cap = self.settings.hard_pool_cap
        if cap is None or cap >= len(dictionary):
            return dictionary

        counts = Counter()
        for w in candidates:
            counts.update(set(w))

        ranked = sorted(dictionary, key=lambda w: distinct_letter_score(w, counts), reverse=True)
        top_cands = sorted(candidates, key=lambda w: distinct_letter_score(w, counts), reverse=True)
        top_cands = top_cands[: self.INCLUDE_TOP_CANDIDATES]

        # Keep dictionary order inside the chosen subset so tie-breaks stay stable
        chosen = set(top_cands) | set(ranked[:cap])
        return [w for w in dictionary if w in chosen]

    def next_guess(self, state: dict) -> str:
        """Pick the guess with maximum expected information gain."""
        candidates: Sequence[str] = state["candidates"]
        dictionary: Sequence[str] = state.get("dictionary") or self.dictionary

        pool = self.select_pool(candidates, dictionary)
        return self.ranker.best_guesses(pool, candidates, top_n=1)[0]
