"""
Opening guesses.

The opener is chosen before any feedback exists, so it only depends on the
dictionary. An OpenerBook ranks quality-gated dictionary words by entropy
over the FULL dictionary and keeps the best few; books are cached per
(alphabet, length, dictionary) so later rounds reuse them.

Quality gate (a bad first word wastes the turn):
  - no letter three or more times
  - at most one doubled letter
  - at least 3 distinct letters
  - never a doubled q/j/x/z (Latin)
  - no straight alphabet run like "abcde" or "edcba"

`pick` takes the caller's recently used openers as a cooldown list so the
opponent does not open every round with the same word.
"""

from __future__ import annotations

import hashlib
import logging
import random
import threading
from collections import Counter
from typing import Dict, Iterable, List, Sequence, Tuple

from wordduel.config import EngineSettings
from wordduel.engine.alphabet import Alphabet, LATIN
from .entropy import EntropyRanker, distinct_letter_score

logger = logging.getLogger(__name__)

_RARE_LATIN = frozenset("qjxz")


def is_monotonic_sequence(word: str) -> bool:
    if len(word) < 4:
        return False
    steps = [ord(b) - ord(a) for a, b in zip(word, word[1:])]
    return all(d == 1 for d in steps) or all(d == -1 for d in steps)


def is_good_opener(word: str, alphabet: Alphabet = LATIN) -> bool:
    counts = Counter(word)
    if any(c >= 3 for c in counts.values()):
        return False
    if sum(1 for c in counts.values() if c == 2) > 1:
        return False
    if len(counts) < min(3, len(word)):
        return False
    if alphabet.name == LATIN.name and any(counts[ch] >= 2 for ch in _RARE_LATIN):
        return False
    return not is_monotonic_sequence(word)


class OpenerBook:
    """Best opening words for one dictionary, with their entropy in bits."""

    def __init__(self, ranked: Sequence[Tuple[str, float]]):
        if not ranked:
            raise ValueError("an opener book needs at least one word")
        self.ranked: Tuple[Tuple[str, float], ...] = tuple(ranked)

    @property
    def best(self) -> str:
        return self.ranked[0][0]

    def words(self) -> List[str]:
        return [w for w, _ in self.ranked]

    def pick(self, rng: random.Random, recent: Iterable[str] = ()) -> str:
        """Random choice among the ranked openers not used recently."""
        recent = set(recent)
        eligible = [w for w, _ in self.ranked if w not in recent]
        if not eligible:
            eligible = self.words()
        return eligible[rng.randrange(len(eligible))]

    @classmethod
    def build(cls, dictionary: Sequence[str], alphabet: Alphabet = LATIN,
              settings: EngineSettings | None = None) -> "OpenerBook":
        settings = settings or EngineSettings()
        words = list(dictionary)
        gated = [w for w in words if is_good_opener(w, alphabet)] or words

        # Cheap prefilter: distinct-letter coverage of the whole dictionary
        counts = Counter()
        for w in words:
            counts.update(set(w))
        if len(gated) > settings.opener_pool_cap:
            top = sorted(gated, key=lambda w: distinct_letter_score(w, counts), reverse=True)
            keep = set(top[: settings.opener_pool_cap])
            gated = [w for w in gated if w in keep]

        ranked = EntropyRanker().rank(gated, words)[: settings.opener_top_n]
        logger.info("opener book built: %d words, best %r (%.3f bits)",
                    len(words), ranked[0][0], ranked[0][1])
        return cls(ranked)


_BOOKS: Dict[Tuple[str, int, str, int, int], OpenerBook] = {}
_BOOKS_LOCK = threading.Lock()


def _fingerprint(dictionary: Sequence[str]) -> str:
    h = hashlib.sha256()
    for w in dictionary:
        h.update(w.encode("utf-8"))
        h.update(b"\n")
    return h.hexdigest()


def get_opener_book(dictionary: Sequence[str], alphabet: Alphabet = LATIN,
                    settings: EngineSettings | None = None) -> OpenerBook:
    """Cached OpenerBook for this dictionary (built on first use)."""
    settings = settings or EngineSettings()
    N = len(dictionary[0]) if dictionary else 0
    key = (alphabet.name, N, _fingerprint(dictionary),
           settings.opener_pool_cap, settings.opener_top_n)
    with _BOOKS_LOCK:
        book = _BOOKS.get(key)
    if book is not None:
        logger.debug("opener book cache hit for %s/%d", alphabet.name, N)
        return book

    book = OpenerBook.build(dictionary, alphabet, settings)
    with _BOOKS_LOCK:
        return _BOOKS.setdefault(key, book)


def clear_opener_cache() -> None:
    with _BOOKS_LOCK:
        _BOOKS.clear()
