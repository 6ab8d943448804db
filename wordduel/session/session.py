"""
One round of a duel.

A GuessSession is created when a new secret word is drawn and closed when
the round ends (win, loss, tier escalation or alphabet switch). It owns:
  - the player's and the opponent's committed GuessRecords
  - the ConstraintSet folded from both histories
  - the CandidatePool for those constraints
  - the opponent's tier and a cache of its next guess
  - a BackgroundRunner whose generation token is retired on every commit
    and on close()

Turns strictly alternate, so only one thread ever writes history; the lock
protects the caches that background jobs fill in.
"""

from __future__ import annotations

import logging
import random
import threading
from concurrent.futures import Future, TimeoutError as FuturesTimeout
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from wordduel.config import EngineSettings
from wordduel.engine import (
    Alphabet, CandidatePool, ConstraintSet, EmptyCandidatePool, GuessRecord, LATIN,
    LengthMismatch, Player, apply, check_guess, score,
)
from wordduel.solvers import DifficultyPolicy, DifficultyTier, get_opener_book
from wordduel.solvers.policy import ENTROPY_TIERS
from .background import BackgroundRunner

logger = logging.getLogger(__name__)


class GuessSession:
    def __init__(
            self,
            secret: str,
            dictionary: Sequence[str],
            *,
            tier: DifficultyTier = DifficultyTier.EASY,
            alphabet: Alphabet = LATIN,
            settings: Optional[EngineSettings] = None,
            history: Iterable[GuessRecord] = (),
            recent_openers: Iterable[str] = (),
            seed: Optional[int] = None,
    ):
        """
        Args:
          secret:         the round's hidden word
          dictionary:     every word of the round (all the secret's length)
          tier:           opponent difficulty, chosen by the caller
          alphabet:       active alphabet; guesses outside it are rejected
          settings:       engine tunables (defaults if omitted)
          history:        previously committed records to replay (restore)
          recent_openers: openers used in recent rounds, avoided if possible
          seed:           RNG seed for reproducible opponent choices
        """
        self.settings = settings or EngineSettings()
        self.alphabet = alphabet
        self.tier = DifficultyTier(tier)

        self._secret = check_guess(secret, len(alphabet.normalize(secret)), alphabet)
        self.N = len(self._secret)

        words = tuple(alphabet.normalize(w) for w in dictionary)
        for w in words:
            if len(w) != self.N:
                raise LengthMismatch(self.N, len(w), w)
        self.dictionary: Tuple[str, ...] = words
        if self._secret not in set(words):
            logger.warning("secret is not in the %d-word dictionary", len(words))

        self._lock = threading.RLock()
        self._records: List[GuessRecord] = []
        self._constraints = ConstraintSet.empty(self.N)
        self._pool = CandidatePool(self.dictionary, self._constraints)
        self._policy = DifficultyPolicy(dictionary=self.dictionary, N=self.N, seed=seed,
                                        settings=self.settings)
        self._runner = BackgroundRunner(self.settings.background_workers)
        self._guess_cache: Dict[Tuple[int, DifficultyTier], str] = {}
        self._opener: Optional[str] = None
        self._opener_future: Optional[Future] = None
        self._rng = random.Random(seed)
        self.recent_openers: Tuple[str, ...] = tuple(recent_openers)
        self._closed = False

        for record in history:
            self.record_guess(record)

        logger.info("round started: N=%d tier=%s alphabet=%s dictionary=%d generation=%d",
                    self.N, self.tier.value, alphabet.name, len(words), self.generation)

    # ---- read-only views ----

    @property
    def generation(self) -> int:
        return self._runner.generation

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def constraints(self) -> ConstraintSet:
        return self._constraints

    @property
    def candidates(self) -> Tuple[str, ...]:
        return self._pool.words

    def history(self, owner: Optional[Player] = None) -> Tuple[GuessRecord, ...]:
        """Committed records in commit order, optionally for one side only."""
        with self._lock:
            if owner is None:
                return tuple(self._records)
            owner = Player(owner)
            return tuple(r for r in self._records if r.turn_owner is owner)

    # ---- scoring and recording ----

    def score(self, guess: str) -> str:
        """Validate `guess` for this round and score it against the secret."""
        w = check_guess(guess, self.N, self.alphabet)
        return score(self._secret, w)

    def submit(self, guess: str, owner: Player) -> GuessRecord:
        """Score `guess` and commit it for `owner`."""
        w = check_guess(guess, self.N, self.alphabet)
        return self.record_guess(GuessRecord(w, score(self._secret, w), Player(owner)))

    def record_guess(self, record: GuessRecord) -> GuessRecord:
        """
        Commit one scored guess and return the record as stored (its guess
        normalized for the round's alphabet). The new constraints and pool are
        computed first; if they contradict earlier feedback or would empty the
        pool, EmptyCandidatePool propagates and nothing is committed.

        Every commit mints a new generation, so background work started for
        the previous history is discarded when it finishes.
        """
        self._ensure_open()
        w = check_guess(record.guess, self.N, self.alphabet)
        if w != record.guess:
            record = GuessRecord(w, record.pattern, record.turn_owner)
        with self._lock:
            constraints = apply(record, self._constraints)
            if constraints.is_contradictory():
                raise EmptyCandidatePool(
                    f"{record.guess} -> {record.pattern} contradicts earlier feedback")
            pool = self._pool.refined(constraints)
            self._records.append(record)
            self._constraints = constraints
            self._pool = pool
            self._guess_cache.clear()
            self._runner.mint()
        logger.debug("%s guessed %s -> %s; %d candidates left",
                     record.turn_owner.value, record.guess, record.pattern, len(pool))
        return record

    # ---- opponent moves ----

    def next_guess(self, tier: Optional[DifficultyTier] = None) -> str:
        """
        The opponent's guess for the current turn. Repeated calls before the
        next record_guess return the same word.
        """
        self._ensure_open()
        tier = DifficultyTier(tier or self.tier)
        with self._lock:
            key = (len(self._records), tier)
            cached = self._guess_cache.get(key)
            if cached is not None:
                return cached
            state = self._state()

        if not state["history"]:
            guess = self._take_opener()
        else:
            guess = self._solve(tier, state)

        with self._lock:
            if len(self._records) != key[0]:
                # history moved on while we were solving; don't cache
                return guess
            return self._guess_cache.setdefault(key, guess)

    def next_guess_async(self, tier: Optional[DifficultyTier] = None) -> Future:
        """
        Compute next_guess off the calling thread. The result fills the guess
        cache only if the session and its history are unchanged by then.
        """
        self._ensure_open()
        tier = DifficultyTier(tier or self.tier)
        with self._lock:
            key = (len(self._records), tier)
            state = self._state()

        def store(_token, guess):
            with self._lock:
                if not self._closed and len(self._records) == key[0]:
                    self._guess_cache.setdefault(key, guess)

        if not state["history"]:
            def opened(word):
                word = self._settle_opener(word)
                store(None, word)
                return word

            # chain onto the opener job instead of queueing a job that waits on it
            return _chained(self.precompute_opener(), opened)
        return self._runner.submit(self._policy.choose, tier, state, on_result=store)

    def _state(self) -> dict:
        return {
            "turn": sum(1 for r in self._records if r.turn_owner is Player.OPPONENT) + 1,
            "N": self.N,
            "candidates": self._pool.words,
            "dictionary": self.dictionary,
            "history": tuple(self._records),
            "secret": self._secret,
        }

    def _solve(self, tier: DifficultyTier, state: dict) -> str:
        budget = self.settings.hard_budget_s
        if tier not in ENTROPY_TIERS or budget is None:
            return self._policy.choose(tier, state)

        future = self._runner.submit(self._policy.choose, tier, state)
        try:
            return future.result(timeout=budget)
        except FuturesTimeout:
            logger.info("%s search exceeded %.2fs with %d candidates; playing medium",
                        tier.value, budget, len(state["candidates"]))
            return self._policy.choose(DifficultyTier.MEDIUM, state)

    # ---- opener ----

    def precompute_opener(self) -> Future:
        """Start computing the opener in the background (once per session)."""
        self._ensure_open()
        with self._lock:
            if self._opener_future is None:
                self._opener_future = self._runner.submit(
                    self._compute_opener, on_result=self._store_opener)
            return self._opener_future

    def _compute_opener(self) -> str:
        book = get_opener_book(self.dictionary, self.alphabet, self.settings)
        return book.pick(self._rng, self.recent_openers)

    def _store_opener(self, _token, word: str) -> None:
        self._settle_opener(word)

    def _take_opener(self) -> str:
        with self._lock:
            if self._opener is not None:
                return self._opener
            future = self._opener_future
        word = future.result() if future is not None else self._compute_opener()
        return self._settle_opener(word)

    def _settle_opener(self, word: str) -> str:
        """Keep the first opener settled for this session and return it."""
        with self._lock:
            if self._opener is None:
                self._opener = word
            return self._opener

    # ---- hints ----

    def possible_letters_by_position(self) -> List[FrozenSet[str]]:
        """Per-position letters still possible given both sides' committed guesses."""
        with self._lock:
            constraints = self._constraints
        return constraints.possible_letters(self.alphabet)

    # ---- lifecycle ----

    def close(self) -> None:
        """End the round: retire the generation token and drop pending work."""
        if self._closed:
            return
        self._closed = True
        self._runner.shutdown()
        logger.info("round closed after %d guesses", len(self._records))

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("session is closed; start a new one for the next round")

    def __enter__(self) -> "GuessSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _chained(source: Future, then) -> Future:
    """A Future resolving to then(result) once `source` succeeds."""
    out: Future = Future()

    def done(f: Future) -> None:
        if f.cancelled():
            out.cancel()
            return
        exc = f.exception()
        if exc is not None:
            out.set_exception(exc)
            return
        try:
            out.set_result(then(f.result()))
        except Exception as e:
            out.set_exception(e)

    source.add_done_callback(done)
    return out
