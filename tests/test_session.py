import threading
import time

import pytest
from wordduel.config import EngineSettings
from wordduel.engine import (
    AlphabetMismatch, EmptyCandidatePool, GuessRecord, HEBREW, LengthMismatch, Player,
)
from wordduel.session import GuessSession
from wordduel.solvers import DifficultyTier, get_opener_book

DICTIONARY = ["crane", "adieu", "alone", "trace", "react", "plane",
              "snake", "grape", "dance", "irate", "ocean", "cared"]
AFTER_ADIEU = ("crane", "trace", "react", "plane", "snake", "grape", "ocean")


def test_submit_scores_and_narrows_candidates():
    with GuessSession("crane", DICTIONARY, seed=1) as s:
        rec = s.submit("ADIEU", Player.PLAYER)
        assert rec == GuessRecord("adieu", "Y--Y-", Player.PLAYER)
        assert s.candidates == AFTER_ADIEU
        assert s.history(Player.PLAYER) == (rec,)
        assert s.history(Player.OPPONENT) == ()


def test_both_sides_feed_the_same_constraints():
    with GuessSession("crane", DICTIONARY, seed=1) as s:
        s.submit("adieu", Player.PLAYER)
        s.submit("trace", Player.OPPONENT)
        assert "crane" in s.candidates
        assert "trace" not in s.candidates
        assert [r.turn_owner for r in s.history()] == [Player.PLAYER, Player.OPPONENT]


def test_solved_guess_leaves_single_letter_per_position():
    with GuessSession("crane", DICTIONARY) as s:
        assert s.submit("crane", Player.OPPONENT).solved
        assert s.possible_letters_by_position() == [frozenset(ch) for ch in "crane"]
        assert s.candidates == ("crane",)


def test_next_guess_is_stable_until_history_changes():
    with GuessSession("crane", DICTIONARY, tier=DifficultyTier.EASY, seed=5) as s:
        s.submit("adieu", Player.PLAYER)
        first = s.next_guess()
        assert all(s.next_guess() == first for _ in range(5))
        assert first in s.candidates


def test_opener_is_played_on_an_empty_history():
    with GuessSession("crane", DICTIONARY, tier=DifficultyTier.HARD, seed=2) as s:
        pre = s.precompute_opener().result(timeout=10)
        assert pre in DICTIONARY
        assert s.precompute_opener() is s.precompute_opener()
        assert s.next_guess() == pre
        assert pre in get_opener_book(s.dictionary, s.alphabet, s.settings).words()


def test_recent_openers_are_avoided():
    settings = EngineSettings(opener_top_n=2)
    book = get_opener_book(tuple(DICTIONARY), settings=settings)
    used, other = book.words()
    with GuessSession("crane", DICTIONARY, settings=settings,
                      recent_openers=[used], seed=0) as s:
        assert s.next_guess() == other


def test_async_guess_fills_the_cache():
    with GuessSession("crane", DICTIONARY, tier=DifficultyTier.MEDIUM, seed=4) as s:
        s.submit("adieu", Player.PLAYER)
        guess = s.next_guess_async().result(timeout=10)
        assert guess in AFTER_ADIEU
        assert s.next_guess() == guess


def test_contradictory_record_is_not_committed():
    with GuessSession("crane", ["crane", "trace", "react"]) as s:
        with pytest.raises(EmptyCandidatePool):
            s.record_guess(GuessRecord("crane", "-----", Player.OPPONENT))
        assert s.history() == ()
        assert s.candidates == ("crane", "trace", "react")


def test_rejects_bad_guesses():
    with GuessSession("crane", DICTIONARY) as s:
        with pytest.raises(LengthMismatch):
            s.submit("cranes", Player.PLAYER)
        with pytest.raises(AlphabetMismatch):
            s.score("cr4ne")
        assert s.history() == ()


def test_dictionary_must_match_secret_length():
    with pytest.raises(LengthMismatch):
        GuessSession("crane", ["crane", "cranes"])


def test_hebrew_round_folds_final_letters():
    with GuessSession("שלום", ["שלום", "חלומ"], alphabet=HEBREW) as s:
        assert s.score("שלומ") == "GGGG"
        with pytest.raises(AlphabetMismatch):
            s.score("abcd")


def test_restore_from_history():
    prior = [GuessRecord("adieu", "Y--Y-", Player.PLAYER)]
    with GuessSession("crane", DICTIONARY, history=prior) as s:
        assert s.history() == tuple(prior)
        assert s.candidates == AFTER_ADIEU


def test_close_retires_generation_and_blocks_use():
    s = GuessSession("crane", DICTIONARY)
    gen = s.generation
    s.close()
    assert s.closed
    assert s.generation != gen
    with pytest.raises(RuntimeError):
        s.next_guess()
    with pytest.raises(RuntimeError):
        s.submit("trace", Player.PLAYER)
    s.close()  # second close is a no-op


def test_hard_falls_back_to_medium_when_over_budget():
    settings = EngineSettings(hard_budget_s=0.05)
    with GuessSession("crane", DICTIONARY, tier=DifficultyTier.HARD,
                      settings=settings, seed=8) as s:
        s.submit("adieu", Player.PLAYER)

        def slow(state):
            time.sleep(0.5)
            return "zzzzz"

        s._policy.solver_for(DifficultyTier.HARD).next_guess = slow
        guess = s.next_guess()
        assert guess != "zzzzz"
        assert guess in AFTER_ADIEU


def test_recorded_guess_is_normalized_before_folding():
    with GuessSession("crane", DICTIONARY) as s:
        rec = s.record_guess(GuessRecord("ADIEU", "Y--Y-", Player.PLAYER))
        assert rec.guess == "adieu"
        assert s.history() == (rec,)
        assert s.candidates == AFTER_ADIEU

    with GuessSession("crane", DICTIONARY) as s:
        s.record_guess(GuessRecord("CRANE", "GGGGG", Player.OPPONENT))
        assert s.candidates == ("crane",)


def test_hebrew_record_with_final_letter_restores():
    words = ["שלומ", "חלומ", "שלוש"]
    prior = [GuessRecord("חלום", "-GGG", Player.PLAYER)]
    with GuessSession("שלום", words, alphabet=HEBREW, history=prior) as s:
        assert s.history()[0].guess == "חלומ"
        assert s.constraints.exact[3] == "מ"
        assert s.candidates == ("שלומ",)


def test_feedback_contradicting_history_is_rejected():
    with GuessSession("cloud", ["cloud", "could", "clout"]) as s:
        s.record_guess(GuessRecord("crane", "G----", Player.PLAYER))
        with pytest.raises(EmptyCandidatePool, match="contradicts"):
            s.record_guess(GuessRecord("cloud", "-----", Player.OPPONENT))
        assert len(s.history()) == 1


def test_each_commit_starts_a_new_generation():
    with GuessSession("crane", DICTIONARY) as s:
        gen = s.generation
        s.submit("adieu", Player.PLAYER)
        assert s.generation != gen


def test_async_opener_requested_before_precompute_does_not_block():
    with GuessSession("crane", DICTIONARY, tier=DifficultyTier.HARD, seed=3) as s:
        gate = threading.Event()
        busy = s._runner.submit(gate.wait, 5)  # hold the only worker
        fut = s.next_guess_async()
        pre = s.precompute_opener()
        gate.set()
        assert busy.result(timeout=10)
        guess = fut.result(timeout=10)
        assert guess == pre.result(timeout=10)
        assert guess in DICTIONARY
        assert s.next_guess() == guess
