import pytest
from wordduel.engine import (
    ConstraintSet, apply, fold, score, filter_candidates, GuessRecord, Player,
    LengthMismatch,
)

WORDS = ["level", "belle", "lemon", "scoop", "cools", "crane", "class",
         "sassy", "abbey", "eerie", "geese", "robot", "trace", "react"]


def test_partially_absent_letter_caps_the_count():
    cs = fold([("sassy", score("class", "sassy"))], N=5)
    assert cs.min_count["s"] == 2
    assert cs.max_count["s"] == 2
    assert cs.max_count["y"] == 0
    assert cs.exact[3] == "s"
    assert "s" in cs.forbidden_at[0] and "s" in cs.forbidden_at[2]
    assert cs.allows("class")

    letters = cs.possible_letters()
    # a third 's' is ruled out only at the positions that saw it
    assert "s" in letters[4]
    assert "s" not in letters[0]
    assert all("y" not in pos for pos in letters)


def test_fully_absent_letter_is_banned_everywhere():
    cs = fold([("crane", "-----")], N=5)
    for ch in "crane":
        assert cs.max_count[ch] == 0
    assert not cs.allows("trace")
    assert cs.allows("boost")


def test_absent_letter_is_also_forbidden_at_its_own_position():
    cs = apply(("sassy", "YY-G-"), ConstraintSet.empty(5))
    assert "y" in cs.forbidden_at[4]
    assert "s" in cs.forbidden_at[2]


def test_fold_is_idempotent():
    history = [("raise", score("crane", "raise")), ("stare", score("crane", "stare"))]
    assert fold(history + history, N=5) == fold(history, N=5)


def test_records_and_pairs_fold_the_same():
    recs = [GuessRecord("adieu", "Y--Y-", Player.PLAYER)]
    assert fold(recs, N=5) == fold([("adieu", "Y--Y-")], N=5)


@pytest.mark.parametrize("secret", ["level", "class", "geese", "crane", "abbey"])
@pytest.mark.parametrize("guess", ["belle", "sassy", "eerie", "scoop", "level"])
def test_constraints_keep_exactly_the_feedback_consistent_words(secret, guess):
    patt = score(secret, guess)
    by_constraints = filter_candidates(WORDS, fold([(guess, patt)], N=5))
    by_scoring = [w for w in WORDS if score(w, guess) == patt]
    assert by_constraints == by_scoring


def test_two_guess_history_matches_scoring():
    secret = "level"
    history = [(g, score(secret, g)) for g in ("eerie", "belle")]
    by_constraints = filter_candidates(WORDS, fold(history, N=5))
    by_scoring = [w for w in WORDS if all(score(w, g) == p for g, p in history)]
    assert by_constraints == by_scoring
    assert "level" in by_constraints


def test_all_exact_gives_singletons():
    cs = fold([("crane", "GGGGG")], N=5)
    assert cs.possible_letters() == [frozenset(ch) for ch in "crane"]


def test_contradiction_is_detected():
    cs = fold([("crane", "G----"), ("cloud", "-----")], N=5)
    assert cs.is_contradictory()
    assert not fold([("crane", "G----")], N=5).is_contradictory()


def test_apply_rejects_wrong_length():
    with pytest.raises(LengthMismatch):
        apply(("cranes", "------"), ConstraintSet.empty(5))
