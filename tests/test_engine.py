import random
from collections import Counter

import pytest
from wordduel.engine import (
    score, normalize_pattern, is_solved, check_guess, validate_guess,
    GuessRecord, Player, HEBREW, get_alphabet,
    LengthMismatch, AlphabetMismatch, WordDuelError, InvalidPattern,
)
from wordduel.engine.scoring import pattern_code, pattern_results, LetterResult


# --- N=5 golden tests (duplicates + placements) ---
@pytest.mark.parametrize("secret,guess,expected", [
    ("level", "belle", "-GYYY"),
    ("level", "level", "GGGGG"),
    ("level", "lemon", "GG---"),
    ("scoop", "cools", "YYG-Y"),
    ("scoop", "scoop", "GGGGG"),
    ("crane", "raise", "YY--G"),
    ("crane", "stare", "--GYG"),
    ("crane", "adieu", "Y--Y-"),
    ("class", "sassy", "YY-G-"),
])
def test_score_n5_golden(secret, guess, expected):
    assert score(secret, guess) == expected


# --- N=6 sample tests ---
@pytest.mark.parametrize("secret,guess,expected", [
    ("letter", "settle", "-GGGYY"),
    ("letter", "little", "G-GG-Y"),
    ("palate", "planet", "GYY-YY"),
    ("tinket", "kitten", "YGYYGY"),
])
def test_score_n6_samples(secret, guess, expected):
    assert score(secret, guess) == expected


def test_score_repeated_letters_are_not_overcounted():
    # secret has two b's; the third guessed b gets nothing
    assert score("abba", "babb") == "YYG-"


def test_score_length_mismatch():
    with pytest.raises(LengthMismatch):
        score("crane", "cranes")
    # engine errors are ValueErrors for callers that only catch those
    with pytest.raises(ValueError):
        score("abc", "ab")


def test_score_marks_at_most_the_secret_letter_count():
    rng = random.Random(1234)
    letters = "abcde"
    for _ in range(300):
        secret = "".join(rng.choice(letters) for _ in range(5))
        guess = "".join(rng.choice(letters) for _ in range(5))
        patt = score(secret, guess)
        sc = Counter(secret)
        for ch in set(guess):
            marked = sum(1 for g, p in zip(guess, patt) if g == ch and p != "-")
            assert marked == min(sc[ch], guess.count(ch))
        for i, (g, s) in enumerate(zip(guess, secret)):
            assert (patt[i] == "G") == (g == s)


def test_pattern_helpers():
    assert is_solved("GGGGG") and not is_solved("GGGG-") and not is_solved("")
    assert pattern_code("-----") == 0
    assert pattern_code("GGGGG") == 3 ** 5 - 1
    assert pattern_code("Y") == 1
    assert pattern_results("G-Y") == [LetterResult.EXACT, LetterResult.ABSENT, LetterResult.PRESENT]


def test_normalize_pattern_accepts_ui_forms():
    assert normalize_pattern("g y-x", 5) == "G-Y--"
    assert normalize_pattern("\U0001F7E9\U0001F7E8\u2B1C\U0001F7E2", 5) == "GY-G-"
    assert normalize_pattern("GGGGGG", 5) == "GGGGG"


def test_check_guess_normalizes_and_rejects():
    assert check_guess("  CRANE ", 5) == "crane"
    with pytest.raises(LengthMismatch):
        check_guess("cranes", 5)
    with pytest.raises(AlphabetMismatch) as ei:
        check_guess("cr4ne", 5)
    assert ei.value.bad_letters == ["4"]
    with pytest.raises(TypeError):
        check_guess(None, 5)


def test_check_guess_hebrew_final_letters_fold():
    he = get_alphabet("he")
    assert he is HEBREW
    assert check_guess("שלום", 4, HEBREW) == "שלומ"
    with pytest.raises(AlphabetMismatch):
        check_guess("abcd", 4, HEBREW)
    with pytest.raises(ValueError):
        get_alphabet("xx")


def test_validate_guess_n5():
    allowed = {"crane", "raise", "stare"}
    assert validate_guess("CRANE", allowed, N=5) is True
    assert validate_guess("trace", allowed, N=5) is False
    assert validate_guess("cranes", allowed, N=5) is False
    assert validate_guess("???", allowed, N=5) is False
    assert validate_guess("trace", None, N=5) is True


def test_guess_record_is_frozen_and_checked():
    r = GuessRecord("crane", "GGGGG", Player.PLAYER)
    assert r.solved
    with pytest.raises(AttributeError):
        r.guess = "trace"
    with pytest.raises(WordDuelError):
        GuessRecord("crane", "GGG", Player.OPPONENT)


def test_guess_record_rejects_unknown_pattern_letters():
    with pytest.raises(InvalidPattern):
        GuessRecord("crane", "GX---", Player.PLAYER)
    with pytest.raises(InvalidPattern):
        GuessRecord("crane", "ggggg", Player.PLAYER)
