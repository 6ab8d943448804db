"""
Wordle-style scoring (feedback) for a single (secret, guess) pair.

Conventions:
  - 'G'  : exact   = correct letter in the correct position
  - 'Y'  : present = correct letter in the wrong position
  - '-'  : absent  = letter not present (or present fewer times than guessed)

The pattern string itself is the compact, hashable key used when grouping
candidates by feedback (see solvers.entropy).

Algorithm (two-pass, canonical for Wordle):
  1) First pass marks all exact matches and counts the remaining (unmatched)
     letters from the secret.
  2) Second pass scans the other positions left to right and marks a letter
     present only if it still has remaining count.
"""

from collections import Counter
from enum import Enum
from typing import List

from .errors import LengthMismatch

# A feedback pattern is a string of LetterResult values, e.g. "GY--G".
FeedbackPattern = str


class LetterResult(str, Enum):
    ABSENT = "-"
    PRESENT = "Y"
    EXACT = "G"


# Base-3 digit per result, used by pattern_code()
_DIGIT = {"-": 0, "Y": 1, "G": 2}


def score(secret: str, guess: str) -> FeedbackPattern:
    """
    Compute the feedback pattern for `guess` against `secret`.

    Raises:
      LengthMismatch if the two words differ in length.

    Examples:
      score("level", "belle") -> "-GYYY"
      score("abba", "babb")   -> "YYG-"
    """
    secret = secret.strip().lower()
    guess = guess.strip().lower()
    if len(secret) != len(guess):
        raise LengthMismatch(len(secret), len(guess), guess)

    n = len(guess)
    pattern = ["-"] * n

    # Pass 1: mark exact matches and collect leftover counts from the secret.
    remaining = Counter()
    for i, (g, s) in enumerate(zip(guess, secret)):
        if g == s:
            pattern[i] = "G"
        else:
            remaining[s] += 1

    # Pass 2: present only while the letter still has unmatched instances.
    for i, g in enumerate(guess):
        if pattern[i] == "G":
            continue
        if remaining[g] > 0:
            pattern[i] = "Y"
            remaining[g] -= 1

    return "".join(pattern)


def pattern_results(pattern: FeedbackPattern) -> List[LetterResult]:
    """Expand a pattern string into its LetterResult sequence."""
    return [LetterResult(ch) for ch in pattern]


def pattern_code(pattern: FeedbackPattern) -> int:
    """Base-3 integer key for a pattern (position 0 is the most significant digit)."""
    code = 0
    for ch in pattern:
        code = code * 3 + _DIGIT[ch]
    return code


def is_solved(pattern: FeedbackPattern) -> bool:
    return bool(pattern) and all(ch == "G" for ch in pattern)


def normalize_pattern(feedback: str, length: int) -> FeedbackPattern:
    """
    Turn a UI feedback string into a canonical pattern of `length` results.

    Exact:   G g 🟩 🟢
    Present: Y y 🟨
    Anything else counts as absent; missing trailing positions are absent.
    """
    out = []
    for ch in list(feedback)[:length]:
        if ch in ("G", "g", "🟩", "🟢"):
            out.append("G")
        elif ch in ("Y", "y", "🟨"):
            out.append("Y")
        else:
            out.append("-")
    out.extend("-" * (length - len(out)))
    return "".join(out)
