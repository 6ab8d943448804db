"""
Guess validation.

A guess is acceptable iff, after normalization:
  - it has exactly the round's word length
  - every letter belongs to the active alphabet
  - (optionally) it appears in the provided `allowed` collection

`check_guess` raises the matching engine error and returns the normalized
word; `validate_guess` is the boolean form for callers that only filter.
"""

from typing import Collection, Optional

from .alphabet import Alphabet, LATIN
from .errors import AlphabetMismatch, LengthMismatch, WordDuelError


def check_guess(word: str, N: int, alphabet: Alphabet = LATIN) -> str:
    """
    Normalize `word` and reject it if it cannot be scored this round.

    The alphabet is checked before the length so that a word in the wrong
    script reports AlphabetMismatch rather than a confusing length error.
    """
    if not isinstance(word, str):
        raise TypeError(f"guess must be a string, got {type(word).__name__}")

    w = alphabet.normalize(word)
    bad = alphabet.foreign_letters(w)
    if bad:
        raise AlphabetMismatch(w, bad, alphabet.name)
    if len(w) != N:
        raise LengthMismatch(N, len(w), w)
    return w


def validate_guess(word: str, allowed: Optional[Collection[str]], N: int,
                   alphabet: Alphabet = LATIN) -> bool:
    """
    Return True if `word` passes check_guess and (when given) is in `allowed`.

    Notes:
      - `allowed` should already be normalized; pass a set when calling this
        in a loop.
    """
    try:
        w = check_guess(word, N, alphabet)
    except (WordDuelError, TypeError):
        return False
    if allowed is None:
        return True
    return w in allowed
