"""
Engine error kinds.

All of these are local, synchronous failures raised to the immediate caller.
Nothing in the engine retries them or guesses around them.
"""


class WordDuelError(ValueError):
    """Base class for every error the engine raises on bad input."""


class LengthMismatch(WordDuelError):
    """Guess and secret (or pattern) lengths differ."""

    def __init__(self, expected: int, got: int, word: str = ""):
        self.expected = expected
        self.got = got
        self.word = word
        detail = f" ({word!r})" if word else ""
        super().__init__(f"expected length {expected}, got {got}{detail}")


class EmptyCandidatePool(WordDuelError):
    """
    No dictionary word satisfies the accumulated constraints.

    This means the dictionary and the recorded history disagree (e.g. the
    secret is missing from the dictionary), which is an upstream data bug.
    """


class AlphabetMismatch(WordDuelError):
    """A word contains letters outside the active alphabet."""

    def __init__(self, word: str, bad_letters, alphabet_name: str):
        self.word = word
        self.bad_letters = sorted(set(bad_letters))
        self.alphabet_name = alphabet_name
        super().__init__(
            f"{word!r} has letters outside the {alphabet_name} alphabet: {self.bad_letters}")


class InvalidPattern(WordDuelError):
    """A feedback pattern holds characters other than 'G', 'Y' and '-'."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(f"pattern {pattern!r} may only contain 'G', 'Y' and '-'")
