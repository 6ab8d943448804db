from .scoring import score, LetterResult, FeedbackPattern, is_solved, normalize_pattern
from .constraints import ConstraintSet, apply, fold
from .candidates import CandidatePool, filter_candidates
from .validation import check_guess, validate_guess
from .records import GuessRecord, Player
from .alphabet import Alphabet, LATIN, HEBREW, get_alphabet
from .errors import WordDuelError, LengthMismatch, EmptyCandidatePool, AlphabetMismatch, InvalidPattern

__all__ = [
    "score", "LetterResult", "FeedbackPattern", "is_solved", "normalize_pattern",
    "ConstraintSet", "apply", "fold",
    "CandidatePool", "filter_candidates",
    "check_guess", "validate_guess",
    "GuessRecord", "Player",
    "Alphabet", "LATIN", "HEBREW", "get_alphabet",
    "WordDuelError", "LengthMismatch", "EmptyCandidatePool", "AlphabetMismatch", "InvalidPattern",
]
