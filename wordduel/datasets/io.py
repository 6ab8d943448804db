from __future__ import annotations
from pathlib import Path
from typing import List

from wordduel.engine.alphabet import Alphabet, LATIN
from wordduel.engine.validation import validate_guess


def read_lines(p: Path | str) -> List[str]:
    """
    Read a UTF-8 text file into a list of lines, stripping trailing CR/LF.
    Raises FileNotFoundError if the path doesn't exist.
    """
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(p)
    return [ln.rstrip("\r\n") for ln in p.read_text(encoding="utf-8").splitlines()]


def read_words(p: Path | str, N: int, alphabet: Alphabet = LATIN) -> List[str]:
    """
    Read a one-word-per-line dictionary, normalized for `alphabet`.
    Keeps only words of length N made of alphabet letters; order and
    first occurrences are preserved.
    """
    seen, out = set(), []
    for raw in read_lines(p):
        if not validate_guess(raw, None, N, alphabet):
            continue
        w = alphabet.normalize(raw)
        if w in seen:
            continue
        seen.add(w)
        out.append(w)
    return out
