"""
Active alphabets.

Two alphabets are built in: Latin ("en") and Hebrew ("he"). Hebrew final
letter forms (ך ם ן ף ץ) are folded into their base letters so that a
word's letters always come from the alphabet's base set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List


@dataclass(frozen=True)
class Alphabet:
    name: str
    letters: str
    finals: Dict[str, str] = field(default_factory=dict)

    @property
    def letter_set(self) -> FrozenSet[str]:
        return frozenset(self.letters)

    def normalize(self, word: str) -> str:
        """Strip, lowercase, and fold final forms to base letters."""
        w = word.strip().lower()
        if self.finals:
            w = "".join(self.finals.get(ch, ch) for ch in w)
        return w

    def foreign_letters(self, word: str) -> List[str]:
        """Letters of an already-normalized word that are not in this alphabet."""
        allowed = self.letter_set
        return [ch for ch in word if ch not in allowed]


LATIN = Alphabet(name="en", letters="abcdefghijklmnopqrstuvwxyz")

HEBREW = Alphabet(
    name="he",
    letters="אבגדהוזחטיכלמנסעפצקרשת",
    finals={"ך": "כ", "ם": "מ", "ן": "נ", "ף": "פ", "ץ": "צ"},
)

ALPHABETS: Dict[str, Alphabet] = {a.name: a for a in (LATIN, HEBREW)}


def get_alphabet(name: str) -> Alphabet:
    try:
        return ALPHABETS[name]
    except KeyError as e:
        raise ValueError(f"Unknown alphabet: {name}. Available: {sorted(ALPHABETS)}") from e
