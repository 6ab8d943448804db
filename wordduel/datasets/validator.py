"""
Dictionary integrity check.

What this module does:
- Validate a round dictionary (one word per line) for a word length N and
  an alphabet.
- Enforce formatting rules (already normalized, alphabet letters only,
  exact length N).
- Detect duplicates and invalid lines; compute SHA-256 of the raw file.
- Optionally check that a list of secrets is contained in the dictionary
  (a secret outside it empties the candidate pool mid-round).
- Return a machine-readable dict (for manifests) and a pretty one-line summary.

Typical use:
    from wordduel.datasets import validate_dictionary, pretty_summary
    rep = validate_dictionary("data/words_5.txt", 5)
    print(pretty_summary(rep))
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple
import hashlib

from wordduel.engine.alphabet import Alphabet, LATIN


# -----------------------------
# Dataclasses for structured reports
# -----------------------------

@dataclass
class FileReport:
    """Per-file diagnostics and metadata."""
    path: str            # file path (as given)
    exists: bool         # did the file exist on disk?
    count: int           # number of VALID words after cleaning
    sha256: str          # SHA-256 of raw file bytes (empty string if missing)
    unique_count: int    # unique valid words (after dedupe)
    invalid_lines: int   # number of invalid lines encountered


@dataclass
class ValidationReport:
    """Top-level validation result for one dictionary."""
    N: int
    alphabet: str
    dictionary: FileReport
    secrets_in_dictionary: bool
    passed: bool
    issues: List[str]    # human-friendly list of problems (if any)


# -----------------------------
# Helpers
# -----------------------------

def _sha256_file(path: Path) -> str:
    """Compute SHA-256 of a file's raw bytes."""
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _load_and_check(path: Path, N: int, alphabet: Alphabet) -> Tuple[List[str], int]:
    """
    Load words from a text file and validate them.

    Rules:
      - one token per line
      - must already be in normalized form (lowercase, no final letter forms)
      - alphabet letters only, exact length N
      - empty/whitespace-only lines are INVALID

    Returns:
      (valid_words, invalid_count)
    """
    valid: List[str] = []
    invalid = 0

    with path.open("r", encoding="utf-8") as f:
        for raw in f:
            w = raw.strip()
            if not w:
                invalid += 1
                continue
            wn = alphabet.normalize(w)
            if wn == w and not alphabet.foreign_letters(wn) and len(wn) == N:
                valid.append(wn)
            else:
                invalid += 1

    return valid, invalid


# -----------------------------
# Public API
# -----------------------------

def validate_dictionary(path: str, N: int, alphabet: Alphabet = LATIN,
                        secrets: Optional[Iterable[str]] = None) -> Dict:
    """
    Validate a dictionary file for word length N.

    Returns a JSON-serializable dict (see ValidationReport) whose `passed`
    flag is strict: non-empty, no invalid lines, no duplicates, and every
    given secret present.
    """
    issues: List[str] = []
    p = Path(path)

    if not p.exists():
        issues.append(f"dictionary file not found: {path}")
        rep = ValidationReport(
            N=N,
            alphabet=alphabet.name,
            dictionary=FileReport(path, False, 0, "", 0, 0),
            secrets_in_dictionary=False,
            passed=False,
            issues=issues,
        )
        return asdict(rep)

    words, invalid = _load_and_check(p, N, alphabet)
    unique = set(words)

    file_report = FileReport(
        path=str(p),
        exists=True,
        count=len(words),
        sha256=_sha256_file(p),
        unique_count=len(unique),
        invalid_lines=invalid,
    )

    secrets_ok = True
    if secrets is not None:
        missing = sorted({alphabet.normalize(s) for s in secrets} - unique)
        if missing:
            secrets_ok = False
            issues.append(f"secrets missing from dictionary (e.g., {missing[:5]})")

    if file_report.count == 0:
        issues.append("dictionary contains 0 valid words")
    if invalid:
        issues.append(f"dictionary has {invalid} invalid line(s)")
    if file_report.count != file_report.unique_count:
        issues.append("dictionary contains duplicate lines")

    passed = (
            secrets_ok
            and invalid == 0
            and file_report.count > 0
            and file_report.count == file_report.unique_count
    )

    rep = ValidationReport(
        N=N,
        alphabet=alphabet.name,
        dictionary=file_report,
        secrets_in_dictionary=secrets_ok,
        passed=passed,
        issues=issues,
    )
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    Produce a compact, human-friendly one-liner for console/docs.

    Example:
        N=5 | en | words=2315 (uniq=2315, sha=abc123def456) | secrets ok=True | OK
    """
    d = report["dictionary"]
    status = "OK" if report["passed"] else "FAIL"
    sha = (d.get("sha256") or "")[:12]
    return (
        f"N={report['N']} | {report['alphabet']} "
        f"| words={d['count']} (uniq={d['unique_count']}, sha={sha}) "
        f"| secrets ok={report['secrets_in_dictionary']} | {status}"
    )
