"""
I/O utilities for duel runs.

Responsibilities:
- write_csv:      flatten per-round results into a tidy CSV (one row per round).
- write_manifest: dump a JSON manifest with config, hashes, and metadata.
- timestamp_id:   stable UTC run ID string.
- git_commit_or_unknown: best-effort short commit hash for reproducibility.

Notes:
- Patterns are prefixed with an apostrophe to keep Excel from interpreting
  strings like "-GYY-" as formulas (which would display as #NAME?).
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List
import csv
import json
import subprocess
import datetime as dt


def _excel_safe_pattern(patt: str) -> str:
    """
    Prefix with an apostrophe so spreadsheet apps treat it as text.
    Example: "-GYY-" -> "'-GYY-"
    """
    return "'" + patt if patt else patt


def write_csv(results: List[Dict], path: str, max_turns: int, N: int) -> str:
    """
    Serialize a batch of duel results to CSV.

    Schema (columns):
      tier, N, secret, winner, turns, time_ms,
      owner_1, guess_1, patt_1, ..., owner_K, guess_K, patt_K
    where K = 2 * max_turns (both sides' rows, in play order).

    Returns:
      The path written (string).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    rows_per_round = 2 * max_turns
    fields = ["tier", "N", "secret", "winner", "turns", "time_ms"]
    for i in range(1, rows_per_round + 1):
        fields += [f"owner_{i}", f"guess_{i}", f"patt_{i}"]

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()

        for r in results:
            row = {
                "tier": r.get("tier", "?"),
                "N": N,
                "secret": r["secret"],
                "winner": r["winner"] or "",
                "turns": r["turns"],
                "time_ms": round(float(r["time_ms"]), 3),
            }

            # Expand history into fixed columns (Excel-safe patterns)
            hist = r.get("history", [])
            for i in range(1, rows_per_round + 1):
                if i <= len(hist):
                    owner, g, patt = hist[i - 1]
                    row[f"owner_{i}"] = owner
                    row[f"guess_{i}"] = g
                    row[f"patt_{i}"] = _excel_safe_pattern(patt)
                else:
                    row[f"owner_{i}"] = ""
                    row[f"guess_{i}"] = ""
                    row[f"patt_{i}"] = ""

            w.writerow(row)

    return str(p)


def write_manifest(manifest: Dict, path: str) -> str:
    """
    Write a JSON manifest with run configuration and dictionary summary.

    Typical keys:
      - run_id, git_commit
      - config: CLI args (tier, N, dictionary, seed, sample, outdir)
      - settings: EngineSettings in effect
      - dictionary: output of datasets.validate_dictionary(...)
      - num_rounds, wins
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2, ensure_ascii=False)
    return str(p)


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Best-effort short git hash of the current repo state.
    Returns 'unknown' if git is not available or the call fails.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
