# apps/cli/run.py
"""
CLI entry point for simulated duels.

This script:
  1) Validates the dictionary (prints counts + SHA, checks secrets ⊆ dictionary).
  2) Loads the dictionary and the secrets to play.
  3) Runs a batch of rounds per tier with a progress bar and writes:
       - CSV:  per-round results + both sides' guess/pattern columns
       - JSON: manifest with config, settings, dictionary hash, git commit, etc.
"""

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import asdict
from pathlib import Path

from tqdm import tqdm

from wordduel.config import EngineSettings
from wordduel.datasets import validate_dictionary, pretty_summary, read_words
from wordduel.engine import Player, get_alphabet
from wordduel.harness import run_duel, WORDLE_MAX_TURNS
from wordduel.harness.io import write_csv, write_manifest, timestamp_id, git_commit_or_unknown
from wordduel.solvers import DifficultyTier, get_solver_ids

logger = logging.getLogger("wordduel.cli")


def main():
    """
    Parse CLI args, validate the dictionary, run the batch with progress, and write outputs.
    """
    tiers = [t.value for t in DifficultyTier]

    ap = argparse.ArgumentParser(description="wordduel: simulate player vs. opponent rounds")
    ap.add_argument("--tier", action="append", choices=tiers,
                    help="opponent tier (repeatable; default: all tiers)")
    ap.add_argument("--player", default="positional_freq",
                    help=f"solver id driving the player side (one of: {', '.join(get_solver_ids())})")
    ap.add_argument("--first", default="player", choices=[p.value for p in Player],
                    help="which side guesses first each round")
    ap.add_argument("--N", type=int, default=5, help="word length (3-7)")
    ap.add_argument("--alphabet", default="en", help="alphabet name (en or he)")
    ap.add_argument("--dictionary", required=True,
                    help="path to the round dictionary (one word per line)")
    ap.add_argument("--secrets", help="path to secrets to play (default: the dictionary)")
    ap.add_argument("--sample", type=int,
                    help="play only a subset of secrets (deterministic by seed)")
    ap.add_argument("--seed", type=int, default=123, help="base RNG seed (for reproducibility)")
    ap.add_argument("--outdir", default="reports", help="directory for output files")
    ap.add_argument("--env-file", help="dotenv file with WORDDUEL_* settings")
    args = ap.parse_args()

    settings = EngineSettings.from_env(args.env_file)
    logging.basicConfig(level=settings.log_level,
                        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    alphabet = get_alphabet(args.alphabet)

    # 1) Load lists
    dictionary = read_words(args.dictionary, args.N, alphabet)
    secrets = read_words(args.secrets, args.N, alphabet) if args.secrets else list(dictionary)

    # 2) Validate and print a one-liner summary
    rep = validate_dictionary(args.dictionary, args.N, alphabet, secrets=secrets)
    print(pretty_summary(rep))
    if not rep["secrets_in_dictionary"]:
        raise SystemExit("Some secrets are missing from the dictionary; rounds would end "
                         "with an empty candidate pool.")

    # 3) Choose cases (deterministic sample by seed)
    rng = random.Random(args.seed)
    if args.sample and args.sample < len(secrets):
        pool = list(secrets)
        rng.shuffle(pool)
        cases = pool[: args.sample]
    else:
        cases = list(secrets)

    run_id = timestamp_id()
    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    # 4) Run each tier with live progress
    for tier in (args.tier or tiers):
        results = []
        for idx, secret in enumerate(tqdm(cases, ncols=80, desc=tier, unit="round"), 1):
            # Derive a per-round seed so runs are reproducible and independent
            per_seed = args.seed + idx * 1013904223  # LCG-ish stride to avoid collisions
            results.append(run_duel(
                secret, dictionary=dictionary, tier=DifficultyTier(tier),
                player_solver=args.player, first=Player(args.first), alphabet=alphabet, settings=settings,
                seed=per_seed,
            ))

        wins = {"player": 0, "opponent": 0, "none": 0}
        for r in results:
            wins[r["winner"] or "none"] += 1
        logger.info("tier %s: %s", tier, wins)

        # 5) Write outputs (CSV + manifest)
        csv_path = outdir / f"duel_{tier}_{run_id}.csv"
        manifest_path = outdir / f"duel_{tier}_{run_id}_manifest.json"

        write_csv(results, str(csv_path), max_turns=WORDLE_MAX_TURNS, N=args.N)
        manifest = {
            "run_id": run_id,
            "git_commit": git_commit_or_unknown(),
            "config": vars(args),
            "settings": asdict(settings),
            "dictionary": rep,
            "num_rounds": len(results),
            "tier": tier,
            "wins": wins,
        }
        write_manifest(manifest, str(manifest_path))

        print(f"Wrote: {csv_path}")
        print(f"Wrote: {manifest_path}")


if __name__ == "__main__":
    main()
