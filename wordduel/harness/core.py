"""
Duel simulator.

- run_duel:  play one round (one hidden secret) between a scripted player
             solver and the opponent at a given tier.
- run_batch: run many rounds in sequence (optionally a sample prefix).

Both sides share one GuessSession, so each sees the other's feedback.
`first` picks who opens; each side gets at most WORDLE_MAX_TURNS guesses.

These functions are UI-agnostic so they can back the CLI, a notebook,
or tests without changes.
"""

from __future__ import annotations
import time
from typing import Dict, List, Optional, Sequence

from wordduel.config import EngineSettings
from wordduel.engine import Alphabet, LATIN, Player
from wordduel.session import GuessSession
from wordduel.solvers import DifficultyTier, create_solver

# Single source of truth for the per-side turn budget.
WORDLE_MAX_TURNS = 6


def _assert_wordle_turns(max_turns: int) -> None:
    """Guardrail: prevent accidental runs with a different turn budget."""
    if max_turns != WORDLE_MAX_TURNS:
        raise ValueError(f"max_turns must be {WORDLE_MAX_TURNS} for Wordle-like rules; got {max_turns}")


def run_duel(
        secret: str,
        *,
        dictionary: Sequence[str],
        tier: DifficultyTier,
        player_solver: str = "positional_freq",
        first: Player = Player.PLAYER,
        alphabet: Alphabet = LATIN,
        settings: Optional[EngineSettings] = None,
        max_turns: int = WORDLE_MAX_TURNS,
        seed: int | None = None,
) -> Dict:
    """
    Play one round to a win or until both sides run out of turns.

    Returns:
        dict with keys:
            secret, tier, winner ("player" / "opponent" / None), turns,
            time_ms, history (list[(owner, guess, pattern)])
    """
    _assert_wordle_turns(max_turns)
    tier = DifficultyTier(tier)

    player = create_solver(player_solver, settings)
    winner: Optional[Player] = None
    turns = 0

    t0 = time.time()
    with GuessSession(secret, dictionary, tier=tier, alphabet=alphabet,
                      settings=settings, seed=seed) as session:
        player.reset(dictionary=session.dictionary, N=session.N, seed=seed)
        session.precompute_opener()

        order = (Player.PLAYER, Player.OPPONENT)
        if first == Player.OPPONENT:
            order = order[::-1]

        for turn in range(1, max_turns + 1):
            turns = turn
            for side in order:
                if side == Player.PLAYER:
                    # the player sees the same shared candidate pool
                    state = {
                        "turn": turn,
                        "N": session.N,
                        "candidates": session.candidates,
                        "dictionary": session.dictionary,
                        "history": session.history(),
                    }
                    guess = player.next_guess(state)
                else:
                    guess = session.next_guess()
                if session.submit(guess, side).solved:
                    winner = side
                    break
            if winner is not None:
                break

        history = [(r.turn_owner.value, r.guess, r.pattern) for r in session.history()]

    dt = (time.time() - t0) * 1000.0
    return {
        "secret": alphabet.normalize(secret),
        "tier": tier.value,
        "winner": winner.value if winner else None,
        "turns": turns,
        "time_ms": dt,
        "history": history,
    }


def run_batch(
        secrets: List[str],
        *,
        dictionary: Sequence[str],
        tier: DifficultyTier,
        player_solver: str = "positional_freq",
        first: Player = Player.PLAYER,
        alphabet: Alphabet = LATIN,
        settings: Optional[EngineSettings] = None,
        max_turns: int = WORDLE_MAX_TURNS,
        seed: int | None = None,
        sample: int | None = None,
) -> List[Dict]:
    """
    Run many rounds back-to-back. If 'sample' is provided, only the first K
    secrets are used to speed up quick experiments.

    Each round's seed is derived from the base seed (seed + index) so runs are
    reproducible but not identical across rounds.
    """
    _assert_wordle_turns(max_turns)

    pool = list(secrets)
    if sample is not None:
        pool = pool[:sample]

    out: List[Dict] = []
    for idx, secret in enumerate(pool, start=1):
        round_seed = None if seed is None else (seed + idx)
        out.append(run_duel(
            secret, dictionary=dictionary, tier=tier, player_solver=player_solver,
            first=first, alphabet=alphabet, settings=settings, max_turns=max_turns, seed=round_seed,
        ))
    return out
