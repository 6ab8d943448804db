"""
Boss solver: the cheating tier.

Plays exactly like Hard until the candidate pool has narrowed to
`settings.boss_reveal_window` words, then plays the secret itself.

The reveal is refused (and Hard plays instead) whenever:
  - no secret was provided in the state,
  - the pool is still wider than the window,
  - the secret is not among the candidates (revealing it would contradict
    the feedback both players have already seen).
"""

from __future__ import annotations

import logging
from typing import Sequence

from .base import register
from .entropy import EntropySolver

logger = logging.getLogger(__name__)


@register
class BossSolver(EntropySolver):
    id = "boss"
    name = "Boss (knows the secret)"
    version = "1.0.0"

    def can_reveal(self, secret: str | None, candidates: Sequence[str]) -> bool:
        if not secret:
            return False
        if len(candidates) > self.settings.boss_reveal_window:
            return False
        if secret not in candidates:
            logger.warning("boss reveal refused: secret is not among %d candidates",
                           len(candidates))
            return False
        return True

    def next_guess(self, state: dict) -> str:
        candidates: Sequence[str] = state["candidates"]
        secret = state.get("secret")
        if self.can_reveal(secret, candidates):
            logger.debug("boss reveal with %d candidates left", len(candidates))
            return secret
        return super().next_guess(state)
