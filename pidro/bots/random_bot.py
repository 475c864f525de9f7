"""Random baseline bot."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

import numpy as np

from ..engine.actions import Action, PlayCard
from ..engine.game import legal_actions
from ..engine.player import Position
from ..engine.state import GameState
from ..engine.state_machine import Phase
from .base_bot import BotBase
from .encoding import encode_play_mask

__all__ = ["RandomBot"]


@dataclass
class RandomBot(BotBase):
    """Picks uniformly among the legal actions."""

    name: str = "random"
    rng: random.Random = field(default_factory=random.Random)

    def select_action(self, state: GameState, position: Position) -> Action:
        legal = legal_actions(state, position)
        if state.phase is Phase.PLAYING and legal:
            mask, options = encode_play_mask(state, position)
            index = self.rng.choice(np.flatnonzero(mask).tolist())
            return PlayCard(options[index])
        return self.rng.choice(legal)
