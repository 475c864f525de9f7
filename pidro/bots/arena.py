"""Bot tournament utilities."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from ..engine.game import PidroGame
from ..engine.player import Position, Team
from ..engine.rules import GameConfig
from ..engine.state import GameState
from ..engine.state_machine import Phase
from .base_bot import BotBase

__all__ = ["Arena", "MatchResult", "play_game"]

log = logging.getLogger(__name__)

MAX_ACTIONS = 20_000


def play_game(
    bots: Mapping[Position, BotBase],
    seed: Optional[int] = None,
    config: Optional[GameConfig] = None,
    max_actions: int = MAX_ACTIONS,
    preset: Optional[str] = None,
) -> GameState:
    """Play one match with a bot in every seat and return the final state.

    Stops after ``max_actions`` submitted actions even if nobody has won.
    """

    game = PidroGame.new(config=config, seed=seed, preset=preset)
    hand_number = game.state.hand_number
    for _ in range(max_actions):
        if game.is_finished():
            break
        position = game.current_turn
        if position is None:
            msg = f"No player to act in phase {game.state.phase.value}"
            raise RuntimeError(msg)
        game.apply(position, bots[position].select_action(game.state, position))
        if game.state.hand_number != hand_number or game.state.phase is Phase.COMPLETE:
            hand_number = game.state.hand_number
            for bot in {id(bot): bot for bot in bots.values()}.values():
                bot.notify_hand_end(game.state)
    else:
        log.warning("Game with seed %s stopped after %d actions", seed, max_actions)
    return game.state


@dataclass
class MatchResult:
    """Result of a head-to-head series between two bot teams."""

    bot_a: str
    bot_b: str
    wins_a: int
    wins_b: int

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"MatchResult({self.bot_a} {self.wins_a}-{self.wins_b} {self.bot_b})"


@dataclass
class Arena:
    """Runs matches between registered bots.

    In each pairing the first bot holds north/south and the second east/west.
    """

    bots: Sequence[BotBase]
    config: Optional[GameConfig] = None
    preset: Optional[str] = None

    def run(self, games: int = 10, seed: int = 0) -> List[MatchResult]:
        """Play ``games`` matches for every pair of bots."""

        results: List[MatchResult] = []
        for i, bot_a in enumerate(self.bots):
            for bot_b in self.bots[i + 1 :]:
                results.append(self._play_pair(bot_a, bot_b, games, seed))
        return results

    def _play_pair(self, bot_a: BotBase, bot_b: BotBase, games: int, seed: int) -> MatchResult:
        bot_a.reset()
        bot_b.reset()
        seats: Dict[Position, BotBase] = {
            pos: bot_a if pos.team is Team.NORTH_SOUTH else bot_b for pos in Position
        }
        wins = {Team.NORTH_SOUTH: 0, Team.EAST_WEST: 0}
        for game_index in range(games):
            final = play_game(seats, seed=seed + game_index, config=self.config, preset=self.preset)
            if final.winner is not None:
                wins[final.winner] += 1
        return MatchResult(
            bot_a=bot_a.name,
            bot_b=bot_b.name,
            wins_a=wins[Team.NORTH_SOUTH],
            wins_b=wins[Team.EAST_WEST],
        )
