"""Simple benchmarking script."""

from __future__ import annotations

import argparse
import logging
import time

from ..bots.greedy_bot import GreedyBot
from ..bots.random_bot import RandomBot
from ..bots.arena import play_game
from ..engine.player import Position, Team
from ..engine.rules import build_default_repository


def main(argv: list[str] | None = None) -> None:
    """Play seeded bot games and report throughput."""

    repo = build_default_repository()
    parser = argparse.ArgumentParser()
    parser.add_argument("--games", type=int, default=100)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--rules", choices=sorted(repo.presets), default="finnish")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    config = repo.get(args.rules)
    greedy, random_bot = GreedyBot(), RandomBot()
    seats = {pos: greedy if pos.team is Team.NORTH_SOUTH else random_bot for pos in Position}
    wins = {team: 0 for team in Team}
    events = 0
    start = time.perf_counter()
    for index in range(args.games):
        final = play_game(seats, seed=args.seed + index, config=config)
        events += len(final.events)
        if final.winner is not None:
            wins[final.winner] += 1
    duration = time.perf_counter() - start
    print(f"Played {args.games} games ({events} events) with {args.rules} rules in {duration:.2f}s")
    print(f"greedy (north/south) {wins[Team.NORTH_SOUTH]} - {wins[Team.EAST_WEST]} random (east/west)")


if __name__ == "__main__":
    main()
