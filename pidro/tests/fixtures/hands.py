"""Fixture helpers for tests."""

from __future__ import annotations

from typing import Mapping, Optional, Tuple, Union

from ...engine.cards import Card
from ...engine.player import Player, Position
from ...engine.state import GameState
from ...engine.state_machine import Phase

HandSpec = Union[str, Tuple[Card, ...]]


def cards(text: str) -> Tuple[Card, ...]:
    """Parse space separated card notation, e.g. ``"Ah Td 5d"``."""

    return tuple(Card.from_notation(token) for token in text.split())


def make_state(
    phase: Phase = Phase.DEALING,
    dealer: Optional[Position] = Position.NORTH,
    hands: Optional[Mapping[Position, HandSpec]] = None,
    **changes,
) -> GameState:
    """Build a state directly in ``phase`` with the given hands."""

    state = GameState.new()
    players = dict(state.players)
    for pos, spec in (hands or {}).items():
        hand = cards(spec) if isinstance(spec, str) else tuple(spec)
        players[pos] = Player(position=pos, hand=hand)
    return state.evolve(phase=phase, current_dealer=dealer, players=players, **changes)


PRESET_HAND = cards("Ah Kh 5h 5d 9h 8h 7h")
