"""Greedy baseline bot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from ..engine.actions import Action, Bid, DeclareTrump, Pass, PlayCard
from ..engine.cards import Card, Suit, point_value, trump_rank
from ..engine.game import legal_actions
from ..engine.player import Position
from ..engine.state import GameState
from .base_bot import BotBase
from .encoding import masked_cards

__all__ = ["GreedyBot", "suit_strength"]


def suit_strength(hand: Sequence[Card], suit: Suit) -> Tuple[int, int]:
    """Points and number of trumps the hand would hold with ``suit`` as trump."""

    trumps = [card for card in hand if trump_rank(card, suit) is not None]
    return sum(point_value(card, suit) for card in trumps), len(trumps)


@dataclass
class GreedyBot(BotBase):
    """Bids what its best suit looks worth and always plays its strongest trump."""

    name: str = "greedy"

    def select_action(self, state: GameState, position: Position) -> Action:
        legal = legal_actions(state, position)
        hand = state.hand(position)
        bids = [action.amount for action in legal if isinstance(action, Bid)]
        if bids:
            points, count = max(suit_strength(hand, suit) for suit in Suit)
            estimate = points + count // 2
            affordable = [amount for amount in bids if amount <= estimate]
            if affordable:
                return Bid(max(affordable))
            return Pass()
        if any(isinstance(action, DeclareTrump) for action in legal):
            return DeclareTrump(max(Suit, key=lambda suit: suit_strength(hand, suit)))
        if any(isinstance(action, PlayCard) for action in legal):
            return PlayCard(max(masked_cards(state, position), key=lambda card: trump_rank(card, state.trump_suit)))
        return legal[0]
