"""Single-trick bookkeeping and resolution."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .cards import TWO, Card, Suit, point_value, trump_rank
from .exceptions import IncompleteTrickError, NotFoundError
from .player import Position

__all__ = ["Trick", "TrickResult"]

Play = Tuple[Position, Card]


def _strength(card: Card, trump_suit: Suit) -> float:
    rank = trump_rank(card, trump_suit)
    return -1000.0 if rank is None else rank


@dataclass(frozen=True)
class Trick:
    """Plays of one trick in the order they were made."""

    leader: Position
    plays: Tuple[Play, ...] = ()

    def __repr__(self) -> str:  # pragma: no cover - trivial
        plays = ", ".join(f"{pos.value}:{card.notation}" for pos, card in self.plays)
        return f"Trick(leader={self.leader.value}, plays=[{plays}])"

    def add_play(self, position: Position, card: Card) -> "Trick":
        return replace(self, plays=self.plays + ((position, card),))

    @property
    def positions(self) -> Tuple[Position, ...]:
        return tuple(pos for pos, _ in self.plays)

    def card_played_by(self, position: Position) -> Card:
        for pos, card in self.plays:
            if pos == position:
                return card
        raise NotFoundError(f"{position.value} has not played in this trick")

    def winner(self, trump_suit: Suit) -> Position:
        """Return the position holding the strongest trump of the trick."""

        if not self.plays:
            raise IncompleteTrickError("Trick has no plays")
        position, _ = max(self.plays, key=lambda play: _strength(play[1], trump_suit))
        return position

    def two_of_trump_player(self, trump_suit: Suit) -> Optional[Position]:
        for pos, card in self.plays:
            if card.rank == TWO and card.suit == trump_suit:
                return pos
        return None

    def points(self, trump_suit: Suit) -> int:
        """Points awarded to the winner.

        The 2 of trump is excluded because its player keeps that point.
        """

        total = sum(point_value(card, trump_suit) for _, card in self.plays)
        if self.two_of_trump_player(trump_suit) is not None:
            total -= 1
        return total


@dataclass(frozen=True)
class TrickResult:
    """Outcome of a completed trick."""

    winner: Position
    winner_points: int
    two_of_trump_player: Optional[Position] = None
    two_of_trump_points: int = 0
    plays: Tuple[Play, ...] = ()

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"TrickResult(winner={self.winner.value}, winner_points={self.winner_points})"

    @classmethod
    def from_trick(cls, trick: Trick, trump_suit: Suit) -> "TrickResult":
        two_player = trick.two_of_trump_player(trump_suit)
        return cls(
            winner=trick.winner(trump_suit),
            winner_points=trick.points(trump_suit),
            two_of_trump_player=two_player,
            two_of_trump_points=1 if two_player is not None else 0,
            plays=trick.plays,
        )
