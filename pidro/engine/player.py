"""Seats, teams and per-player hand state."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple

from .cards import Card, Suit, is_trump

__all__ = ["Position", "Team", "POSITIONS", "Player", "clockwise_from"]


class Position(str, Enum):
    """Seats around the table, declared in clockwise order."""

    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Position({self.value})"

    @property
    def team(self) -> "Team":
        if self in (Position.NORTH, Position.SOUTH):
            return Team.NORTH_SOUTH
        return Team.EAST_WEST

    @property
    def left(self) -> "Position":
        """The next seat clockwise."""

        return POSITIONS[(POSITIONS.index(self) + 1) % len(POSITIONS)]

    @property
    def partner(self) -> "Position":
        return POSITIONS[(POSITIONS.index(self) + 2) % len(POSITIONS)]


class Team(str, Enum):
    """The two fixed partnerships."""

    NORTH_SOUTH = "north_south"
    EAST_WEST = "east_west"

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Team({self.value})"

    @property
    def members(self) -> Tuple[Position, Position]:
        if self is Team.NORTH_SOUTH:
            return (Position.NORTH, Position.SOUTH)
        return (Position.EAST, Position.WEST)

    @property
    def opponent(self) -> "Team":
        return Team.EAST_WEST if self is Team.NORTH_SOUTH else Team.NORTH_SOUTH


POSITIONS: Tuple[Position, ...] = tuple(Position)


def clockwise_from(start: Position) -> Iterator[Position]:
    """Yield all four seats clockwise beginning with ``start``."""

    index = POSITIONS.index(start)
    for offset in range(len(POSITIONS)):
        yield POSITIONS[(index + offset) % len(POSITIONS)]


@dataclass(frozen=True)
class Player:
    """A seat's hand and per-hand status."""

    position: Position
    hand: Tuple[Card, ...] = ()
    eliminated: bool = False
    revealed_cards: Tuple[Card, ...] = ()
    tricks_won: int = 0

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Player({self.position.value}, hand={list(self.hand)}, eliminated={self.eliminated})"

    @property
    def team(self) -> Team:
        return self.position.team

    @property
    def active(self) -> bool:
        """True while the player has not gone cold, whatever the hand size."""

        return not self.eliminated

    def add_cards(self, cards: Iterable[Card]) -> "Player":
        return replace(self, hand=self.hand + tuple(cards))

    def remove_card(self, card: Card) -> "Player":
        """Remove the first copy of ``card``; no-op if it is absent."""

        if card not in self.hand:
            return self
        index = self.hand.index(card)
        return replace(self, hand=self.hand[:index] + self.hand[index + 1 :])

    def has_card(self, card: Card) -> bool:
        return card in self.hand

    def trump_cards(self, trump_suit: Optional[Suit]) -> Tuple[Card, ...]:
        return tuple(card for card in self.hand if is_trump(card, trump_suit))

    def non_trump_cards(self, trump_suit: Optional[Suit]) -> Tuple[Card, ...]:
        return tuple(card for card in self.hand if not is_trump(card, trump_suit))

    def eliminate(self) -> "Player":
        """Mark the player cold and snapshot the hand they reveal.

        Eliminating twice keeps the first snapshot.
        """

        if self.eliminated:
            return self
        return replace(self, eliminated=True, revealed_cards=tuple(self.hand))

    def increment_tricks_won(self) -> "Player":
        return replace(self, tricks_won=self.tricks_won + 1)
