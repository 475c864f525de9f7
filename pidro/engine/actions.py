"""Player actions and action masks for the Pidro engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Dict, Iterable, List, Tuple, Type

import numpy as np

from .cards import Card, Suit, card_index
from .exceptions import InvalidActionError
from .state_machine import Phase

__all__ = [
    "Action",
    "SelectDealer",
    "Pass",
    "Bid",
    "DeclareTrump",
    "Discard",
    "DealerRobPack",
    "PlayCard",
    "ACTION_PHASES",
    "ActionMask",
    "mask_playable_cards",
]


@dataclass(frozen=True)
class Action:
    """Base class of everything a seat (or the host) can submit."""

    kind: ClassVar[str] = "action"


@dataclass(frozen=True)
class SelectDealer(Action):
    """Issued by the host to start a match."""

    kind: ClassVar[str] = "select_dealer"


@dataclass(frozen=True)
class Pass(Action):
    kind: ClassVar[str] = "pass"


@dataclass(frozen=True)
class Bid(Action):
    kind: ClassVar[str] = "bid"
    amount: int


@dataclass(frozen=True)
class DeclareTrump(Action):
    kind: ClassVar[str] = "declare_trump"
    suit: Suit


@dataclass(frozen=True)
class Discard(Action):
    kind: ClassVar[str] = "discard"
    cards: Tuple[Card, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "cards", tuple(self.cards))


@dataclass(frozen=True)
class DealerRobPack(Action):
    kind: ClassVar[str] = "dealer_rob_pack"
    selected_cards: Tuple[Card, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "selected_cards", tuple(self.selected_cards))


@dataclass(frozen=True)
class PlayCard(Action):
    kind: ClassVar[str] = "play_card"
    card: Card


ACTION_PHASES: Dict[Type[Action], Phase] = {
    SelectDealer: Phase.DEALER_SELECTION,
    Pass: Phase.BIDDING,
    Bid: Phase.BIDDING,
    DeclareTrump: Phase.DECLARING,
    Discard: Phase.DISCARDING,
    DealerRobPack: Phase.SECOND_DEAL,
    PlayCard: Phase.PLAYING,
}


@dataclass
class ActionMask:
    """Binary mask describing which actions are available."""

    values: List[int]

    def __post_init__(self) -> None:
        if any(val not in {0, 1} for val in self.values):
            msg = "Action masks must contain only 0 or 1 entries"
            raise ValueError(msg)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"ActionMask(values={self.values})"

    def as_numpy(self) -> np.ndarray:
        return np.array(self.values, dtype=np.int8)


def mask_playable_cards(hand: Iterable[Card], legal: Iterable[Card]) -> ActionMask:
    """Create an action mask over ``hand`` for cards that can legally be played."""

    legal_set = {card_index(card) for card in legal}
    mask = [1 if card_index(card) in legal_set else 0 for card in hand]
    if not any(mask):
        raise InvalidActionError("No legal cards available")
    return ActionMask(values=mask)
