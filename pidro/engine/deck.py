"""Deck handling."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from .cards import Card, create_deck

__all__ = ["Deck"]


@dataclass(frozen=True)
class Deck:
    """Ordered, immutable collection of cards dealt from the front."""

    cards: Tuple[Card, ...] = ()
    shuffled: bool = False

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Deck(remaining={len(self.cards)}, shuffled={self.shuffled})"

    def __len__(self) -> int:
        return len(self.cards)

    @classmethod
    def new(cls, rng: Optional[random.Random] = None) -> "Deck":
        """Return a freshly shuffled 52-card deck."""

        return cls(cards=create_deck()).shuffle(rng)

    @classmethod
    def from_cards(cls, cards: Sequence[Card]) -> "Deck":
        return cls(cards=tuple(cards))

    def shuffle(self, rng: Optional[random.Random] = None) -> "Deck":
        """Return a new deck holding the same cards in random order."""

        cards = list(self.cards)
        (rng or random.Random()).shuffle(cards)
        return replace(self, cards=tuple(cards), shuffled=True)

    def deal_batch(self, count: int) -> Tuple[Tuple[Card, ...], "Deck"]:
        """Remove up to ``count`` cards from the front.

        Returns the dealt cards and the remaining deck.
        """

        if count < 0:
            msg = f"Cannot deal a negative number of cards: {count}"
            raise ValueError(msg)
        return self.cards[:count], replace(self, cards=self.cards[count:])

    draw = deal_batch

    def remaining(self) -> int:
        return len(self.cards)
