"""Choosing which cards a robbing dealer keeps."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from ..cards import Card, Suit, is_trump, point_value

__all__ = ["rob_key", "select_best_cards"]


def rob_key(card: Card, trump_suit: Suit) -> Tuple[int, int, int]:
    """Sort key: all trumps first, then by point value, then by rank."""

    return (0 if is_trump(card, trump_suit) else 1, -point_value(card, trump_suit), -card.rank)


def select_best_cards(pool: Iterable[Card], trump_suit: Suit, count: int = 6) -> List[Card]:
    """Return the ``count`` cards the dealer should keep (fewer if the pool is smaller)."""

    return sorted(pool, key=lambda card: rob_key(card, trump_suit))[:count]
