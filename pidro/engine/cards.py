"""Card abstractions for the Pidro engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

__all__ = [
    "Suit",
    "Ordering",
    "Card",
    "RANKS",
    "POINT_RANKS",
    "same_color_suit",
    "is_trump",
    "trump_rank",
    "compare",
    "point_value",
    "create_deck",
]

ACE = 14
KING = 13
QUEEN = 12
JACK = 11
TEN = 10
FIVE = 5
TWO = 2

RANKS: Tuple[int, ...] = tuple(range(TWO, ACE + 1))

# Trump cards worth a single point; both fives are worth five.
POINT_RANKS = frozenset({ACE, JACK, TEN, TWO})


class Suit(str, Enum):
    """Enumeration of the four suits."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Suit({self.value})"

    @property
    def code(self) -> str:
        """Single letter used by the card notation."""

        return self.value[0]


class Ordering(str, Enum):
    """Result of comparing two cards."""

    GT = "gt"
    EQ = "eq"
    LT = "lt"


_SAME_COLOR: Dict[Suit, Suit] = {
    Suit.HEARTS: Suit.DIAMONDS,
    Suit.DIAMONDS: Suit.HEARTS,
    Suit.CLUBS: Suit.SPADES,
    Suit.SPADES: Suit.CLUBS,
}

_RANK_CODES: Dict[int, str] = {TEN: "T", JACK: "J", QUEEN: "Q", KING: "K", ACE: "A"}
_CODE_RANKS: Dict[str, int] = {code: rank for rank, code in _RANK_CODES.items()}
_CODE_SUITS: Dict[str, Suit] = {suit.code: suit for suit in Suit}


def same_color_suit(suit: Suit) -> Suit:
    """Return the other suit of the same colour (hearts/diamonds, clubs/spades)."""

    return _SAME_COLOR[suit]


@dataclass(frozen=True)
class Card:
    """Immutable playing card. Rank 14 is the ace, 11 the jack."""

    rank: int
    suit: Suit

    def __post_init__(self) -> None:
        if isinstance(self.rank, bool) or not isinstance(self.rank, int):
            msg = f"Card rank must be an int, got {self.rank!r}"
            raise ValueError(msg)
        if not TWO <= self.rank <= ACE:
            msg = f"Unknown rank: {self.rank}"
            raise ValueError(msg)
        if not isinstance(self.suit, Suit):
            msg = f"Unknown suit: {self.suit!r}"
            raise ValueError(msg)

    def __repr__(self) -> str:
        return f"Card({self.notation})"

    @property
    def notation(self) -> str:
        """Short notation such as ``Ah`` or ``Td``."""

        return f"{_RANK_CODES.get(self.rank, str(self.rank))}{self.suit.code}"

    @classmethod
    def from_notation(cls, text: str) -> "Card":
        """Parse the short notation produced by :attr:`notation`."""

        text = text.strip()
        if len(text) < 2:
            msg = f"Invalid card notation: {text!r}"
            raise ValueError(msg)
        rank_part, suit_part = text[:-1].upper(), text[-1].lower()
        if suit_part not in _CODE_SUITS:
            msg = f"Invalid suit in card notation: {text!r}"
            raise ValueError(msg)
        if rank_part in _CODE_RANKS:
            rank = _CODE_RANKS[rank_part]
        elif rank_part.isdigit():
            rank = int(rank_part)
        else:
            msg = f"Invalid rank in card notation: {text!r}"
            raise ValueError(msg)
        return cls(rank=rank, suit=_CODE_SUITS[suit_part])

    def is_trump(self, trump_suit: Optional[Suit]) -> bool:
        return is_trump(self, trump_suit)

    def point_value(self, trump_suit: Optional[Suit]) -> int:
        return point_value(self, trump_suit)


def card_index(card: Card) -> int:
    """Return a stable index in ``range(52)`` for the card."""

    return list(Suit).index(card.suit) * len(RANKS) + (card.rank - TWO)


def is_trump(card: Card, trump_suit: Optional[Suit]) -> bool:
    """Return True for cards of the trump suit and for the wrong five."""

    if trump_suit is None:
        return False
    if card.suit == trump_suit:
        return True
    return card.rank == FIVE and card.suit == same_color_suit(trump_suit)


def trump_rank(card: Card, trump_suit: Optional[Suit]) -> Optional[float]:
    """Return the strength of a trump card, or None for non-trump cards.

    The right five keeps its face value while the wrong five sits half a
    step below it, above the four.
    """

    if not is_trump(card, trump_suit):
        return None
    if card.rank == FIVE and card.suit != trump_suit:
        return 4.5
    return float(card.rank)


def compare(a: Card, b: Card, trump_suit: Optional[Suit]) -> Ordering:
    """Compare two cards under the given trump suit.

    Trump beats non-trump; two non-trump cards compare equal.
    """

    rank_a = trump_rank(a, trump_suit)
    rank_b = trump_rank(b, trump_suit)
    if rank_a is None and rank_b is None:
        return Ordering.EQ
    if rank_b is None:
        return Ordering.GT
    if rank_a is None:
        return Ordering.LT
    if rank_a > rank_b:
        return Ordering.GT
    if rank_a < rank_b:
        return Ordering.LT
    return Ordering.EQ


def point_value(card: Card, trump_suit: Optional[Suit]) -> int:
    """Return 5 for either five, 1 for trump A/J/10/2 and 0 otherwise."""

    if not is_trump(card, trump_suit):
        return 0
    if card.rank == FIVE:
        return 5
    if card.rank in POINT_RANKS:
        return 1
    return 0


def create_deck() -> Tuple[Card, ...]:
    """Create a tuple representing the standard 52-card deck in suit order."""

    return tuple(Card(rank=rank, suit=suit) for suit in Suit for rank in RANKS)


def sort_cards(cards: Iterable[Card], trump_suit: Optional[Suit] = None) -> List[Card]:
    """Return cards sorted for display.

    With a trump suit the trumps come first from strongest to weakest,
    otherwise cards are sorted by suit then descending rank.
    """

    suit_order = {suit: idx for idx, suit in enumerate(Suit)}

    def key(card: Card) -> Tuple[int, float, int]:
        strength = trump_rank(card, trump_suit)
        if strength is not None:
            return (0, -strength, 0)
        return (1, float(suit_order[card.suit]), -card.rank)

    return sorted(cards, key=key)


__all__ += ["card_index", "sort_cards", "ACE", "KING", "QUEEN", "JACK", "TEN", "FIVE", "TWO"]
