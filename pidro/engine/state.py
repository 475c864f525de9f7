"""Game state models for Pidro."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, Iterator, Optional, Tuple

from .cards import Card, Suit
from .player import POSITIONS, Player, Position, Team, clockwise_from
from .rules import GameConfig
from .state_machine import Phase
from .trick import Trick, TrickResult

if TYPE_CHECKING:  # pragma: no cover
    from .events import Event

__all__ = ["BidEntry", "GameState"]


@dataclass(frozen=True)
class BidEntry:
    """A bid or, when ``amount`` is None, a pass."""

    position: Position
    amount: Optional[int] = None

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"BidEntry({self.position.value}, {'pass' if self.amount is None else self.amount})"

    @property
    def is_pass(self) -> bool:
        return self.amount is None


def _initial_players() -> Dict[Position, Player]:
    return {pos: Player(position=pos) for pos in POSITIONS}


def _zero_scores() -> Dict[Team, int]:
    return {team: 0 for team in Team}


def _empty_kills() -> Dict[Position, Tuple[Card, ...]]:
    return {pos: () for pos in POSITIONS}


@dataclass(frozen=True)
class GameState:
    """Complete, immutable game state snapshot.

    Mappings are rebuilt on every change and never mutated in place.
    ``cache`` holds derived values only and is ignored by equality.
    """

    phase: Phase = Phase.DEALER_SELECTION
    hand_number: int = 1
    variant: str = "finnish"
    players: Dict[Position, Player] = field(default_factory=_initial_players)
    current_dealer: Optional[Position] = None
    current_turn: Optional[Position] = None
    deck: Tuple[Card, ...] = ()
    discarded_cards: Tuple[Card, ...] = ()
    bids: Tuple[BidEntry, ...] = ()
    highest_bid: Optional[Tuple[Position, int]] = None
    bidding_team: Optional[Team] = None
    trump_suit: Optional[Suit] = None
    tricks: Tuple[TrickResult, ...] = ()
    current_trick: Optional[Trick] = None
    trick_number: int = 0
    hand_points: Dict[Team, int] = field(default_factory=_zero_scores)
    cumulative_scores: Dict[Team, int] = field(default_factory=_zero_scores)
    killed_cards: Dict[Position, Tuple[Card, ...]] = field(default_factory=_empty_kills)
    killed_top_played: FrozenSet[Position] = frozenset()
    dealer_pool_size: Optional[int] = None
    winner: Optional[Team] = None
    events: Tuple["Event", ...] = ()
    config: GameConfig = field(default_factory=GameConfig)
    rng_seed: Optional[int] = None
    cache: Dict[Any, Any] = field(default_factory=dict, compare=False, repr=False)

    def __repr__(self) -> str:  # pragma: no cover - simple
        return (
            "GameState("  # pylint: disable=line-too-long
            f"phase={self.phase.value}, hand={self.hand_number}, dealer={self.current_dealer}, "
            f"turn={self.current_turn}, trump={self.trump_suit}, scores={self.cumulative_scores})"
        )

    @classmethod
    def new(cls, config: Optional[GameConfig] = None, seed: Optional[int] = None) -> "GameState":
        """Create a fresh match waiting for dealer selection."""

        return cls(config=config or GameConfig(), rng_seed=seed)

    def update(self, name: str, value: Any) -> "GameState":
        """Replace a single field, checking only that the value has the right type."""

        if name not in _FIELD_TYPES:
            msg = f"GameState has no field {name!r}"
            raise KeyError(msg)
        expected, optional = _FIELD_TYPES[name]
        if not (value is None and optional) and not isinstance(value, expected):
            msg = f"GameState.{name} expects {expected}, got {type(value).__name__}"
            raise TypeError(msg)
        changes = {name: value}
        changes.setdefault("cache", {})
        return replace(self, **changes)

    def evolve(self, **changes: Any) -> "GameState":
        """Replace several fields at once without type checks, dropping the cache."""

        return replace(self, cache={}, **changes)

    def player(self, position: Position) -> Player:
        return self.players[position]

    def hand(self, position: Position) -> Tuple[Card, ...]:
        return self.players[position].hand

    def with_player(self, player: Player) -> "GameState":
        players = dict(self.players)
        players[player.position] = player
        return self.evolve(players=players)

    def seats_from_dealer(self) -> Iterator[Position]:
        """Seats clockwise starting left of the dealer, ending with the dealer."""

        if self.current_dealer is None:
            return iter(())
        return clockwise_from(self.current_dealer.left)

    def active_positions(self) -> Tuple[Position, ...]:
        return tuple(pos for pos in POSITIONS if self.players[pos].active)

    def next_active(self, after: Position, exclude: Tuple[Position, ...] = ()) -> Optional[Position]:
        """First active seat clockwise after ``after`` that is not excluded."""

        for pos in clockwise_from(after.left):
            if pos != after and self.players[pos].active and pos not in exclude:
                return pos
        return None

    def next_discarder(self) -> Optional[Position]:
        """Seat that still holds more trumps than the final hand size."""

        for pos in self.seats_from_dealer():
            if len(self.players[pos].trump_cards(self.trump_suit)) > self.config.final_hand_size:
                return pos
        return None

    def dealer_rob_pending(self) -> bool:
        """True when the dealer is short of a full hand and cards remain in the deck."""

        if self.current_dealer is None:
            return False
        short = len(self.hand(self.current_dealer)) < self.config.final_hand_size
        return short and bool(self.deck)

    def killed_top(self, position: Position) -> Optional[Card]:
        """The killed card ``position`` may still play, if any."""

        stack = self.killed_cards.get(position, ())
        if not stack or position in self.killed_top_played:
            return None
        return stack[0]

    def view_for(self, position: Position) -> "GameState":
        """Return the state as seen from one seat: other hands and the deck are hidden."""

        players = {
            pos: player if pos == position else replace(player, hand=())
            for pos, player in self.players.items()
        }
        return self.evolve(players=players, deck=(), events=())


_FIELD_TYPES: Dict[str, Tuple[Any, bool]] = {
    "phase": (Phase, False),
    "hand_number": (int, False),
    "variant": (str, False),
    "players": (dict, False),
    "current_dealer": (Position, True),
    "current_turn": (Position, True),
    "deck": (tuple, False),
    "discarded_cards": (tuple, False),
    "bids": (tuple, False),
    "highest_bid": (tuple, True),
    "bidding_team": (Team, True),
    "trump_suit": (Suit, True),
    "tricks": (tuple, False),
    "current_trick": (Trick, True),
    "trick_number": (int, False),
    "hand_points": (dict, False),
    "cumulative_scores": (dict, False),
    "killed_cards": (dict, False),
    "killed_top_played": (frozenset, False),
    "dealer_pool_size": (int, True),
    "winner": (Team, True),
    "events": (tuple, False),
    "config": (GameConfig, False),
    "rng_seed": (int, True),
    "cache": (dict, False),
}
