"""Event vocabulary and the reducer that applies events to a state.

Every state change goes through :func:`apply_event`, both during live play
and when a game is replayed from its log, so the two can never diverge.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, ClassVar, Dict, Optional, Tuple, Type

from .cards import Card, Suit
from .player import Position, Team, clockwise_from
from .rules import GameConfig
from .state import BidEntry, GameState
from .state_machine import Phase, transition
from .trick import Trick, TrickResult

__all__ = [
    "Event",
    "DealerSelected",
    "CardsDealt",
    "BidMade",
    "BidPassed",
    "BiddingComplete",
    "TrumpDeclared",
    "CardsDiscarded",
    "CardsKilled",
    "SecondDeal",
    "DealerRobbed",
    "CardPlayed",
    "PlayerWentCold",
    "TrickWon",
    "HandScored",
    "GameOver",
    "DealerRotated",
    "ACTION_EVENTS",
    "apply_event",
]


@dataclass(frozen=True)
class Event:
    """Base class for log entries."""

    kind: ClassVar[str] = "event"


@dataclass(frozen=True)
class DealerSelected(Event):
    """The deck was cut; ``deck`` is the shuffled deck the hand is dealt from.

    The match rules and seed travel with the first event so that the log alone
    rebuilds the game.
    """

    kind: ClassVar[str] = "dealer_selected"
    position: Position
    card: Card
    deck: Tuple[Card, ...]
    config: Optional[GameConfig] = None
    seed: Optional[int] = None


@dataclass(frozen=True)
class CardsDealt(Event):
    kind: ClassVar[str] = "cards_dealt"
    hands: Dict[Position, Tuple[Card, ...]]


@dataclass(frozen=True)
class BidMade(Event):
    kind: ClassVar[str] = "bid_made"
    position: Position
    amount: int


@dataclass(frozen=True)
class BidPassed(Event):
    kind: ClassVar[str] = "bid_passed"
    position: Position


@dataclass(frozen=True)
class BiddingComplete(Event):
    kind: ClassVar[str] = "bidding_complete"
    position: Position
    amount: int


@dataclass(frozen=True)
class TrumpDeclared(Event):
    kind: ClassVar[str] = "trump_declared"
    suit: Suit


@dataclass(frozen=True)
class CardsDiscarded(Event):
    """Non-trump cards thrown away after the trump declaration."""

    kind: ClassVar[str] = "cards_discarded"
    position: Position
    cards: Tuple[Card, ...]


@dataclass(frozen=True)
class CardsKilled(Event):
    """Excess trumps a player set aside to get down to the final hand size."""

    kind: ClassVar[str] = "cards_killed"
    position: Position
    cards: Tuple[Card, ...]


@dataclass(frozen=True)
class SecondDeal(Event):
    """Cards dealt to top hands back up; only the new cards are listed."""

    kind: ClassVar[str] = "second_deal"
    hands: Dict[Position, Tuple[Card, ...]]


@dataclass(frozen=True)
class DealerRobbed(Event):
    kind: ClassVar[str] = "dealer_robbed"
    cards_kept: Tuple[Card, ...]
    cards_discarded: Tuple[Card, ...]


@dataclass(frozen=True)
class CardPlayed(Event):
    kind: ClassVar[str] = "card_played"
    position: Position
    card: Card


@dataclass(frozen=True)
class PlayerWentCold(Event):
    kind: ClassVar[str] = "player_went_cold"
    position: Position
    revealed: Tuple[Card, ...]


@dataclass(frozen=True)
class TrickWon(Event):
    kind: ClassVar[str] = "trick_won"
    position: Position
    points: int


@dataclass(frozen=True)
class HandScored(Event):
    """``points`` is the change applied to the team's cumulative score."""

    kind: ClassVar[str] = "hand_scored"
    team: Team
    points: int


@dataclass(frozen=True)
class GameOver(Event):
    kind: ClassVar[str] = "game_over"
    winner: Team
    scores: Dict[Team, int]


@dataclass(frozen=True)
class DealerRotated(Event):
    """The next hand starts: new dealer and a freshly shuffled deck."""

    kind: ClassVar[str] = "dealer_rotated"
    position: Position
    deck: Tuple[Card, ...]


# Events recorded for a submitted action; every other event is derived.
ACTION_EVENTS: Tuple[Type[Event], ...] = (
    DealerSelected,
    BidMade,
    BidPassed,
    TrumpDeclared,
    CardsKilled,
    DealerRobbed,
    CardPlayed,
)


def _remove_cards(cards: Tuple[Card, ...], removed: Tuple[Card, ...]) -> Tuple[Card, ...]:
    remaining = list(cards)
    for card in removed:
        if card in remaining:
            remaining.remove(card)
    return tuple(remaining)


def _deal_into_hands(state: GameState, hands: Dict[Position, Tuple[Card, ...]]) -> GameState:
    players = dict(state.players)
    dealt: Tuple[Card, ...] = ()
    for pos, cards in hands.items():
        players[pos] = players[pos].add_cards(cards)
        dealt += tuple(cards)
    return state.evolve(players=players, deck=_remove_cards(state.deck, dealt))


def _dealer_selected(state: GameState, event: DealerSelected) -> GameState:
    return state.evolve(
        config=event.config if event.config is not None else state.config,
        rng_seed=event.seed,
        phase=transition(state.phase, Phase.DEALING),
        current_dealer=event.position,
        current_turn=None,
        deck=tuple(event.deck),
    )


def _cards_dealt(state: GameState, event: CardsDealt) -> GameState:
    state = _deal_into_hands(state, event.hands)
    first = state.current_dealer.left if state.current_dealer is not None else None
    return state.evolve(phase=transition(state.phase, Phase.BIDDING), current_turn=first)


def _next_bidder(state: GameState, after: Position) -> Position | None:
    acted = {bid.position for bid in state.bids}
    for pos in clockwise_from(after.left):
        if pos not in acted:
            return pos
    return None


def _bid_made(state: GameState, event: BidMade) -> GameState:
    state = state.evolve(
        bids=state.bids + (BidEntry(event.position, event.amount),),
        highest_bid=(event.position, event.amount),
        bidding_team=event.position.team,
    )
    return state.evolve(current_turn=_next_bidder(state, event.position))


def _bid_passed(state: GameState, event: BidPassed) -> GameState:
    state = state.evolve(bids=state.bids + (BidEntry(event.position, None),))
    return state.evolve(current_turn=_next_bidder(state, event.position))


def _bidding_complete(state: GameState, event: BiddingComplete) -> GameState:
    return state.evolve(
        phase=transition(state.phase, Phase.DECLARING),
        highest_bid=(event.position, event.amount),
        bidding_team=event.position.team,
        current_turn=event.position,
    )


def _trump_declared(state: GameState, event: TrumpDeclared) -> GameState:
    state = state.evolve(phase=transition(state.phase, Phase.DISCARDING), trump_suit=event.suit)
    return state.evolve(current_turn=state.next_discarder())


def _cards_discarded(state: GameState, event: CardsDiscarded) -> GameState:
    player = state.player(event.position)
    for card in event.cards:
        player = player.remove_card(card)
    state = state.with_player(player).evolve(discarded_cards=state.discarded_cards + tuple(event.cards))
    return state.evolve(current_turn=state.next_discarder())


def _cards_killed(state: GameState, event: CardsKilled) -> GameState:
    player = state.player(event.position)
    for card in event.cards:
        player = player.remove_card(card)
    killed = dict(state.killed_cards)
    killed[event.position] = killed.get(event.position, ()) + tuple(event.cards)
    state = state.with_player(player).evolve(killed_cards=killed)
    return state.evolve(current_turn=state.next_discarder())


def _start_play(state: GameState) -> GameState:
    leader = state.highest_bid[0] if state.highest_bid is not None else None
    return state.evolve(phase=transition(state.phase, Phase.PLAYING), current_turn=leader)


def _second_deal(state: GameState, event: SecondDeal) -> GameState:
    state = _deal_into_hands(state, event.hands)
    state = state.evolve(phase=transition(state.phase, Phase.SECOND_DEAL))
    if state.dealer_rob_pending():
        return state.evolve(current_turn=state.current_dealer)
    return _start_play(state)


def _dealer_robbed(state: GameState, event: DealerRobbed) -> GameState:
    dealer = state.player(state.current_dealer)
    pool_size = len(dealer.hand) + len(state.deck)
    state = state.with_player(replace(dealer, hand=tuple(event.cards_kept)))
    state = state.evolve(
        deck=(),
        discarded_cards=state.discarded_cards + tuple(event.cards_discarded),
        dealer_pool_size=pool_size,
    )
    return _start_play(state)


def _card_played(state: GameState, event: CardPlayed) -> GameState:
    player = state.player(event.position)
    if player.has_card(event.card):
        state = state.with_player(player.remove_card(event.card))
    elif state.killed_top(event.position) == event.card:
        killed = dict(state.killed_cards)
        killed[event.position] = killed[event.position][1:]
        state = state.evolve(
            killed_cards=killed,
            killed_top_played=state.killed_top_played | {event.position},
        )
    trick = state.current_trick or Trick(leader=event.position)
    trick = trick.add_play(event.position, event.card)
    return state.evolve(
        current_trick=trick,
        current_turn=state.next_active(event.position, exclude=trick.positions),
    )


def _player_went_cold(state: GameState, event: PlayerWentCold) -> GameState:
    state = state.with_player(state.player(event.position).eliminate())
    played = state.current_trick.positions if state.current_trick is not None else ()
    return state.evolve(current_turn=state.next_active(event.position, exclude=played))


def _trick_won(state: GameState, event: TrickWon) -> GameState:
    result = TrickResult.from_trick(state.current_trick, state.trump_suit)
    if result.winner != event.position:
        msg = f"Trick was won by {result.winner.value}, not {event.position.value}"
        raise ValueError(msg)
    hand_points = dict(state.hand_points)
    hand_points[result.winner.team] += result.winner_points
    if result.two_of_trump_player is not None:
        hand_points[result.two_of_trump_player.team] += result.two_of_trump_points
    state = state.with_player(state.player(result.winner).increment_tricks_won())
    leader = result.winner if state.player(result.winner).active else state.next_active(result.winner)
    return state.evolve(
        tricks=state.tricks + (result,),
        current_trick=None,
        trick_number=state.trick_number + 1,
        hand_points=hand_points,
        current_turn=leader,
    )


def _hand_scored(state: GameState, event: HandScored) -> GameState:
    scores = dict(state.cumulative_scores)
    scores[event.team] += event.points
    if not state.config.allow_negative_scores:
        scores[event.team] = max(0, scores[event.team])
    return state.evolve(
        phase=transition(state.phase, Phase.SCORING),
        cumulative_scores=scores,
        current_turn=None,
    )


def _game_over(state: GameState, event: GameOver) -> GameState:
    return state.evolve(phase=transition(state.phase, Phase.COMPLETE), winner=event.winner, current_turn=None)


def _dealer_rotated(state: GameState, event: DealerRotated) -> GameState:
    fresh = GameState.new(config=state.config, seed=state.rng_seed)
    return fresh.evolve(
        phase=transition(state.phase, Phase.DEALING),
        hand_number=state.hand_number + 1,
        current_dealer=event.position,
        deck=tuple(event.deck),
        cumulative_scores=dict(state.cumulative_scores),
        events=state.events,
    )


_REDUCERS: Dict[Type[Event], Callable[[GameState, Event], GameState]] = {
    DealerSelected: _dealer_selected,
    CardsDealt: _cards_dealt,
    BidMade: _bid_made,
    BidPassed: _bid_passed,
    BiddingComplete: _bidding_complete,
    TrumpDeclared: _trump_declared,
    CardsDiscarded: _cards_discarded,
    CardsKilled: _cards_killed,
    SecondDeal: _second_deal,
    DealerRobbed: _dealer_robbed,
    CardPlayed: _card_played,
    PlayerWentCold: _player_went_cold,
    TrickWon: _trick_won,
    HandScored: _hand_scored,
    GameOver: _game_over,
    DealerRotated: _dealer_rotated,
}


def apply_event(state: GameState, event: Event) -> GameState:
    """Apply ``event`` to ``state`` and append it to the event log."""

    reducer = _REDUCERS.get(type(event))
    if reducer is None:
        msg = f"Unknown event type: {type(event).__name__}"
        raise TypeError(msg)
    state = reducer(state, event)
    return state.evolve(events=state.events + (event,))
