"""Trump declaration, discarding, the second deal and robbing the pack."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, NamedTuple, Sequence, Tuple

from ..cards import Card, Suit, is_trump, point_value
from ..deck import Deck
from ..events import CardsDiscarded, CardsKilled, DealerRobbed, SecondDeal, TrumpDeclared, apply_event
from ..exceptions import (
    CardNotInHandError,
    InvalidActionError,
    InvalidCardCountError,
    InvalidPhaseError,
    NotYourTurnError,
    PointCardError,
)
from ..player import Position
from ..state import GameState
from ..state_machine import Phase
from .dealer_rob import select_best_cards

__all__ = [
    "HandCategories",
    "declare_trump",
    "categorize_hand",
    "discard_non_trumps",
    "excess_trumps",
    "validate_discard",
    "discard",
    "second_deal",
    "rob_pool",
    "rob_keep_count",
    "dealer_rob_pack",
    "auto_rob",
]

log = logging.getLogger(__name__)


class HandCategories(NamedTuple):
    trump: Tuple[Card, ...]
    non_trump: Tuple[Card, ...]


def _require_phase(state: GameState, phase: Phase) -> None:
    if state.phase is not phase:
        raise InvalidPhaseError(expected=phase, actual=state.phase)


def declare_trump(state: GameState, position: Position, suit: Suit) -> GameState:
    """The bidding winner names the trump suit."""

    _require_phase(state, Phase.DECLARING)
    if not isinstance(suit, Suit):
        msg = f"Unknown suit: {suit!r}"
        raise ValueError(msg)
    bidder = state.highest_bid[0] if state.highest_bid is not None else None
    if position != bidder:
        raise NotYourTurnError(expected=bidder, actual=position)
    log.debug("%s declares %s", position.value, suit.value)
    return apply_event(state, TrumpDeclared(suit=suit))


def categorize_hand(hand: Iterable[Card], trump_suit: Suit) -> HandCategories:
    cards = tuple(hand)
    return HandCategories(
        trump=tuple(card for card in cards if is_trump(card, trump_suit)),
        non_trump=tuple(card for card in cards if not is_trump(card, trump_suit)),
    )


def discard_non_trumps(state: GameState) -> GameState:
    """Throw away every player's non-trump cards; the wrong five stays."""

    _require_phase(state, Phase.DISCARDING)
    for pos in state.seats_from_dealer():
        non_trump = categorize_hand(state.hand(pos), state.trump_suit).non_trump
        if non_trump:
            state = apply_event(state, CardsDiscarded(position=pos, cards=non_trump))
    return state


def excess_trumps(state: GameState, position: Position) -> int:
    """How many trumps ``position`` holds beyond the final hand size."""

    held = len(state.player(position).trump_cards(state.trump_suit))
    return max(0, held - state.config.final_hand_size)


def validate_discard(
    cards: Sequence[Card], hand: Sequence[Card], trump_suit: Suit, final_hand_size: int = 6
) -> None:
    """Reject point cards while a non-point trump could be discarded instead."""

    trumps = [card for card in hand if is_trump(card, trump_suit)]
    if len(trumps) <= final_hand_size:
        return
    if not any(point_value(card, trump_suit) for card in cards):
        return
    spare = [card for card in trumps if point_value(card, trump_suit) == 0 and card not in cards]
    if spare:
        raise PointCardError(f"Discard {spare[0].notation} before any point card")


def discard(state: GameState, position: Position, cards: Sequence[Card]) -> GameState:
    """Set aside the excess trumps of a player holding too many."""

    _require_phase(state, Phase.DISCARDING)
    if state.current_turn is None:
        raise InvalidActionError("Nobody needs to discard")
    if position != state.current_turn:
        raise NotYourTurnError(expected=state.current_turn, actual=position)
    cards = tuple(cards)
    if len(set(cards)) != len(cards):
        raise InvalidActionError("Discard lists a card twice")
    excess = excess_trumps(state, position)
    if len(cards) != excess:
        raise InvalidCardCountError(expected=excess, actual=len(cards))
    hand = state.hand(position)
    for card in cards:
        if card not in hand:
            raise CardNotInHandError(card)
    validate_discard(cards, hand, state.trump_suit, state.config.final_hand_size)
    return apply_event(state, CardsKilled(position=position, cards=cards))


def second_deal(state: GameState) -> GameState:
    """Top the non-dealers back up to the final hand size from the deck."""

    _require_phase(state, Phase.DISCARDING)
    if state.current_turn is not None:
        raise InvalidActionError(f"{state.current_turn.value} still has to discard")
    deck = Deck.from_cards(state.deck)
    hands: Dict[Position, Tuple[Card, ...]] = {}
    for pos in state.seats_from_dealer():
        if pos == state.current_dealer:
            continue
        needed = state.config.final_hand_size - len(state.hand(pos))
        if needed <= 0:
            continue
        batch, deck = deck.deal_batch(needed)
        if batch:
            hands[pos] = batch
    return apply_event(state, SecondDeal(hands=hands))


def rob_pool(state: GameState) -> Tuple[Card, ...]:
    """The dealer's remaining hand plus the whole undealt deck."""

    return state.hand(state.current_dealer) + state.deck


def rob_keep_count(state: GameState) -> int:
    return min(state.config.final_hand_size, len(rob_pool(state)))


def dealer_rob_pack(state: GameState, position: Position, selected_cards: Sequence[Card]) -> GameState:
    """Keep ``selected_cards`` out of the dealer's pool and discard the rest."""

    _require_phase(state, Phase.SECOND_DEAL)
    dealer = state.current_dealer
    if position != dealer or position != state.current_turn:
        raise NotYourTurnError(expected=dealer, actual=position)
    if not state.dealer_rob_pending():
        raise InvalidActionError("There is no pack to rob")
    selected = tuple(selected_cards)
    expected = rob_keep_count(state)
    if len(selected) != expected:
        raise InvalidCardCountError(expected=expected, actual=len(selected))
    remaining = list(rob_pool(state))
    for card in selected:
        if card not in remaining:
            raise CardNotInHandError(card)
        remaining.remove(card)
    log.debug("%s robs the pack: keeps %d of %d", position.value, len(selected), len(selected) + len(remaining))
    return apply_event(state, DealerRobbed(cards_kept=selected, cards_discarded=tuple(remaining)))


def auto_rob(state: GameState) -> GameState:
    """Rob the pack on the dealer's behalf with :func:`select_best_cards`."""

    keep = select_best_cards(rob_pool(state), state.trump_suit, rob_keep_count(state))
    return dealer_rob_pack(state, state.current_dealer, keep)
