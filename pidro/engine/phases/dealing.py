"""Dealer selection, rotation and the initial deal."""

from __future__ import annotations

import logging
import random
from typing import Dict, Optional, Tuple

from ..cards import Card
from ..deck import Deck
from ..events import CardsDealt, DealerRotated, DealerSelected, apply_event
from ..exceptions import InsufficientCardsError, InvalidPhaseError, NoDealerError
from ..player import POSITIONS, Position
from ..state import GameState
from ..state_machine import Phase

__all__ = ["DEAL_BATCH_SIZE", "hand_rng", "select_dealer", "rotate_dealer", "deal_initial"]

log = logging.getLogger(__name__)

DEAL_BATCH_SIZE = 3


def hand_rng(state: GameState, hand_number: Optional[int] = None) -> random.Random:
    """Random source for one hand, reproducible when the match has a seed."""

    number = state.hand_number if hand_number is None else hand_number
    if state.rng_seed is None:
        return random.Random()
    return random.Random(f"{state.rng_seed}-{number}")


def select_dealer(state: GameState) -> GameState:
    """Shuffle a deck and cut it; the cut position picks the dealer."""

    if state.phase is not Phase.DEALER_SELECTION:
        raise InvalidPhaseError(expected=Phase.DEALER_SELECTION, actual=state.phase)
    rng = hand_rng(state)
    deck = Deck.new(rng)
    cut = rng.randrange(len(deck))
    card = deck.cards[cut]
    dealer = POSITIONS[cut % len(POSITIONS)]
    log.debug("Cut %s at %d, %s deals", card.notation, cut, dealer.value)
    event = DealerSelected(position=dealer, card=card, deck=deck.cards, config=state.config, seed=state.rng_seed)
    return apply_event(state, event)


def rotate_dealer(state: GameState) -> GameState:
    """Pass the deal clockwise and start the next hand with a fresh deck."""

    if state.current_dealer is None:
        raise NoDealerError("No dealer to rotate")
    deck = Deck.new(hand_rng(state, state.hand_number + 1))
    dealer = state.current_dealer.left
    log.debug("Hand %d: deal passes to %s", state.hand_number + 1, dealer.value)
    return apply_event(state, DealerRotated(position=dealer, deck=deck.cards))


def deal_initial(state: GameState) -> GameState:
    """Deal the opening hands in batches of three, starting left of the dealer."""

    if state.current_dealer is None:
        raise NoDealerError("Cannot deal without a dealer")
    if state.phase is not Phase.DEALING:
        raise InvalidPhaseError(expected=Phase.DEALING, actual=state.phase)
    per_player = state.config.initial_deal_count
    required = per_player * len(POSITIONS)
    if len(state.deck) < required:
        raise InsufficientCardsError(required=required, available=len(state.deck))

    deck = Deck.from_cards(state.deck)
    order = list(state.seats_from_dealer())
    hands: Dict[Position, Tuple[Card, ...]] = {pos: () for pos in order}
    while any(len(hands[pos]) < per_player for pos in order):
        for pos in order:
            batch, deck = deck.deal_batch(min(DEAL_BATCH_SIZE, per_player - len(hands[pos])))
            hands[pos] += batch
    return apply_event(state, CardsDealt(hands=hands))
