"""Bidding phase implementation.

A single round clockwise from the dealer's left; everybody acts once and
the dealer acts last.
"""

from __future__ import annotations

import logging
from typing import List

from ..events import BidMade, BiddingComplete, BidPassed, apply_event
from ..exceptions import (
    AlreadyActedError,
    InvalidBidError,
    InvalidPhaseError,
    NotYourTurnError,
)
from ..player import POSITIONS, Position
from ..state import GameState
from ..state_machine import Phase

__all__ = [
    "has_acted",
    "all_passed",
    "bidding_complete",
    "validate_bid",
    "apply_bid",
    "apply_pass",
    "legal_bid_amounts",
    "can_pass",
]

log = logging.getLogger(__name__)


def has_acted(state: GameState, position: Position) -> bool:
    return any(bid.position == position for bid in state.bids)


def all_passed(state: GameState) -> bool:
    """True once the three non-dealers passed and the dealer has not acted."""

    dealer = state.current_dealer
    if dealer is None:
        return False
    passed = {bid.position for bid in state.bids if bid.is_pass}
    others = [pos for pos in POSITIONS if pos != dealer]
    return all(pos in passed for pos in others) and not has_acted(state, dealer)


def bidding_complete(state: GameState) -> bool:
    return state.highest_bid is not None and all(has_acted(state, pos) for pos in POSITIONS)


def _check_turn(state: GameState, position: Position) -> None:
    if state.phase is not Phase.BIDDING:
        raise InvalidPhaseError(expected=Phase.BIDDING, actual=state.phase)
    if has_acted(state, position):
        raise AlreadyActedError(f"{position.value} already acted this round")
    if position != state.current_turn:
        raise NotYourTurnError(expected=state.current_turn, actual=position)


def validate_bid(state: GameState, position: Position, amount: int) -> None:
    """Raise unless ``position`` may bid ``amount`` now.

    A bid must beat the current high bid, except that the maximum bid may
    be repeated and then takes over.
    """

    _check_turn(state, position)
    cfg = state.config
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidBidError(f"Bid must be an integer, got {amount!r}")
    if not cfg.min_bid <= amount <= cfg.max_bid:
        raise InvalidBidError(f"Bid {amount} outside {cfg.min_bid}..{cfg.max_bid}")
    if state.highest_bid is not None:
        current = state.highest_bid[1]
        if amount < current or (amount == current and amount != cfg.max_bid):
            raise InvalidBidError(f"Bid {amount} does not beat {current}")


def _finish_if_complete(state: GameState) -> GameState:
    if not bidding_complete(state):
        return state
    position, amount = state.highest_bid
    log.debug("Bidding won by %s with %d", position.value, amount)
    return apply_event(state, BiddingComplete(position=position, amount=amount))


def apply_bid(state: GameState, position: Position, amount: int) -> GameState:
    validate_bid(state, position, amount)
    return _finish_if_complete(apply_event(state, BidMade(position=position, amount=amount)))


def apply_pass(state: GameState, position: Position) -> GameState:
    """Record a pass; a dealer passing after three passes bids ``min_bid`` instead."""

    _check_turn(state, position)
    if position == state.current_dealer and all_passed(state):
        log.debug("Everybody passed, %s is forced to bid %d", position.value, state.config.min_bid)
        return _finish_if_complete(apply_event(state, BidMade(position=position, amount=state.config.min_bid)))
    return _finish_if_complete(apply_event(state, BidPassed(position=position)))


def legal_bid_amounts(state: GameState, position: Position) -> List[int]:
    """Amounts ``position`` may bid right now (empty when it is not their turn)."""

    if state.phase is not Phase.BIDDING or position != state.current_turn or has_acted(state, position):
        return []
    cfg = state.config
    if state.highest_bid is None:
        return list(range(cfg.min_bid, cfg.max_bid + 1))
    current = state.highest_bid[1]
    if current == cfg.max_bid:
        return [cfg.max_bid]
    return list(range(current + 1, cfg.max_bid + 1))


def can_pass(state: GameState, position: Position) -> bool:
    return state.phase is Phase.BIDDING and position == state.current_turn and not has_acted(state, position)
