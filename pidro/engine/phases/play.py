"""Trick play logic."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..cards import Card, is_trump
from ..events import CardPlayed, PlayerWentCold, TrickWon, apply_event
from ..exceptions import CardNotInHandError, IncompleteTrickError, InvalidActionError, InvalidPhaseError, NotYourTurnError
from ..player import Position
from ..state import GameState
from ..state_machine import Phase
from .scoring import apply_bid_result

__all__ = [
    "playable_cards",
    "can_play",
    "validate_play",
    "play_card",
    "trick_complete",
    "complete_trick",
    "eliminate_player",
    "hand_over",
    "advance",
]

log = logging.getLogger(__name__)


def playable_cards(state: GameState, position: Position) -> Tuple[Card, ...]:
    """Trumps in hand plus the top killed card while it is still unplayed."""

    cards = state.player(position).trump_cards(state.trump_suit)
    top = state.killed_top(position)
    if top is not None:
        cards += (top,)
    return cards


def can_play(state: GameState, position: Position) -> bool:
    return state.player(position).active and bool(playable_cards(state, position))


def validate_play(state: GameState, position: Position, card: Card) -> None:
    if state.phase is not Phase.PLAYING:
        raise InvalidPhaseError(expected=Phase.PLAYING, actual=state.phase)
    if position != state.current_turn:
        raise NotYourTurnError(expected=state.current_turn, actual=position)
    if not state.player(position).has_card(card) and state.killed_top(position) != card:
        raise CardNotInHandError(card)
    if not is_trump(card, state.trump_suit):
        raise InvalidActionError(f"Only trump may be played, {card.notation} is not trump")


def play_card(state: GameState, position: Position, card: Card) -> GameState:
    validate_play(state, position, card)
    log.debug("%s plays %s", position.value, card.notation)
    return apply_event(state, CardPlayed(position=position, card=card))


def trick_complete(state: GameState) -> bool:
    """True when every active player has played to the current trick."""

    trick = state.current_trick
    if trick is None or not trick.plays:
        return False
    return all(pos in trick.positions for pos in state.active_positions())


def complete_trick(state: GameState) -> GameState:
    if not trick_complete(state):
        raise IncompleteTrickError("Not every active player has played")
    trick = state.current_trick
    winner = trick.winner(state.trump_suit)
    return apply_event(state, TrickWon(position=winner, points=trick.points(state.trump_suit)))


def eliminate_player(state: GameState, position: Position) -> GameState:
    """The player has no trump left: they go cold and reveal their hand."""

    log.debug("%s goes cold", position.value)
    return apply_event(state, PlayerWentCold(position=position, revealed=state.hand(position)))


def hand_over(state: GameState) -> bool:
    if state.current_trick is not None:
        return False
    return not any(can_play(state, pos) for pos in state.active_positions())


def advance(state: GameState) -> Optional[GameState]:
    """Take the next automatic step of the playing phase, or None if a player must act."""

    if trick_complete(state):
        return complete_trick(state)
    if hand_over(state):
        return apply_bid_result(state)
    turn = state.current_turn
    if turn is not None and not can_play(state, turn):
        return eliminate_player(state, turn)
    return None
