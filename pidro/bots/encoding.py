"""Numpy encodings of the card play decision for bots."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from ..engine.actions import PlayCard, mask_playable_cards
from ..engine.cards import Card
from ..engine.game import legal_actions
from ..engine.player import Position
from ..engine.state import GameState

__all__ = ["play_options", "encode_play_mask", "masked_cards"]


def play_options(state: GameState, position: Position) -> Tuple[Card, ...]:
    """Cards the mask indexes: the hand, then the top killed card while unplayed."""

    options = state.hand(position)
    top = state.killed_top(position)
    if top is not None:
        options += (top,)
    return options


def encode_play_mask(state: GameState, position: Position) -> Tuple[np.ndarray, Tuple[Card, ...]]:
    """Return an int8 mask over :func:`play_options` and the options themselves.

    Raises :class:`~pidro.engine.exceptions.InvalidActionError` when the seat
    has nothing to play.
    """

    options = play_options(state, position)
    legal = [action.card for action in legal_actions(state, position) if isinstance(action, PlayCard)]
    return mask_playable_cards(options, legal).as_numpy(), options


def masked_cards(state: GameState, position: Position) -> Tuple[Card, ...]:
    mask, options = encode_play_mask(state, position)
    return tuple(options[index] for index in np.flatnonzero(mask))
