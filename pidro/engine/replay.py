"""Rebuilding states from the event log, plus undo, redo and history queries."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Tuple

from .events import ACTION_EVENTS, Event, apply_event
from .exceptions import NoHistoryError
from .state import GameState

__all__ = [
    "replay",
    "undo",
    "undo_action",
    "redo",
    "history_length",
    "last_event",
    "events_since",
]

log = logging.getLogger(__name__)


def replay(events: Iterable[Event]) -> GameState:
    """Fold ``events`` over a fresh game.

    The first ``DealerSelected`` restores the match rules and seed, so
    ``replay(state.events) == state`` for any state reached through play.
    """

    state = GameState.new()
    for event in events:
        state = apply_event(state, event)
    return state


def _rebuild(events: Sequence[Event], current: GameState) -> GameState:
    if not events:
        return GameState.new(config=current.config, seed=current.rng_seed)
    return replay(events)


def undo(state: GameState) -> GameState:
    """Return the state as it was before the last event."""

    if not state.events:
        raise NoHistoryError("Nothing to undo")
    log.debug("Undoing %s", state.events[-1].kind)
    return _rebuild(state.events[:-1], state)


def undo_action(state: GameState) -> GameState:
    """Return the state as it was before the last submitted action.

    Drops the last action event together with the events derived from it.
    """

    events = list(state.events)
    if not events:
        raise NoHistoryError("Nothing to undo")
    while events:
        event = events.pop()
        if isinstance(event, ACTION_EVENTS):
            break
    return _rebuild(events, state)


def redo(state: GameState, *events: Event) -> GameState:
    """Re-apply previously undone ``events`` in order."""

    if not events:
        raise NoHistoryError("Nothing to redo")
    for event in events:
        state = apply_event(state, event)
    return state


def history_length(state: GameState) -> int:
    return len(state.events)


def last_event(state: GameState) -> Optional[Event]:
    return state.events[-1] if state.events else None


def events_since(state: GameState, index: int) -> Tuple[Event, ...]:
    """Events appended after the log held ``index`` entries.

    Pair with :func:`history_length` to follow a game incrementally.
    """

    if index < 0:
        msg = f"History index must be non-negative, got {index}"
        raise ValueError(msg)
    return tuple(state.events[index:])
