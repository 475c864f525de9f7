"""Phase definitions and the legal transition table."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Dict, FrozenSet

from .exceptions import InvalidPhaseError

if TYPE_CHECKING:  # pragma: no cover
    from .state import GameState

__all__ = ["Phase", "TRANSITIONS", "valid_transition", "transition", "next_phase", "is_terminal"]


class Phase(str, Enum):
    """The nine phases of a match, in play order."""

    DEALER_SELECTION = "dealer_selection"
    DEALING = "dealing"
    BIDDING = "bidding"
    DECLARING = "declaring"
    DISCARDING = "discarding"
    SECOND_DEAL = "second_deal"
    PLAYING = "playing"
    SCORING = "scoring"
    COMPLETE = "complete"

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Phase({self.value})"


TRANSITIONS: Dict[Phase, FrozenSet[Phase]] = {
    Phase.DEALER_SELECTION: frozenset({Phase.DEALING}),
    Phase.DEALING: frozenset({Phase.BIDDING}),
    Phase.BIDDING: frozenset({Phase.DECLARING}),
    Phase.DECLARING: frozenset({Phase.DISCARDING}),
    Phase.DISCARDING: frozenset({Phase.SECOND_DEAL}),
    Phase.SECOND_DEAL: frozenset({Phase.PLAYING}),
    Phase.PLAYING: frozenset({Phase.SCORING}),
    Phase.SCORING: frozenset({Phase.DEALING, Phase.COMPLETE}),
    Phase.COMPLETE: frozenset(),
}


def valid_transition(current: Phase, target: Phase) -> bool:
    """Static adjacency check."""

    return target in TRANSITIONS[current]


def transition(current: Phase, target: Phase) -> Phase:
    """Return ``target`` if reachable from ``current``.

    Staying in the same phase is always allowed.
    """

    if current == target or valid_transition(current, target):
        return target
    raise InvalidPhaseError(expected=sorted(p.value for p in TRANSITIONS[current]), actual=target)


def is_terminal(phase: Phase) -> bool:
    return not TRANSITIONS[phase]


def next_phase(state: "GameState") -> Phase:
    """Derive the successor of the state's phase from its content."""

    from .phases.scoring import game_over

    phase = state.phase
    if phase is Phase.SCORING:
        return Phase.COMPLETE if game_over(state) else Phase.DEALING
    if is_terminal(phase):
        raise InvalidPhaseError(expected="a non-terminal phase", actual=phase)
    (successor,) = TRANSITIONS[phase]
    return successor
