"""Action dispatcher and the high-level game controller."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import List, Optional

from .actions import ACTION_PHASES, Action, Bid, DealerRobPack, DeclareTrump, Discard, Pass, PlayCard, SelectDealer
from .cards import Suit, point_value
from .exceptions import InvalidActionError, InvalidPhaseError, PidroError
from .phases import bidding, dealing, play, scoring, trump
from .phases.dealer_rob import select_best_cards
from .player import Position
from .replay import undo_action
from .rules import GameConfig, build_default_repository
from .state import GameState
from .state_machine import Phase

__all__ = ["ActionResult", "apply_action", "try_apply_action", "legal_actions", "PidroGame"]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionResult:
    """Outcome of :func:`try_apply_action`: the new state or the error raised."""

    ok: bool
    state: GameState
    error: Optional[PidroError] = None

    def __repr__(self) -> str:  # pragma: no cover - trivial
        if self.ok:
            return f"ActionResult(ok, phase={self.state.phase.value})"
        return f"ActionResult(error={self.error.code})"


def _dispatch(state: GameState, position: Optional[Position], action: Action) -> GameState:
    if isinstance(action, SelectDealer):
        return dealing.select_dealer(state)
    if isinstance(action, Pass):
        return bidding.apply_pass(state, position)
    if isinstance(action, Bid):
        return bidding.apply_bid(state, position, action.amount)
    if isinstance(action, DeclareTrump):
        return trump.declare_trump(state, position, action.suit)
    if isinstance(action, Discard):
        return trump.discard(state, position, action.cards)
    if isinstance(action, DealerRobPack):
        return trump.dealer_rob_pack(state, position, action.selected_cards)
    if isinstance(action, PlayCard):
        return play.play_card(state, position, action.card)
    raise InvalidActionError(f"Unknown action: {action!r}")


def _automatic_step(state: GameState) -> Optional[GameState]:
    """Apply the next step that needs no player input, if any."""

    phase = state.phase
    if phase is Phase.DEALING:
        return dealing.deal_initial(state)
    if phase is Phase.DISCARDING:
        if any(state.player(pos).non_trump_cards(state.trump_suit) for pos in state.players):
            return trump.discard_non_trumps(state)
        if state.current_turn is None:
            return trump.second_deal(state)
        return None
    if phase is Phase.SECOND_DEAL and state.config.auto_dealer_rob and state.dealer_rob_pending():
        return trump.auto_rob(state)
    if phase is Phase.PLAYING:
        return play.advance(state)
    if phase is Phase.SCORING:
        return scoring.finish_hand(state)
    return None


def advance(state: GameState) -> GameState:
    """Run automatic steps until a player has to act or the game is over."""

    while True:
        following = _automatic_step(state)
        if following is None:
            return state
        state = following


def apply_action(state: GameState, position: Optional[Position], action: Action) -> GameState:
    """Apply ``action`` for ``position`` and every automatic step that follows.

    Component errors propagate to the caller unchanged.
    """

    expected = ACTION_PHASES.get(type(action))
    if expected is None:
        raise InvalidActionError(f"Unknown action: {action!r}")
    if state.phase is not expected:
        raise InvalidPhaseError(expected=expected, actual=state.phase)
    log.debug("%s -> %s in %s", position.value if position else "host", action, state.phase.value)
    return advance(_dispatch(state, position, action))


def try_apply_action(state: GameState, position: Optional[Position], action: Action) -> ActionResult:
    """Like :func:`apply_action` but returns rule violations instead of raising."""

    try:
        return ActionResult(ok=True, state=apply_action(state, position, action))
    except PidroError as exc:
        return ActionResult(ok=False, state=state, error=exc)


def _legal_discards(state: GameState, position: Position) -> List[Action]:
    trump_suit = state.trump_suit
    trumps = state.player(position).trump_cards(trump_suit)
    excess = trump.excess_trumps(state, position)
    spare = [card for card in trumps if point_value(card, trump_suit) == 0]
    candidates = spare if len(spare) >= excess else list(trumps)
    actions: List[Action] = []
    for cards in itertools.combinations(candidates, excess):
        try:
            trump.validate_discard(cards, trumps, trump_suit, state.config.final_hand_size)
        except PidroError:
            continue
        actions.append(Discard(cards=cards))
    return actions


def _compute_legal_actions(state: GameState, position: Position) -> List[Action]:
    phase = state.phase
    if phase is Phase.BIDDING:
        actions: List[Action] = [Bid(amount) for amount in bidding.legal_bid_amounts(state, position)]
        if bidding.can_pass(state, position):
            actions.append(Pass())
        return actions
    if position != state.current_turn:
        return []
    if phase is Phase.DECLARING:
        return [DeclareTrump(suit) for suit in Suit]
    if phase is Phase.DISCARDING:
        return _legal_discards(state, position)
    if phase is Phase.SECOND_DEAL and state.dealer_rob_pending():
        # Only the suggested selection is listed; any subset of the pool of the right size is legal.
        keep = select_best_cards(trump.rob_pool(state), state.trump_suit, trump.rob_keep_count(state))
        return [DealerRobPack(selected_cards=tuple(keep))]
    if phase is Phase.PLAYING:
        return [PlayCard(card) for card in play.playable_cards(state, position)]
    return []


def legal_actions(state: GameState, position: Position) -> List[Action]:
    """Every action ``position`` may submit now; empty when it is not their move."""

    key = ("legal_actions", position)
    if key not in state.cache:
        state.cache[key] = _compute_legal_actions(state, position)
    return list(state.cache[key])


@dataclass
class PidroGame:
    """High-level controller holding the current state of one match."""

    state: GameState

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"PidroGame(phase={self.state.phase.value}, scores={self.state.cumulative_scores})"

    @classmethod
    def new(
        cls, config: Optional[GameConfig] = None, seed: Optional[int] = None, preset: Optional[str] = None
    ) -> "PidroGame":
        """Start a match: the dealer is selected and the first hand dealt.

        Without an explicit ``config`` the rules come from the named preset.
        """

        if config is None:
            config = build_default_repository().get(preset)
        state = GameState.new(config=config, seed=seed)
        return cls(state=apply_action(state, None, SelectDealer()))

    @property
    def current_turn(self) -> Optional[Position]:
        return self.state.current_turn

    def apply(self, position: Position, action: Action) -> GameState:
        self.state = apply_action(self.state, position, action)
        return self.state

    def legal_actions(self, position: Position) -> List[Action]:
        return legal_actions(self.state, position)

    def undo(self) -> GameState:
        self.state = undo_action(self.state)
        return self.state

    def is_finished(self) -> bool:
        return self.state.phase is Phase.COMPLETE
