"""Scoring logic for Finnish Pidro."""

from __future__ import annotations

import logging
from typing import Dict, Iterable

from ..cards import point_value
from ..events import GameOver, HandScored, apply_event
from ..exceptions import GameNotOverError, InvalidActionError, InvalidPhaseError
from ..player import POSITIONS, Team
from ..state import GameState
from ..state_machine import Phase, next_phase
from ..trick import Trick, TrickResult
from .dealing import rotate_dealer

__all__ = [
    "POINTS_PER_HAND",
    "score_trick",
    "aggregate_team_scores",
    "bid_result",
    "apply_bid_result",
    "game_over",
    "determine_winner",
    "total_available_points",
    "finish_hand",
]

log = logging.getLogger(__name__)

POINTS_PER_HAND = 14


def score_trick(trick: Trick, trump_suit) -> TrickResult:
    """Resolve winner, winner points and the retained 2-of-trump point."""

    return TrickResult.from_trick(trick, trump_suit)


def aggregate_team_scores(results: Iterable[TrickResult]) -> Dict[Team, int]:
    totals: Dict[Team, int] = {team: 0 for team in Team}
    for result in results:
        totals[result.winner.team] += result.winner_points
        if result.two_of_trump_player is not None:
            totals[result.two_of_trump_player.team] += result.two_of_trump_points
    return totals


def bid_result(state: GameState) -> Dict[Team, int]:
    """Score change per team for the hand just played.

    The bidding team scores its points if it made the bid and loses the
    bid otherwise. Defenders always keep what they took.
    """

    if state.highest_bid is None or state.bidding_team is None:
        raise InvalidActionError("No bid to settle")
    amount = state.highest_bid[1]
    bidders = state.bidding_team
    taken = state.hand_points[bidders]
    return {
        bidders: taken if taken >= amount else -amount,
        bidders.opponent: state.hand_points[bidders.opponent],
    }


def apply_bid_result(state: GameState) -> GameState:
    if state.phase is not Phase.PLAYING:
        raise InvalidPhaseError(expected=Phase.PLAYING, actual=state.phase)
    deltas = bid_result(state)
    bidders = state.bidding_team
    for team in (bidders, bidders.opponent):
        state = apply_event(state, HandScored(team=team, points=deltas[team]))
    log.info(
        "Hand %d scored: %s bid %d, took %d; scores %s",
        state.hand_number,
        bidders.value,
        state.highest_bid[1],
        state.hand_points[bidders],
        {team.value: score for team, score in state.cumulative_scores.items()},
    )
    return state


def game_over(state: GameState) -> bool:
    return any(score >= state.config.winning_score for score in state.cumulative_scores.values())


def determine_winner(state: GameState) -> Team:
    """Winner of the match; the bidding team wins when both cross the line together."""

    reached = [team for team, score in state.cumulative_scores.items() if score >= state.config.winning_score]
    if not reached:
        raise GameNotOverError("Neither team has reached the winning score")
    if len(reached) == 1:
        return reached[0]
    if state.bidding_team is not None:
        return state.bidding_team
    return max(reached, key=lambda team: state.cumulative_scores[team])


def total_available_points(state: GameState) -> int:
    """Points still in circulation this hand.

    Killed cards are out of play, except the top card of each stack
    while its owner may still play it.
    """

    lost = 0
    for pos in POSITIONS:
        stack = state.killed_cards.get(pos, ())
        out_of_play = stack if pos in state.killed_top_played else stack[1:]
        lost += sum(point_value(card, state.trump_suit) for card in out_of_play)
    return POINTS_PER_HAND - lost


def finish_hand(state: GameState) -> GameState:
    """End the match or start the next hand after scoring."""

    if state.phase is not Phase.SCORING:
        raise InvalidPhaseError(expected=Phase.SCORING, actual=state.phase)
    if next_phase(state) is Phase.COMPLETE:
        winner = determine_winner(state)
        log.info("Game over after %d hands: %s wins", state.hand_number, winner.value)
        return apply_event(state, GameOver(winner=winner, scores=dict(state.cumulative_scores)))
    return rotate_dealer(state)
