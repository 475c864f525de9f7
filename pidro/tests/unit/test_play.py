"""Trick play tests."""

from __future__ import annotations

import pytest

from ...engine.cards import Suit
from ...engine.events import PlayerWentCold, TrickWon
from ...engine.exceptions import CardNotInHandError, IncompleteTrickError, InvalidActionError, NotYourTurnError
from ...engine.phases.play import (
    advance,
    can_play,
    complete_trick,
    eliminate_player,
    hand_over,
    play_card,
    playable_cards,
    trick_complete,
)
from ...engine.player import Position, Team
from ...engine.state import GameState
from ...engine.state_machine import Phase
from ..fixtures.hands import cards, make_state

N, E, S, W = Position.NORTH, Position.EAST, Position.SOUTH, Position.WEST


def playing_state(hands, **changes) -> GameState:
    return make_state(
        phase=Phase.PLAYING,
        dealer=N,
        hands=hands,
        trump_suit=Suit.HEARTS,
        highest_bid=(E, 7),
        bidding_team=Team.EAST_WEST,
        current_turn=E,
        **changes,
    )


def card(text: str):
    return cards(text)[0]


def test_only_trump_may_be_played() -> None:
    state = playing_state({E: "Ah 4c"})
    with pytest.raises(InvalidActionError):
        play_card(state, E, card("4c"))
    with pytest.raises(CardNotInHandError):
        play_card(state, E, card("Kh"))
    with pytest.raises(NotYourTurnError):
        play_card(state, S, card("Ah"))


def test_play_moves_card_into_trick_and_passes_turn() -> None:
    state = play_card(playing_state({E: "Ah 2h", S: "Kh"}), E, card("Ah"))
    assert state.hand(E) == cards("2h")
    assert state.current_trick.plays == ((E, card("Ah")),)
    assert state.current_trick.leader is E
    assert state.current_turn is S


def test_player_without_trump_goes_cold() -> None:
    state = playing_state({E: "Ah 2h", S: "Kh 3h", W: "4c", N: "Th 9h"})
    state = play_card(state, E, card("Ah"))
    state = play_card(state, S, card("Kh"))
    assert state.current_turn is W
    assert not can_play(state, W)
    state = advance(state)
    assert isinstance(state.events[-1], PlayerWentCold)
    assert state.player(W).eliminated
    assert state.player(W).revealed_cards == cards("4c")
    assert state.current_turn is N


def test_trick_completes_once_active_players_have_played() -> None:
    state = playing_state({E: "Ah 2h", S: "Kh 3h", W: "4c", N: "Th 9h"})
    state = play_card(state, E, card("Ah"))
    state = play_card(state, S, card("Kh"))
    with pytest.raises(IncompleteTrickError):
        complete_trick(state)
    state = eliminate_player(state, W)
    state = play_card(state, N, card("Th"))
    assert trick_complete(state)
    state = complete_trick(state)
    assert state.events[-1] == TrickWon(position=E, points=2)
    assert state.hand_points == {Team.EAST_WEST: 2, Team.NORTH_SOUTH: 0}
    assert state.player(E).tricks_won == 1
    assert state.current_trick is None
    assert state.trick_number == 1
    assert state.current_turn is E


def test_two_of_trump_point_goes_to_its_team() -> None:
    state = playing_state({E: "2h", S: "3h", W: "4c", N: "9h"})
    state = play_card(state, E, card("2h"))
    state = play_card(state, S, card("3h"))
    state = advance(state)
    state = play_card(state, N, card("9h"))
    state = advance(state)
    assert state.tricks[-1].winner is N
    assert state.hand_points == {Team.EAST_WEST: 1, Team.NORTH_SOUTH: 0}


def test_hand_over_when_nobody_holds_trump() -> None:
    state = playing_state({E: "4c", S: "5c", W: "", N: "Ks"})
    assert hand_over(state)
    scored = advance(state)
    assert scored.phase is Phase.SCORING


def test_top_killed_card_stays_playable_once() -> None:
    killed = {pos: () for pos in Position}
    killed[E] = cards("9h 8h")
    state = playing_state({E: "Ah", S: "Kh"}, killed_cards=killed)
    assert playable_cards(state, E) == cards("Ah 9h")
    state = play_card(state, E, card("9h"))
    assert state.killed_cards[E] == cards("8h")
    assert E in state.killed_top_played
    assert state.hand(E) == cards("Ah")
    assert playable_cards(state, E) == cards("Ah")
