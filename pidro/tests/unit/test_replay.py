"""Event log replay and undo tests."""

from __future__ import annotations

import pytest

from ...engine.actions import Bid, Pass
from ...engine.events import BiddingComplete, BidMade, CardsDealt, DealerSelected, apply_event
from ...engine.exceptions import NoHistoryError
from ...engine.game import PidroGame, apply_action
from ...engine.replay import events_since, history_length, last_event, redo, replay, undo, undo_action
from ...engine.rules import GameConfig
from ...engine.state import GameState


def test_replay_rebuilds_state() -> None:
    game = PidroGame.new(seed=11)
    state = apply_action(game.state, game.current_turn, Bid(7))
    assert replay(state.events) == state


def test_replay_restores_rules_and_seed_from_the_log() -> None:
    config = GameConfig(winning_score=21, allow_negative_scores=False, auto_dealer_rob=True)
    game = PidroGame.new(config=config, seed=7)
    game.apply(game.current_turn, Pass())
    rebuilt = replay(game.state.events)
    assert rebuilt == game.state
    assert rebuilt.config == config
    assert rebuilt.rng_seed == 7


def test_undo_of_dealer_selection_keeps_rules_and_seed() -> None:
    config = GameConfig(winning_score=31)
    before = GameState.new(config=config, seed=4)
    after = PidroGame.new(config=config, seed=4).state
    assert undo_action(after) == before


def test_first_events_select_dealer_and_deal() -> None:
    state = PidroGame.new(seed=5).state
    assert isinstance(state.events[0], DealerSelected)
    assert isinstance(state.events[1], CardsDealt)


def test_undo_drops_last_event() -> None:
    state = PidroGame.new(seed=2).state
    previous = undo(state)
    assert previous.events == state.events[:-1]
    assert not isinstance(previous.events[-1], CardsDealt)


def test_undo_action_restores_state_before_action() -> None:
    before = PidroGame.new(seed=3).state
    after = apply_action(before, before.current_turn, Pass())
    assert undo_action(after) == before


def test_undo_action_drops_derived_events() -> None:
    state = PidroGame.new(seed=3).state
    for _ in range(3):
        state = apply_action(state, state.current_turn, Pass())
    final = apply_action(state, state.current_turn, Bid(8))
    assert len(final.events) > len(state.events) + 1
    assert undo_action(final) == state


def test_nothing_to_undo() -> None:
    with pytest.raises(NoHistoryError):
        undo(GameState.new())
    with pytest.raises(NoHistoryError):
        undo_action(GameState.new())


def test_unknown_event_rejected() -> None:
    with pytest.raises(TypeError):
        apply_event(GameState.new(), object())


def test_event_log_is_append_only() -> None:
    before = PidroGame.new(seed=9).state
    after = apply_action(before, before.current_turn, Bid(6))
    assert after.events[: len(before.events)] == before.events
    assert after.events[-1] == BidMade(position=before.current_turn, amount=6)


def test_redo_reapplies_undone_events() -> None:
    state = PidroGame.new(seed=3).state
    for _ in range(3):
        state = apply_action(state, state.current_turn, Pass())
    final = apply_action(state, state.current_turn, Pass())
    back = undo_action(final)
    undone = events_since(final, history_length(back))
    assert [type(event) for event in undone] == [BidMade, BiddingComplete]
    assert redo(back, *undone) == final


def test_redo_needs_events() -> None:
    with pytest.raises(NoHistoryError):
        redo(GameState.new())


def test_history_queries() -> None:
    state = PidroGame.new(seed=6).state
    assert history_length(GameState.new()) == 0
    assert last_event(GameState.new()) is None
    assert history_length(state) == len(state.events)
    assert isinstance(last_event(state), CardsDealt)
    mark = history_length(state)
    after = apply_action(state, state.current_turn, Bid(9))
    assert events_since(after, mark) == (BidMade(position=state.current_turn, amount=9),)
    assert events_since(after, 0) == after.events
    with pytest.raises(ValueError):
        events_since(after, -1)
