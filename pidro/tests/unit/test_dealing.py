"""Dealer selection, rotation and initial deal tests."""

from __future__ import annotations

import pytest

from ...engine.cards import create_deck
from ...engine.events import CardsDealt, DealerSelected
from ...engine.exceptions import InsufficientCardsError, InvalidPhaseError, NoDealerError
from ...engine.phases.dealing import deal_initial, rotate_dealer, select_dealer
from ...engine.player import Position
from ...engine.state import GameState
from ...engine.state_machine import Phase
from ..fixtures.hands import make_state


def test_select_dealer_emits_event_and_sets_dealer() -> None:
    state = select_dealer(GameState.new(seed=11))
    event = state.events[-1]
    assert isinstance(event, DealerSelected)
    assert state.current_dealer is event.position
    assert event.card in state.deck
    assert len(state.deck) == 52
    assert state.phase is Phase.DEALING
    assert event.seed == 11
    assert event.config == state.config


def test_select_dealer_is_reproducible_with_a_seed() -> None:
    assert select_dealer(GameState.new(seed=5)) == select_dealer(GameState.new(seed=5))


def test_select_dealer_only_once() -> None:
    state = select_dealer(GameState.new())
    with pytest.raises(InvalidPhaseError):
        select_dealer(state)


def test_deal_initial_gives_nine_cards_each() -> None:
    state = make_state(deck=create_deck())
    dealt = deal_initial(state)
    assert len(dealt.deck) == 16
    for pos in Position:
        assert len(dealt.hand(pos)) == 9
    assert dealt.current_turn is Position.EAST
    assert dealt.phase is Phase.BIDDING
    event = dealt.events[-1]
    assert isinstance(event, CardsDealt)
    assert event.hands[Position.SOUTH] == dealt.hand(Position.SOUTH)


def test_deal_initial_batches_of_three_from_dealers_left() -> None:
    deck = create_deck()
    dealt = deal_initial(make_state(deck=deck))
    assert dealt.hand(Position.EAST)[:3] == deck[0:3]
    assert dealt.hand(Position.SOUTH)[:3] == deck[3:6]
    assert dealt.hand(Position.NORTH)[:3] == deck[9:12]
    assert dealt.hand(Position.EAST)[3:6] == deck[12:15]


def test_deal_initial_keeps_every_card() -> None:
    dealt = deal_initial(make_state(deck=create_deck()))
    everything = list(dealt.deck)
    for pos in Position:
        everything.extend(dealt.hand(pos))
    assert sorted(everything, key=repr) == sorted(create_deck(), key=repr)


def test_deal_initial_needs_a_dealer() -> None:
    with pytest.raises(NoDealerError):
        deal_initial(make_state(dealer=None, deck=create_deck()))


def test_deal_initial_needs_enough_cards() -> None:
    with pytest.raises(InsufficientCardsError) as exc_info:
        deal_initial(make_state(deck=create_deck()[:30]))
    assert exc_info.value.required == 36
    assert exc_info.value.available == 30
    assert exc_info.value.code == "insufficient_cards"


def test_rotate_dealer_cycles_clockwise() -> None:
    state = make_state()
    seen = []
    for _ in range(4):
        state = rotate_dealer(state)
        seen.append(state.current_dealer)
    assert seen == [Position.EAST, Position.SOUTH, Position.WEST, Position.NORTH]
    assert state.hand_number == 5
    assert len(state.deck) == 52


def test_rotate_dealer_needs_a_dealer() -> None:
    with pytest.raises(NoDealerError):
        rotate_dealer(make_state(dealer=None))
