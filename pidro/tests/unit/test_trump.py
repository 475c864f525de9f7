"""Trump declaration, discard, second deal and pack robbing tests."""

from __future__ import annotations

import pytest

from ...engine.cards import Suit
from ...engine.events import CardsDiscarded, CardsKilled, DealerRobbed, SecondDeal
from ...engine.exceptions import (
    CardNotInHandError,
    InvalidCardCountError,
    InvalidPhaseError,
    NotYourTurnError,
    PointCardError,
)
from ...engine.phases.dealer_rob import select_best_cards
from ...engine.phases.trump import (
    auto_rob,
    categorize_hand,
    dealer_rob_pack,
    declare_trump,
    discard,
    discard_non_trumps,
    rob_pool,
    second_deal,
    validate_discard,
)
from ...engine.player import Position
from ...engine.state import GameState
from ...engine.state_machine import Phase
from ..fixtures.hands import cards, make_state

N, E, S, W = Position.NORTH, Position.EAST, Position.SOUTH, Position.WEST


def declaring_state(hands) -> GameState:
    return make_state(
        phase=Phase.DECLARING,
        dealer=N,
        hands=hands,
        highest_bid=(E, 8),
        bidding_team=E.team,
        current_turn=E,
    )


def second_deal_state(dealer_hand: str, deck: str) -> GameState:
    hands = {E: "Ah Kh Qh Jh", S: "Th 9h 8h 7h 6h 4h", W: "3h 2h 5h 5d", N: dealer_hand}
    return make_state(
        phase=Phase.DISCARDING,
        dealer=N,
        hands=hands,
        deck=cards(deck),
        trump_suit=Suit.HEARTS,
        highest_bid=(W, 8),
        bidding_team=W.team,
        current_turn=None,
    )


def test_declare_trump_by_bidder() -> None:
    state = declare_trump(declaring_state({E: "Ah 3c"}), E, Suit.HEARTS)
    assert state.trump_suit is Suit.HEARTS
    assert state.phase is Phase.DISCARDING


def test_only_bidder_declares() -> None:
    with pytest.raises(NotYourTurnError):
        declare_trump(declaring_state({}), S, Suit.HEARTS)
    with pytest.raises(InvalidPhaseError):
        declare_trump(make_state(phase=Phase.BIDDING), E, Suit.HEARTS)


def test_categorize_hand_keeps_wrong_five_as_trump() -> None:
    result = categorize_hand(cards("Ah 5d 5c Ks"), Suit.HEARTS)
    assert result.trump == cards("Ah 5d")
    assert result.non_trump == cards("5c Ks")


def test_discard_non_trumps_for_every_player() -> None:
    state = declare_trump(
        declaring_state({N: "Ah 3c 5d", E: "Kh 2s", S: "4s 5s", W: "Qh Jh"}), E, Suit.HEARTS
    )
    state = discard_non_trumps(state)
    discards = [event for event in state.events if isinstance(event, CardsDiscarded)]
    assert [event.position for event in discards] == [E, S, N]
    assert state.hand(N) == cards("Ah 5d")
    assert state.hand(S) == ()
    assert state.discarded_cards == cards("2s 4s 5s 3c")


def test_validate_discard_point_card_rule() -> None:
    hand = cards("Ah Kh Qh Jh Th 9h 8h 7h")
    with pytest.raises(PointCardError) as exc_info:
        validate_discard(cards("Ah 9h"), hand, Suit.HEARTS)
    assert exc_info.value.code == "point_card"
    validate_discard(cards("9h 8h"), hand, Suit.HEARTS)
    validate_discard(cards("Ah"), cards("Ah Kh"), Suit.HEARTS)


def test_player_with_too_many_trumps_must_kill() -> None:
    hands = {E: "Ah Kh Qh Jh Th 9h 8h 7h", S: "2c", W: "3c", N: "4c"}
    state = discard_non_trumps(declare_trump(declaring_state(hands), E, Suit.HEARTS))
    assert state.current_turn is E
    with pytest.raises(InvalidCardCountError):
        discard(state, E, cards("9h"))
    with pytest.raises(CardNotInHandError):
        discard(state, E, cards("9h 6h"))
    with pytest.raises(PointCardError):
        discard(state, E, cards("Jh 9h"))
    with pytest.raises(NotYourTurnError):
        discard(state, S, cards("9h 8h"))
    killed = discard(state, E, cards("9h 8h"))
    assert isinstance(killed.events[-1], CardsKilled)
    assert killed.killed_cards[E] == cards("9h 8h")
    assert len(killed.hand(E)) == 6
    assert killed.current_turn is None


def test_second_deal_tops_up_non_dealers_then_dealer_robs() -> None:
    state = second_deal(second_deal_state("Qs Js", "2c 3c 4c 5c 6c 7c 8c 9c Tc Jc"))
    event = state.events[-1]
    assert isinstance(event, SecondDeal)
    assert event.hands == {E: cards("2c 3c"), W: cards("4c 5c")}
    assert len(state.hand(E)) == 6 and len(state.hand(W)) == 6
    assert state.phase is Phase.SECOND_DEAL
    assert state.current_turn is N
    assert rob_pool(state) == cards("Qs Js 6c 7c 8c 9c Tc Jc")


def test_second_deal_without_robbing_starts_play_with_bidder() -> None:
    state = second_deal(second_deal_state("Qs Js Ts 9s 8s 7s", "2c 3c 4c 5c 6c"))
    assert state.phase is Phase.PLAYING
    assert state.current_turn is W
    assert state.deck == cards("6c")


def test_second_deal_stops_when_deck_runs_out() -> None:
    state = second_deal(second_deal_state("Qs Js", "2c 3c 4c"))
    assert state.hand(E)[-2:] == cards("2c 3c")
    assert state.hand(W) == cards("3h 2h 5h 5d 4c")
    assert state.deck == ()
    assert state.phase is Phase.PLAYING


def test_dealer_rob_pack_keeps_selection() -> None:
    state = second_deal(second_deal_state("Qs Js", "2c 3c 4c 5c 6c 7c 8c 9c Tc Jc"))
    robbed = dealer_rob_pack(state, N, cards("Qs 6c 7c 8c 9c Jc"))
    assert robbed.hand(N) == cards("Qs 6c 7c 8c 9c Jc")
    assert robbed.deck == ()
    assert robbed.dealer_pool_size == 8
    assert cards("Js")[0] in robbed.discarded_cards
    assert cards("Tc")[0] in robbed.discarded_cards
    assert isinstance(robbed.events[-1], DealerRobbed)
    assert robbed.phase is Phase.PLAYING
    assert robbed.current_turn is W


def test_dealer_rob_pack_errors() -> None:
    state = second_deal(second_deal_state("Qs Js", "2c 3c 4c 5c 6c 7c 8c 9c Tc Jc"))
    with pytest.raises(InvalidCardCountError) as exc_info:
        dealer_rob_pack(state, N, cards("Qs 6c 7c"))
    assert (exc_info.value.expected, exc_info.value.actual) == (6, 3)
    with pytest.raises(CardNotInHandError):
        dealer_rob_pack(state, N, cards("Qs 6c 7c 8c 9c Ah"))
    with pytest.raises(NotYourTurnError):
        dealer_rob_pack(state, E, cards("Qs Js 6c 7c 8c 9c"))
    with pytest.raises(InvalidPhaseError):
        dealer_rob_pack(make_state(phase=Phase.PLAYING), N, ())


def test_auto_rob_uses_best_cards() -> None:
    state = second_deal(second_deal_state("Qs Js", "2c 3c 4c 5c 6c 7c 8c 9c Tc Jc"))
    expected = select_best_cards(rob_pool(state), Suit.HEARTS)
    robbed = auto_rob(state)
    assert list(robbed.hand(N)) == expected
