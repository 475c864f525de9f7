"""Trick resolution tests."""

from __future__ import annotations

import pytest

from ...engine.cards import Suit
from ...engine.exceptions import IncompleteTrickError, NotFoundError
from ...engine.phases.scoring import score_trick
from ...engine.player import Position
from ...engine.trick import Trick
from ..fixtures.hands import cards


def make_trick(leader: Position, notation: str) -> Trick:
    trick = Trick(leader=leader)
    seats = [leader, leader.left, leader.left.left, leader.left.left.left]
    for pos, card in zip(seats, cards(notation)):
        trick = trick.add_play(pos, card)
    return trick


def test_empty_trick_has_no_winner() -> None:
    with pytest.raises(IncompleteTrickError):
        Trick(leader=Position.NORTH).winner(Suit.HEARTS)


def test_highest_trump_wins() -> None:
    trick = make_trick(Position.NORTH, "Th Kh 5h 5d")
    assert trick.winner(Suit.HEARTS) is Position.EAST
    assert trick.points(Suit.HEARTS) == 11


def test_right_five_beats_wrong_five() -> None:
    trick = make_trick(Position.SOUTH, "5d 5h")
    assert trick.winner(Suit.HEARTS) is Position.WEST


def test_two_of_trump_point_stays_with_its_player() -> None:
    trick = make_trick(Position.NORTH, "Ah 2h 3h 4h")
    result = score_trick(trick, Suit.HEARTS)
    assert result.winner is Position.NORTH
    assert result.winner_points == 1
    assert result.two_of_trump_player is Position.EAST
    assert result.two_of_trump_points == 1


def test_two_of_trump_excluded_with_ten_in_trick() -> None:
    trick = make_trick(Position.NORTH, "Ah 2h Th 4h")
    result = score_trick(trick, Suit.HEARTS)
    assert result.winner is Position.NORTH
    assert result.winner_points == 2
    assert result.two_of_trump_player is Position.EAST


def test_lone_two_wins_nothing_as_winner() -> None:
    trick = make_trick(Position.WEST, "2s")
    result = score_trick(trick, Suit.SPADES)
    assert result.winner is Position.WEST
    assert result.winner_points == 0
    assert result.two_of_trump_player is Position.WEST
    assert result.two_of_trump_points == 1


def test_card_played_by() -> None:
    trick = make_trick(Position.EAST, "Kc Qc")
    assert trick.card_played_by(Position.SOUTH) == cards("Qc")[0]
    with pytest.raises(NotFoundError):
        trick.card_played_by(Position.NORTH)
