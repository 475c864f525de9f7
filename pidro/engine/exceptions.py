"""Exception hierarchy for the Pidro engine.

Every error carries a ``code`` naming its kind so that hosts can report
failures without matching on exception classes.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "PidroError",
    "NoDealerError",
    "InsufficientCardsError",
    "InvalidPhaseError",
    "NotYourTurnError",
    "InvalidActionError",
    "InvalidBidError",
    "AlreadyActedError",
    "CardNotInHandError",
    "InvalidCardCountError",
    "PointCardError",
    "IncompleteTrickError",
    "NotFoundError",
    "GameNotOverError",
    "NoHistoryError",
]


class PidroError(Exception):
    """Base exception for the project."""

    code: str = "error"

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"{self.__class__.__name__}({self.args})"


class NoDealerError(PidroError):
    """Raised when an operation needs a dealer and none is set."""

    code = "no_dealer"


class InsufficientCardsError(PidroError):
    """Raised when the deck cannot cover a deal."""

    code = "insufficient_cards"

    def __init__(self, required: int, available: int) -> None:
        super().__init__(f"Need {required} cards but only {available} remain")
        self.required = required
        self.available = available


class InvalidPhaseError(PidroError):
    """Raised when an action does not belong to the current phase."""

    code = "invalid_phase"

    def __init__(self, expected: Any, actual: Any) -> None:
        super().__init__(f"Expected phase {expected}, game is in {actual}")
        self.expected = expected
        self.actual = actual


class NotYourTurnError(PidroError):
    """Raised when a position acts out of turn."""

    code = "not_your_turn"

    def __init__(self, expected: Any, actual: Any) -> None:
        super().__init__(f"It is {expected}'s turn, not {actual}'s")
        self.expected = expected
        self.actual = actual


class InvalidActionError(PidroError):
    """Raised when an invalid move is attempted."""

    code = "invalid_action"


class InvalidBidError(InvalidActionError):
    """Raised when a bid is not allowed by the rules."""

    code = "invalid_bid"


class AlreadyActedError(InvalidActionError):
    """Raised when a player bids or passes twice in one round."""

    code = "already_acted"


class CardNotInHandError(InvalidActionError):
    code = "card_not_in_hand"

    def __init__(self, card: Any) -> None:
        super().__init__(f"{card!r} is not available to this player")
        self.card = card


class InvalidCardCountError(InvalidActionError):
    code = "invalid_card_count"

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Expected {expected} cards, got {actual}")
        self.expected = expected
        self.actual = actual


class PointCardError(InvalidActionError):
    """Raised when a point card is discarded while a non-point trump could be."""

    code = "point_card"


class IncompleteTrickError(PidroError):
    code = "incomplete_trick"


class NotFoundError(PidroError):
    code = "not_found"


class GameNotOverError(PidroError):
    code = "game_not_over"


class NoHistoryError(PidroError):
    code = "no_history"
