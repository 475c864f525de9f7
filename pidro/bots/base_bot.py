"""Bot interface for Pidro."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..engine.actions import Action
from ..engine.player import Position
from ..engine.state import GameState

__all__ = ["BotBase"]


class BotBase(ABC):
    """Abstract base class for bot implementations.

    Bots only read the state and pick one of ``legal_actions``.
    """

    name: str = "bot"

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return self.name

    @abstractmethod
    def select_action(self, state: GameState, position: Position) -> Action:
        """Return the next action to submit for ``position``."""

    def notify_hand_end(self, state: GameState) -> None:
        """Hook called after each scored hand."""

    def reset(self) -> None:
        """Reset internal state if any."""
