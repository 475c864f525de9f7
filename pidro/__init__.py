"""Finnish Pidro rules engine."""

from __future__ import annotations

from .engine.game import PidroGame, apply_action, legal_actions
from .engine.rules import load_rules

__all__ = ["PidroGame", "apply_action", "legal_actions", "load_rules"]
