"""Rule configuration models for Finnish Pidro."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, ConfigDict, model_validator

__all__ = ["GameConfig", "load_rules", "RulesRepository", "build_default_repository", "DEFAULT_RULES_PATH"]

DECK_SIZE = 52
SEATS = 4


class GameConfig(BaseModel):
    """Tunable parameters of a match."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    min_bid: int = 6
    max_bid: int = 14
    winning_score: int = 62
    initial_deal_count: int = 9
    final_hand_size: int = 6
    allow_negative_scores: bool = True
    auto_dealer_rob: bool = False

    @model_validator(mode="after")
    def _check_ranges(self) -> "GameConfig":
        if self.min_bid < 1 or self.min_bid > self.max_bid:
            msg = f"Bid range {self.min_bid}..{self.max_bid} is empty"
            raise ValueError(msg)
        if self.winning_score <= 0:
            raise ValueError("winning_score must be positive")
        if self.final_hand_size <= 0 or self.initial_deal_count <= 0:
            raise ValueError("Hand sizes must be positive")
        if self.initial_deal_count * SEATS > DECK_SIZE:
            msg = f"Cannot deal {self.initial_deal_count} cards to {SEATS} players from {DECK_SIZE}"
            raise ValueError(msg)
        return self


DEFAULT_RULES_PATH = Path(__file__).with_name("rules_finnish.yaml")


def load_rules(path: Path | str | None = None) -> GameConfig:
    """Load rule configuration from YAML, falling back to defaults."""

    cfg_path = Path(path) if path is not None else DEFAULT_RULES_PATH
    data: Dict[str, Any] = {}
    if cfg_path.exists():
        with cfg_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    return GameConfig.model_validate(data)


@dataclass
class RulesRepository:
    """Registry of named rule presets."""

    default: GameConfig
    presets: Dict[str, GameConfig] = field(default_factory=dict)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"RulesRepository(default={self.default}, presets={sorted(self.presets)})"

    def register(self, name: str, config: GameConfig) -> None:
        self.presets[name] = config

    def get(self, name: str | None = None) -> GameConfig:
        """Retrieve a named configuration; ``None`` and ``"default"`` give the default."""

        if name in {None, "default"}:
            return self.default
        if name not in self.presets:
            msg = f"Unknown rules preset: {name}"
            raise KeyError(msg)
        return self.presets[name]


def build_default_repository() -> RulesRepository:
    """Create a repository loading rules from disk.

    ``short`` plays to 31 with scores floored at zero, which keeps bot
    matches brief.
    """

    default = load_rules()
    repo = RulesRepository(default=default, presets={"finnish": default})
    short = {**default.model_dump(), "winning_score": 31, "allow_negative_scores": False}
    repo.register("short", GameConfig.model_validate(short))
    return repo
