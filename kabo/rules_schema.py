"""Validation schema for Kabo rules configuration."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, Field, field_validator, model_validator

from .cards import MAX_RANK, MIN_RANK


def _validate_rank(value: int) -> int:
    if not MIN_RANK <= value <= MAX_RANK:
        raise ValueError(f"Unknown rank: {value!r}")
    return value


class RuleSet(BaseModel):
    cards_per_player: int = Field(4, ge=1, description="Face-down cards dealt to every player.")
    peeks_per_player: int = Field(2, ge=0, description="Own cards each player may look at before the first turn.")
    max_players: int = Field(12, ge=1, description="Upper bound on the number of seats.")
    min_reshuffle_discards: int = Field(
        4,
        ge=1,
        description="Discards required before an exhausted deck may be rebuilt from the discard pile.",
    )
    peek_ranks: list[int] = Field(default_factory=lambda: [7, 8], description="Held ranks that allow peeking at an own card.")
    spy_ranks: list[int] = Field(default_factory=lambda: [9, 10], description="Held ranks that allow spying on another player.")
    swap_ranks: list[int] = Field(default_factory=lambda: [11, 12], description="Held ranks that allow a blind swap.")

    @field_validator("peek_ranks", "spy_ranks", "swap_ranks")
    @classmethod
    def validate_ranks(cls, value: list[int]) -> list[int]:
        return [_validate_rank(rank) for rank in value]

    @model_validator(mode="after")
    def ensure_disjoint_powers(self) -> "RuleSet":
        peek, spy, swap = set(self.peek_ranks), set(self.spy_ranks), set(self.swap_ranks)
        if peek & spy or peek & swap or spy & swap:
            raise ValueError("A rank can grant at most one power.")
        return self

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "RuleSet":
        return cls.model_validate(dict(payload))


DEFAULT_RULES = RuleSet()
