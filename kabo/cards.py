"""Card-related data structures and helpers for Kabo."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Mapping

MIN_RANK = 0
MAX_RANK = 13

# Ranks 0 and 13 appear twice, everything in between four times.
RANK_COUNTS: dict[int, int] = {rank: 4 for rank in range(MIN_RANK + 1, MAX_RANK)}
RANK_COUNTS[MIN_RANK] = 2
RANK_COUNTS[MAX_RANK] = 2

DECK_SIZE = sum(RANK_COUNTS.values())


@dataclass(frozen=True, order=True)
class Card:
    """Immutable representation of a playing card."""

    rank: int

    def __post_init__(self) -> None:
        if not MIN_RANK <= self.rank <= MAX_RANK:
            raise ValueError(f"The number {self.rank} is no valid card.")


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck."""
    return [Card(rank) for rank in sorted(RANK_COUNTS) for _ in range(RANK_COUNTS[rank])]


def rank_counts(cards: Iterable[Card]) -> Counter:
    return Counter(card.rank for card in cards)


def serialize_card(card: Card) -> dict[str, int]:
    return {"rank": card.rank}


def deserialize_card(payload: Mapping[str, int]) -> Card:
    return Card(int(payload["rank"]))


def card_label(card: Card) -> str:
    return f"Card {card.rank}"
