"""Player hands for Kabo."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from .cards import Card
from .errors import InvalidIndex


@dataclass
class Player:
    name: str
    cards: List[Card] = field(default_factory=list)

    @property
    def hand_size(self) -> int:
        return len(self.cards)

    def check_index(self, index: int) -> None:
        if not 0 <= index < len(self.cards):
            raise InvalidIndex(index, len(self.cards))

    def card_at(self, index: int) -> Card:
        self.check_index(index)
        return self.cards[index]

    def set_card(self, index: int, card: Card) -> Card:
        """Put card face-down at index and return the card it displaced."""
        old = self.card_at(index)
        self.cards[index] = card
        return old

    def remove_cards(self, indices: Iterable[int]) -> List[Card]:
        """Remove the cards at the given slots, returned in slot order."""
        ordered = sorted(set(indices))
        for index in ordered:
            self.check_index(index)
        removed = [self.cards[index] for index in ordered]
        for index in reversed(ordered):
            del self.cards[index]
        return removed
