"""Deck and discard pile containers for Kabo."""

from __future__ import annotations

import logging
from random import Random
from typing import TYPE_CHECKING, List, Optional, Sequence

from .cards import Card, build_deck
from .errors import ensure

if TYPE_CHECKING:
    from .player import Player

logger = logging.getLogger(__name__)


class Deck:
    """Face-down draw stack. The last element is the top card."""

    def __init__(self, cards: Optional[Sequence[Card]] = None) -> None:
        self._cards: List[Card] = list(cards) if cards is not None else build_deck()

    @classmethod
    def shuffled(cls, rng: Random) -> "Deck":
        deck = cls()
        deck.shuffle(rng)
        return deck

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def shuffle(self, rng: Random) -> None:
        rng.shuffle(self._cards)

    def draw(self) -> Optional[Card]:
        """Pop the top card, or return None when the deck is empty."""
        if not self._cards:
            return None
        return self._cards.pop()

    def deal(self, players: Sequence["Player"], cards_per_player: int) -> None:
        ensure(
            len(self._cards) >= len(players) * cards_per_player,
            f"Cannot deal {cards_per_player} cards to {len(players)} players from {len(self._cards)} cards.",
        )
        for _ in range(cards_per_player):
            for player in players:
                player.cards.append(self._cards.pop())

    def refill_from(self, discard_pile: "DiscardPile", rng: Random) -> None:
        """Turn the whole discard pile into this deck and shuffle it."""
        ensure(not self._cards, "Only an empty deck can be refilled.")
        self._cards = discard_pile.take_all()
        self.shuffle(rng)
        logger.debug("Shuffled %d discarded cards into a new deck", len(self._cards))


class DiscardPile:
    """Face-up stack. The last element is the visible top card."""

    def __init__(self, cards: Optional[Sequence[Card]] = None) -> None:
        self._cards: List[Card] = list(cards or [])

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    @property
    def top(self) -> Optional[Card]:
        return self._cards[-1] if self._cards else None

    def __len__(self) -> int:
        return len(self._cards)

    def push(self, card: Card) -> None:
        self._cards.append(card)

    def extend(self, cards: Sequence[Card]) -> None:
        self._cards.extend(cards)

    def pop(self) -> Card:
        ensure(bool(self._cards), "The discard pile is unexpectedly empty.")
        return self._cards.pop()

    def take_all(self) -> List[Card]:
        cards, self._cards = self._cards, []
        return cards
