"""Turn engine for Kabo."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum, auto
from random import Random
from typing import List, Optional, Sequence

from .cards import DECK_SIZE, RANK_COUNTS, Card, rank_counts
from .deck import Deck, DiscardPile
from .errors import AlreadyKabo, InvalidIndex, NotEnoughCards, WrongCard, WrongPhase, ensure
from .events import (
    CardDrawn,
    DeckDrawn,
    DiscardShuffle,
    Discards,
    EndTurn,
    GameEvent,
    GameOver,
    Kabo,
    MultiReplaced,
    MultiReplaceFailed,
    Peeked,
    Replaced,
    Seen,
    Spied,
    Swapped,
)
from .player import Player
from .rules_schema import RuleSet

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    AWAITING_DRAW = auto()
    HOLDING_CARD = auto()
    GAME_OVER = auto()


class PlayerPhase(Enum):
    """Publicly observable state of a single player."""

    WAITING = auto()
    AWAITING_DRAW = auto()
    HOLDING_CARD = auto()
    KABO = auto()
    GAME_OVER = auto()


@dataclass
class Game:
    """Shared and private state of a running match.

    Every public action checks its phase and its preconditions before
    touching any container, so a rejected action leaves the game unchanged.
    The acting player index is trusted; card and target indices are not.
    """

    deck: Deck
    discard_pile: DiscardPile
    players: List[Player]
    rng: Random = field(default_factory=Random)
    rules: RuleSet = field(default_factory=RuleSet)
    current_player: int = 0
    kabo: Optional[int] = None
    hand_card: Optional[Card] = None
    finished: bool = False

    # Queries -----------------------------------------------------------

    @property
    def phase(self) -> TurnPhase:
        if self.finished:
            return TurnPhase.GAME_OVER
        if self.hand_card is None:
            return TurnPhase.AWAITING_DRAW
        return TurnPhase.HOLDING_CARD

    @property
    def discard_top(self) -> Optional[Card]:
        return self.discard_pile.top

    def player_phase(self, player_index: int) -> PlayerPhase:
        if not 0 <= player_index < len(self.players):
            raise InvalidIndex(player_index, len(self.players))
        if self.finished:
            return PlayerPhase.GAME_OVER
        if player_index == self.current_player:
            if self.hand_card is None:
                return PlayerPhase.AWAITING_DRAW
            return PlayerPhase.HOLDING_CARD
        if player_index == self.kabo:
            return PlayerPhase.KABO
        return PlayerPhase.WAITING

    def all_cards(self) -> List[Card]:
        cards = list(self.deck.cards) + list(self.discard_pile.cards)
        for player in self.players:
            cards.extend(player.cards)
        if self.hand_card is not None:
            cards.append(self.hand_card)
        return cards

    def card_count(self) -> int:
        return len(self.all_cards())

    def rank_counts(self) -> Counter:
        return rank_counts(self.all_cards())

    def check_invariants(self) -> None:
        ensure(self.card_count() == DECK_SIZE, f"Expected {DECK_SIZE} cards, found {self.card_count()}.")
        ensure(self.rank_counts() == Counter(RANK_COUNTS), "Rank multiplicities no longer match the deck.")
        ensure(0 <= self.current_player < len(self.players), "Turn cursor points outside the table.")

    # Draw phase --------------------------------------------------------

    def deck_draw(self) -> List[GameEvent]:
        self._ensure_phase(TurnPhase.AWAITING_DRAW)
        events: List[GameEvent] = []
        card = self.deck.draw()
        if card is None:
            ensure(
                len(self.discard_pile) >= self.rules.min_reshuffle_discards,
                f"Deck exhausted with only {len(self.discard_pile)} discards.",
            )
            # No top card stays behind; the player is certain to discard next.
            self.deck.refill_from(self.discard_pile, self.rng)
            events.append(DiscardShuffle())
            card = self.deck.draw()
            ensure(card is not None, "Reshuffled deck is empty.")
        self.hand_card = card
        logger.debug("Player %d drew from the deck", self.current_player)
        events.append(DeckDrawn(player_index=self.current_player))
        events.append(CardDrawn(card=card, from_discard=False))
        return events

    def discard_draw(self) -> List[GameEvent]:
        self._ensure_phase(TurnPhase.AWAITING_DRAW)
        card = self.discard_pile.pop()
        self.hand_card = card
        logger.debug("Player %d took %s from the discard pile", self.current_player, card)
        return [CardDrawn(card=card, from_discard=True)]

    def announce_kabo(self) -> List[GameEvent]:
        self._ensure_phase(TurnPhase.AWAITING_DRAW)
        if self.kabo is not None:
            raise AlreadyKabo(self.kabo)
        self.kabo = self.current_player
        logger.info("Player %d called Kabo", self.current_player)
        return [Kabo(player_index=self.current_player), self.end_turn()]

    # Holding phase -----------------------------------------------------

    def discard(self) -> List[GameEvent]:
        card = self._held_card()
        return self.discard_and_end(card)

    def replace(self, player_index: int, card_index: int) -> List[GameEvent]:
        held = self._held_card()
        player = self._player(player_index)
        player.check_index(card_index)
        old = player.set_card(card_index, held)
        self.hand_card = None
        return [Replaced(player_index=player_index, card_index=card_index), *self.discard_and_end(old)]

    def multi_replace(
        self,
        player_index: int,
        card_indices: Sequence[int],
        claimed_rank: Optional[int] = None,
    ) -> List[GameEvent]:
        held = self._held_card()
        player = self._player(player_index)
        indices = list(card_indices)
        if len(indices) < 2:
            raise NotEnoughCards("Replacing several cards needs at least two indices.")
        for index in indices:
            player.check_index(index)
        for position, index in enumerate(indices):
            if index in indices[:position]:
                raise InvalidIndex(index)

        seen = tuple((index, player.cards[index]) for index in indices)
        ranks = {card.rank for _, card in seen}
        matches = len(ranks) == 1 and (claimed_rank is None or claimed_rank in ranks)
        if not matches:
            logger.debug("Player %d failed a multi-replace on %s", player_index, indices)
            return [
                MultiReplaceFailed(player_index=player_index, claimed_rank=claimed_rank, cards_seen=seen),
                *self.discard_and_end(held),
            ]

        target = min(indices)
        removed = player.remove_cards(index for index in indices if index != target)
        old = player.set_card(target, held)
        self.hand_card = None
        discarded = [old, *removed]
        self.discard_pile.extend(discarded)
        return [
            MultiReplaced(player_index=player_index, card_indices=tuple(sorted(indices))),
            Discards(cards=tuple(discarded)),
            self.end_turn(),
        ]

    def peek(self, player_index: int, card_index: int) -> List[GameEvent]:
        held = self._held_card(self.rules.peek_ranks)
        player = self._player(player_index)
        card = player.card_at(card_index)
        return [
            Peeked(player_index=player_index, card_index=card_index),
            Seen(player_index=player_index, card_index=card_index, card=card),
            *self.discard_and_end(held),
        ]

    def spy(self, player_index: int, other_player_index: int, card_index: int) -> List[GameEvent]:
        held = self._held_card(self.rules.spy_ranks)
        self._player(player_index)
        other = self._other_player(player_index, other_player_index)
        card = other.card_at(card_index)
        return [
            Spied(player_index=player_index, other_player_index=other_player_index, card_index=card_index),
            Seen(player_index=other_player_index, card_index=card_index, card=card),
            *self.discard_and_end(held),
        ]

    def swap(
        self,
        player_index: int,
        my_card_index: int,
        other_player_index: int,
        other_card_index: int,
    ) -> List[GameEvent]:
        held = self._held_card(self.rules.swap_ranks)
        player = self._player(player_index)
        other = self._other_player(player_index, other_player_index)
        player.check_index(my_card_index)
        other.check_index(other_card_index)
        mine, theirs = player.cards[my_card_index], other.cards[other_card_index]
        player.cards[my_card_index], other.cards[other_card_index] = theirs, mine
        event = Swapped(
            player_index=player_index,
            card_index=my_card_index,
            other_player_index=other_player_index,
            other_card_index=other_card_index,
        )
        return [event, *self.discard_and_end(held)]

    # Internals ---------------------------------------------------------

    def discard_and_end(self, card: Card) -> List[GameEvent]:
        self.discard_pile.push(card)
        self.hand_card = None
        return [Discards(cards=(card,)), self.end_turn()]

    def end_turn(self) -> GameEvent:
        ensure(self.hand_card is None, "Cannot end a turn while a card is held.")
        self.current_player = (self.current_player + 1) % len(self.players)
        if self.kabo is not None and self.current_player == self.kabo:
            self.finished = True
            logger.info("Turn returned to Kabo caller %d, game over", self.kabo)
            return GameOver(kabo_player=self.kabo)
        logger.debug("Turn passes to player %d", self.current_player)
        return EndTurn(next_player=self.current_player)

    def _held_card(self, allowed_ranks: Optional[Sequence[int]] = None) -> Card:
        self._ensure_phase(TurnPhase.HOLDING_CARD)
        assert self.hand_card is not None
        if allowed_ranks is not None and self.hand_card.rank not in allowed_ranks:
            raise WrongCard(self.hand_card)
        return self.hand_card

    def _player(self, player_index: int) -> Player:
        ensure(0 <= player_index < len(self.players), f"Player index {player_index} out of range.")
        return self.players[player_index]

    def _other_player(self, player_index: int, other_player_index: int) -> Player:
        if other_player_index == player_index or not 0 <= other_player_index < len(self.players):
            raise InvalidIndex(other_player_index, len(self.players))
        return self.players[other_player_index]

    def _ensure_phase(self, expected: TurnPhase) -> None:
        if self.phase != expected:
            raise WrongPhase(f"Action not allowed in phase {self.phase.name}. Expected {expected.name}.")
