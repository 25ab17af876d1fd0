"""Setup phase for Kabo: dealing and the initial peeks."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from random import Random
from typing import List, Optional, Sequence

from .cards import DECK_SIZE, RANK_COUNTS, Card, rank_counts
from .deck import Deck, DiscardPile
from .errors import NoPeeksLeft, ensure
from .game import Game
from .player import Player
from .rules_schema import RuleSet

logger = logging.getLogger(__name__)


@dataclass
class PreGame:
    """Dealt table before the first turn.

    Every player looks at up to ``rules.peeks_per_player`` of their own cards.
    Once all peeks are used the setup is handed over with :meth:`to_game`.
    """

    deck: Deck
    discard_pile: DiscardPile
    players: List[Player]
    peeks: List[int]
    total_peeks: int
    rng: Random = field(default_factory=Random)
    rules: RuleSet = field(default_factory=RuleSet)
    _consumed: bool = field(default=False, init=False)

    @classmethod
    def new(
        cls,
        names: Sequence[str],
        cards_per_player: Optional[int] = None,
        *,
        rng: Optional[Random] = None,
        deck: Optional[Sequence[Card]] = None,
        rules: Optional[RuleSet] = None,
    ) -> "PreGame":
        """Shuffle, flip the first discard and deal every named player a hand.

        An explicit ``deck`` is used in the given order (top card last) and is
        not shuffled.
        """
        rules = rules or RuleSet()
        rng = rng or Random()
        if cards_per_player is None:
            cards_per_player = rules.cards_per_player
        ensure(len(names) >= 1, "A game needs at least one player.")
        ensure(
            len(names) <= rules.max_players,
            f"Too many players. There are {len(names)}, but only {rules.max_players} are allowed.",
        )

        if deck is not None:
            pile = Deck(deck)
            ensure(len(pile) == DECK_SIZE, f"Deck must contain exactly {DECK_SIZE} cards.")
            ensure(rank_counts(pile.cards) == Counter(RANK_COUNTS), "Deck ranks do not match the standard deck.")
        else:
            pile = Deck.shuffled(rng)
        # The undealt deck plus the first discard must cover one reshuffle.
        ensure(
            len(names) * cards_per_player <= DECK_SIZE - rules.min_reshuffle_discards,
            f"Cannot deal {cards_per_player} cards to {len(names)} players.",
        )

        discard_pile = DiscardPile()
        discard_pile.push(pile.draw())
        players = [Player(name) for name in names]
        pile.deal(players, cards_per_player)

        peeks = [rules.peeks_per_player for _ in players]
        logger.debug("Dealt %d cards to each of %d players", cards_per_player, len(players))
        return cls(
            deck=pile,
            discard_pile=discard_pile,
            players=players,
            peeks=peeks,
            total_peeks=sum(peeks),
            rng=rng,
            rules=rules,
        )

    def peeks_remaining(self, player_index: int) -> int:
        self._check_player(player_index)
        return self.peeks[player_index]

    @property
    def total_peeks_remaining(self) -> int:
        return self.total_peeks

    @property
    def is_ready(self) -> bool:
        return self.total_peeks == 0

    def card_count(self) -> int:
        return len(self.deck) + len(self.discard_pile) + sum(player.hand_size for player in self.players)

    def peek(self, player_index: int, card_index: int) -> Card:
        ensure(not self._consumed, "This setup has already been turned into a game.")
        self._check_player(player_index)
        if self.peeks[player_index] == 0:
            raise NoPeeksLeft(player_index)
        card = self.players[player_index].card_at(card_index)
        self.peeks[player_index] -= 1
        self.total_peeks -= 1
        return card

    def to_game(self) -> Game:
        ensure(not self._consumed, "This setup has already been turned into a game.")
        ensure(self.total_peeks == 0, f"{self.total_peeks} peeks are still unused.")
        ensure(sum(self.peeks) == 0, "Per-player peek counters disagree with the total.")
        ensure(self.card_count() == DECK_SIZE, f"Expected {DECK_SIZE} cards, found {self.card_count()}.")
        game = Game(
            deck=self.deck,
            discard_pile=self.discard_pile,
            players=self.players,
            rng=self.rng,
            rules=self.rules,
        )
        game.check_invariants()
        self._consumed = True
        logger.info("Setup finished, starting a game with %d players", len(self.players))
        return game

    def _check_player(self, player_index: int) -> None:
        ensure(0 <= player_index < len(self.players), f"Player index {player_index} out of range.")
