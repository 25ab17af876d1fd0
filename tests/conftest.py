from random import Random

import pytest

from kabo.cards import Card, build_deck
from kabo.deck import Deck, DiscardPile
from kabo.game import Game
from kabo.player import Player


def make_table(hands, top=(), discard=(5,), rules=None, seed=0):
    """Build a running game from exact ranks; all other cards stay in the deck.

    ``top`` lists the next deck draws in order, ``discard`` ends with the visible card.
    """
    pool = build_deck()

    def take(rank):
        card = Card(rank)
        pool.remove(card)
        return card

    players = [Player(name, [take(rank) for rank in ranks]) for name, ranks in zip("ABCDEF", hands)]
    discard_pile = DiscardPile([take(rank) for rank in discard])
    top_cards = [take(rank) for rank in top]
    deck = Deck(pool + top_cards[::-1])
    game = Game(deck=deck, discard_pile=discard_pile, players=players, rng=Random(seed))
    if rules is not None:
        game.rules = rules
    return game


@pytest.fixture
def table():
    return make_table


@pytest.fixture
def three_players(table):
    return table([[1, 2, 3, 4], [5, 6, 7, 8], [9, 10, 11, 12]])
