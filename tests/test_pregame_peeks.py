from random import Random

import pytest

from kabo.cards import Card, build_deck
from kabo.errors import InvalidIndex, InvariantViolation, NoPeeksLeft
from kabo.pregame import PreGame
from kabo.rules_schema import RuleSet


def dealt(seed=5):
    return PreGame.new(["A", "B", "C"], 4, rng=Random(seed))


def use_all_peeks(pregame):
    for player_index in range(len(pregame.players)):
        pregame.peek(player_index, 0)
        pregame.peek(player_index, 1)


def test_new_deals_hands_and_flips_discard():
    pregame = dealt()

    assert len(pregame.deck) == 52 - 1 - 12 == 39
    assert len(pregame.discard_pile) == 1
    assert [player.hand_size for player in pregame.players] == [4, 4, 4]
    assert [player.name for player in pregame.players] == ["A", "B", "C"]
    assert pregame.peeks == [2, 2, 2]
    assert pregame.total_peeks_remaining == 6
    assert pregame.card_count() == 52


def test_explicit_deck_is_used_in_order():
    pregame = PreGame.new(["A", "B", "C"], 4, deck=build_deck())

    assert pregame.discard_pile.top == Card(13)
    assert pregame.players[0].cards == [Card(13), Card(12), Card(11), Card(10)]
    assert pregame.players[1].cards == [Card(12), Card(12), Card(11), Card(10)]
    assert pregame.players[2].cards == [Card(12), Card(11), Card(11), Card(10)]
    assert pregame.deck.cards[-1] == Card(10)


def test_peek_reveals_own_card_and_uses_allowance():
    pregame = dealt()
    card = pregame.peek(0, 0)

    assert card == pregame.players[0].cards[0]
    assert pregame.peeks_remaining(0) == 1
    assert pregame.total_peeks_remaining == 5


def test_seventh_peek_fails_for_every_player():
    pregame = dealt()
    use_all_peeks(pregame)

    assert pregame.is_ready
    for player_index in range(3):
        with pytest.raises(NoPeeksLeft) as excinfo:
            pregame.peek(player_index, 2)
        assert excinfo.value.player_index == player_index


def test_third_peek_by_same_player_fails():
    pregame = dealt()
    pregame.peek(1, 0)
    pregame.peek(1, 0)
    with pytest.raises(NoPeeksLeft):
        pregame.peek(1, 3)
    assert pregame.peeks == [2, 0, 2]


@pytest.mark.parametrize("card_index", [4, -1])
def test_peek_invalid_card_index_keeps_allowance(card_index):
    pregame = dealt()
    with pytest.raises(InvalidIndex):
        pregame.peek(0, card_index)
    assert pregame.peeks_remaining(0) == 2


def test_peek_with_unknown_player_is_fatal():
    pregame = dealt()
    with pytest.raises(InvariantViolation):
        pregame.peek(3, 0)


def test_to_game_before_all_peeks_is_fatal():
    pregame = dealt()
    pregame.peek(0, 0)
    with pytest.raises(InvariantViolation):
        pregame.to_game()


def test_to_game_starts_first_turn():
    pregame = dealt()
    use_all_peeks(pregame)
    game = pregame.to_game()

    assert game.current_player == 0
    assert game.hand_card is None
    assert game.kabo is None
    assert game.card_count() == 52
    game.check_invariants()

    with pytest.raises(InvariantViolation):
        pregame.to_game()


def test_deal_larger_than_deck_is_fatal():
    with pytest.raises(InvariantViolation):
        PreGame.new([str(index) for index in range(12)], 5)


def test_no_peeks_rule_is_ready_immediately():
    pregame = PreGame.new(["A", "B"], 4, rng=Random(1), rules=RuleSet(peeks_per_player=0))
    assert pregame.is_ready
    assert pregame.to_game().players[1].hand_size == 4


def test_default_hand_size_comes_from_rules():
    pregame = PreGame.new(["A", "B"], rng=Random(1), rules=RuleSet(cards_per_player=6))
    assert [player.hand_size for player in pregame.players] == [6, 6]


def test_explicit_deck_needs_standard_ranks():
    with pytest.raises(InvariantViolation):
        PreGame.new(["A", "B"], 4, deck=[Card(0)] * 52)


def test_game_needs_at_least_one_player():
    with pytest.raises(InvariantViolation):
        PreGame.new([], 4, rng=Random(1))


def test_deal_leaves_enough_cards_for_a_reshuffle():
    with pytest.raises(InvariantViolation):
        PreGame.new([str(index) for index in range(10)], 5, rng=Random(1))

    pregame = PreGame.new([str(index) for index in range(12)], 4, rng=Random(1))
    assert len(pregame.deck) == 3
