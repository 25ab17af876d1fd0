import pytest
from pydantic import ValidationError

from kabo.cards import Card
from kabo.errors import WrongCard
from kabo.events import Seen
from kabo.rules_schema import DEFAULT_RULES, RuleSet


def test_default_rules():
    assert DEFAULT_RULES.cards_per_player == 4
    assert DEFAULT_RULES.peeks_per_player == 2
    assert DEFAULT_RULES.min_reshuffle_discards == 4
    assert DEFAULT_RULES.peek_ranks == [7, 8]
    assert DEFAULT_RULES.spy_ranks == [9, 10]
    assert DEFAULT_RULES.swap_ranks == [11, 12]


@pytest.mark.parametrize(
    "payload",
    [
        {"peek_ranks": [7, 9]},
        {"swap_ranks": [14]},
        {"cards_per_player": 0},
        {"min_reshuffle_discards": 0},
        {"peeks_per_player": -1},
    ],
)
def test_invalid_rules_rejected(payload):
    with pytest.raises(ValidationError):
        RuleSet.from_mapping(payload)


def test_custom_power_ranks_drive_the_engine(table):
    rules = RuleSet.from_mapping({"peek_ranks": [1], "spy_ranks": [], "swap_ranks": []})
    game = table([[2, 3, 4, 5], [6, 7, 8, 9]], top=[1, 7], rules=rules)

    game.deck_draw()
    assert game.peek(0, 0)[1] == Seen(player_index=0, card_index=0, card=Card(2))

    game.deck_draw()
    with pytest.raises(WrongCard):
        game.peek(1, 0)
