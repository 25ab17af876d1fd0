"""Player action vocabulary and dispatch onto the turn engine."""

from __future__ import annotations

from typing import Annotated, Any, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .cards import MAX_RANK, MIN_RANK
from .events import GameEvent
from .game import Game

Slot = Annotated[int, Field(ge=0)]


class ActionModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# Before a card is held.


class DeckDraw(ActionModel):
    type: Literal["deck_draw"] = "deck_draw"


class DiscardDraw(ActionModel):
    type: Literal["discard_draw"] = "discard_draw"


class CallKabo(ActionModel):
    type: Literal["kabo"] = "kabo"


# While a card is held.


class Discard(ActionModel):
    type: Literal["discard"] = "discard"


class Replace(ActionModel):
    type: Literal["replace"] = "replace"
    card_index: Slot


class MultiReplace(ActionModel):
    type: Literal["multi_replace"] = "multi_replace"
    card_indices: Tuple[Slot, ...]
    claimed_rank: Optional[int] = Field(None, ge=MIN_RANK, le=MAX_RANK)


class Peek(ActionModel):
    type: Literal["peek"] = "peek"
    card_index: Slot


class Spy(ActionModel):
    type: Literal["spy"] = "spy"
    other_player_index: Slot
    card_index: Slot


class Swap(ActionModel):
    type: Literal["swap"] = "swap"
    my_card_index: Slot
    other_player_index: Slot
    other_card_index: Slot


Action = Union[DeckDraw, DiscardDraw, CallKabo, Discard, Replace, MultiReplace, Peek, Spy, Swap]

ACTION_ADAPTER: TypeAdapter = TypeAdapter(Annotated[Action, Field(discriminator="type")])


def parse_action(payload: Mapping[str, Any]) -> Action:
    """Build an action from a ``{"type": ..., **fields}`` mapping."""
    try:
        return ACTION_ADAPTER.validate_python(dict(payload))
    except ValidationError as exc:
        raise ValueError(f"Invalid action payload: {exc}") from exc


def apply_action(game: Game, player_index: int, action: Action) -> List[GameEvent]:
    """Run ``action`` for the (already authorized) acting player."""
    if isinstance(action, DeckDraw):
        return game.deck_draw()
    if isinstance(action, DiscardDraw):
        return game.discard_draw()
    if isinstance(action, CallKabo):
        return game.announce_kabo()
    if isinstance(action, Discard):
        return game.discard()
    if isinstance(action, Replace):
        return game.replace(player_index, action.card_index)
    if isinstance(action, MultiReplace):
        return game.multi_replace(player_index, action.card_indices, action.claimed_rank)
    if isinstance(action, Peek):
        return game.peek(player_index, action.card_index)
    if isinstance(action, Spy):
        return game.spy(player_index, action.other_player_index, action.card_index)
    if isinstance(action, Swap):
        return game.swap(player_index, action.my_card_index, action.other_player_index, action.other_card_index)
    raise TypeError(f"Unsupported action: {action!r}")
