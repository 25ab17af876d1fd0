"""Events emitted by the Kabo engine after a successful action."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Optional, Tuple, Union

from .cards import Card, serialize_card


@dataclass(frozen=True)
class DiscardShuffle:
    """The exhausted deck was rebuilt from the discard pile."""


@dataclass(frozen=True)
class DeckDrawn:
    """Public notice that a player drew a face-down card from the deck."""

    player_index: int


@dataclass(frozen=True)
class CardDrawn:
    card: Card
    from_discard: bool = False


@dataclass(frozen=True)
class Discards:
    cards: Tuple[Card, ...]


@dataclass(frozen=True)
class Kabo:
    player_index: int


@dataclass(frozen=True)
class EndTurn:
    next_player: int


@dataclass(frozen=True)
class Seen:
    player_index: int
    card_index: int
    card: Card


@dataclass(frozen=True)
class Replaced:
    player_index: int
    card_index: int


@dataclass(frozen=True)
class Peeked:
    player_index: int
    card_index: int


@dataclass(frozen=True)
class Spied:
    player_index: int
    other_player_index: int
    card_index: int


@dataclass(frozen=True)
class Swapped:
    player_index: int
    card_index: int
    other_player_index: int
    other_card_index: int


@dataclass(frozen=True)
class MultiReplaced:
    player_index: int
    card_indices: Tuple[int, ...]


@dataclass(frozen=True)
class MultiReplaceFailed:
    player_index: int
    claimed_rank: Optional[int]
    cards_seen: Tuple[Tuple[int, Card], ...]


@dataclass(frozen=True)
class GameOver:
    kabo_player: int


GameEvent = Union[
    DiscardShuffle,
    DeckDrawn,
    CardDrawn,
    Discards,
    Kabo,
    EndTurn,
    Seen,
    Replaced,
    Peeked,
    Spied,
    Swapped,
    MultiReplaced,
    MultiReplaceFailed,
    GameOver,
]


def is_private(event: GameEvent) -> bool:
    """Return True if only the acting player may learn about the event."""
    if isinstance(event, Seen):
        return True
    # A card taken from the discard pile was face up already.
    return isinstance(event, CardDrawn) and not event.from_discard


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Card):
        return serialize_card(value)
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    return value


def serialize_event(event: GameEvent) -> dict[str, Any]:
    payload: dict[str, Any] = {"type": type(event).__name__}
    for item in fields(event):
        payload[item.name] = _serialize_value(getattr(event, item.name))
    return payload
