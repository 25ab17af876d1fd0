"""Error types raised by the Kabo engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .cards import Card


class KaboError(RuntimeError):
    """Base class for recoverable, caller-facing errors."""


class GameError(KaboError):
    """Raised when a turn action is rejected."""


class PreGameError(KaboError):
    """Raised when a setup action is rejected."""


class WrongPhase(GameError):
    """Raised when an action is attempted outside its legal phase."""


class AlreadyKabo(GameError):
    """Raised when Kabo is called a second time."""

    def __init__(self, player_index: int) -> None:
        super().__init__(f"Player {player_index} already called Kabo.")
        self.player_index = player_index


class WrongCard(GameError):
    """Raised when the held card does not allow the requested action."""

    def __init__(self, card: Card) -> None:
        super().__init__(f"The held card {card.rank} does not allow this action.")
        self.card = card


class InvalidIndex(GameError, PreGameError):
    """Raised when an index does not address an existing slot."""

    def __init__(self, index: int, bound: Optional[int] = None) -> None:
        if bound is None:
            message = f"Index {index} is not allowed here."
        else:
            message = f"Index {index} is out of range (bound {bound})."
        super().__init__(message)
        self.index = index
        self.bound = bound


class NotEnoughCards(GameError):
    """Raised when a multi-replace names fewer than two cards."""


class NotYourTurn(GameError):
    """Raised when a player acts while another player is on turn."""

    def __init__(self, player_index: int, current_player: int) -> None:
        super().__init__(f"Player {player_index} acted, but it is player {current_player}'s turn.")
        self.player_index = player_index
        self.current_player = current_player


class NoPeeksLeft(PreGameError):
    """Raised when a player has used up their setup peeks."""

    def __init__(self, player_index: int) -> None:
        super().__init__(f"Player {player_index} has no peeks left.")
        self.player_index = player_index


class InvariantViolation(AssertionError):
    """Raised when internal game state is corrupted or a trusted caller misbehaves."""


def ensure(condition: bool, message: str) -> None:
    if not condition:
        raise InvariantViolation(message)
