"""Convenience service layer for hosts and transports."""

from __future__ import annotations

from dataclasses import dataclass
from random import Random
from typing import List, Optional, Sequence, Tuple

from .actions import Action, apply_action
from .cards import Card, serialize_card
from .errors import InvalidIndex, NotYourTurn, WrongPhase
from .events import GameEvent, is_private
from .game import Game, PlayerPhase
from .pregame import PreGame
from .rules_schema import RuleSet


@dataclass
class PlayerView:
    index: int
    name: str
    hand_size: int
    phase: str
    peeks_remaining: int
    is_current: bool
    called_kabo: bool


@dataclass
class MatchView:
    phase: str
    current_player: Optional[int]
    discard_top: Optional[dict]
    deck_size: int
    discard_size: int
    kabo: Optional[int]
    players: list[PlayerView]


class MatchService:
    """Facade around PreGame and Game for transport consumers.

    The service owns the hand-over from setup to play and enforces whose
    turn it is; everything else is decided by the engine.
    """

    def __init__(self, pregame: PreGame) -> None:
        self.pregame: Optional[PreGame] = pregame
        self.game: Optional[Game] = None
        self._maybe_start()

    @classmethod
    def start(
        cls,
        names: Sequence[str],
        *,
        seed: Optional[int] = None,
        rules: Optional[RuleSet] = None,
    ) -> "MatchService":
        return cls(PreGame.new(names, rng=Random(seed), rules=rules))

    # Actions -----------------------------------------------------------

    def peek(self, player_index: int, card_index: int) -> Card:
        if self.pregame is None:
            raise WrongPhase("Setup peeks are over.")
        card = self.pregame.peek(player_index, card_index)
        self._maybe_start()
        return card

    def act(self, player_index: int, action: Action) -> List[GameEvent]:
        game = self._require_game()
        if player_index != game.current_player:
            raise NotYourTurn(player_index, game.current_player)
        return apply_action(game, player_index, action)

    @staticmethod
    def split_events(events: Sequence[GameEvent]) -> Tuple[List[GameEvent], List[GameEvent]]:
        """Return ``(public, private)``; private events go to the actor only."""
        public = [event for event in events if not is_private(event)]
        private = [event for event in events if is_private(event)]
        return public, private

    # Views -------------------------------------------------------------

    @property
    def players(self):
        if self.game is not None:
            return self.game.players
        assert self.pregame is not None
        return self.pregame.players

    def get_player_view(self, player_index: int) -> PlayerView:
        players = self.players
        if not 0 <= player_index < len(players):
            raise InvalidIndex(player_index, len(players))
        player = players[player_index]
        if self.game is None:
            assert self.pregame is not None
            return PlayerView(
                index=player_index,
                name=player.name,
                hand_size=player.hand_size,
                phase="preparation",
                peeks_remaining=self.pregame.peeks_remaining(player_index),
                is_current=False,
                called_kabo=False,
            )
        phase = self.game.player_phase(player_index)
        return PlayerView(
            index=player_index,
            name=player.name,
            hand_size=player.hand_size,
            phase=phase.name.lower(),
            peeks_remaining=0,
            is_current=phase in (PlayerPhase.AWAITING_DRAW, PlayerPhase.HOLDING_CARD),
            called_kabo=self.game.kabo == player_index,
        )

    def get_match_view(self) -> MatchView:
        players = [self.get_player_view(index) for index in range(len(self.players))]
        if self.game is None:
            assert self.pregame is not None
            top = self.pregame.discard_pile.top
            return MatchView(
                phase="preparation",
                current_player=None,
                discard_top=serialize_card(top) if top is not None else None,
                deck_size=len(self.pregame.deck),
                discard_size=len(self.pregame.discard_pile),
                kabo=None,
                players=players,
            )
        top = self.game.discard_top
        return MatchView(
            phase=self.game.phase.name.lower(),
            current_player=None if self.game.finished else self.game.current_player,
            discard_top=serialize_card(top) if top is not None else None,
            deck_size=len(self.game.deck),
            discard_size=len(self.game.discard_pile),
            kabo=self.game.kabo,
            players=players,
        )

    # Helpers -----------------------------------------------------------

    def _maybe_start(self) -> None:
        if self.pregame is not None and self.pregame.is_ready:
            self.game = self.pregame.to_game()
            self.pregame = None

    def _require_game(self) -> Game:
        if self.game is None:
            raise WrongPhase("The game has not started yet.")
        return self.game
