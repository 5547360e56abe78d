"""
Room Model for UNO Game

A room is one isolated game instance: its players (in turn order), deck,
discard pile, current card, turn pointer and direction.
"""

from typing import List, Dict, Any, Optional
from enum import Enum
import threading

from .card import Card
from .player import Player

DEFAULT_MAX_PLAYERS = 4
DEFAULT_MIN_PLAYERS = 2


class RoomPhase(Enum):
    """Room phases"""
    LOBBY = "lobby"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class Room:
    """Per-game mutable state, guarded by ``lock`` for a whole action."""

    def __init__(self, code: str, max_players: int = DEFAULT_MAX_PLAYERS, min_players: int = DEFAULT_MIN_PLAYERS):
        self._code = code
        self.max_players = max_players
        self.min_players = min_players
        self.players: List[Player] = []
        self.phase = RoomPhase.LOBBY
        self.deck: List[Card] = []
        self.discard_pile: List[Card] = []
        # Wild cards drawn while seeding the first card; out of play until the next deal
        self.set_aside: List[Card] = []
        self.current_card: Optional[Card] = None
        self.current_player_index = 0
        self.direction = 1
        self.winner: Optional[Player] = None
        self.lock = threading.RLock()

    @property
    def code(self) -> str:
        return self._code

    @property
    def started(self) -> bool:
        return self.phase != RoomPhase.LOBBY

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.max_players

    @property
    def is_empty(self) -> bool:
        return not self.players

    def can_start(self) -> bool:
        return len(self.players) >= self.min_players

    # ========= Players =========

    def add_player(self, player: Player):
        if not self.players:
            player.is_host = True
        self.players.append(player)

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def player_index(self, player_id: str) -> Optional[int]:
        for i, player in enumerate(self.players):
            if player.player_id == player_id:
                return i
        return None

    def find_player_by_connection(self, connection_ref: str) -> Optional[Player]:
        for player in self.players:
            if player.connection_ref == connection_ref:
                return player
        return None

    def get_current_player(self) -> Optional[Player]:
        if not self.players:
            return None
        return self.players[self.current_player_index]

    def remove_player(self, player_id: str) -> Optional[Player]:
        """Remove a player, keeping host, turn pointer and card count consistent.

        The earliest remaining player inherits the host flag. In a started room
        the departing hand goes to the bottom of the deck so no card leaves play.
        """
        index = self.player_index(player_id)
        if index is None:
            return None

        player = self.players.pop(index)

        if self.started:
            self.deck[0:0] = player.clear_hand()
            if self.players:
                if index < self.current_player_index:
                    self.current_player_index -= 1
                elif index == self.current_player_index and self.direction == -1:
                    # Turn passes to the previous seat in reverse play
                    self.current_player_index = (index - 1) % len(self.players)
                if self.current_player_index >= len(self.players):
                    self.current_player_index = 0
            else:
                self.current_player_index = 0

        if player.is_host and self.players:
            self.players[0].is_host = True
        return player

    # ========= Bookkeeping =========

    def reset_for_deal(self):
        """Clear piles and hands ahead of a fresh deal"""
        self.deck = []
        self.discard_pile = []
        self.set_aside = []
        self.current_card = None
        self.current_player_index = 0
        self.direction = 1
        self.winner = None
        for player in self.players:
            player.clear_hand()

    def total_cards(self) -> int:
        """Cards accounted for by this room (108 once a game has been dealt)"""
        return (
            len(self.deck)
            + len(self.discard_pile)
            + len(self.set_aside)
            + sum(player.card_count for player in self.players)
        )

    # ========= Snapshots =========

    def roster(self) -> List[Dict[str, Any]]:
        return [player.to_public_dict() for player in self.players]

    def public_state(self) -> Dict[str, Any]:
        """Shared game snapshot sent to everyone in the room"""
        return {
            "currentCard": self.current_card.to_dict() if self.current_card else None,
            "currentPlayerIndex": self.current_player_index,
            "direction": self.direction,
            "players": self.roster(),
        }
