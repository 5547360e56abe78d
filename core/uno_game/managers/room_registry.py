"""
Room Registry for UNO Game

Process-wide mapping from room code to Room. One instance is created at
startup and handed to the action processor.
"""

from typing import Dict, List, Optional, Callable
import random
import string
import threading

from tools.logger.custom_logging import custom_log
from utils.exceptions.game_exceptions import RoomCodeExhausted
from ..models.player import Player
from ..models.room import Room, DEFAULT_MAX_PLAYERS, DEFAULT_MIN_PLAYERS

LOGGING_SWITCH = True

DEFAULT_CODE_LENGTH = 6
DEFAULT_CODE_ALPHABET = string.ascii_uppercase + string.digits
DEFAULT_MAX_ATTEMPTS = 20


def new_room_code(length: int = DEFAULT_CODE_LENGTH, alphabet: str = DEFAULT_CODE_ALPHABET) -> str:
    return "".join(random.choices(alphabet, k=length))


class RoomRegistry:
    """Thread-safe room map with unique code allocation."""

    def __init__(self, code_length: int = DEFAULT_CODE_LENGTH, code_alphabet: str = DEFAULT_CODE_ALPHABET,
                 max_players: int = DEFAULT_MAX_PLAYERS, min_players: int = DEFAULT_MIN_PLAYERS,
                 max_code_attempts: int = DEFAULT_MAX_ATTEMPTS,
                 code_generator: Optional[Callable[[], str]] = None):
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.Lock()
        self.code_length = code_length
        self.code_alphabet = code_alphabet
        self.max_players = max_players
        self.min_players = min_players
        self.max_code_attempts = max(1, max_code_attempts)
        self._code_generator = code_generator or (lambda: new_room_code(self.code_length, self.code_alphabet))

    def create_room(self, host: Optional[Player] = None) -> Room:
        """Allocate an unused code and register a lobby under it.

        ``host`` is seated before the room becomes visible to lookups.
        """
        with self._lock:
            for _ in range(self.max_code_attempts):
                code = self._code_generator()
                if code not in self._rooms:
                    room = Room(code, max_players=self.max_players, min_players=self.min_players)
                    if host is not None:
                        room.add_player(host)
                    self._rooms[code] = room
                    custom_log(f"Room {code} registered ({len(self._rooms)} active)", isOn=LOGGING_SWITCH)
                    return room
                custom_log(f"Room code collision on {code}, retrying", level="WARNING")
        raise RoomCodeExhausted()

    def get_room(self, code: Optional[str]) -> Optional[Room]:
        if not code:
            return None
        with self._lock:
            return self._rooms.get(code)

    def delete_if_empty(self, room: Room) -> bool:
        """Drop ``room`` from the registry if nobody is left in it."""
        with self._lock:
            if room.is_empty and self._rooms.get(room.code) is room:
                del self._rooms[room.code]
                deleted = True
            else:
                deleted = False
        if deleted:
            custom_log(f"Room {room.code} deleted (all players left)", isOn=LOGGING_SWITCH)
        return deleted

    def rooms(self) -> List[Room]:
        """Snapshot of the registered rooms"""
        with self._lock:
            return list(self._rooms.values())

    def find_by_connection(self, connection_ref: str) -> Optional[Room]:
        """First room holding a player bound to ``connection_ref``"""
        for room in self.rooms():
            with room.lock:
                if room.find_player_by_connection(connection_ref) is not None:
                    return room
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)
