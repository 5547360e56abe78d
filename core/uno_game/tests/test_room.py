import itertools

import pytest

from ..managers.room_registry import RoomRegistry, new_room_code
from ..models.card import Card
from ..models.player import Player
from ..models.room import Room, RoomPhase
from utils.exceptions.game_exceptions import RoomCodeExhausted


class TestRoom:
    """Roster bookkeeping on a single room."""

    def setup_method(self):
        self.room = Room("ROOM01")
        for pid in ("a", "b", "c"):
            self.room.add_player(Player(pid, pid.upper(), f"sid-{pid}"))

    def test_first_player_is_host(self):
        assert [p.is_host for p in self.room.players] == [True, False, False]

    def test_host_leaving_promotes_next_player(self):
        self.room.remove_player("a")
        assert self.room.players[0].player_id == "b"
        assert self.room.players[0].is_host is True

    def test_remove_unknown_player(self):
        assert self.room.remove_player("zzz") is None
        assert len(self.room.players) == 3

    def test_is_full(self):
        assert not self.room.is_full
        self.room.add_player(Player("d", "D"))
        assert self.room.is_full

    def test_find_player_by_connection(self):
        assert self.room.find_player_by_connection("sid-b").player_id == "b"
        assert self.room.find_player_by_connection("sid-x") is None

    def test_leave_before_current_rebases_turn(self):
        self.room.phase = RoomPhase.IN_PROGRESS
        self.room.current_player_index = 2
        self.room.remove_player("a")
        assert self.room.get_current_player().player_id == "c"

    def test_leave_of_last_seat_wraps_turn(self):
        self.room.phase = RoomPhase.IN_PROGRESS
        self.room.current_player_index = 2
        self.room.remove_player("c")
        assert self.room.current_player_index == 0

    def test_leave_in_game_returns_hand_to_deck(self):
        self.room.phase = RoomPhase.IN_PROGRESS
        self.room.players[1].hand = [Card("red", "1"), Card("blue", "2")]
        self.room.deck = [Card("green", "3")]
        self.room.remove_player("b")
        assert self.room.deck == [Card("red", "1"), Card("blue", "2"), Card("green", "3")]

    def test_current_player_leaving_in_reverse_passes_turn_backwards(self):
        self.room.phase = RoomPhase.IN_PROGRESS
        self.room.direction = -1
        self.room.current_player_index = 1
        self.room.remove_player("b")
        assert self.room.get_current_player().player_id == "a"

    def test_first_seat_leaving_in_reverse_wraps_to_last(self):
        self.room.phase = RoomPhase.IN_PROGRESS
        self.room.direction = -1
        self.room.remove_player("a")
        assert self.room.get_current_player().player_id == "c"

    def test_current_player_leaving_forward_passes_to_next_seat(self):
        self.room.phase = RoomPhase.IN_PROGRESS
        self.room.current_player_index = 1
        self.room.remove_player("b")
        assert self.room.get_current_player().player_id == "c"

    def test_leave_in_lobby_keeps_index(self):
        self.room.remove_player("a")
        assert self.room.current_player_index == 0

    def test_public_state_has_no_hands(self):
        self.room.players[0].hand = [Card("red", "1")]
        state = self.room.public_state()
        assert state["players"][0] == {"id": "a", "name": "A", "isHost": True, "cardCount": 1}
        assert "hand" not in state["players"][0]


class TestRoomRegistry:

    def test_codes_are_six_uppercase_alphanumerics(self):
        code = new_room_code()
        assert len(code) == 6
        assert code.isalnum() and code.upper() == code

    def test_create_and_lookup(self):
        registry = RoomRegistry()
        room = registry.create_room()
        assert registry.get_room(room.code) is room
        assert len(registry) == 1

    def test_host_is_seated_before_registration(self):
        registry = RoomRegistry()
        room = registry.create_room(Player("h", "Host", "sid-h"))
        registered = registry.get_room(room.code)
        assert [p.player_id for p in registered.players] == ["h"]
        assert registered.players[0].is_host
        assert registry.delete_if_empty(room) is False

    def test_collision_is_retried(self):
        codes = iter(["AAAAAA", "AAAAAA", "BBBBBB"])
        registry = RoomRegistry(code_generator=lambda: next(codes))
        first = registry.create_room()
        second = registry.create_room()
        assert (first.code, second.code) == ("AAAAAA", "BBBBBB")
        assert registry.get_room("AAAAAA") is first

    def test_exhausted_attempts(self):
        registry = RoomRegistry(max_code_attempts=3, code_generator=lambda: "SAME00")
        registry.create_room()
        with pytest.raises(RoomCodeExhausted):
            registry.create_room()

    def test_delete_if_empty(self):
        registry = RoomRegistry()
        room = registry.create_room()
        room.add_player(Player("p", "P"))
        assert registry.delete_if_empty(room) is False
        room.remove_player("p")
        assert registry.delete_if_empty(room) is True
        assert registry.get_room(room.code) is None

    def test_find_by_connection_returns_first_match(self):
        counter = itertools.count()
        registry = RoomRegistry(code_generator=lambda: f"R{next(counter):05d}")
        first = registry.create_room()
        second = registry.create_room()
        first.add_player(Player("p1", "One", "sid-1"))
        second.add_player(Player("p2", "Two", "sid-1"))
        assert registry.find_by_connection("sid-1") is first
        assert registry.find_by_connection("nobody") is None
