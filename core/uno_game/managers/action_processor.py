"""
Action Processor for UNO Game

Receives parsed player actions, resolves the target room through the
registry, applies the action and emits the resulting messages.

Every operation holds the room lock for its whole validate, mutate and
broadcast sequence, so the next action on a room only sees state after all
broadcasts of the previous one went out.
"""

from typing import Dict, Any, Optional, Callable
import traceback

from tools.logger.custom_logging import custom_log
from utils.config.config import Config
from utils.exceptions.game_exceptions import GameError, RoomNotFound, RoomFull, GameInProgress, \
    PlayerAlreadyInRoom, EmptyDeck, NoCardsAvailable, RoomCodeExhausted
from utils.exceptions.validation_exceptions import ValidationError
from core.metrics import record_action, UNO_ACTIVE_ROOMS, UNO_GAMES_FINISHED_TOTAL
from core.validators.action_validators import ActionValidator
from ..models.card import Card, PLAYABLE_COLORS
from ..models.player import Player
from ..models.room import Room, RoomPhase
from ..utils.deck_factory import DeckFactory, draw
from ..game_logic.turn_coordinator import apply_card_effect, advance_turn
from ..game_logic.yaml_loader import DEFAULT_RULES
from . import uno_message_system as messages
from .room_registry import RoomRegistry
from .uno_message_system import UnoMessageSystem

LOGGING_SWITCH = True


class ActionProcessor:
    """Applies player actions to rooms and broadcasts the outcome"""

    def __init__(self, registry: RoomRegistry, message_system: UnoMessageSystem,
                 deck_factory: Optional[DeckFactory] = None, rules: Optional[Dict[str, Any]] = None,
                 enforce_rules: Optional[bool] = None):
        self.registry = registry
        self.message_system = message_system
        self.deck_factory = deck_factory or DeckFactory()
        rules = rules or DEFAULT_RULES
        self.hand_size = int(rules.get("dealing", {}).get("hand_size", 7))
        self.draw_penalties = dict(rules.get("draw_penalties") or DEFAULT_RULES["draw_penalties"])
        self.enforce_rules = Config.UNO_ENFORCE_RULES if enforce_rules is None else enforce_rules
        self.validator = ActionValidator(max_message_length=Config.WS_MAX_PAYLOAD_SIZE)
        self._handlers: Dict[str, Callable[[str, Dict[str, Any]], bool]] = {
            'create_lobby': lambda conn, env: self.create_lobby(conn, env['playerId'], env['playerName']) is not None,
            'join_lobby': lambda conn, env: self.join_lobby(conn, env['roomCode'], env['playerId'], env['playerName']),
            'leave_lobby': lambda conn, env: self.leave_lobby(env['roomCode'], env['playerId']),
            'start_game': lambda conn, env: self.start_game(env['roomCode']),
            'play_card': lambda conn, env: self.play_card(env['roomCode'], env['playerId'], env['card']),
            'draw_card': lambda conn, env: self.draw_card(env['roomCode'], env['playerId']),
            'call_uno': lambda conn, env: self.call_uno(env['roomCode'], env['playerId']),
        }

    # ========= Dispatch =========

    def dispatch(self, connection_ref: str, raw_envelope) -> bool:
        """Validate an inbound envelope and route it by ``type``.

        Malformed or unknown envelopes are logged and dropped without a reply.
        Returns True when the action changed state or produced messages.
        """
        try:
            envelope = self.validator.parse_envelope(raw_envelope)
            action_type = self.validator.validate_action(envelope)
        except ValidationError as e:
            custom_log(f"Dropped message from {connection_ref}: {e.message}", level="WARNING")
            record_action("invalid", "dropped")
            return False

        try:
            handled = bool(self._handlers[action_type](connection_ref, envelope))
        except GameError as e:
            custom_log(f"{action_type} from {connection_ref} failed: {e.message}", level="WARNING")
            handled = False
        except Exception as e:
            custom_log(f"❌ {action_type} from {connection_ref} raised: {e}\n{traceback.format_exc()}", level="ERROR")
            record_action(action_type, "error")
            return False

        record_action(action_type, "applied" if handled else "ignored")
        return handled

    # ========= Lobby =========

    def create_lobby(self, connection_ref: str, player_id: str, player_name: str) -> Optional[Room]:
        """Open a new room with the caller as host"""
        host = Player(player_id, player_name, connection_ref, is_host=True)
        try:
            room = self.registry.create_room(host)
        except RoomCodeExhausted as e:
            custom_log(f"❌ create_lobby for {player_id}: {e.message}", level="ERROR")
            self.message_system.send_to_connection(connection_ref, messages.error(e.message, e.code))
            return None

        with room.lock:
            UNO_ACTIVE_ROOMS.set(len(self.registry))
            custom_log(f"✅ Lobby {room.code} created by {player_id}", isOn=LOGGING_SWITCH)
            self.message_system.send_to_connection(connection_ref, messages.lobby_created(room.code))
            self.message_system.broadcast_to_room(room, messages.lobby_update(room))
        return room

    def join_lobby(self, connection_ref: str, room_code: str, player_id: str, player_name: str) -> bool:
        """Add a player to an open lobby; failures go back to the requester as ``error``"""
        room = self.registry.get_room(room_code)
        try:
            if room is None:
                raise RoomNotFound()
            with room.lock:
                # The room may have been emptied and dropped while we waited for the lock
                if self.registry.get_room(room_code) is not room:
                    raise RoomNotFound()
                if room.is_full:
                    raise RoomFull()
                if room.started:
                    raise GameInProgress()
                if room.get_player(player_id) is not None:
                    raise PlayerAlreadyInRoom()

                room.add_player(Player(player_id, player_name, connection_ref))
                custom_log(f"Player {player_id} joined lobby {room_code} ({len(room.players)}/{room.max_players})", isOn=LOGGING_SWITCH)
                self.message_system.send_to_connection(connection_ref, messages.lobby_joined(room_code))
                self.message_system.broadcast_to_room(room, messages.lobby_update(room))
                return True
        except (RoomNotFound, RoomFull, GameInProgress, PlayerAlreadyInRoom) as e:
            custom_log(f"join_lobby {room_code} rejected for {player_id}: {e.message}", isOn=LOGGING_SWITCH)
            self.message_system.send_to_connection(connection_ref, messages.error(e.message, e.code))
            return False

    def leave_lobby(self, room_code: str, player_id: str) -> bool:
        room = self.registry.get_room(room_code)
        if room is None:
            custom_log(f"leave_lobby ignored: room {room_code} not found", isOn=LOGGING_SWITCH)
            return False
        with room.lock:
            return self._remove_player(room, player_id)

    def handle_disconnect(self, connection_ref: str) -> bool:
        """Treat a closed connection as its player leaving the first room that holds it"""
        room = self.registry.find_by_connection(connection_ref)
        if room is None:
            return False
        with room.lock:
            player = room.find_player_by_connection(connection_ref)
            if player is None:
                return False
            custom_log(f"Connection {connection_ref} closed, removing {player.player_id} from {room.code}", isOn=LOGGING_SWITCH)
            return self._remove_player(room, player.player_id)

    def _remove_player(self, room: Room, player_id: str) -> bool:
        """Caller holds ``room.lock``"""
        player = room.remove_player(player_id)
        if player is None:
            custom_log(f"leave ignored: {player_id} not in room {room.code}", isOn=LOGGING_SWITCH)
            return False

        if self.registry.delete_if_empty(room):
            UNO_ACTIVE_ROOMS.set(len(self.registry))
            return True

        custom_log(f"Player {player_id} left room {room.code} ({len(room.players)} remain)", isOn=LOGGING_SWITCH)
        self.message_system.broadcast_to_room(room, messages.lobby_update(room))
        return True

    # ========= Game =========

    def start_game(self, room_code: str) -> bool:
        """Deal a fresh game; each player is told their own hand"""
        room = self.registry.get_room(room_code)
        if room is None:
            custom_log(f"start_game ignored: room {room_code} not found", isOn=LOGGING_SWITCH)
            return False

        with room.lock:
            if not room.can_start():
                custom_log(f"start_game ignored: room {room_code} has {len(room.players)} player(s)", isOn=LOGGING_SWITCH)
                return False

            room.reset_for_deal()
            room.deck = self.deck_factory.build_deck()
            try:
                for player in room.players:
                    for _ in range(self.hand_size):
                        player.add_card_to_hand(draw(room.deck))

                # Wilds cannot open the discard pile
                seed = draw(room.deck)
                while seed.is_wild():
                    room.set_aside.append(seed)
                    seed = draw(room.deck)
            except EmptyDeck:
                custom_log(f"❌ Room {room_code}: deck ran out while dealing {self.hand_size} cards each", level="ERROR")
                room.reset_for_deal()
                room.phase = RoomPhase.LOBBY
                return False

            room.discard_pile.append(seed)
            room.current_card = seed
            room.phase = RoomPhase.IN_PROGRESS

            custom_log(
                f"✅ Game started in {room_code}: {len(room.players)} players, first card {seed}, "
                f"{len(room.deck)} left in deck, {len(room.set_aside)} set aside",
                isOn=LOGGING_SWITCH
            )
            for player in room.players:
                self.message_system.send_to_player(player, messages.game_started(room, player))
            return True

    def _acting_player(self, room: Room, player_id: str, action: str) -> Optional[Player]:
        """Resolve the player for a play/draw, or None when the action must be ignored"""
        if room.phase != RoomPhase.IN_PROGRESS:
            custom_log(f"{action} ignored: room {room.code} is {room.phase.value}", isOn=LOGGING_SWITCH)
            return None
        player = room.get_player(player_id)
        if player is None:
            custom_log(f"{action} ignored: {player_id} not in room {room.code}", isOn=LOGGING_SWITCH)
            return None
        if self.enforce_rules and room.get_current_player() is not player:
            custom_log(f"{action} ignored: not {player_id}'s turn in {room.code}", isOn=LOGGING_SWITCH)
            return None
        return player

    def play_card(self, room_code: str, player_id: str, card_data: Dict[str, Any],
                  chosen_color: Optional[str] = None) -> bool:
        """Play a card from the player's hand onto the discard pile.

        Unknown room or player, a card not in hand and (with rule enforcement)
        out-of-turn or non-matching plays are ignored.
        """
        room = self.registry.get_room(room_code)
        if room is None:
            custom_log(f"play_card ignored: room {room_code} not found", isOn=LOGGING_SWITCH)
            return False

        with room.lock:
            player = self._acting_player(room, player_id, "play_card")
            if player is None:
                return False

            requested = Card.from_dict(card_data)
            index = player.find_card(requested.color, requested.value)
            if index is None:
                custom_log(f"play_card ignored: {player_id} holds no {requested}", isOn=LOGGING_SWITCH)
                return False

            card = player.hand[index]
            chosen = chosen_color or card_data.get('chosenColor')
            if self.enforce_rules:
                if not card.can_play_on(room.current_card):
                    custom_log(f"play_card ignored: {card} does not match {room.current_card}", isOn=LOGGING_SWITCH)
                    return False
                if card.is_wild() and chosen not in PLAYABLE_COLORS:
                    custom_log(f"play_card ignored: {card} played without a color choice", isOn=LOGGING_SWITCH)
                    return False

            player.remove_card_at(index)
            if card.is_wild() and chosen in PLAYABLE_COLORS:
                card.assign_color(chosen)

            room.discard_pile.append(card)
            room.current_card = card
            effect = apply_card_effect(card, room, self.deck_factory, self.draw_penalties)

            if not player.hand:
                room.phase = RoomPhase.FINISHED
                room.winner = player
                UNO_GAMES_FINISHED_TOTAL.inc()
                custom_log(f"🏆 {player.player_id} won in room {room_code}", isOn=LOGGING_SWITCH)
                self.message_system.broadcast_to_room(room, messages.game_over(player))
                return True

            advance_turn(room, effect.skip_next)
            self.message_system.broadcast_to_room(room, messages.game_update(room))
            self.message_system.broadcast_to_room(room, messages.card_played(player, card))
            return True

    def draw_card(self, room_code: str, player_id: str) -> bool:
        """Draw one card for the player, then pass the turn"""
        room = self.registry.get_room(room_code)
        if room is None:
            custom_log(f"draw_card ignored: room {room_code} not found", isOn=LOGGING_SWITCH)
            return False

        with room.lock:
            player = self._acting_player(room, player_id, "draw_card")
            if player is None:
                return False

            try:
                card = self.deck_factory.draw_with_reshuffle(room)
            except NoCardsAvailable:
                custom_log(f"draw_card ignored: no cards left to draw in {room_code}", level="WARNING")
                return False

            player.add_card_to_hand(card)
            self.message_system.send_to_player(player, messages.card_drawn(player, card))
            advance_turn(room)
            self.message_system.broadcast_to_room(room, messages.game_update(room))
            return True

    def call_uno(self, room_code: str, player_id: str) -> bool:
        room = self.registry.get_room(room_code)
        if room is None:
            custom_log(f"call_uno ignored: room {room_code} not found", isOn=LOGGING_SWITCH)
            return False
        with room.lock:
            self.message_system.broadcast_to_room(room, messages.uno_called(player_id))
            return True
