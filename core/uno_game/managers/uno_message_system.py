"""
UNO Message System

Central messaging facade for the UNO game. Every outbound message passes
through here on its way to the broadcast gateway.

The gateway (WebSocketManager in production, a recording fake in tests) must
provide:
- send_to_session(session_id, event, data) -> bool
- is_session_connected(session_id) -> bool

Messages are plain JSON-serializable dicts carrying a "type" field; the type
doubles as the Socket.IO event name.
"""

from typing import Dict, Any, List, Optional
from tools.logger.custom_logging import custom_log
from ..models.player import Player
from ..models.room import Room

LOGGING_SWITCH = False


# ====== Message builders ======

def lobby_created(room_code: str) -> Dict[str, Any]:
    return {"type": "lobby_created", "roomCode": room_code}


def lobby_joined(room_code: str) -> Dict[str, Any]:
    return {"type": "lobby_joined", "roomCode": room_code}


def error(message: str, code: Optional[str] = None) -> Dict[str, Any]:
    payload = {"type": "error", "message": message}
    if code:
        payload["code"] = code
    return payload


def lobby_update(room: Room) -> Dict[str, Any]:
    return {"type": "lobby_update", "players": room.roster()}


def game_started(room: Room, player: Player) -> Dict[str, Any]:
    state = room.public_state()
    return {
        "type": "game_started",
        "currentCard": state["currentCard"],
        "hand": [card.to_dict() for card in player.hand],
        "players": state["players"],
        "currentPlayerIndex": state["currentPlayerIndex"],
        "direction": state["direction"],
    }


def game_update(room: Room) -> Dict[str, Any]:
    payload = {"type": "game_update"}
    payload.update(room.public_state())
    return payload


def card_played(player: Player, card) -> Dict[str, Any]:
    return {
        "type": "card_played",
        "playerId": player.player_id,
        "playerName": player.name,
        "card": card.to_dict(),
    }


def card_drawn(player: Player, card) -> Dict[str, Any]:
    return {"type": "card_drawn", "playerId": player.player_id, "card": card.to_dict()}


def uno_called(player_id: str) -> Dict[str, Any]:
    return {"type": "uno_called", "playerId": player_id}


def game_over(winner: Player) -> Dict[str, Any]:
    return {"type": "game_over", "winner": winner.to_winner_dict()}


class UnoMessageSystem:
    """Addresses messages to connections, players and whole rooms."""

    def __init__(self, gateway):
        self.gateway = gateway

    def send_to_connection(self, connection_ref: Optional[str], message: Dict[str, Any]) -> bool:
        """Send to one connection; closed or unknown connections are skipped."""
        if not connection_ref or not self.gateway.is_session_connected(connection_ref):
            custom_log(f"UnoMsg: skipped {message.get('type')} to closed connection {connection_ref}", isOn=LOGGING_SWITCH)
            return False
        return self.gateway.send_to_session(connection_ref, message["type"], message)

    def send_to_player(self, player: Player, message: Dict[str, Any]) -> bool:
        return self.send_to_connection(player.connection_ref, message)

    def broadcast_to_room(self, room: Room, message: Dict[str, Any]) -> List[str]:
        """Send to every open connection in the room; returns the player ids reached."""
        delivered = []
        for player in list(room.players):
            if self.send_to_player(player, message):
                delivered.append(player.player_id)
        custom_log(f"UnoMsg: {message.get('type')} -> room {room.code} ({len(delivered)} delivered)", isOn=LOGGING_SWITCH)
        return delivered
