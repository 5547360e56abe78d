"""
Player Models for UNO Game
"""

from typing import List, Dict, Any, Optional
from .card import Card


class Player:
    """A seat at a room: identity, host flag, hand and connection handle.

    ``connection_ref`` is the Socket.IO session id used to address messages;
    the transport owns the connection itself.
    """

    def __init__(self, player_id: str, name: str, connection_ref: Optional[str] = None, is_host: bool = False):
        self.player_id = player_id
        self.name = name
        self.connection_ref = connection_ref
        self.is_host = is_host
        self.hand: List[Card] = []

    @property
    def card_count(self) -> int:
        return len(self.hand)

    def add_card_to_hand(self, card: Card):
        """Add a card to the player's hand"""
        self.hand.append(card)

    def find_card(self, color: str, value: str) -> Optional[int]:
        """Index of the first hand card matching color and value, or None"""
        for i, card in enumerate(self.hand):
            if card.matches(color, value):
                return i
        return None

    def remove_card_at(self, index: int) -> Card:
        return self.hand.pop(index)

    def clear_hand(self) -> List[Card]:
        """Empty the hand and return the cards it held"""
        cards, self.hand = self.hand, []
        return cards

    def to_public_dict(self) -> Dict[str, Any]:
        """Roster entry visible to every player in the room"""
        return {
            "id": self.player_id,
            "name": self.name,
            "isHost": self.is_host,
            "cardCount": self.card_count,
        }

    def to_winner_dict(self) -> Dict[str, Any]:
        return {"id": self.player_id, "name": self.name}
