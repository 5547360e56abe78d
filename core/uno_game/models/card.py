"""
Card Models for UNO Game

This module defines the card system for the UNO game: colors, values,
card kinds and their wire representation.
"""

from typing import Dict, Any, Optional
from enum import Enum


class CardColor(Enum):
    """Card colors"""
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    WILD = "wild"


class CardKind(Enum):
    """Card kinds"""
    NUMBER = "number"
    ACTION = "action"
    WILD = "wild"


class CardValue:
    """Special card values (number cards use "0".."9")"""
    SKIP = "Skip"
    REVERSE = "Reverse"
    DRAW_TWO = "+2"
    WILD = "Wild"
    WILD_DRAW_FOUR = "+4"


PLAYABLE_COLORS = [CardColor.RED.value, CardColor.BLUE.value, CardColor.GREEN.value, CardColor.YELLOW.value]
NUMBER_VALUES = [str(n) for n in range(10)]
ACTION_VALUES = [CardValue.SKIP, CardValue.REVERSE, CardValue.DRAW_TWO]
WILD_VALUES = [CardValue.WILD, CardValue.WILD_DRAW_FOUR]


def kind_for_value(value: str) -> str:
    """Resolve the card kind implied by a card value."""
    if value in WILD_VALUES:
        return CardKind.WILD.value
    if value in ACTION_VALUES:
        return CardKind.ACTION.value
    return CardKind.NUMBER.value


class Card:
    """Represents a single UNO card.

    Color, value and kind are fixed at creation; the only mutation allowed is
    assigning the chosen color of a wild card when it is played.
    """

    def __init__(self, color: str, value: str, kind: Optional[str] = None):
        self.color = color
        self.value = value
        self.kind = kind or kind_for_value(value)

    def __str__(self):
        if self.kind == CardKind.WILD.value and self.color == CardColor.WILD.value:
            return self.value
        return f"{self.color.title()} {self.value}"

    def __repr__(self):
        return f"Card({self.color!r}, {self.value!r}, {self.kind!r})"

    def __eq__(self, other):
        if not isinstance(other, Card):
            return NotImplemented
        return (self.color, self.value, self.kind) == (other.color, other.value, other.kind)

    def __hash__(self):
        return hash((self.color, self.value, self.kind))

    def is_wild(self) -> bool:
        return self.kind == CardKind.WILD.value

    def matches(self, color: str, value: str) -> bool:
        """Check if this card is the one a client refers to by color and value.

        Wild cards sit in hands with color "wild", so they match on value alone.
        """
        if self.is_wild():
            return self.value == value
        return self.color == color and self.value == value

    def can_play_on(self, current: Optional['Card']) -> bool:
        """Check if this card may legally be played on top of ``current``.

        A wild on the pile that never got a color accepts anything.
        """
        if current is None or self.is_wild() or current.color == CardColor.WILD.value:
            return True
        return self.color == current.color or self.value == current.value

    def assign_color(self, color: str):
        """Set the chosen color of a wild card being played."""
        if self.is_wild() and color:
            self.color = color

    def to_dict(self) -> Dict[str, Any]:
        """Convert card to its wire representation (kind travels as "type")."""
        return {
            "color": self.color,
            "value": self.value,
            "type": self.kind,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Card':
        """Create card from a wire dictionary (accepts "type" or "kind")."""
        value = str(data["value"])
        return cls(
            color=str(data.get("color") or ""),
            value=value,
            kind=data.get("type") or data.get("kind") or kind_for_value(value),
        )
