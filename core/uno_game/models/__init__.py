"""
UNO Game Models

This module contains the data models for the UNO card game.
"""

from .card import Card, CardColor, CardKind, CardValue
from .player import Player
from .room import Room, RoomPhase

__all__ = [
    'Card',
    'CardColor',
    'CardKind',
    'CardValue',
    'Player',
    'Room',
    'RoomPhase'
]
