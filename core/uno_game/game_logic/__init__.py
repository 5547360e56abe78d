"""
UNO Game Logic

Turn arithmetic, card effects and rule loading.
"""

from .turn_coordinator import CardEffect, next_index, apply_card_effect, advance_turn
from .yaml_loader import YAMLLoader, load_game_rules

__all__ = [
    'CardEffect',
    'next_index',
    'apply_card_effect',
    'advance_turn',
    'YAMLLoader',
    'load_game_rules'
]
