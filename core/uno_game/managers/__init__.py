"""
UNO Game Managers

Room registry, action processing and outbound messaging.
"""

from .room_registry import RoomRegistry
from .uno_message_system import UnoMessageSystem
from .action_processor import ActionProcessor

__all__ = [
    'RoomRegistry',
    'UnoMessageSystem',
    'ActionProcessor'
]
