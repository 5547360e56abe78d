"""
UNO Game Main Entry Point

This module serves as the main entry point for the UNO game backend,
wiring the room registry, action processor and message system to the
WebSocket manager.
"""

from typing import Optional, Dict, Any
from tools.logger.custom_logging import custom_log
from utils.config.config import Config
from .game_logic.yaml_loader import load_game_rules
from .managers.action_processor import ActionProcessor
from .managers.room_registry import RoomRegistry
from .managers.uno_message_system import UnoMessageSystem
from .utils.deck_factory import DeckFactory
from core.validators.action_validators import ACTION_REQUIRED_FIELDS

LOGGING_SWITCH = True


class UnoGameMain:
    """Main orchestrator for the UNO game backend"""

    def __init__(self):
        self.app_manager = None
        self.websocket_manager = None
        self.rules: Dict[str, Any] = {}
        self.room_registry: Optional[RoomRegistry] = None
        self.message_system: Optional[UnoMessageSystem] = None
        self.action_processor: Optional[ActionProcessor] = None
        self._initialized = False

    def initialize(self, app_manager, rules_path: Optional[str] = None, enforce_rules: Optional[bool] = None,
                   deck_seed: Optional[int] = None) -> bool:
        """Initialize the UNO game backend with the main app_manager"""
        try:
            self.app_manager = app_manager
            self.websocket_manager = app_manager.get_websocket_manager()

            if not self.websocket_manager:
                custom_log("❌ WebSocket manager not available for UNO game", level="ERROR")
                return False

            self.rules = load_game_rules(rules_path or Config.UNO_RULES_PATH or None)
            self.room_registry = RoomRegistry(
                code_length=self.rules["room_code"]["length"],
                code_alphabet=self.rules["room_code"]["alphabet"],
                max_players=self.rules["players"]["max"],
                min_players=self.rules["players"]["min"],
                max_code_attempts=Config.ROOM_CODE_MAX_ATTEMPTS,
            )
            self.message_system = UnoMessageSystem(self.websocket_manager)
            self.action_processor = ActionProcessor(
                self.room_registry,
                self.message_system,
                deck_factory=DeckFactory(deck_seed),
                rules=self.rules,
                enforce_rules=enforce_rules,
            )

            self._register_uno_handlers()

            self._initialized = True
            custom_log(
                f"✅ UNO Game backend initialized (rule enforcement {'on' if self.action_processor.enforce_rules else 'off'})",
                isOn=LOGGING_SWITCH
            )
            return True

        except Exception as e:
            custom_log(f"❌ Failed to initialize UNO Game backend: {str(e)}", level="ERROR")
            return False

    def _register_uno_handlers(self):
        """One Socket.IO event per action type, plus the raw ``message`` envelope"""
        for action_type in ACTION_REQUIRED_FIELDS:
            self.websocket_manager.register_handler(action_type, self._action_event_handler(action_type))

        self.websocket_manager.register_handler('message', self._handle_message)
        self.websocket_manager.on_disconnect(self.action_processor.handle_disconnect)

    def _action_event_handler(self, action_type: str):
        def handler(session_id, data):
            envelope = dict(data) if isinstance(data, dict) else {}
            envelope['type'] = action_type
            self.action_processor.dispatch(session_id, envelope)
        return handler

    def _handle_message(self, session_id, data):
        self.action_processor.dispatch(session_id, data)

    def get_action_processor(self) -> Optional[ActionProcessor]:
        return self.action_processor if self._initialized else None

    def get_room_registry(self) -> Optional[RoomRegistry]:
        return self.room_registry if self._initialized else None

    def is_initialized(self) -> bool:
        """Check if the UNO game backend is initialized"""
        return self._initialized

    def health_check(self) -> dict:
        """Perform health check on UNO game components"""
        if not self._initialized:
            return {
                'status': 'not_initialized',
                'component': 'uno_game',
                'details': 'UNO game backend not initialized'
            }

        return {
            'status': 'healthy',
            'component': 'uno_game',
            'details': {
                'active_rooms': len(self.room_registry),
                'enforce_rules': self.action_processor.enforce_rules,
            }
        }
