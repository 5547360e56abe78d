from typing import Optional, Dict, Any
from tools.logger.custom_logging import custom_log, log_function_call
from utils.config.config import Config
from core.managers.websockets.websocket_manager import WebSocketManager
from core.uno_game.uno_game_main import UnoGameMain

LOGGING_SWITCH = True


class AppManager:
    def __init__(self):
        self.flask_app = None
        self.websocket_manager: Optional[WebSocketManager] = None
        self.uno_game_main: Optional[UnoGameMain] = None
        self._initialized = False

    def is_initialized(self):
        return self._initialized

    def get_websocket_manager(self):
        return self.websocket_manager

    def get_uno_game_main(self):
        return self.uno_game_main

    @log_function_call
    def initialize(self, app, rules_path: Optional[str] = None, enforce_rules: Optional[bool] = None,
                   deck_seed: Optional[int] = None):
        """
        Initialize the WebSocket manager and the UNO game backend on ``app``.
        """
        if not hasattr(app, "add_url_rule"):
            raise RuntimeError("AppManager requires a valid Flask app instance.")

        self.flask_app = app
        custom_log(f"AppManager initialized with Flask app: {self.flask_app}", isOn=LOGGING_SWITCH)

        self.websocket_manager = WebSocketManager()
        self.websocket_manager.initialize(app, use_builtin_handlers=True)

        self.uno_game_main = UnoGameMain()
        if not self.uno_game_main.initialize(self, rules_path=rules_path, enforce_rules=enforce_rules,
                                             deck_seed=deck_seed):
            raise RuntimeError("UNO game backend failed to initialize")

        self._initialized = True
        custom_log("✅ WebSocket manager and UNO game backend initialized", isOn=LOGGING_SWITCH)

    def health_check(self) -> Dict[str, Any]:
        if not self._initialized:
            return {'status': 'unhealthy', 'reason': 'App manager not initialized'}

        uno_health = self.uno_game_main.health_check()
        ws_health = self.websocket_manager.health_check()
        overall = 'healthy' if uno_health.get('status') == 'healthy' and ws_health.get('status') == 'healthy' else 'degraded'
        return {
            'status': overall,
            'app': Config.APP_NAME,
            'version': Config.APP_VERSION,
            'websocket': ws_health,
            'uno_game': uno_health,
        }

    def run(self, app, **kwargs):
        """Run the Flask application with Socket.IO support."""
        if self.websocket_manager:
            custom_log("🚀 Starting Flask app with WebSocket support", isOn=LOGGING_SWITCH)
            self.websocket_manager.run(app, **kwargs)
        else:
            app.run(**kwargs)
