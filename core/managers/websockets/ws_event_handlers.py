"""
WebSocket Event Handlers
Connection lifecycle handlers for WebSocket sessions
"""

from tools.logger.custom_logging import custom_log
from core.metrics import UNO_CONNECTED_SESSIONS

LOGGING_SWITCH = False


class WSEventHandlers:
    """Centralized WebSocket event handlers"""

    def __init__(self, websocket_manager):
        self.websocket_manager = websocket_manager
        self.socketio = websocket_manager.socketio

    def handle_connect(self, session_id, data=None):
        """Handle client connection"""
        self.websocket_manager.add_session(session_id)
        UNO_CONNECTED_SESSIONS.inc()
        return True

    def handle_disconnect(self, session_id, reason=None):
        """Handle client disconnection.

        The session is marked closed first so nothing is sent to it while the
        disconnect callbacks tidy up game state.
        """
        if not self.websocket_manager.remove_session(session_id):
            return False
        UNO_CONNECTED_SESSIONS.dec()
        custom_log(f"Session {session_id} closed ({reason})", isOn=LOGGING_SWITCH)
        self.websocket_manager.run_disconnect_callbacks(session_id)
        return True
