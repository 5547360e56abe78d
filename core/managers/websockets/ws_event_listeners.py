"""
WebSocket Event Listeners
Centralized Socket.IO event listener registration
"""

from flask import request
from tools.logger.custom_logging import custom_log

LOGGING_SWITCH = False


class WSEventListeners:
    """Centralized WebSocket event listeners"""

    def __init__(self, websocket_manager, event_handlers):
        self.websocket_manager = websocket_manager
        self.event_handlers = event_handlers
        self.socketio = websocket_manager.socketio

    def register_all_listeners(self):
        """Register the connection lifecycle listeners"""

        @self.socketio.on('connect')
        def handle_connect(auth=None):
            custom_log("🔍 [CONNECT] Connection event received", isOn=LOGGING_SWITCH)
            return self.event_handlers.handle_connect(request.sid, auth)

        @self.socketio.on('disconnect')
        def handle_disconnect(reason=None):
            custom_log("🔍 [DISCONNECT] Disconnection event received", isOn=LOGGING_SWITCH)
            self.event_handlers.handle_disconnect(request.sid, reason)

        custom_log("✅ Connection listeners registered", isOn=LOGGING_SWITCH)

    def register_custom_listener(self, event_name, handler_func):
        """Register a custom event listener"""
        @self.socketio.on(event_name)
        def custom_handler(data=None):
            custom_log(f"🔍 [CUSTOM] Event '{event_name}' received with data: {data}", isOn=LOGGING_SWITCH)
            session_id = request.sid
            return handler_func(session_id, data)

        custom_log(f"✅ Custom event listener registered for: {event_name}", isOn=LOGGING_SWITCH)
