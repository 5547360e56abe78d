from flask_socketio import SocketIO
from typing import Dict, Any, Set, Callable, List
from tools.logger.custom_logging import custom_log
from core.managers.websockets.ws_event_listeners import WSEventListeners
from core.managers.websockets.ws_event_handlers import WSEventHandlers
from utils.config.config import Config
import threading

LOGGING_SWITCH = False


def _socketio_origins(origins: List[str]):
    """Socket.IO wants "*" as a plain string to allow every origin."""
    cleaned = [origin.strip() for origin in origins if origin.strip()]
    if not cleaned or "*" in cleaned:
        return "*"
    return cleaned


class WebSocketManager:
    """Owns the Socket.IO server and the set of open sessions.

    Game code addresses connections by Socket.IO session id through
    send_to_session and is_session_connected.
    """

    def __init__(self):
        self.socketio = SocketIO(
            cors_allowed_origins=_socketio_origins(Config.WS_ALLOWED_ORIGINS),
            async_mode='threading',
            logger=Config.DEBUG,
            engineio_logger=Config.DEBUG,
            max_http_buffer_size=Config.WS_MAX_PAYLOAD_SIZE,
            ping_timeout=Config.WS_PING_TIMEOUT,
            ping_interval=Config.WS_PING_INTERVAL
        )
        self._sessions: Set[str] = set()
        self._sessions_lock = threading.Lock()
        self._disconnect_callbacks: List[Callable[[str], Any]] = []

        # Initialize event handlers and listeners
        self.event_handlers = WSEventHandlers(self)
        self.event_listeners = WSEventListeners(self, self.event_handlers)

        custom_log("WebSocketManager initialized", isOn=LOGGING_SWITCH)

    def initialize(self, app, use_builtin_handlers=True):
        """Initialize the WebSocket manager with the Flask app."""
        custom_log("🔧 [WS-INIT] Initializing WebSocket manager...", isOn=LOGGING_SWITCH)
        self.socketio.init_app(app)

        if use_builtin_handlers:
            self.event_listeners.register_all_listeners()
            custom_log("🔧 [WS-INIT] Builtin handlers registered", isOn=LOGGING_SWITCH)

    def register_handler(self, event: str, handler: Callable):
        """Register ``handler(session_id, data)`` for a Socket.IO event."""
        self.event_listeners.register_custom_listener(event, handler)

    def on_disconnect(self, callback: Callable[[str], Any]):
        """Call ``callback(session_id)`` after a session closes."""
        self._disconnect_callbacks.append(callback)

    # ========= Sessions =========

    def add_session(self, session_id: str):
        with self._sessions_lock:
            self._sessions.add(session_id)
        custom_log(f"Session {session_id} connected", isOn=LOGGING_SWITCH)

    def remove_session(self, session_id: str) -> bool:
        with self._sessions_lock:
            if session_id not in self._sessions:
                return False
            self._sessions.discard(session_id)
        custom_log(f"Session {session_id} disconnected", isOn=LOGGING_SWITCH)
        return True

    def is_session_connected(self, session_id: str) -> bool:
        with self._sessions_lock:
            return session_id in self._sessions

    def get_session_count(self) -> int:
        with self._sessions_lock:
            return len(self._sessions)

    def run_disconnect_callbacks(self, session_id: str):
        for callback in list(self._disconnect_callbacks):
            try:
                callback(session_id)
            except Exception as e:
                custom_log(f"❌ Disconnect callback failed for session {session_id}: {str(e)}", level="ERROR")

    # ========= Sending =========

    def send_to_session(self, session_id: str, event: str, data: Any) -> bool:
        """Send message to a specific session; closed sessions are skipped."""
        if not self.is_session_connected(session_id):
            custom_log(f"Skipped {event} to closed session {session_id}", isOn=LOGGING_SWITCH)
            return False
        try:
            self.socketio.emit(event, data, to=session_id)
            custom_log(f"✅ Sent {event} to session {session_id}", isOn=LOGGING_SWITCH)
            return True
        except Exception as e:
            custom_log(f"❌ Error sending {event} to session {session_id}: {str(e)}", level="ERROR")
            return False

    def health_check(self) -> Dict[str, Any]:
        return {'status': 'healthy', 'sessions': self.get_session_count()}

    def run(self, app, **kwargs):
        """Run the WebSocket server."""
        self.socketio.run(app, **kwargs)
