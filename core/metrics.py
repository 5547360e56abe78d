from prometheus_client import Counter, Gauge
from prometheus_flask_exporter import PrometheusMetrics
from flask import Flask

# Initialize metrics with app name from config
from utils.config.config import Config
metrics = PrometheusMetrics.for_app_factory(app_name=Config.APP_NAME, path=None)

# Game metrics live in the default registry so /metrics exposes them next to the Flask ones
UNO_ACTIONS_TOTAL = Counter(
    'uno_actions_total',
    'Inbound UNO actions by type and outcome',
    ['action', 'outcome']
)
UNO_ACTIVE_ROOMS = Gauge(
    'uno_active_rooms',
    'Rooms currently registered'
)
UNO_CONNECTED_SESSIONS = Gauge(
    'uno_connected_sessions',
    'Open Socket.IO sessions'
)
UNO_GAMES_FINISHED_TOTAL = Counter(
    'uno_games_finished_total',
    'Games that ended with a winner'
)


def init_metrics(app: Flask):
    """Initialize metrics for the Flask application."""
    metrics.init_app(app)
    metrics.info('uno_server_info', 'UNO Room Server Information', version=Config.APP_VERSION)
    return metrics


def record_action(action: str, outcome: str):
    UNO_ACTIONS_TOTAL.labels(action=action, outcome=outcome).inc()
