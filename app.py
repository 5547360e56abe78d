from flask import Flask, request, jsonify, Response
from flask_cors import CORS
from core.managers.app_manager import AppManager
from core.metrics import init_metrics
from utils.config.config import Config
from tools.logger.custom_logging import custom_log

# Logging switch for optional verbose metrics/logging
LOGGING_SWITCH = Config.DEBUG


# Initialize the AppManager
app_manager = AppManager()

# Initialize the Flask app
app = Flask(__name__)

# Enable Cross-Origin Resource Sharing (CORS)
if Config.DEBUG or "*" in Config.WS_ALLOWED_ORIGINS:
    CORS(app)
else:
    CORS(app,
        origins=Config.WS_ALLOWED_ORIGINS,
        supports_credentials=True,
        methods=["GET", "OPTIONS"]
    )

# Initialize metrics
metrics = init_metrics(app)

# Initialize the AppManager and pass the app for WebSocket and game registration
app_manager.initialize(app)

# Additional app-level configurations
app.config["DEBUG"] = Config.DEBUG


@app.route('/')
def index():
    """Liveness text kept for clients that poll the root URL."""
    return "UNO WebSocket Server Running"


@app.route('/metrics')
def metrics_endpoint():
    """Expose Prometheus metrics through Flask route."""
    from prometheus_client import generate_latest, REGISTRY

    try:
        custom_log(f"Flask /metrics endpoint: Request from {request.remote_addr}", isOn=LOGGING_SWITCH)
        return Response(
            generate_latest(REGISTRY),
            mimetype='text/plain; version=0.0.4; charset=utf-8'
        )
    except Exception as e:
        custom_log(f"Flask /metrics endpoint: Error generating metrics: {e}", level="ERROR")
        return jsonify({
            'success': False,
            'error': f'Failed to generate metrics: {str(e)}'
        }), 500


@app.route('/health')
def health_check():
    """Health check endpoint for liveness and readiness probes"""
    try:
        health = app_manager.health_check()
        return health, 200 if health.get('status') == 'healthy' else 503
    except Exception as e:
        return {'status': 'unhealthy', 'reason': str(e)}, 503


if __name__ == "__main__":
    custom_log(f"🚀 Starting {Config.APP_NAME} on {Config.HOST}:{Config.PORT}")
    app_manager.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG, allow_unsafe_werkzeug=True)
