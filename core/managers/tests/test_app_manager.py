import pytest
from flask import Flask

from core.managers.app_manager import AppManager


class TestAppManager:

    def test_health_before_initialize(self):
        assert AppManager().health_check()['status'] == 'unhealthy'

    def test_initialize_wires_game_backend(self):
        app_manager = AppManager()
        app_manager.initialize(Flask(__name__), enforce_rules=True)

        assert app_manager.is_initialized()
        assert app_manager.get_uno_game_main().get_action_processor().enforce_rules is True
        health = app_manager.health_check()
        assert health['status'] == 'healthy'
        assert health['uno_game']['details']['active_rooms'] == 0

    def test_rejects_non_flask_app(self):
        with pytest.raises(RuntimeError):
            AppManager().initialize(object())


class TestHttpEndpoints:
    """Routes exposed by app.py next to the Socket.IO endpoint."""

    def setup_method(self):
        import app as app_module
        self.client = app_module.app.test_client()

    def test_root_liveness(self):
        response = self.client.get('/')
        assert response.status_code == 200
        assert response.get_data(as_text=True) == "UNO WebSocket Server Running"

    def test_health(self):
        response = self.client.get('/health')
        assert response.status_code == 200
        assert response.get_json()['uno_game']['status'] == 'healthy'

    def test_metrics(self):
        response = self.client.get('/metrics')
        assert response.status_code == 200
        assert 'uno_active_rooms' in response.get_data(as_text=True)
