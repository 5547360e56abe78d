import json

from flask import Flask

from core.managers.app_manager import AppManager


def _named(received, event):
    return [packet['args'][0] for packet in received if packet['name'] == event]


class TestUnoOverSocketIO:
    """Drive the server end to end through Flask-SocketIO test clients."""

    def setup_method(self):
        self.app = Flask(__name__)
        self.app_manager = AppManager()
        self.app_manager.initialize(self.app, enforce_rules=False, deck_seed=2024)
        self.socketio = self.app_manager.get_websocket_manager().socketio
        self.client1 = self.socketio.test_client(self.app)
        self.client2 = self.socketio.test_client(self.app)

    def teardown_method(self):
        for client in (self.client1, self.client2):
            if client.is_connected():
                client.disconnect()

    def _open_lobby(self):
        self.client1.emit('create_lobby', {'playerId': 'p1', 'playerName': 'Alice'})
        room_code = _named(self.client1.get_received(), 'lobby_created')[0]['roomCode']
        self.client2.emit('join_lobby', {'roomCode': room_code, 'playerId': 'p2', 'playerName': 'Bob'})
        return room_code

    def test_lobby_handshake(self):
        room_code = self._open_lobby()
        assert len(room_code) == 6

        received2 = self.client2.get_received()
        assert _named(received2, 'lobby_joined') == [{'type': 'lobby_joined', 'roomCode': room_code}]
        roster = _named(self.client1.get_received(), 'lobby_update')[-1]['players']
        assert [(p['id'], p['isHost']) for p in roster] == [('p1', True), ('p2', False)]

    def test_two_player_turns(self):
        room_code = self._open_lobby()
        self.client1.get_received()
        self.client2.get_received()

        self.client1.emit('start_game', {'roomCode': room_code})
        started1 = _named(self.client1.get_received(), 'game_started')[0]
        started2 = _named(self.client2.get_received(), 'game_started')[0]
        assert len(started1['hand']) == 7 and len(started2['hand']) == 7
        assert started1['currentCard'] == started2['currentCard']
        assert started1['currentPlayerIndex'] == 0

        card = next(c for c in started1['hand'] if c['type'] == 'number')
        self.client1.emit('play_card', {'roomCode': room_code, 'playerId': 'p1', 'card': card})
        update1 = _named(self.client1.get_received(), 'game_update')[-1]
        received2 = self.client2.get_received()
        update2 = _named(received2, 'game_update')[-1]
        assert update1 == update2
        assert update1['currentPlayerIndex'] == 1
        assert [p['cardCount'] for p in update1['players']] == [6, 7]
        assert update1['currentCard'] == card
        assert _named(received2, 'card_played')[-1]['playerName'] == 'Alice'

        self.client2.emit('draw_card', {'roomCode': room_code, 'playerId': 'p2'})
        received1 = self.client1.get_received()
        received2 = self.client2.get_received()
        assert len(_named(received2, 'card_drawn')) == 1
        assert _named(received1, 'card_drawn') == []
        update1 = _named(received1, 'game_update')[-1]
        update2 = _named(received2, 'game_update')[-1]
        assert update1 == update2
        assert update1['currentPlayerIndex'] == 0
        assert [p['cardCount'] for p in update1['players']] == [6, 8]

    def test_message_envelope_and_malformed_frames(self):
        self.client1.send(json.dumps({'type': 'create_lobby', 'playerId': 'p1', 'playerName': 'Alice'}))
        assert len(_named(self.client1.get_received(), 'lobby_created')) == 1

        self.client1.send('this is not json')
        self.client1.send(json.dumps({'type': 'teleport'}))
        assert self.client1.get_received() == []
        assert self.client1.is_connected()

    def test_join_errors_go_to_requester_only(self):
        self.client2.emit('join_lobby', {'roomCode': 'ZZZZZZ', 'playerId': 'p2', 'playerName': 'Bob'})
        errors = _named(self.client2.get_received(), 'error')
        assert errors == [{'type': 'error', 'message': 'Lobby not found', 'code': 'room_not_found'}]
        assert self.client1.get_received() == []

    def test_disconnect_removes_player(self):
        room_code = self._open_lobby()
        self.client1.get_received()

        self.client2.disconnect()
        roster = _named(self.client1.get_received(), 'lobby_update')[-1]['players']
        assert [p['id'] for p in roster] == ['p1']

        self.client1.disconnect()
        registry = self.app_manager.get_uno_game_main().get_room_registry()
        assert registry.get_room(room_code) is None
