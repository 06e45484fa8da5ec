import logging
import os
import random
import sys
import pytest

# Ensure the backend root (containing the `catmouse` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from catmouse import create_app, socketio
from catmouse.services.game import BroadcastGateway, GameSession, GameSettings


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = '*'
    DEFAULT_ROOM_ID = 'LOBBY'
    MAX_SEATS = 6
    MIN_PLAYERS = 3
    MAX_PLAYERS = 6
    CATCH_DIST = 0.06
    CATCH_HOLD_MS = 1200
    TICK_INTERVAL_MS = 150


class FakeClock:
    """Manually advanced clock; both readings move together."""

    def __init__(self, start_ms=1_000_000.0):
        self.now = start_ms

    def monotonic_ms(self):
        return self.now

    def wall_ms(self):
        return 1_700_000_000_000.0 + self.now

    def advance(self, ms):
        self.now += ms


class RecordingGateway(BroadcastGateway):
    """Gateway that keeps every outbound message instead of sending it."""

    def __init__(self):
        super().__init__(socketio=None)
        self.sent = []
        self.members = {}

    def _emit(self, event, payload, to):
        self.sent.append((event, payload, to))

    def join(self, participant_id, room_id):
        self.members.setdefault(room_id, set()).add(participant_id)

    def events(self, name):
        return [payload for event, payload, _ in self.sent if event == name]

    def clear(self):
        self.sent.clear()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def gateway():
    return RecordingGateway()


@pytest.fixture()
def session(gateway, clock):
    return GameSession(
        GameSettings(),
        gateway,
        clock=clock,
        rng=random.Random(1234),
        logger=logging.getLogger('catmouse.tests'),
    )


@pytest.fixture()
def flask_app(clock):
    application = create_app(TestConfig, clock=clock, rng=random.Random(99))
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def game(flask_app):
    return flask_app.extensions['catmouse']


@pytest.fixture()
def connect_player(flask_app):
    """Factory for Socket.IO test clients; returns (client, participant id)."""
    clients = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        hello = [pkt for pkt in test_client.get_received() if pkt['name'] == 'hello']
        assert hello, 'server did not greet the connection'
        clients.append(test_client)
        return test_client, hello[0]['args'][0]['id']

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def sio_client(connect_player):
    test_client, _ = connect_player()
    return test_client
