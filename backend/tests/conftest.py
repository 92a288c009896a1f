import os
import sys
import random
import threading
import pytest

# Ensure the backend root (containing the `codewords` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from codewords import create_app, db, socketio
from codewords.game import engine
from codewords.gateway import SessionGateway
from codewords.store import MemoryKeyValueStore, SessionRepository


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    STORE_BACKEND = 'sql'
    SESSION_TTL_SEC = 3600
    STORE_RETRY_ATTEMPTS = 2
    STORE_RETRY_BACKOFF_MS = 0
    CORS_ORIGINS = ['http://localhost:3000']


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import codewords.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace='/ws'
        )
        # Drop the 'connected' greeting
        test_client.get_received('/ws')
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected('/ws'):
                test_client.disconnect(namespace='/ws')
        except Exception:
            pass


class RecordingEmitter:
    """Stands in for the Socket.IO server: remembers every emit per connection."""

    def __init__(self):
        self._lock = threading.Lock()
        self.sent = []

    def emit(self, event, data, to=None, namespace=None):
        with self._lock:
            self.sent.append((to, event, data))

    def events(self, sid, event=None):
        with self._lock:
            return [(e, d) for to, e, d in self.sent if to == sid and (event is None or e == event)]

    def payloads(self, sid, event):
        return [d for _, d in self.events(sid, event)]

    def clear(self):
        with self._lock:
            self.sent.clear()


@pytest.fixture()
def emitter():
    return RecordingEmitter()


@pytest.fixture()
def memory_repository():
    return SessionRepository(MemoryKeyValueStore(), ttl=3600)


@pytest.fixture()
def gateway(memory_repository, emitter):
    return SessionGateway(
        memory_repository, emitter=emitter, retry_attempts=3, retry_backoff=0, rng=random.Random(11)
    )


def card_index(session, card_type, exclude=()):
    """First unrevealed board position holding ``card_type``."""
    for i, card in enumerate(session.key_card):
        if card == card_type and not session.revealed[i] and i not in exclude:
            return i
    raise AssertionError(f'no unrevealed {card_type} card left')


def seat_players(session, team_count=2):
    """Join one spymaster and one operative per team; the red spymaster hosts."""
    teams = session.teams[:team_count]
    for team in teams:
        engine.join(session, f'{team}-spy', f'{team.title()} Spy')
        engine.join(session, f'{team}-op', f'{team.title()} Op')
        engine.select_team_and_role(session, f'{team}-spy', team, 'spymaster')
        engine.select_team_and_role(session, f'{team}-op', team, 'operative')
    return session


def new_session(settings=None, seed=3):
    return engine.create_session('ABC123', settings=settings, rng=random.Random(seed))


@pytest.fixture()
def lobby_session():
    return seat_players(new_session())


@pytest.fixture()
def playing_session(lobby_session):
    engine.start_game(lobby_session, 'red-spy')
    return lobby_session
