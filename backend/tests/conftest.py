import os
import sys
import pytest

# Ensure the backend root (containing the `guessgame` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from guessgame import create_app, db, socketio
from guessgame.services.games.registry import clear_sessions


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LEADERBOARD_LIMIT = 10
    LEADERBOARD_MAX_LIMIT = 50


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeStore:
    """In-memory stand-in for RecordStore."""

    def __init__(self, records=None):
        self.records = list(records or [])
        self.inserted = []

    def fetch_best(self):
        top = self.fetch_top(1)
        return top[0] if top else None

    def fetch_top(self, limit):
        ranked = sorted(self.records, key=lambda r: (r.attempts, r.time_seconds))
        return ranked[:limit] if limit > 0 else []

    def insert(self, record):
        self.records.append(record)
        self.inserted.append(record)
        return record


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import guessgame.models  # noqa: F401
        db.create_all()
        yield application
        clear_sessions()
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store():
    return FakeStore()


@pytest.fixture()
def seeded_store():
    from guessgame.models import GameRecord
    return FakeStore([GameRecord(name='Champ', attempts=1, time_seconds=0.5)])


class FailingStore(FakeStore):
    """Store whose writes are dropped, as RecordStore does when the database is down."""

    def insert(self, record):
        return None


@pytest.fixture()
def failing_store():
    return FailingStore()
