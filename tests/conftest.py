import itertools
import os
import tempfile

# Keep test logs out of the working tree; must happen before wordgame is imported
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="wordgame-logs-"))

import pytest

from wordgame import create_app
from wordgame.config import TestingConfig
from wordgame.models.game import GameSession
from wordgame.services import game_service as game_service_module
from wordgame.services.game_service import initialize_game_service
from wordgame.services.word_service import Dictionary

WORDS = [
    "allow", "loyal", "speed", "erase", "crane", "about", "apple",
    "eerie", "hello", "world", "train", "sweet", "geese", "trace",
]


class CyclingChooser:
    """Deterministic stand-in for random.choice."""

    def __init__(self, *answers):
        self.calls = 0
        self._answers = itertools.cycle(answers)

    def __call__(self, words):
        self.calls += 1
        return next(self._answers)


@pytest.fixture
def dictionary():
    return Dictionary.from_words(WORDS)


@pytest.fixture
def make_chooser():
    return CyclingChooser


@pytest.fixture
def make_session():
    def _make(secret="CRANE"):
        return GameSession(secret_word=secret)
    return _make


@pytest.fixture
def service(dictionary):
    svc = initialize_game_service(dictionary, CyclingChooser("crane", "speed"))
    yield svc
    game_service_module._game_service = None


@pytest.fixture
def app(service):
    app, socketio = create_app(TestingConfig)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socket_client(app):
    client = app.socketio.test_client(app)
    yield client
    if client.is_connected():
        client.disconnect()
