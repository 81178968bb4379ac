import os
import sys
import pytest

# Ensure the backend root (containing the `fruitbox` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from fruitbox import create_app, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    RNG_SEED = 0
    GRID_HEIGHT = 10
    GRID_WIDTH = 17
    FRUIT_TYPES = 5
    TOTAL_ROUNDS = 0
    ROUND_DURATION_SEC = 0
    TIMER_HEARTBEAT_SEC = 0
    LEADERBOARD_SIZE = 10
    CORS_ORIGINS = ['http://localhost:5173']


@pytest.fixture()
def make_app():
    """Build an app from TestConfig with selected settings overridden."""
    def _make(**overrides):
        config_class = type('OverriddenTestConfig', (TestConfig,), overrides)
        return create_app(config_class)
    return _make


@pytest.fixture()
def flask_app(make_app):
    application = make_app()
    with application.app_context():
        yield application


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
    except RuntimeError:
        pass
