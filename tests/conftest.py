import pytest

from config import TestingConfig
from controller import GameController
from models import BoardConfig


class FakeScheduler:
    """Collects timers instead of running them."""

    def __init__(self):
        self.armed = 0
        self.pending = []

    def arm_ticker(self):
        self.armed += 1

    def call_later(self, delay, callback):
        self.pending.append((delay, callback))

    def fire_all(self):
        pending, self.pending = self.pending, []
        for _, callback in pending:
            callback()


@pytest.fixture
def board():
    return BoardConfig()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def controller(board, scheduler):
    return GameController(board=board, scheduler=scheduler, clock=lambda: 100.0)


@pytest.fixture
def background_tasks(monkeypatch):
    import server

    tasks = []
    monkeypatch.setattr(server.socketio, 'start_background_task',
                        lambda target, *args: tasks.append((target, args)))
    return tasks


@pytest.fixture
def app():
    import server

    server.app.config.from_object(TestingConfig)
    yield server.app
    server.sessions.clear()


@pytest.fixture
def client(app, background_tasks):
    import server

    client = server.socketio.test_client(app)
    yield client
    if client.is_connected():
        client.disconnect()
