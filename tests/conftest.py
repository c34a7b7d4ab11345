import pytest

from notifycenter import Registry, capabilities


@capabilities("ping", "pong")
class Listener:
    def __init__(self, name: str) -> None:
        self.name = name
        self.received = []

    def ping(self, payload) -> None:
        self.received.append(payload)

    def __repr__(self) -> str:
        return f"Listener({self.name!r})"


@pytest.fixture
def registry():
    return Registry()


@pytest.fixture
def make_listener():
    return Listener
