import threading

import pytest


class StubTransport:
    """Records requests and answers with a fixed outcome."""

    def __init__(self, ok=True, error=None):
        self.ok = ok
        self.error = error
        self.calls = []

    def send(self, endpoint, token, body):
        self.calls.append((endpoint, token, body))
        if self.error is not None:
            raise self.error
        return self.ok


class RecordingCallback:
    def __init__(self):
        self.successes = 0
        self.failures = []
        self.done = threading.Event()

    def success(self):
        self.successes += 1
        self.done.set()

    def failure(self, error):
        self.failures.append(error)
        self.done.set()


@pytest.fixture
def transport():
    return StubTransport()


@pytest.fixture
def callback():
    return RecordingCallback()
