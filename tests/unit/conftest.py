import base64
import threading

import pytest

from adapters.altstrade_adapter import AltsTradeAdapter
from config import ClientConfig

PUBLIC_KEY = "pub-key-123"
PRIVATE_KEY = base64.b64encode(b"super-secret-signing-key").decode()
T0 = 1700000000000


class FakeResponse:
    def __init__(self, body, status_code=200):
        self.content = body.encode("utf-8") if isinstance(body, str) else body
        self.status_code = status_code


class FakeSession:
    """Stands in for requests.Session: records calls, replays one canned outcome."""

    def __init__(self, body='{"result":"ok"}', status_code=200, exc=None):
        self.body = body
        self.status_code = status_code
        self.exc = exc
        self.calls = []
        self.closed = False

    def request(self, method, url, data=None, headers=None, timeout=None):
        self.calls.append({
            "method": method,
            "url": url,
            "data": data,
            "headers": dict(headers or {}),
            "timeout": timeout,
        })
        if self.exc is not None:
            raise self.exc
        return FakeResponse(self.body, self.status_code)

    def close(self):
        self.closed = True


class FixedClock:
    def __init__(self, *ticks):
        self.ticks = list(ticks)
        self.last = ticks[0]

    def __call__(self):
        if self.ticks:
            self.last = self.ticks.pop(0)
        return self.last


class CallbackRecorder:
    def __init__(self):
        self.calls = []
        self.done = threading.Event()

    def __call__(self, error, result):
        self.calls.append((error, result))
        self.done.set()

    def wait(self):
        assert self.done.wait(5), "callback never fired"
        return self.calls


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def make_client(session):
    clients = []

    def _make(public_key=PUBLIC_KEY, private_key=PRIVATE_KEY, clock=None, sess=None):
        client = AltsTradeAdapter(
            public_key,
            private_key,
            cfg=ClientConfig(max_workers=1),
            clock=clock or FixedClock(T0),
            session=sess or session,
        )
        clients.append(client)
        return client

    yield _make
    for c in clients:
        c.close()
