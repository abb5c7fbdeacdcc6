import json

import pytest
import requests

from timekit import TimekitClient

class FakeSession():
    """
    Stands in for requests.Session.  Records every request() call and
    replays queued responses (or exceptions) in order.
    """
    def __init__(self) -> None:
        self.calls = []
        self.queue = []
        self.closed = False

    def reply(self, code: int = 200, body=None, text: str|None = None) -> None:
        r = requests.Response()
        r.status_code = code
        r.reason = "Test"
        r.encoding = "utf-8"
        if text is not None:
            r._content = text.encode("utf-8")
        elif body is not None:
            r._content = json.dumps(body).encode("utf-8")
        else:
            r._content = b""
        self.queue.append(r)

    def fail(self, exc: Exception) -> None:
        self.queue.append(exc)

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        r = self.queue.pop(0) if self.queue else None
        if isinstance(r, Exception):
            raise r
        if r is None:
            self.reply(200, {"data": {}})
            r = self.queue.pop(0)
        r.url = url
        return r

    def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> dict:
        return self.calls[-1]

    @property
    def last_body(self):
        return json.loads(self.last["data"])

@pytest.fixture
def session():
    return FakeSession()

@pytest.fixture
def client(session):
    return TimekitClient("test-app", session=session)
