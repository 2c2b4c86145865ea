from typing import Dict, List, Optional

import pytest
import requests


class FakeResponse:
    def __init__(self, content: bytes = b"", status: int = 200, lines: Optional[List[str]] = None,
                 encoding: Optional[str] = "utf-8"):
        self.content = content
        self.status_code = status
        self.encoding = encoding
        self._lines = lines or []
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def iter_lines(self, decode_unicode=False):
        for line in self._lines:
            yield line

    def close(self):
        self.closed = True


class FakeSession:
    """Stands in for requests.Session; answers from a url -> response map."""

    def __init__(self, responses: Dict[str, object]):
        self.responses = responses
        self.headers: Dict[str, str] = {}
        self.verify = True
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        response = self.responses.get(url)
        if response is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture()
def fake_session_factory():
    sessions = []

    def make(responses):
        def factory():
            session = FakeSession(responses)
            sessions.append(session)
            return session
        return factory

    make.sessions = sessions
    return make
