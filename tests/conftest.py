"""
pytest configuration for websearch tests
"""

import pytest

from websearch.logging_utils import set_log_handler, set_log_level


@pytest.fixture(autouse=True)
def isolated_cwd(monkeypatch, tmp_path):
    """Run every test from an empty working directory"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("WEBSEARCH_ENGINE", raising=False)
    monkeypatch.delenv("WEBSEARCH_ACTION", raising=False)
    monkeypatch.delenv("WEBSEARCH_LOG_LEVEL", raising=False)
    yield tmp_path
    set_log_level(None)


@pytest.fixture
def log_lines():
    """Capture formatted log lines"""
    lines = []
    set_log_handler(lambda line: lines.append(line))
    yield lines
    set_log_handler(None)


class FakePage:
    def __init__(self, url, html, links):
        self.url = url
        self._html = html
        self._links = links

    def html(self):
        return self._html

    def links(self):
        return list(self._links)


class FakeSession:
    instances = []

    def __init__(self, html="<html>result</html>", links=None):
        self.html = html
        self.links = links if links is not None else []
        self.visited = []
        self.connects = 0
        self.closed = False
        FakeSession.instances.append(self)

    def connect(self):
        self.connects += 1
        return self

    def navigate(self, url):
        self.visited.append(url)
        return FakePage(url, self.html, self.links)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_session_factory():
    """Session factory that records every session it creates"""
    FakeSession.instances = []
    options = {}

    def factory():
        return FakeSession(**options)

    factory.options = options
    factory.instances = FakeSession.instances
    return factory


@pytest.fixture
def launcher():
    """Browser launcher that records URLs and succeeds"""
    opened = []

    def launch(url):
        opened.append(url)
        return True

    launch.opened = opened
    return launch
