"""Shared pytest fixtures for Title Rating Finder tests."""

import json
import pytest
from pathlib import Path

from finder.config import FinderConfig


@pytest.fixture
def fixtures_dir():
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def api_responses_dir(fixtures_dir):
    """Return path to API response fixtures."""
    return fixtures_dir / "api_responses"


@pytest.fixture
def load_response(api_responses_dir):
    """Load an upstream payload fixture by file stem."""
    def _load(name):
        with open(api_responses_dir / f'{name}.json') as f:
            return json.load(f)
    return _load


@pytest.fixture
def tmdb_config():
    """TMDB configuration with a test key."""
    return FinderConfig(provider='tmdb', api_key='test_tmdb_key')


@pytest.fixture
def omdb_config():
    """OMDb configuration with a test key."""
    return FinderConfig(provider='omdb', api_key='test_omdb_key')


@pytest.fixture
def clear_env_vars(monkeypatch):
    """Clear all finder-related environment variables."""
    for key in ['TMDB_API_KEY', 'OMDB_API_KEY', 'FINDER_PROVIDER',
                'FINDER_SUGGESTION_CAP', 'FINDER_FALLBACK_CAP', 'FINDER_TIMEOUT']:
        monkeypatch.delenv(key, raising=False)


class FakeTimer:
    """threading.Timer stand-in driven by the test."""

    instances = []

    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False
        FakeTimer.instances.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if self.started and not self.cancelled:
            self.function(*self.args, **self.kwargs)


@pytest.fixture
def fake_timer():
    """Fresh FakeTimer class with an empty instance list."""
    FakeTimer.instances = []
    return FakeTimer
