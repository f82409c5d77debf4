"""
Shared pytest fixtures for the SkillSync test suite.

The environment is prepared before the Flask app is imported: an in-memory
SQLite database, no Gemini credential, and a config path that does not
exist so defaults apply.
"""

import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.pop("GEMINI_API_KEY", None)
os.environ["SKILLSYNC_CONFIG"] = os.path.join(tempfile.gettempdir(), "skillsync-tests-no-config.json")

import pytest

from career_assessment import DOMAINS
from gemini_service import ExternalServiceError
from score_ledger import ScoreLedger


class FakeGeminiClient:
    """Stands in for GeminiClient; returns a canned reply or raises"""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def generate(self, prompt, generation_config=None):
        self.calls.append((prompt, generation_config))
        if self.error is not None:
            raise self.error
        return self.reply


class MemoryStore:
    """Dict-backed stand-in for models.ScopedStore"""

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.writes = 0

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, value):
        self.data[key] = value
        self.writes += 1


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def ledger():
    return ScoreLedger(DOMAINS)


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def failing_client():
    return FakeGeminiClient(error=ExternalServiceError("connection reset"))


@pytest.fixture
def flask_app():
    from app import app
    import routes

    app.config["TESTING"] = True
    routes.rate_limit_store.clear()
    yield app
    routes.rate_limit_store.clear()


@pytest.fixture
def client(flask_app):
    return flask_app.test_client()
