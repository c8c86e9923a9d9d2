"""
Shared test fixtures.

The application is exercised against an in-memory SQLite database, with the
authenticated user and the AI clients replaced through FastAPI dependency
overrides. Environment variables are set before any application module is
imported because the database engine and the rate limiter read them at import
time.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mock_interview.main import app
from mock_interview.database import get_db_session
from mock_interview.models.user_models import Base
from mock_interview.core.ai_client_manager import get_ai_client_manager
from mock_interview.services.auth.firebase_auth import get_current_user_uid, get_websocket_user_uid

TEST_UID = "user-1"
OTHER_UID = "user-2"


def completion(content):
    """Build an object shaped like an OpenAI chat completion."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeCompletions:
    """Records calls and replays queued replies; an Exception reply is raised."""

    def __init__(self):
        self.replies = []
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if not self.replies:
            raise ConnectionError("AI service is not running")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return completion(reply)


class FakeAIClient:
    def __init__(self):
        self.completions = FakeCompletions()
        self.chat = SimpleNamespace(completions=self.completions)

    def reply_with(self, *replies):
        self.completions.replies.extend(replies)


class FakeAIClientManager:
    def __init__(self):
        self.question_client = FakeAIClient()
        self.analysis_client = FakeAIClient()
        self.doubt_client = FakeAIClient()

    def get_question_generation_client(self):
        return self.question_client

    def get_answer_analysis_client(self):
        return self.analysis_client

    def get_doubt_resolution_client(self):
        return self.doubt_client


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def ai_manager():
    return FakeAIClientManager()


@pytest.fixture
def current_user():
    """Mutable holder for the UID the fake auth dependency returns."""
    return {"uid": TEST_UID}


@pytest.fixture
def client(db_session, ai_manager, current_user):
    app.dependency_overrides[get_db_session] = lambda: db_session
    app.dependency_overrides[get_ai_client_manager] = lambda: ai_manager
    app.dependency_overrides[get_current_user_uid] = lambda: current_user["uid"]
    app.dependency_overrides[get_websocket_user_uid] = lambda: current_user["uid"]
    # Not used as a context manager so the lifespan (create_tables) does not run
    test_client = TestClient(app)
    try:
        yield test_client
    finally:
        app.dependency_overrides.clear()
