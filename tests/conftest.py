"""
Shared fixtures: in-memory database and a scripted LLM client
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from studyhub.database import init_db
from studyhub.crud import create_user
from studyhub.schemas import UserCreate


class FakeLLMClient:
    """Returns scripted replies and records every call"""

    def __init__(self):
        self.responses = []
        self.chat_responses = []
        self.error = None
        self.generate_calls = []
        self.send_calls = []

    def generate(self, prompt, system=None, json_mode=False):
        self.generate_calls.append({"prompt": prompt, "system": system, "json_mode": json_mode})
        if self.error:
            raise self.error
        return self.responses.pop(0) if self.responses else ""

    def send_message(self, prompt, history, system_messages=()):
        self.send_calls.append({
            "prompt": prompt,
            "history": list(history),
            "system_messages": list(system_messages)
        })
        if self.error:
            raise self.error
        return self.chat_responses.pop(0) if self.chat_responses else ""


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def user(db):
    return create_user(db, UserCreate(username="alice"))


@pytest.fixture
def llm():
    return FakeLLMClient()
