"""Shared fixtures for the llms.txt test suite.

Forum content lives in an in-memory SQLite database created fresh for every
test, and the cache store is a fakeredis client, so no external services are
needed.
"""

import os

# Keep app imports away from the production database before anything is imported.
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["LLMS_TXT_ENABLED"] = "true"

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from llms_txt.api.deps import get_cache_store, get_clock, get_config, get_db
from llms_txt.core.config import LlmsTxtConfig
from llms_txt.core.redis import RedisConnection
from llms_txt.main import app
from llms_txt.services.selection import ContentSelector

from tests.factories import NOW


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(engine):
    """Per-test database session."""
    with Session(engine) as session:
        yield session


@pytest.fixture()
def clock():
    return lambda: NOW


@pytest.fixture()
def config() -> LlmsTxtConfig:
    return LlmsTxtConfig(
        base_url="https://forum.example.com",
        site_title="Example Forum",
        site_description="Questions and answers about examples",
        min_views=0,
    )


@pytest.fixture()
def selector(db, clock) -> ContentSelector:
    return ContentSelector(db, clock=clock)


@pytest.fixture()
def store() -> RedisConnection:
    return RedisConnection(client=fakeredis.FakeAsyncRedis(decode_responses=True))


@pytest.fixture()
def client(db, clock, config, store):
    """FastAPI TestClient with the session, clock, config and cache store overridden."""

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_config] = lambda: config
    app.dependency_overrides[get_cache_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
