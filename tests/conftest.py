"""Pytest configuration and fixtures."""

from collections.abc import Generator

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from enrollment.application.identity.commands.create_user_command import CreateUserCommand
from enrollment.application.identity.commands.create_user_handler import CreateUserHandler
from enrollment.application.identity.queries.does_user_exist import DoesUserExistHandler
from enrollment.database import Base, build_engine
from enrollment.infrastructure import models  # noqa: F401
from enrollment.infrastructure.jobs.memory_queue import InMemoryJobQueue
from enrollment.infrastructure.memory import InMemoryUserLookup, InMemoryUserStore
from tests.factories import make_command, make_handler

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture
def command() -> CreateUserCommand:
    return make_command()


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def job_queue() -> InMemoryJobQueue:
    return InMemoryJobQueue()


@pytest.fixture
def uniqueness_checker(store: InMemoryUserStore) -> DoesUserExistHandler:
    return DoesUserExistHandler(InMemoryUserLookup(store))


@pytest.fixture
def handler(store: InMemoryUserStore, job_queue: InMemoryJobQueue) -> CreateUserHandler:
    return make_handler(store, job_queue)


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database with all tables for each test."""
    test_engine = build_engine(TEST_DATABASE_URL)
    Base.metadata.create_all(bind=test_engine)
    try:
        yield test_engine
    finally:
        Base.metadata.drop_all(bind=test_engine)
        test_engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
