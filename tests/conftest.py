# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("EVENT_BUS_BACKEND", "memory")

from hottakes.api.v1.dependencies import get_event_bus_dep
from hottakes.core.security import create_access_token, hash_password
from hottakes.db.session import Base
from hottakes.db.session import get_db as app_get_session
from hottakes.main import app as fastapi_app
from hottakes.models import Post, User, UserRole
from hottakes.services.events import InMemoryEventBus

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "Sup3r-Secret-Pass!"


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    """Session bound to a fresh in-memory database.

    Services commit and roll back on their own, so tests run against real
    transactions instead of an outer savepoint.
    """
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def file_engine(tmp_path: Path) -> Generator[Engine, None, None]:
    """File-backed SQLite engine usable from several threads at once.

    Every transaction starts with BEGIN IMMEDIATE so concurrent writers
    queue on the database lock instead of failing on upgrade.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'hottakes-test.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record) -> None:  # pragma: no cover
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn) -> None:  # pragma: no cover
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def file_sessions(file_engine: Engine) -> Callable[..., Session]:
    """Return a factory for independent sessions on the file-backed engine."""
    return sessionmaker(bind=file_engine, autocommit=False, autoflush=False)


@pytest.fixture()
def interleaved_sessions(tmp_path: Path) -> Generator[Callable[..., Session], None, None]:
    """Session factory on a file-backed engine with the driver's default locking.

    Reads take no lasting lock, so concurrent requests really see the same
    row before either of them writes.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'hottakes-race.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    finally:
        engine.dispose()


@pytest.fixture()
def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture()
def published(event_bus: InMemoryEventBus) -> list[tuple[str, dict[str, Any]]]:
    """Collect every event published on the test bus."""
    events: list[tuple[str, dict[str, Any]]] = []
    for topic in ("post_added", "post_updated", "post_removed", "mod_message"):
        event_bus.subscribe(topic, lambda name, payload: events.append((name, dict(payload))))
    return events


@pytest.fixture()
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    event_bus: InMemoryEventBus,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_event_bus_dep] = lambda: event_bus
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_event_bus_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(scope="session")
def password_hash() -> str:
    """Hash the shared test password once; argon2id is deliberately slow."""
    return hash_password(TEST_PASSWORD)


def make_user(
    session: Session,
    username: str,
    password_hash: str,
    role: UserRole = UserRole.USER,
) -> User:
    user = User(username=username, password_hash=password_hash, role=role)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def make_post(session: Session, owner: User, content: str = "Pineapple belongs on pizza") -> Post:
    post = Post(owner_id=owner.id, content=content, agree_count=0, disagree_count=0)
    session.add(post)
    session.commit()
    session.refresh(post)
    return post


def bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def test_user(db_session: Session, password_hash: str) -> User:
    """Create and return a persisted regular user."""
    return make_user(db_session, "alice", password_hash)


@pytest.fixture()
def other_user(db_session: Session, password_hash: str) -> User:
    """Create and return a second regular user."""
    return make_user(db_session, "bob", password_hash)


@pytest.fixture()
def moderator(db_session: Session, password_hash: str) -> User:
    return make_user(db_session, "mod_mia", password_hash, UserRole.MODERATOR)


@pytest.fixture()
def admin(db_session: Session, password_hash: str) -> User:
    return make_user(db_session, "admin_ann", password_hash, UserRole.ADMIN)


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return bearer(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return bearer(other_user)


@pytest.fixture()
def moderator_token(moderator: User) -> dict[str, str]:
    return bearer(moderator)


@pytest.fixture()
def admin_token(admin: User) -> dict[str, str]:
    return bearer(admin)


@pytest.fixture()
def test_post(db_session: Session, other_user: User) -> Post:
    """Create a baseline post owned by the secondary user."""
    return make_post(db_session, other_user)


@pytest.fixture()
def user_factory(db_session: Session, password_hash: str) -> Callable[..., User]:
    """Return a function creating additional committed users."""

    def _create(username: str, role: UserRole = UserRole.USER) -> User:
        return make_user(db_session, username, password_hash, role)

    return _create


@pytest.fixture()
def post_factory(db_session: Session) -> Callable[..., Post]:
    """Return a function creating committed posts."""

    def _create(owner: User, content: str = "Pineapple belongs on pizza") -> Post:
        return make_post(db_session, owner, content)

    return _create


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    return bearer
