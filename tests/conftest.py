"""Shared pytest fixtures and configuration."""

import os

# Set test environment variables before the app reads its settings
os.environ.setdefault("SYNC_DATABASE_URL", "sqlite://")
os.environ["IDENTITY_SIGNING_SECRET"] = "test-identity-secret"
os.environ.setdefault("LOG_FORMAT", "text")

from decimal import Decimal
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from estatemls.db import Base, get_db, import_all_models
from estatemls.main import app
from estatemls.models import Property, PropertyMedia, PropertyStatus, User, UserRole
from tests.utils.factories import create_property_data, create_user_data

import_all_models()


@pytest.fixture
def engine():
    """Fresh in-memory database per test; one shared connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    """API client wired to the test database."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db) -> Callable[..., User]:
    def _make(role: UserRole = UserRole.USER, **overrides) -> User:
        user = User(**create_user_data(role=role, **overrides))
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def make_property(db) -> Callable[..., Property]:
    def _make(
        owner: User,
        status: PropertyStatus = PropertyStatus.PUBLISHED,
        with_media: bool = True,
        **overrides,
    ) -> Property:
        overrides.setdefault("price", Decimal("100000.00"))
        prop = Property(**create_property_data(owner_id=owner.id, status=status, **overrides))
        if with_media:
            prop.media.append(PropertyMedia(file_path="properties/cover.jpg", is_primary=True))
        db.add(prop)
        db.commit()
        return prop

    return _make


@pytest.fixture
def buyer(make_user) -> User:
    return make_user(first_name="Jane", last_name="Buyer")


@pytest.fixture
def agent(make_user) -> User:
    return make_user(role=UserRole.AGENT)


@pytest.fixture
def admin(make_user) -> User:
    return make_user(role=UserRole.ADMIN)


@pytest.fixture
def listing(make_property, agent) -> Property:
    """A published 100000.00 listing owned and managed by ``agent``."""
    return make_property(agent)
