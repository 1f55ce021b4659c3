"""Shared test fixtures for request-authz tests."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pytest
from sqlalchemy import Boolean, ForeignKey, Integer, String, create_engine
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    Session,
    mapped_column,
    relationship,
    sessionmaker,
)

from request_authz.component._component import AuthorizationComponent
from request_authz.config._config import ComponentConfig
from request_authz.lifecycle import Controller
from request_authz.request import RequestContext
from request_authz.testing import MockIdentity, MockService

# Import fixtures from request_authz.testing for test discovery.
from request_authz.testing._fixtures import (  # noqa: F401
    authz_registry,
    authz_service,
    isolated_authz_state,
)

# ---------------------------------------------------------------------------
# Test models
# ---------------------------------------------------------------------------


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    role: Mapped[str] = mapped_column(String(50), default="viewer")

    articles: Mapped[list[Article]] = relationship("Article", back_populates="owner")


class Article(Base):
    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    is_published: Mapped[bool] = mapped_column(Boolean, default=False)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"))

    owner: Mapped[User] = relationship("User", back_populates="articles")


# ---------------------------------------------------------------------------
# Actors and controllers
# ---------------------------------------------------------------------------


@dataclass
class Actor:
    """Plain authenticated principal, as an authentication layer would provide."""

    id: int
    role: str = "viewer"


class ArticlesController(Controller):
    model = Article


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def engine():
    """Create an in-memory SQLite engine with all tables."""
    eng = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(eng)
    return eng


@pytest.fixture()
def session(engine):
    """Provide a transactional session that rolls back after each test."""
    factory = sessionmaker(bind=engine)
    sess = factory()
    try:
        yield sess
    finally:
        sess.rollback()
        sess.close()


@pytest.fixture()
def sample_data(session: Session) -> dict[str, list]:
    """Seed the database with sample data for testing."""
    alice = User(id=1, name="Alice", role="admin")
    bob = User(id=2, name="Bob", role="editor")
    session.add_all([alice, bob])

    article1 = Article(id=1, title="Published", is_published=True, owner_id=1)
    article2 = Article(id=2, title="Draft", is_published=False, owner_id=1)
    article3 = Article(id=3, title="Bob's", is_published=True, owner_id=2)
    session.add_all([article1, article2, article3])

    session.flush()
    return {"users": [alice, bob], "articles": [article1, article2, article3]}


@pytest.fixture()
def article() -> Article:
    return Article(id=10, title="Detached", is_published=True, owner_id=1)


@pytest.fixture()
def make_component() -> Callable[..., AuthorizationComponent]:
    """Factory building a component over a controller with the given request state.

    ``identity`` and ``service`` default to permissive doubles; pass ``None``
    to leave the attribute out of the request.
    """
    _unset: Any = object()

    def _make(
        action: str = "view",
        *,
        identity: Any = _unset,
        service: Any = _unset,
        config: ComponentConfig | None = None,
        controller_cls: type[Controller] = ArticlesController,
    ) -> AuthorizationComponent:
        cfg = config if config is not None else ComponentConfig()
        attributes: dict[str, Any] = {}
        identity = MockIdentity() if identity is _unset else identity
        service = MockService() if service is _unset else service
        if identity is not None:
            attributes[cfg.identity_attribute] = identity
        if service is not None:
            attributes[cfg.service_attribute] = service

        request = RequestContext(attributes=attributes, params={"action": action})
        controller = controller_cls(request)
        component = AuthorizationComponent(controller, cfg)
        controller.add_component(component)
        return component

    return _make
