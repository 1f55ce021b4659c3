"""Tests for policy/_resolver.py — PolicyResolver checks and scopes."""

from __future__ import annotations

import logging

import pytest
from sqlalchemy import literal_column, select

from request_authz.config._config import PolicyConfig
from request_authz.exceptions import NoPolicyError
from request_authz.policy._registry import PolicyRegistry
from request_authz.policy._resolver import PolicyResolver, resource_type_of
from tests.conftest import Actor, Article, User


def _owner(actor, article) -> bool:
    return article.owner_id == actor.id


def _published(actor, article) -> bool:
    return article.is_published


def _own_articles(actor, stmt):
    return stmt.where(Article.owner_id == actor.id)


def _published_articles(actor, stmt):
    return stmt.where(Article.is_published == True)  # noqa: E712


class TestResourceTypeOf:
    def test_instance(self, article):
        assert resource_type_of(article) is Article

    def test_class_is_its_own_key(self):
        assert resource_type_of(Article) is Article

    def test_builtin(self):
        assert resource_type_of([1, 2]) is list


class TestCan:
    def test_allowed(self, article):
        registry = PolicyRegistry()
        registry.register(Article, "edit", _owner, name="owner", description="")

        assert PolicyResolver(registry).can(Actor(id=1), "edit", article) is True

    def test_denied(self, article):
        registry = PolicyRegistry()
        registry.register(Article, "edit", _owner, name="owner", description="")

        assert PolicyResolver(registry).can(Actor(id=2), "edit", article) is False

    def test_policies_are_ored(self):
        registry = PolicyRegistry()
        registry.register(Article, "view", _owner, name="owner", description="")
        registry.register(Article, "view", _published, name="published", description="")
        draft = Article(id=1, title="d", is_published=False, owner_id=1)
        public = Article(id=2, title="p", is_published=True, owner_id=1)
        resolver = PolicyResolver(registry)

        assert resolver.can(Actor(id=2), "view", public) is True
        assert resolver.can(Actor(id=2), "view", draft) is False
        assert resolver.can(Actor(id=1), "view", draft) is True

    def test_missing_policy_denies_by_default(self, article):
        assert PolicyResolver(PolicyRegistry()).can(Actor(id=1), "view", article) is False

    def test_missing_policy_raises_when_configured(self, article):
        resolver = PolicyResolver(PolicyRegistry(), PolicyConfig(on_missing_policy="raise"))

        with pytest.raises(NoPolicyError) as exc_info:
            resolver.can(Actor(id=1), "view", article)

        assert exc_info.value.resource_type == "Article"
        assert exc_info.value.action == "view"

    def test_model_level_check(self):
        registry = PolicyRegistry()
        registry.register(
            Article,
            "create",
            lambda actor, model: actor.role == "editor",
            name="editors_create",
            description="",
        )
        resolver = PolicyResolver(registry)

        assert resolver.can(Actor(id=1, role="editor"), "create", Article) is True
        assert resolver.can(Actor(id=1), "create", Article) is False

    def test_uses_global_registry_by_default(self, isolated_authz_state, article):
        _, registry = isolated_authz_state
        registry.register(Article, "view", _published, name="published", description="")

        assert PolicyResolver().can(Actor(id=1), "view", article) is True

    def test_logs_when_enabled(self, article, caplog):
        registry = PolicyRegistry()
        registry.register(Article, "edit", _owner, name="owner", description="")
        resolver = PolicyResolver(registry, PolicyConfig(log_policy_decisions=True))

        with caplog.at_level(logging.DEBUG, logger="request_authz"):
            resolver.can(Actor(id=1), "edit", article)

        assert any("Policy evaluation: Article.edit" in r.message for r in caplog.records)
        assert any("['owner']" in r.message for r in caplog.records)

    def test_logs_missing_policy_warning(self, article, caplog):
        resolver = PolicyResolver(PolicyRegistry(), PolicyConfig(log_policy_decisions=True))

        with caplog.at_level(logging.WARNING, logger="request_authz"):
            resolver.can(Actor(id=1), "edit", article)

        assert any("deny-by-default" in r.message for r in caplog.records)

    def test_silent_by_default(self, article, caplog):
        with caplog.at_level(logging.DEBUG, logger="request_authz"):
            PolicyResolver(PolicyRegistry()).can(Actor(id=1), "edit", article)

        assert [r for r in caplog.records if r.name.startswith("request_authz")] == []


class TestApplyScopeStatement:
    def test_scope_filters_rows(self, session, sample_data):
        registry = PolicyRegistry()
        registry.register_scope(Article, "index", _own_articles, name="own", description="")

        stmt = PolicyResolver(registry).apply_scope(Actor(id=2), "index", select(Article))
        titles = session.execute(stmt).scalars().all()

        assert [a.title for a in titles] == ["Bob's"]

    def test_scopes_are_chained(self, session, sample_data):
        registry = PolicyRegistry()
        registry.register_scope(Article, "index", _own_articles, name="own", description="")
        registry.register_scope(
            Article, "index", _published_articles, name="published", description=""
        )

        stmt = PolicyResolver(registry).apply_scope(Actor(id=1), "index", select(Article))
        ids = session.execute(stmt).scalars().all()

        assert [a.id for a in ids] == [1]

    def test_missing_scope_returns_no_rows(self, session, sample_data):
        stmt = PolicyResolver(PolicyRegistry()).apply_scope(Actor(id=1), "index", select(Article))

        assert session.execute(stmt).scalars().all() == []

    def test_missing_scope_raises_when_configured(self):
        resolver = PolicyResolver(PolicyRegistry(), PolicyConfig(on_missing_policy="raise"))

        with pytest.raises(NoPolicyError):
            resolver.apply_scope(Actor(id=1), "index", select(Article))

    def test_each_entity_scoped(self, session, sample_data):
        registry = PolicyRegistry()
        registry.register_scope(Article, "index", _published_articles, name="pub", description="")
        registry.register_scope(
            User, "index", lambda actor, stmt: stmt.where(User.id == actor.id), name="me", description=""
        )

        stmt = select(Article, User).join(User, Article.owner_id == User.id)
        stmt = PolicyResolver(registry).apply_scope(Actor(id=2), "index", stmt)
        rows = session.execute(stmt).all()

        assert [(a.title, u.name) for a, u in rows] == [("Bob's", "Bob")]

    def test_entity_scoped_once_for_many_columns(self, session, sample_data):
        calls: list[str] = []

        def owned_through_user(actor, stmt):
            calls.append("scope")
            return stmt.join(User, Article.owner_id == User.id).where(User.id == actor.id)

        registry = PolicyRegistry()
        registry.register_scope(Article, "index", owned_through_user, name="own", description="")

        stmt = select(Article.id, Article.title).order_by(Article.id)
        stmt = PolicyResolver(registry).apply_scope(Actor(id=1), "index", stmt)
        rows = session.execute(stmt).all()

        assert calls == ["scope"]
        assert [tuple(row) for row in rows] == [(1, "Published"), (2, "Draft")]

    def test_missing_scope_for_many_columns(self, session, sample_data):
        stmt = select(Article.id, Article.title)
        scoped = PolicyResolver(PolicyRegistry()).apply_scope(Actor(id=1), "index", stmt)

        assert session.execute(scoped).all() == []

    def test_column_only_statement_untouched(self):
        stmt = select(literal_column("1"))
        scoped = PolicyResolver(PolicyRegistry()).apply_scope(Actor(id=1), "index", stmt)
        # No mapped entity in the projection means nothing to scope
        assert str(scoped) == str(stmt)


class TestApplyScopePlainResource:
    def test_registered_scope_runs(self):
        registry = PolicyRegistry()
        registry.register_scope(
            list,
            "index",
            lambda actor, items: [i for i in items if i.owner_id == actor.id],
            name="own",
            description="",
        )
        items = [Article(id=1, title="a", owner_id=1), Article(id=2, title="b", owner_id=2)]

        result = PolicyResolver(registry).apply_scope(Actor(id=2), "index", items)

        assert [a.id for a in result] == [2]

    def test_missing_scope_raises(self):
        with pytest.raises(NoPolicyError) as exc_info:
            PolicyResolver(PolicyRegistry()).apply_scope(Actor(id=1), "index", [1, 2])

        assert exc_info.value.resource_type == "list"
