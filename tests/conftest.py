"""Pytest configuration and shared fixtures for BudgetBuddy tests.

Every test gets its own SQLite file under ``tmp_path`` so repositories,
services and the CLI never touch a real data directory.
"""

from __future__ import annotations

import pytest
from sqlmodel import select

from budgetbuddy.config import TestConfig
from budgetbuddy.context import AppContext, create_app_context
from budgetbuddy.models import User

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def app_config(tmp_path) -> TestConfig:
    """Configuration pointing at a throwaway data directory."""

    return TestConfig(data_dir=tmp_path)


@pytest.fixture
def app_context(app_config) -> AppContext:
    """Fully wired context over a fresh schema, nobody signed in."""

    return create_app_context(app_config)


@pytest.fixture
def session_factory(app_context):
    """Session factory shared with the context's repositories."""

    return app_context.session_factory


@pytest.fixture
def expense_repo(app_context):
    return app_context.expense_repo


@pytest.fixture
def budget_repo(app_context):
    return app_context.budget_repo


@pytest.fixture
def goal_repo(app_context):
    return app_context.goal_repo


# =============================================================================
# Users
# =============================================================================


def _create_user(session_factory, username: str) -> User:
    with session_factory() as session:
        existing = session.exec(select(User).where(User.username == username)).first()
        if existing:
            session.expunge(existing)
            return existing
        user = User(username=username, password_hash="dummy-hash")
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


@pytest.fixture
def user(session_factory) -> User:
    """Default owner for scoped rows."""

    return _create_user(session_factory, "tester")


@pytest.fixture
def other_user(session_factory) -> User:
    """A second owner used to check user scoping."""

    return _create_user(session_factory, "someone-else")


@pytest.fixture
def signed_in_context(app_context, user) -> AppContext:
    """Context with ``user`` already signed in."""

    app_context.user = user
    return app_context
