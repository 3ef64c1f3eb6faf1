"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import BaseConfig
from .errors import Unauthenticated
from .infra.database import SessionFactory, create_db_engine, create_session_factory, init_database
from .infra.repositories import (
    SQLModelBudgetRepository,
    SQLModelExpenseRepository,
    SQLModelSavingsGoalRepository,
)
from .logging_config import get_logger
from .models.user import User
from .services import auth

logger = get_logger(__name__)


@dataclass
class AppContext:
    """Configuration, repositories and the signed-in user for one session."""

    config: BaseConfig
    session_factory: SessionFactory

    expense_repo: SQLModelExpenseRepository
    budget_repo: SQLModelBudgetRepository
    goal_repo: SQLModelSavingsGoalRepository
    user: Optional[User] = None

    def current_user(self) -> Optional[User]:
        """The signed-in user, or ``None``."""
        return self.user

    def sign_in(self, username: str, password: str) -> User:
        """Authenticate and remember the user; raises ``Unauthenticated`` on bad credentials."""
        user = auth.authenticate(
            username=username, password=password, session_factory=self.session_factory
        )
        if user is None:
            raise Unauthenticated("Invalid username or password")
        self.user = user
        logger.info(f"Signed in: {user.username}")
        return user

    def sign_out(self) -> None:
        self.user = None

    def require_user_id(self) -> int:
        """Return the current user id or raise if nobody is signed in."""

        if self.user is None or self.user.id is None:
            raise Unauthenticated("Sign in to continue")
        return self.user.id


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    return AppContext(
        config=config,
        session_factory=session_factory,
        expense_repo=SQLModelExpenseRepository(session_factory),
        budget_repo=SQLModelBudgetRepository(session_factory),
        goal_repo=SQLModelSavingsGoalRepository(session_factory),
    )
