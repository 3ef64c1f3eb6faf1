"""Error taxonomy shared by services, repositories and the CLI."""

from __future__ import annotations


class BudgetBuddyError(Exception):
    """Base class for every domain-level failure."""


class InvalidInput(BudgetBuddyError, ValueError):
    """Input rejected before any persistence call was made."""


class InvalidAmount(InvalidInput):
    """Amount is missing, non-numeric, non-finite or not strictly positive."""


class InvalidCategory(InvalidInput):
    """Category is not one of the closed set of expense categories."""


class AlreadyCompleted(InvalidInput):
    """Deposit attempted on a savings goal that has already reached its target."""


class Unauthenticated(BudgetBuddyError):
    """No user is signed in for a data operation."""


class PersistenceFailure(BudgetBuddyError):
    """The storage call failed; the underlying error is kept as ``__cause__``."""


class ConstraintViolation(PersistenceFailure):
    """A required field was missing or a unique/foreign key constraint was broken."""


class NotFound(PersistenceFailure, LookupError):
    """Record does not exist or is not owned by the calling user."""


__all__ = [
    "AlreadyCompleted",
    "BudgetBuddyError",
    "ConstraintViolation",
    "InvalidAmount",
    "InvalidCategory",
    "InvalidInput",
    "NotFound",
    "PersistenceFailure",
    "Unauthenticated",
]
