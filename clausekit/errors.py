"""Custom exception hierarchy for clausekit.

All public errors inherit from ClauseKitError so callers can catch the base
class for any clausekit-specific failure.
"""
from __future__ import annotations


class ClauseKitError(Exception):
    """Base exception for all clausekit errors."""


class MissingTableReferenceError(ClauseKitError):
    """Raised when a statement is rendered without its mandatory table clause.

    This is a programming error in the call sequence, never a data error:
    ``get_delete_query`` needs ``from_()``, ``get_insert_query`` and
    ``get_replace_query`` need ``into()``, ``get_update_query`` needs
    ``update()``.

    Args:
        clause: Name of the missing clause (``'from'``, ``'into'`` or
            ``'update'``).
        statement: Statement kind being rendered (``'DELETE'``, ...).
    """

    def __init__(self, clause: str, statement: str) -> None:
        super().__init__(f"No {clause}() in {statement.lower()} query!")
        self.clause = clause
        self.statement = statement


class ProfileConfigError(ClauseKitError):
    """Raised when a DialectProfile is misconfigured.

    Detected at :meth:`DialectProfileBuilder.build` time, before any builder
    uses the profile.

    Args:
        message: Human-readable description.
        field: The profile field that failed validation.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class UnknownDialectError(ClauseKitError):
    """Raised when no builder is registered for a dialect name.

    Args:
        name: The requested dialect name.
        registered: Names that are registered.
    """

    def __init__(self, name: str, registered: list[str]) -> None:
        super().__init__(
            f"Unsupported dialect: '{name}'. Registered dialects: {registered}."
        )
        self.name = name
        self.registered = registered
