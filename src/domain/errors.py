"""Domain error hierarchy.

Each error carries the HTTP status an upstream API layer should map it to.
Repository implementations translate store-native exceptions into
RepositoryError (or one of its specific sub-kinds) so callers never see
driver exception types.
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base exception for all catalog domain errors."""

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(DomainError):
    """A requested record does not exist."""

    status_code = 404


class ConflictError(DomainError):
    """The operation conflicts with existing state (e.g. a duplicate email)."""

    status_code = 409


class ValidationError(DomainError):
    """Input was rejected by schema or business validation."""

    status_code = 400


class UnauthorizedError(DomainError):
    status_code = 401


class ForbiddenError(DomainError):
    """The caller is known but not allowed to perform the operation."""

    status_code = 403


class UnsupportedOperationError(DomainError):
    """A capability (e.g. soft delete) was requested on a repository lacking it."""

    status_code = 500


class RepositoryError(DomainError):
    """Any store fault: connectivity, malformed identifier, bad query.

    cause holds the original exception; its message is appended to ours.
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, details)


class DuplicateRecordError(RepositoryError, ConflictError):
    """A uniqueness constraint rejected a create or update."""

    status_code = 409


class RecordValidationError(RepositoryError, ValidationError):
    """Store-level schema validation (unknown field, CHECK, NOT NULL) failed."""

    status_code = 400
