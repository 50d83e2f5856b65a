"""The uniform error boundary between SQLAlchemy and the domain layer."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.domain.errors import (
    DomainError,
    DuplicateRecordError,
    RecordValidationError,
    RepositoryError,
)

logger = logging.getLogger(__name__)

_UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == _UNIQUE_VIOLATION_SQLSTATE:
        return True
    message = str(orig).lower()
    return "unique" in message or "duplicate key" in message


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Wrap store faults raised in the block as RepositoryError.

    Domain errors pass through untouched.  Unique violations become
    DuplicateRecordError, other integrity violations (CHECK, NOT NULL,
    foreign key) become RecordValidationError.  Malformed identifiers
    (ValueError) and connectivity failures (OSError) become RepositoryError.
    """
    try:
        yield
    except DomainError:
        raise
    except IntegrityError as exc:
        if is_unique_violation(exc):
            logger.warning("Duplicate record while %s: %s", action, exc.orig)
            raise DuplicateRecordError(f"Error {action}", exc.orig) from exc
        logger.warning("Integrity violation while %s: %s", action, exc.orig)
        raise RecordValidationError(f"Error {action}", exc.orig) from exc
    except (SQLAlchemyError, ValueError, OSError) as exc:
        logger.warning("Store fault while %s: %s", action, exc)
        raise RepositoryError(f"Error {action}", exc) from exc
