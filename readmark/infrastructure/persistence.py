"""Error translation shared by the SQLAlchemy repositories."""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from readmark.exceptions import PersistenceError

logger = structlog.get_logger(__name__)


@contextmanager
def translate_errors(db: Session, operation: str) -> Iterator[None]:
    """Roll back and re-raise database failures as PersistenceError."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("persistence_failed", operation=operation, error=str(e))
        raise PersistenceError(f"{operation} failed: {e}") from e
