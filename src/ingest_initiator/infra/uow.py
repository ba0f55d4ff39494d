"""
Unit of Work boundary for the ingest initiator.

The initiator only reads from the database, but sessions still go through
this context manager so connections are always rolled back and closed.
"""

from __future__ import annotations

import contextlib
from collections.abc import Generator

from sqlalchemy.orm import Session, sessionmaker


@contextlib.contextmanager
def session(factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Database session context manager for CLI runs.

    - Opens a DB session from ``factory``
    - Yields it for use
    - On success: commits the transaction
    - On exception: rolls back and re-raises the exception
    - Always closes the session

    Usage:
        with session(SessionLocal) as db:
            requests = SqlRequestStore(db).get_valid_requests(from_date, to_date)
    """
    db = factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
