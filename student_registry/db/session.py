from __future__ import annotations

from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from student_registry.core.errors import TransactionFailure
from student_registry.core.logging import get_logger
from student_registry.core.settings import settings

connect_args = (
    {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
)

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request, closed at the end."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """Run the block as a single unit of work.

    Commits when the block finishes, rolls back on any exception. Storage
    errors are re-raised as ``TransactionFailure``; everything else (domain
    errors included) is re-raised untouched after the rollback.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        get_logger().error("student.transaction_failed", error=str(exc))
        raise TransactionFailure(str(exc)) from exc
    except BaseException:
        db.rollback()
        raise
