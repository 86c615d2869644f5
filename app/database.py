"""Database connection and session management."""

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.config import settings


def _build_engine(database_url: str, echo: bool = False):
    """Create a SQLAlchemy engine with appropriate configuration.

    Pooled connections are checked before use so a dropped database
    connection surfaces as a fresh connect instead of a stale cursor.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(
        database_url,
        connect_args=connect_args,
        echo=echo,
        pool_pre_ping=True,
    )


engine = _build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def get_db():
    """Yield a request-scoped database session, closing it on every exit."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
