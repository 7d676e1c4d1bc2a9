"""Engine and request-scoped sessions."""
from collections.abc import Generator

from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool

from productiviflow.config import settings

engine = create_engine(
    str(settings.DATABASE_URL),
    poolclass=QueuePool,
    pool_pre_ping=True,
    pool_size=10,
    max_overflow=20,
    pool_recycle=3600,
)

# Services keep using users and tasks after commit; completion reloads what it changes in SQL
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    """One session per request, rolled back if the handler raises."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        logger.exception("Request failed inside a database session")
        db.rollback()
        raise
    finally:
        db.close()
