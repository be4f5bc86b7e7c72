from contextlib import contextmanager
from typing import Iterator, Optional
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from parkspot.config import DATABASE_URL, DB_POOL_PRE_PING
from parkspot.logger import get_logger

Base = declarative_base()
logger = get_logger(__name__)


def create_db_engine(database_url: str, **engine_kwargs) -> Engine:
    """Build an engine; SQLite connections may be shared across request threads."""
    if database_url.startswith("sqlite"):
        engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        engine_kwargs.setdefault("pool_pre_ping", DB_POOL_PRE_PING)
        engine_kwargs.setdefault("pool_recycle", 300)
    return create_engine(database_url, **engine_kwargs)


class DatabaseClient:
    """Owns the engine and session factory used by the booking services.

    Constructed once by the application (or a test) and passed to whatever
    needs database access, instead of living in a module-level global.
    """

    def __init__(self, database_url: Optional[str] = None, engine: Optional[Engine] = None, **engine_kwargs):
        self.database_url = database_url or DATABASE_URL
        self.engine = engine or create_db_engine(self.database_url, **engine_kwargs)
        self.session_factory = sessionmaker(
            bind=self.engine, autocommit=False, autoflush=False, expire_on_commit=False
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Run a unit of work: commit on success, roll back and re-raise on error."""
        db = self.session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def create_all(self) -> None:
        # Models must be imported so their tables are registered on Base
        from parkspot.models import booking_model, property_model, user_model  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables verified/created")

    def ping(self) -> None:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def dispose(self) -> None:
        self.engine.dispose()
