from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional
import logging

from pydantic_settings import BaseSettings
from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from opstracker.engine.errors import PersistenceWriteError
from .base import BlobStore
from .models import Base, TrackerBlobModel

logger = logging.getLogger(__name__)


class SqlStoreConfig(BaseSettings):
    """Configuration for the SQL blob store."""
    TRACKER_DB_URL: str = "sqlite:///data/opstracker.db"
    TRACKER_DB_ECHO: bool = False

    model_config = {"env_file": ".env", "extra": "ignore"}


class SqlBlobStore(BlobStore):
    """
    SQLAlchemy-backed blob store: one row per key in tracker_blobs.
    """

    def __init__(self, config: SqlStoreConfig):
        self.config = config
        self._engine = None
        self._session_factory = None

    def connect(self) -> None:
        if self._engine:
            return

        url = make_url(self.config.TRACKER_DB_URL)
        try:
            logger.info(f"Connecting blob store to {url.render_as_string(hide_password=True)}")

            if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)

            self._engine = create_engine(url, echo=self.config.TRACKER_DB_ECHO, pool_pre_ping=True)
            Base.metadata.create_all(self._engine)
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
            logger.info("Blob store ready.")

        except Exception as e:
            logger.error(f"Failed to connect blob store: {e}")
            raise

    def close(self) -> None:
        if self._engine:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Blob store connection closed.")

    def health_check(self) -> bool:
        if not self._engine:
            return False
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.exception("blob store unhealthy")
            return False

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around a series of operations.
        """
        if not self._session_factory:
            raise ConnectionError("Blob store is not connected. Call connect() first.")

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def load(self, key: str) -> Optional[str]:
        with self.get_session() as session:
            row = session.get(TrackerBlobModel, key)
            return row.value if row else None

    def save(self, key: str, blob: str) -> None:
        try:
            with self.get_session() as session:
                session.merge(TrackerBlobModel(key=key, value=blob))
        except (SQLAlchemyError, ConnectionError) as e:
            logger.error(f"Failed to save blob '{key}': {e}")
            raise PersistenceWriteError(f"Failed to save blob '{key}'") from e
