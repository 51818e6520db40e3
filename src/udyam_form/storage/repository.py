"""
Submission sink backed by SQLAlchemy.

The sink is optional: without a DATABASE_URL the API acknowledges valid
submissions without storing them.
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from udyam_form.config import UdyamFormConfig, get_config
from udyam_form.errors import SinkUnavailable
from udyam_form.models.submission import SubmissionRecord
from udyam_form.storage.models import Base, UdyamSubmission

logger = logging.getLogger(__name__)


class SubmissionRepository:
    """Stores validated submission records."""

    def __init__(self, database_url: str):
        self.database_url = database_url
        self._engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @classmethod
    def from_config(cls, config: UdyamFormConfig | None = None) -> "SubmissionRepository | None":
        """Build the sink, or return None when no database is configured."""
        config = config or get_config()
        if not config.database_url:
            return None
        return cls(config.database_url)

    def _get_session_factory(self) -> sessionmaker:
        if self._session_factory is None:
            try:
                self._engine = create_engine(self.database_url, pool_pre_ping=True)
                Base.metadata.create_all(self._engine)
            except (SQLAlchemyError, ImportError) as e:
                self._engine = None
                raise SinkUnavailable(f"Database unavailable: {type(e).__name__}") from e
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory

    def save(self, record: SubmissionRecord) -> str:
        """
        Store a record and return its generated id.

        Raises:
            SinkUnavailable: If the database cannot be reached or rejects the row.
        """
        session = self._get_session_factory()()
        try:
            row = UdyamSubmission(**record.model_dump(by_alias=False))
            session.add(row)
            session.commit()
            logger.info(f"Stored submission {row.id}")
            return row.id
        except SQLAlchemyError as e:
            session.rollback()
            raise SinkUnavailable(f"Failed to store submission: {type(e).__name__}") from e
        finally:
            session.close()

    def get(self, submission_id: str) -> UdyamSubmission | None:
        session = self._get_session_factory()()
        try:
            return session.get(UdyamSubmission, submission_id)
        finally:
            session.close()
