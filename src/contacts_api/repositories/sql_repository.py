"""SQLAlchemy implementation of ContactStore.

Works with any database SQLAlchemy supports; SQLite is the default.
Each call opens its own session, so the repository can be shared by
concurrent requests running on worker threads.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from contacts_api.config import get_engine
from contacts_api.entities import ContactEntity

from .tables import Base, ContactRow, utcnow

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_entity(row: ContactRow) -> ContactEntity:
    return ContactEntity(
        id=row.id,
        name=row.name,
        phone=row.phone,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


class SqlContactRepository:
    """Relational implementation backed by the ``contacts`` table.

    This class satisfies the ContactStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, engine: Engine | None = None) -> None:
        """Initialize the SQL contact repository.

        Args:
            engine: SQLAlchemy engine. If None, creates one from settings.
        """
        self._engine = engine or get_engine()
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)

    @classmethod
    def create(cls, database_url: str | None = None, create_schema: bool = True) -> "SqlContactRepository":
        """Factory method to create SqlContactRepository with defaults.

        Args:
            database_url: SQLAlchemy URL. If None, uses settings.
            create_schema: Create the ``contacts`` table if it is missing.

        Returns:
            Configured SqlContactRepository
        """
        repository = cls(engine=get_engine(database_url))
        if create_schema:
            repository.create_schema()
        return repository

    def create_schema(self) -> None:
        """Create the ``contacts`` table if it does not exist."""
        Base.metadata.create_all(self._engine)
        logger.info("Contacts table ready")

    def find_by_id(self, contact_id: int | None) -> ContactEntity | None:
        if contact_id is None:
            return None

        with self._session_factory() as session:
            row = session.get(ContactRow, contact_id)
            return _to_entity(row) if row is not None else None

    def find_page(self, skip: int, take: int) -> tuple[list[ContactEntity], int]:
        with self._session_factory() as session:
            rows = session.scalars(
                select(ContactRow).order_by(ContactRow.id).offset(skip).limit(take)
            ).all()
            total = session.scalar(select(func.count()).select_from(ContactRow)) or 0
            return [_to_entity(row) for row in rows], total

    def insert(self, name: str, phone: str) -> ContactEntity:
        now = utcnow()
        with self._session_factory() as session:
            row = ContactRow(name=name, phone=phone, created_at=now, updated_at=now)
            session.add(row)
            session.commit()
            return _to_entity(row)

    def update(self, contact: ContactEntity) -> ContactEntity | None:
        """Write name, phone and updated_at of an existing contact.

        Returns:
            The stored contact, or None if the row no longer exists
        """
        with self._session_factory() as session:
            row = session.get(ContactRow, contact.id)
            if row is None:
                return None

            row.name = contact.name
            row.phone = contact.phone
            row.updated_at = contact.updated_at
            session.commit()
            return _to_entity(row)

    def delete(self, contact_id: int) -> bool:
        with self._session_factory() as session:
            row = session.get(ContactRow, contact_id)
            if row is None:
                return False

            session.delete(row)
            session.commit()
            return True

    def health_check(self) -> bool:
        """Check if the database is reachable.

        Returns:
            True if healthy, False otherwise
        """
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("Database health check failed: %s", e)
            return False

    def dispose(self) -> None:
        """Close all pooled connections."""
        self._engine.dispose()

    @property
    def engine(self) -> Engine:
        """Get the SQLAlchemy engine."""
        return self._engine
