"""SQL-backed submission store (PostgreSQL in production, SQLite in tests)."""

import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy import create_engine, Column, Integer, String, Text, DateTime
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from marketing_service.shared.storage.base import StorageUnavailableError, SubmissionStore
from marketing_service.shared.storage.models import (
    ContactCreate,
    ContactSubmission,
    NewsletterCreate,
    NewsletterSubscription,
)

Base = declarative_base()


def _utcnow():
    return datetime.now(timezone.utc)


class Contact(Base):
    """Contact / demo request submitted from the website."""
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    school = Column(String, nullable=False)
    role = Column(String, nullable=True)
    student_count = Column(String, nullable=True)  # range picked in the form, e.g. '51-200'
    message = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class Newsletter(Base):
    """Newsletter subscription. The unique email column backs insert-or-return-existing."""
    __tablename__ = "newsletters"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String, unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


def normalize_database_url(url: str) -> str:
    """Heroku uses postgres:// but SQLAlchemy 2.0+ requires postgresql://"""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are always UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_contact(row: Contact) -> ContactSubmission:
    return ContactSubmission(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        school=row.school,
        role=row.role,
        student_count=row.student_count,
        message=row.message,
        created_at=_as_utc(row.created_at),
    )


def _to_subscription(row: Newsletter) -> NewsletterSubscription:
    return NewsletterSubscription(id=row.id, email=row.email, created_at=_as_utc(row.created_at))


class SqlSubmissionStore(SubmissionStore):
    """
    Submission store over two tables.

    Each operation opens its own session. Database errors are logged and
    re-raised as StorageUnavailableError; nothing is retried here.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
        )

    @classmethod
    def from_url(cls, database_url: str) -> "SqlSubmissionStore":
        engine_kwargs = {
            "pool_pre_ping": True,  # Verify connections before using
            "pool_recycle": 3600,  # Recycle connections after 1 hour
        }
        return cls(create_engine(normalize_database_url(database_url), **engine_kwargs))

    def initialize(self) -> None:
        """Create the contacts and newsletters tables if they are missing."""
        try:
            Base.metadata.create_all(bind=self.engine, checkfirst=True)
        except SQLAlchemyError as e:
            logging.error(f"Database initialization error: {str(e)}", exc_info=True)
            raise StorageUnavailableError("Could not initialize submission tables") from e
        logging.info("Submission tables initialized successfully")

    def create_contact(self, data: ContactCreate) -> ContactSubmission:
        db = self.SessionLocal()
        try:
            row = Contact(**data.model_dump(), created_at=_utcnow())
            db.add(row)
            db.commit()
            return _to_contact(row)
        except SQLAlchemyError as e:
            db.rollback()
            logging.error(f"Failed to store contact submission: {str(e)}", exc_info=True)
            raise StorageUnavailableError("Failed to store contact submission") from e
        finally:
            db.close()

    def list_contacts(self) -> List[ContactSubmission]:
        db = self.SessionLocal()
        try:
            rows = db.query(Contact).order_by(Contact.id).all()
            return [_to_contact(row) for row in rows]
        except SQLAlchemyError as e:
            logging.error(f"Failed to fetch contacts: {str(e)}", exc_info=True)
            raise StorageUnavailableError("Failed to fetch contacts") from e
        finally:
            db.close()

    def subscribe_newsletter(self, data: NewsletterCreate) -> NewsletterSubscription:
        db = self.SessionLocal()
        try:
            existing = db.query(Newsletter).filter(Newsletter.email == data.email).first()
            if existing:
                return _to_subscription(existing)

            row = Newsletter(email=data.email, created_at=_utcnow())
            db.add(row)
            try:
                db.commit()
            except IntegrityError:
                # Another request inserted the same email first; return its row
                db.rollback()
                winner = db.query(Newsletter).filter(Newsletter.email == data.email).one()
                return _to_subscription(winner)
            return _to_subscription(row)
        except SQLAlchemyError as e:
            db.rollback()
            logging.error(f"Failed to store newsletter subscription: {str(e)}", exc_info=True)
            raise StorageUnavailableError("Failed to store newsletter subscription") from e
        finally:
            db.close()

    def list_newsletter_subscriptions(self) -> List[NewsletterSubscription]:
        db = self.SessionLocal()
        try:
            rows = db.query(Newsletter).order_by(Newsletter.id).all()
            return [_to_subscription(row) for row in rows]
        except SQLAlchemyError as e:
            logging.error(f"Failed to fetch newsletter subscriptions: {str(e)}", exc_info=True)
            raise StorageUnavailableError("Failed to fetch newsletter subscriptions") from e
        finally:
            db.close()
