import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    # Naive UTC, so PostgreSQL and SQLite round-trip the same value
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel(Base):
    __abstract__ = True

    # Populated by the repositories at construction time, not by column defaults
    id = Column(String(32), primary_key=True, index=True)
    created_at = Column(DateTime, nullable=False, index=True)
