"""
Declarative base shared by all models.
"""
from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    """Python-side timestamp default so ordering survives sub-second inserts."""
    return datetime.now(timezone.utc)
