# landing_api/db/mixins.py
from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Global SQLAlchemy Base for all models."""
    pass


class CreatedAtMixin:
    # sqlite CURRENT_TIMESTAMP is UTC; rows are never updated so there is no updated_at
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
