# landing_api/db/models/inquiry.py
from __future__ import annotations

from typing import Optional
from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from landing_api.db.mixins import Base, CreatedAtMixin


class Inquiry(CreatedAtMixin, Base):
    __tablename__ = "inquiries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str] = mapped_column(String(15), nullable=False)  # digits only
    service: Mapped[Optional[str]] = mapped_column(String(80))
    message: Mapped[Optional[str]] = mapped_column(Text)
    page_url: Mapped[Optional[str]] = mapped_column(String(400))
    ip: Mapped[Optional[str]] = mapped_column(String(64))

# Column order used by the CSV export header.
INQUIRY_COLUMNS = ("id", "name", "phone", "service", "message", "page_url", "created_at", "ip")
