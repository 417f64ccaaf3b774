"""Document model."""
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text

from docportal.db.base import Base


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class Document(Base):
    """Metadata row for one stored PDF."""

    __tablename__ = "documents"
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted row
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    filename = Column(String(255), nullable=False)
    filepath = Column(Text, nullable=False)
    filesize = Column(Integer, nullable=False)
    created_at = Column(String(40), nullable=False, default=utc_now_iso)
