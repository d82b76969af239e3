"""Key/value rows backing per-session durable storage (state and stats)."""
from sqlalchemy import Column, Integer, String, Text, UniqueConstraint

from rapid_capture.db.session import Base


class SessionEntry(Base):
    __tablename__ = "session_entries"
    __table_args__ = (UniqueConstraint("session_key", "key", name="uq_session_entries_session_key_key"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_key = Column(String(64), nullable=False, index=True)
    key = Column(String(64), nullable=False)
    value = Column(Text, nullable=False)  # JSON document
