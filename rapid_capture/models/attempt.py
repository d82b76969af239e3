"""Attempt model: one committed action on one scenario."""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from rapid_capture.db.session import Base


class Attempt(Base):
    __tablename__ = "attempts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    profile_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    # Corpus ids live in code, not in a table
    scenario_id = Column(String(64), nullable=False, index=True)
    selected_action = Column(String(64), nullable=False)
    is_correct = Column(Boolean, nullable=False)
    score_change = Column(Integer, nullable=False)
    time_taken_seconds = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)

    profile = relationship("Profile", back_populates="attempts")
