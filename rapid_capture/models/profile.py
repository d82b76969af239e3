"""Profile model: durable totals for one trainee session."""
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from rapid_capture.db.session import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Session cookie value (UUID string)
    session_key = Column(String(64), unique=True, nullable=False, index=True)

    total_score = Column(Integer, nullable=False, default=0)  # may go negative
    scenarios_attempted = Column(Integer, nullable=False, default=0)
    scenarios_correct = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)

    attempts = relationship("Attempt", back_populates="profile", order_by="Attempt.id")
