"""SQLAlchemy declarative base and model imports for Alembic."""
from rapid_capture.db.session import Base

# Import all models so Alembic can see them
from rapid_capture.models.attempt import Attempt  # noqa: F401
from rapid_capture.models.profile import Profile  # noqa: F401
from rapid_capture.models.session_entry import SessionEntry  # noqa: F401

__all__ = ["Base", "Profile", "Attempt", "SessionEntry"]
