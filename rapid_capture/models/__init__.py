from rapid_capture.models.profile import Profile
from rapid_capture.models.attempt import Attempt
from rapid_capture.models.session_entry import SessionEntry

__all__ = ["Profile", "Attempt", "SessionEntry"]
