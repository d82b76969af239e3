"""Application configuration from environment."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Rapid Capture"
    debug: bool = False
    log_level: str = "INFO"

    # Database (async driver; alembic converts to a sync url)
    database_url: str = "sqlite+aiosqlite:///./rapid_capture.db"

    # Session cookie identifying the trainee
    session_cookie_name: str = "rc_session_id"
    session_cookie_max_age: int = 60 * 60 * 24 * 30  # 30 days

    # Well-known keys for per-session durable storage
    session_state_key: str = "cyber_scenarios_session"
    session_stats_key: str = "cyber_scenarios_stats"

    # Selection; set a seed for reproducible runs
    random_seed: int | None = None

    # Background side effects
    feedback_timeout_seconds: float = 15.0
    persistence_timeout_seconds: float = 10.0
    shutdown_grace_seconds: float = 5.0

    # Sessions whose feedback slot is kept in memory; least recently used go first
    feedback_slot_capacity: int = 10_000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()

