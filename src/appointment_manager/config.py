"""Appointment Manager — configuration loaded from environment."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, loaded from .env or environment variables."""

    # ── Database ──────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./appointments.db"

    # ── Repository ────────────────────────────────────────
    actor_tag: str = "user"
    id_allocation_attempts: int = 3

    # ── Audit ─────────────────────────────────────────────
    audit_log_path: str = "login_activity.txt"

    # ── App ───────────────────────────────────────────────
    app_name: str = "Appointment Manager"
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton settings instance
settings = Settings()
