"""
config.py

Centralized configuration management using pydantic-settings.
All modules must import settings from this file.
Direct os.getenv() calls are prohibited elsewhere.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings loaded from .env file."""

    # Notification content
    reminder_body: str = "Gentle reminder for your task!"
    category_identifier: str = "OrganizerPlusCategory"
    task_payload_key: str = "Task"

    # Completion behavior
    cancel_on_complete: bool = True

    # Delivery daemon
    notification_daemon_url: str = "http://127.0.0.1:8700"
    notification_daemon_timeout: float = 5.0
    use_local_center: bool = True

    # In-memory notification center capacity (platform pending limit)
    max_pending_requests: int = 64

    # Logging
    log_json: bool = False
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "REMINDERS_",
    }


settings = Settings()
