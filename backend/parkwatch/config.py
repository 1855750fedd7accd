"""
Application settings (Pydantic Settings).
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env next to backend/ (parent of parkwatch/)
_env_path = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    database_url: str = "sqlite:///./parkwatch.db"
    # Upstream parking status page (PARKING_URL etc. in .env)
    parking_url: str = "https://centralpark.co.il/parking"
    parking_referer: str = "https://centralpark.co.il/parking"
    parking_next_url: str = "/he/parking"
    parking_locale: str = "he"
    parking_user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/144.0.0.0 Safari/537.36"
    )
    fetch_timeout_seconds: float = 10.0
    refresh_interval_seconds: int = 300
    # History sampling: min gap between appends and samples kept per (weekday, hour) bucket
    history_interval_minutes: int = 15
    history_bucket_cap: int = 8
    scheduler_enabled: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = _env_path
        extra = "ignore"

    @field_validator("parking_url", "parking_referer", "parking_locale", mode="after")
    @classmethod
    def strip_parking(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("history_interval_minutes", "history_bucket_cap", "refresh_interval_seconds", mode="after")
    @classmethod
    def positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v


settings = Settings()
