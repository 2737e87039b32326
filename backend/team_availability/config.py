"""
Application settings (Pydantic Settings).
"""
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

# .env next to backend/ (parent of team_availability/)
_env_path = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    database_url: str = "sqlite:///./availability.db"
    # ADMIN_SECRET in .env; empty disables the privileged view
    admin_secret: str = ""
    calendar_year: int = 2026
    start_month: int = 5  # May
    end_month: int = 9  # September, inclusive
    toggle_debounce_ms: int = 300
    cors_origins: str = ""
    seed_on_startup: bool = False
    log_level: str = "INFO"
    api_base_url: str = "http://127.0.0.1:8000"

    class Config:
        env_file = _env_path
        extra = "ignore"

    @field_validator("admin_secret", "api_base_url", mode="after")
    @classmethod
    def strip_value(cls, v: str) -> str:
        return (v or "").strip()

    @model_validator(mode="after")
    def check_month_window(self) -> "Settings":
        if not 1 <= self.start_month <= self.end_month <= 12:
            raise ValueError(
                f"start_month/end_month must satisfy 1 <= start <= end <= 12 (got {self.start_month}..{self.end_month})"
            )
        return self

    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
