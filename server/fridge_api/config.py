"""Application configuration loaded from environment variables."""
import calendar
import os
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Generative model access
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/models"
    request_timeout: float = 8.0
    probe_timeout: float = 3.0

    # Local key-value store
    data_path: str = os.getenv("DATA_PATH", os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

    @property
    def store_db_path(self) -> str:
        return os.path.join(self.data_path, "fridge_store.db")

    # First day of the week for weekly progress
    week_start: Literal["sunday", "monday"] = "sunday"

    @property
    def first_weekday(self) -> int:
        return calendar.SUNDAY if self.week_start == "sunday" else calendar.MONDAY

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8083
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    class Config:
        env_prefix = "FRIDGE_"
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
