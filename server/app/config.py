"""Server configuration

The Gemini API key is read once at startup and injected into GeminiClient.
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

from spotcheck.models import DEFAULT_MODEL


class Settings(BaseSettings):
    """Settings loaded from environment variables / .env"""

    # Gemini API
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_MODEL

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Local storage
    preview_dir: Optional[Path] = None
    log_dir: Optional[Path] = None

    # Sessions
    max_sessions: int = 100

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
