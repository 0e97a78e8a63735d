"""Configuration helpers for newsdesk."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_DATA_ROOT = Path.home() / "newsdesk"
DEFAULT_API_URL = "https://newsapi.org/v2/"


class Settings(BaseModel):
    """Runtime configuration loaded from env vars with sensible defaults."""

    api_key: str | None = None
    api_base_url: str = DEFAULT_API_URL
    country: str = "us"
    page_size: int = 20
    timeout: float = 30.0
    data_dir: Path = Field(default_factory=lambda: DEFAULT_DATA_ROOT)
    db_filename: str = "favorites.sqlite3"
    log_level: str = "INFO"
    user_id: str = "anonymous"

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_filename

    def ensure_directories(self) -> None:
        """Create data directories if they are missing."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def load(cls) -> "Settings":
        load_dotenv()
        data_dir = Path(os.environ.get("NEWSDESK_DATA_DIR", DEFAULT_DATA_ROOT))
        return cls(
            api_key=os.environ.get("NEWSDESK_API_KEY"),
            api_base_url=os.environ.get("NEWSDESK_API_URL", DEFAULT_API_URL),
            country=os.environ.get("NEWSDESK_COUNTRY", "us"),
            page_size=int(os.environ.get("NEWSDESK_PAGE_SIZE", "20")),
            timeout=float(os.environ.get("NEWSDESK_TIMEOUT", "30")),
            data_dir=data_dir,
            db_filename=os.environ.get("NEWSDESK_DB_FILENAME", "favorites.sqlite3"),
            log_level=os.environ.get("NEWSDESK_LOG_LEVEL", "INFO"),
            user_id=os.environ.get("NEWSDESK_USER_ID", "anonymous"),
        )


def get_settings() -> Settings:
    """Convenience accessor for lazy modules."""
    settings = Settings.load()
    settings.ensure_directories()
    return settings
