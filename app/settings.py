from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content on disk
    CONTENT_DIR: str = "content"
    POSTS_PREFIX: str = "posts/"
    PAGES_PREFIX: str = "pages/"

    # Content table
    DATABASE_URL: str = "sqlite:///./content.db"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Our own API Key
    CONTENT_API_KEY: str = ""

    # Background sync, 0 disables the watcher
    WATCH_INTERVAL_SECONDS: float = 0.0

    WORDS_PER_MINUTE: int = Field(default=200, gt=0)

    @property
    def content_path(self) -> Path:
        return Path(self.CONTENT_DIR)


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
