"""Configuration loaded from environment variables and an optional .env file."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fmhy_catalog.metadata import DEFAULT_VERSION

DEFAULT_DOCUMENTS: tuple[str, ...] = (
    "adblockvpnguide.md",
    "ai.md",
    "android-iosguide.md",
    "audiopiracyguide.md",
    "beginners-guide.md",
    "devtools.md",
    "downloadpiracyguide.md",
    "edupiracyguide.md",
    "file-tools.md",
    "gaming-tools.md",
    "gamingpiracyguide.md",
    "img-tools.md",
    "internet-tools.md",
    "linuxguide.md",
    "miscguide.md",
    "non-english.md",
    "readingpiracyguide.md",
    "social-media-tools.md",
    "storage.md",
    "system-tools.md",
    "text-tools.md",
    "torrentpiracyguide.md",
    "unsafesites.md",
    "video-tools.md",
    "videopiracyguide.md",
)


class Settings(BaseSettings):
    """Catalog settings, read from ``FMHY_CATALOG_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FMHY_CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    docs_path: Path = Field(default=Path("docs"), description="Directory holding the markdown documents")
    database_path: Path = Field(default=Path("fmhy_catalog.db"))
    documents: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DOCUMENTS),
        description="Filenames to parse, in output order",
    )
    version: str = Field(default=DEFAULT_VERSION)
    log_level: str = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
