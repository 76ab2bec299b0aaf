"""Application settings loaded from environment / .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Database ──────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./dodo.db"

    # ── Corpus ────────────────────────────────────────────
    corpus_root: str = "project-docs"
    corpus_pattern: str = "**/*.md"
    # When False the filesystem collaborator reports NotSupported
    corpus_writable: bool = False

    # ── Documents ─────────────────────────────────────────
    reject_duplicate_paths: bool = False
    version_history_limit: int = 10
    seed_welcome_document: bool = True

    # ── Service ───────────────────────────────────────────
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:5173"


@lru_cache
def get_settings() -> Settings:
    return Settings()
