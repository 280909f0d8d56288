"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Git settings default to marked placeholders: the app boots without them and
      recorder operations fail with ConfigurationError until they are set

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - recorder_config() hands the core an explicit frozen config instead of letting it read env vars
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from codedeck.core.recorder_config import RecorderConfig


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./codedeck.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres provides postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Git recorder
    github_pat: str = "ghp-placeholder"
    git_repo_path: str = "/path/to/your/solutions-repo"
    git_user_name: str = "your-name"
    git_user_email: str = "you@example.com"
    git_remote_name: str = "origin"
    git_branch: str = "main"
    git_push_timeout_seconds: float = 60.0
    git_command_timeout_seconds: float = 30.0
    # Clean tree → append to .codedeck-attempts.log so the commit still happens
    git_allow_empty_commit_via_log: bool = True

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def recorder_config(self) -> RecorderConfig:
        return RecorderConfig(
            auth_token=self.github_pat,
            repo_path=self.git_repo_path,
            author_name=self.git_user_name,
            author_email=self.git_user_email,
            remote_name=self.git_remote_name,
            branch=self.git_branch,
            push_timeout_seconds=self.git_push_timeout_seconds,
            command_timeout_seconds=self.git_command_timeout_seconds,
            allow_empty_commit_via_log=self.git_allow_empty_commit_via_log,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
