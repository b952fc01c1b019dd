"""Configuration management for sparkmd."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging_utils import configure_logging


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SPARK_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Vault Configuration
    vault_path: Path = Field(default_factory=Path.cwd, description="Root folder of the document vault")
    state_dir: str = Field(default=".spark", description="Vault-relative folder for logs and notifications")

    # Write-back Configuration
    add_blank_lines: bool = Field(default=True, description="Surround inline result blocks with blank lines")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_profile: str = Field(default="default", description="Log profile (default, console)")

    @property
    def logs_dir(self) -> Path:
        return self.vault_path / self.state_dir / "logs"

    @property
    def notifications_path(self) -> Path:
        return self.vault_path / self.state_dir / "notifications.jsonl"


def get_settings(vault_path: Optional[Path] = None) -> Settings:
    """Get application settings.

    Args:
        vault_path: Optional vault path override

    Returns:
        Settings instance
    """
    settings = Settings(vault_path=vault_path) if vault_path is not None else Settings()
    configure_logging(profile="console" if settings.log_profile == "console" else "default", level=settings.log_level)
    return settings
