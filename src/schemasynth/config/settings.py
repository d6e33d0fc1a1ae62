"""Application settings using Pydantic Settings."""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from schemasynth.generation.constants import (
    DEFAULT_CHUNK_ROWS,
    DEFAULT_MAX_PLACEHOLDER_LENGTH,
    DEFAULT_NULL_PROBABILITY,
    DEFAULT_PROVIDER,
    DEFAULT_REGEX_REPEAT_LIMIT,
)


def find_and_load_env_file():
    """Find and load .env file in current directory or parent directories."""
    current = Path.cwd().resolve()
    # Check current directory and up to 3 levels up
    for _ in range(4):
        env_path = current / ".env"
        if env_path.exists():
            # Load the .env file into environment variables
            load_dotenv(env_path, override=False)
            return str(env_path)
        parent = current.parent
        if parent == current:  # Reached root
            break
        current = parent
    return None


# Load .env file before Settings class is defined
find_and_load_env_file()


class Settings(BaseSettings):
    """Application configuration settings."""

    # Generation Configuration
    default_seed: Optional[int] = None
    default_locale: str = "en"
    chunk_rows: int = DEFAULT_CHUNK_ROWS
    provider: str = DEFAULT_PROVIDER  # Leaf provider registry name

    # Foreign key allocation
    null_probability: float = DEFAULT_NULL_PROBABILITY

    # Pattern engine limits
    regex_repeat_limit: int = DEFAULT_REGEX_REPEAT_LIMIT
    max_placeholder_length: Optional[int] = DEFAULT_MAX_PLACEHOLDER_LENGTH

    # Logging Configuration
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_prefix="SCHEMASYNTH_",
        env_file=None,  # We load it manually with dotenv
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, **kwargs):
        """Initialize settings and create the log directory if needed."""
        super().__init__(**kwargs)
        if self.chunk_rows < 1:
            raise ValueError(f"chunk_rows must be positive, got {self.chunk_rows}")
        if not 0.0 <= self.null_probability <= 1.0:
            raise ValueError(
                f"null_probability must be within [0, 1], got {self.null_probability}"
            )
        if self.log_file:
            self.log_file = Path(self.log_file)
            self.log_file.parent.mkdir(parents=True, exist_ok=True)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
