"""Configuration management for model-class-builder."""

from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional

# Checked in order; the first existing file wins
ENV_FILE_LOCATIONS = (
    Path(".env"),
    Path.home() / ".model-class-builder" / ".env",
)


def _find_env_file() -> Optional[str]:
    for candidate in ENV_FILE_LOCATIONS:
        if candidate.is_file():
            return str(candidate)
    return None


class Settings(BaseSettings):
    """Application settings loaded from MODELGEN_* environment variables."""

    database_url: Optional[str] = Field(
        default=None,
        description="SQLAlchemy URL of the database to introspect"
    )
    namespace: Optional[str] = Field(
        default=None,
        description="Namespace named in the docstring of generated modules"
    )
    include_attributes: bool = Field(
        default=True,
        description="Emit max-length metadata on bounded string fields"
    )
    output_dir: str = Field(
        default="models",
        description="Default directory for batch generation"
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level for the command line"
    )

    class Config:
        env_prefix = "MODELGEN_"
        env_file = _find_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()
