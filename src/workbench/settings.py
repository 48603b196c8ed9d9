"""Application settings and configuration."""

from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version
from typing import Annotated

from fastapi import Depends
from loguru import logger
from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from conversion.text_encoder import DEFAULT_TEXT_ENCODING, TEXT_ENCODINGS


class Settings(BaseSettings):
    """
    Application configuration settings.

    Settings can be configured via:

    1. Environment variables (e.g., BRICKPIPE_API_PORT=9000)
    2. .env file in the project root
    3. Default values defined below

    All settings use the BRICKPIPE_ prefix for environment variables.

    .. rubric:: Examples

    Set the content size limit via environment::

        export BRICKPIPE_MAX_CONTENT_SIZE=65536  # 64KB

    Or create a .env file::

        BRICKPIPE_DEFAULT_TEXT_ENCODING=latin-1
        BRICKPIPE_MAX_CONTENT_SIZE=65536
    """

    # Content Configuration
    default_text_encoding: Annotated[
        str,
        Field(
            default=DEFAULT_TEXT_ENCODING,
            description=f"Text encoding used for text input and bucket previews, one of: {', '.join(TEXT_ENCODINGS)}",
        ),
    ]

    max_content_size: Annotated[
        int,
        Field(
            default=1024 * 1024,  # 1MB
            description="Maximum pipe input size in bytes",
            gt=0,
        ),
    ]

    # API Configuration
    api_host: Annotated[str, Field(default="127.0.0.1", description="API host address")]
    api_port: Annotated[int, Field(default=8000, description="API port", gt=0, lt=65536)]

    # Application Metadata
    app_title: Annotated[str, Field(default="Brickpipe API", description="Application title")]

    model_config = SettingsConfigDict(
        env_prefix="BRICKPIPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        validate_assignment=True,
        extra="forbid",
    )

    @field_validator("default_text_encoding")
    @classmethod
    def _validate_text_encoding(cls, value: str) -> str:
        if value not in TEXT_ENCODINGS:
            raise ValueError(f"Unsupported text encoding '{value}'")
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def app_version(self) -> str:
        """
        Get the application version from package metadata.

        :return: The application version from pyproject.toml.
                 Falls back to "0.0.0" if the package is not installed.
        """
        try:
            return version("brickpipe")
        except PackageNotFoundError:
            logger.warning("Could not determine package version, using fallback '0.0.0'")
            return "0.0.0"

    def log_startup_config(self) -> None:
        """Log application configuration at startup."""
        logger.info("=" * 60)
        logger.info("Application startup - Configuration:")
        logger.info(f"  Title: {self.app_title}")
        logger.info(f"  Version: {self.app_version}")
        logger.info(f"  Host: {self.api_host}:{self.api_port}")
        logger.info(f"  Default text encoding: {self.default_text_encoding}")
        logger.info(f"  Max content size: {self.max_content_size / 1024:.1f}KB")
        logger.info("=" * 60)

    @property
    def base_url(self) -> str:
        return f"http://{self.api_host}:{self.api_port}"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    :return: The application settings instance.
    """
    return Settings()  # type: ignore


SettingsDep = Annotated[Settings, Depends(get_settings)]
