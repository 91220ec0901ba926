"""Application configuration and settings management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="MARKUP_DOCX_", extra="ignore")

    app_name: str = Field(default="Markup to DOCX API", description="Human readable application name.")
    environment: Literal["local", "development", "staging", "production"] = Field(
        default="local",
        description="Deployment environment name.",
    )
    host: str = Field(default="0.0.0.0", description="Interface the HTTP server binds to.")
    port: int = Field(default=8000, description="Port the HTTP server listens on.")
    log_level: str = Field(default="INFO", description="Root logging level.")
    max_body_bytes: int = Field(
        default=1024 * 1024,
        description="Largest accepted request body; bigger payloads are rejected with 413.",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API from a browser.",
    )
    download_filename: str = Field(
        default="output.docx",
        description="File name suggested to clients requesting a raw download.",
    )
    markup_parser: str = Field(
        default="html.parser",
        description="BeautifulSoup tree builder used to parse the markup.",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()


settings = get_settings()
