"""Configuration for the Review Matrix service."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # App
    environment: str = Field(default="development", env="ENVIRONMENT")
    debug: bool = Field(default=True, env="DEBUG")
    host: str = Field(default="0.0.0.0", env="HOST")
    port: int = Field(default=8080, env="PORT")

    # GitHub REST API
    github_api_url: str = Field(default="https://api.github.com", env="GITHUB_API_URL")
    github_user_agent: str = Field(default="review-matrix", env="GITHUB_USER_AGENT")

    # Defaults for the CLI and requests without an Authorization header
    github_token: Optional[str] = Field(default=None, env="GITHUB_TOKEN")
    github_organization: Optional[str] = Field(default=None, env="GITHUB_ORGANIZATION")

    # Fetch behaviour
    request_timeout: float = Field(default=30.0, gt=0, env="REQUEST_TIMEOUT")
    max_concurrency: int = Field(default=5, ge=1, env="MAX_CONCURRENCY")
    page_size: int = Field(default=100, ge=1, le=100, env="PAGE_SIZE")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


settings = Settings()
