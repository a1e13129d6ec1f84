"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./issue_changelog.db",
        description="Database connection URL used by SQLAlchemy for the policy store",
        min_length=1,
    )
    jira_base_url: str | None = Field(
        default=None,
        description="Base URL of the Jira Cloud site, e.g. https://example.atlassian.net",
    )
    jira_email: str | None = Field(
        default=None,
        description="Account email used for basic authentication against Jira",
    )
    jira_api_token: str | None = Field(
        default=None,
        description="API token paired with JIRA_EMAIL",
    )
    jira_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout applied to every upstream Jira request",
        gt=0,
    )
    default_issue_key: str = Field(
        default="KC-24",
        description="Issue key used when a request carries no issue context",
        min_length=1,
    )
    app_timezone: str | None = Field(
        default=None,
        description="Timezone used to resolve whole-day date ranges",
    )
    default_page_size: int = Field(
        default=25,
        description="Number of activities per page when the caller does not choose one",
        gt=0,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )

    @model_validator(mode="after")
    def _validate_jira_credentials(self) -> "Settings":
        if bool(self.jira_email) ^ bool(self.jira_api_token):
            raise ValueError(
                "JIRA_EMAIL and JIRA_API_TOKEN must both be provided to authenticate"
            )
        if self.jira_email and "@" not in self.jira_email:
            raise ValueError("JIRA_EMAIL must be a valid email address")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
