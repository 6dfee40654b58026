"""
Application configuration management.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings

from pr_policy.models.error import PrPolicyError


class ConfigurationError(PrPolicyError):
    """Raised when required Azure DevOps settings are missing."""
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Azure DevOps
    devops_account: Optional[str] = None
    devops_project: Optional[str] = None
    devops_pat: Optional[str] = None
    devops_base_url: str = "https://dev.azure.com"

    # PR status
    status_locale: str = "nl"
    status_context_name: str = "Validatie Git Bestanden"
    status_context_genre: str = "PR Validator"

    # Application
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def organization_url(self) -> str:
        """Azure DevOps organization URL for the configured account."""
        return f"{self.devops_base_url.rstrip('/')}/{self.devops_account}"

    def validate_required(self) -> None:
        """
        Check that the account, project and PAT are configured.

        Raises:
            ConfigurationError: Naming the first missing setting
        """
        if not self.devops_account:
            raise ConfigurationError("Azure DevOps Account not configured!")

        if not self.devops_project:
            raise ConfigurationError("Azure DevOps Project not configured!")

        if not self.devops_pat:
            raise ConfigurationError("Azure DevOps PAT not configured!")


@lru_cache
def get_settings() -> Settings:
    """Build the settings once per process."""
    return Settings()
