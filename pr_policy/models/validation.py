"""Validation result and outcome data models."""

from pydantic import BaseModel


class ValidationResult(BaseModel):
    """
    Accumulated file checks for a pull request.

    The change log flag is only ever raised. The GitVersion flag holds the
    result of the most recent GitVersion evaluation.
    """

    version_file_updated: bool = False
    changelog_updated: bool = False


class PrOutcome(BaseModel):
    """Status to report back on the pull request."""

    succeeded: bool
    description: str
