"""Data models for the Azure DevOps PR policy checker."""

from .api_response import WebhookResponse, WebhookResult
from .error import PrPolicyError
from .file_change import CommitChangeSet, FileChange
from .gitversion import GitVersionFile
from .pr_event import MalformedPayloadError, PullRequestEvent
from .validation import PrOutcome, ValidationResult

__all__ = [
    # PR event models
    "PullRequestEvent",
    "MalformedPayloadError",
    # File change models
    "FileChange",
    "CommitChangeSet",
    # GitVersion models
    "GitVersionFile",
    # Validation models
    "ValidationResult",
    "PrOutcome",
    # Error models
    "PrPolicyError",
    # API response models
    "WebhookResponse",
    "WebhookResult",
]
