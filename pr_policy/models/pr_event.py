"""Pull request event data models."""

from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from .error import PrPolicyError

BRANCH_PREFIX = "refs/heads/"


class MalformedPayloadError(PrPolicyError):
    """Raised when a webhook payload is not a recognizable PR event."""
    pass


def _strip_branch_prefix(ref_name: str) -> str:
    return ref_name.replace(BRANCH_PREFIX, "")


class PullRequestEvent(BaseModel):
    """Pull request event from an Azure DevOps service hook."""

    pull_request_id: int
    repository_id: str
    source_branch: str
    target_branch: str
    title: Optional[str] = None
    event_type: Optional[str] = None  # 'git.pullrequest.created', 'git.pullrequest.updated'

    @classmethod
    def from_payload(cls, payload: Any) -> "PullRequestEvent":
        """
        Build a typed event from a raw service hook payload.

        Args:
            payload: Decoded JSON body of the service hook request

        Returns:
            PullRequestEvent with branch names stripped of ``refs/heads/``

        Raises:
            MalformedPayloadError: If the payload is not a PR event or a
                required field is missing or unparsable
        """
        if not isinstance(payload, dict):
            raise MalformedPayloadError("Payload is not an Azure DevOps pull request event")

        resource = payload.get("resource")
        if not isinstance(resource, dict):
            raise MalformedPayloadError("Payload has no resource")

        repository = resource.get("repository")
        repository_id = repository.get("id") if isinstance(repository, dict) else None
        source_ref = resource.get("sourceRefName")
        target_ref = resource.get("targetRefName")

        try:
            pull_request_id = int(str(resource.get("pullRequestId")))
        except ValueError as e:
            raise MalformedPayloadError(
                f"Invalid pull request id: {resource.get('pullRequestId')!r}"
            ) from e

        missing = [
            name for name, value in (
                ("resource.repository.id", repository_id),
                ("resource.sourceRefName", source_ref),
                ("resource.targetRefName", target_ref),
            )
            if not isinstance(value, str) or not value
        ]
        if missing:
            raise MalformedPayloadError(f"Payload is missing required fields: {', '.join(missing)}")

        try:
            return cls(
                pull_request_id=pull_request_id,
                repository_id=repository_id,
                source_branch=_strip_branch_prefix(source_ref),
                target_branch=_strip_branch_prefix(target_ref),
                title=resource.get("title"),
                event_type=payload.get("eventType"),
            )
        except ValidationError as e:
            raise MalformedPayloadError(f"Invalid pull request event: {e}") from e
