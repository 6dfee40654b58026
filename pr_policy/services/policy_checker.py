"""
PR policy checker.

Handles one service hook delivery from start to finish: validates the
configuration, parses the payload, scans the pull request commits and posts
the resulting status back on the pull request.
"""

from typing import Any, Callable, List, Optional

from pr_policy.config import ConfigurationError, Settings
from pr_policy.models.api_response import WebhookResult
from pr_policy.models.file_change import CommitChangeSet, FileChange
from pr_policy.models.pr_event import MalformedPayloadError, PullRequestEvent
from pr_policy.models.validation import PrOutcome
from pr_policy.services.change_scanner import ChangeScanner
from pr_policy.services.devops_client import DevOpsClient, create_devops_client
from pr_policy.services.status_composer import DEFAULT_LOCALE, compose_status
from pr_policy.services.version_validator import is_valid_version_bump
from pr_policy.utils.logging import get_logger, log_error_with_context, log_pr_event

logger = get_logger(__name__)

ClientFactory = Callable[[Settings], DevOpsClient]


class PullRequestPolicyChecker:
    """Checks a pull request for an updated GitVersion file and change log."""

    def __init__(self, client: DevOpsClient, locale: str = DEFAULT_LOCALE):
        self.client = client
        self.locale = locale

    async def _collect_changes(self, event: PullRequestEvent) -> List[CommitChangeSet]:
        commit_ids = await self.client.list_pull_request_commits(
            event.repository_id, event.pull_request_id
        )

        change_sets = []
        for commit_id in commit_ids:
            change_sets.append(await self.client.get_commit_changes(event.repository_id, commit_id))
        return change_sets

    async def _validate_version_file(self, event: PullRequestEvent, change: FileChange) -> bool:
        original = await self.client.get_file_content(
            event.repository_id, event.target_branch, change.path
        )
        updated = await self.client.get_file_content(
            event.repository_id, event.source_branch, change.path
        )
        return is_valid_version_bump(original, updated)

    async def check(self, event: PullRequestEvent, changelog_optional: bool = False) -> PrOutcome:
        """
        Validate the pull request and post the outcome as a PR status.

        Args:
            event: Parsed pull request event
            changelog_optional: Skip the change log requirement

        Returns:
            The outcome that was posted
        """
        pr_logger = logger.with_context(
            pr_id=str(event.pull_request_id),
            repository_id=event.repository_id,
        )
        change_sets = await self._collect_changes(event)

        async def validate(change: FileChange) -> bool:
            return await self._validate_version_file(event, change)

        result = await ChangeScanner(validate).scan(change_sets, changelog_optional)
        outcome = compose_status(result, self.locale)

        pr_logger.info(
            f"PR {event.pull_request_id} validation: {outcome.description}",
            extra={"succeeded": outcome.succeeded},
        )

        await self.client.post_pull_request_status(
            event.repository_id, event.pull_request_id, outcome
        )
        return outcome


async def handle_webhook(
    payload: Any,
    changelog_optional: bool,
    settings: Settings,
    client_factory: Optional[ClientFactory] = None,
) -> WebhookResult:
    """
    Process one Azure DevOps service hook delivery.

    Args:
        payload: Decoded JSON body, or None when the body was not JSON
        changelog_optional: Skip the change log requirement
        settings: Application settings
        client_factory: Builds the Azure DevOps client from settings,
            defaults to create_devops_client

    Returns:
        WebhookResult with 200 on success, 400 on configuration or
        processing errors and 404 when the payload is not a PR event
    """
    try:
        settings.validate_required()
    except ConfigurationError as e:
        logger.error(str(e))
        return WebhookResult(status_code=400, message=str(e))

    try:
        event = PullRequestEvent.from_payload(payload)
    except MalformedPayloadError as e:
        logger.info(f"Ignoring service hook: {e}")
        return WebhookResult(status_code=404, message=str(e))

    log_pr_event(
        logger,
        pr_id=str(event.pull_request_id),
        repository_id=event.repository_id,
        event_type=event.event_type or "",
    )

    try:
        client_factory = client_factory or create_devops_client
        checker = PullRequestPolicyChecker(client_factory(settings), settings.status_locale)
        outcome = await checker.check(event, changelog_optional)
    except Exception as e:
        pr_logger = logger.with_context(
            pr_id=str(event.pull_request_id),
            repository_id=event.repository_id,
        )
        log_error_with_context(pr_logger, f"Error validating PR {event.pull_request_id}", e)
        return WebhookResult(status_code=400, message=str(e))

    return WebhookResult(status_code=200, message=outcome.description)
