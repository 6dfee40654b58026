"""
Azure DevOps client for the PR policy checker.

Wraps the Azure DevOps Python SDK git client: pull request commits, commit
changes, file content at a branch tip and pull request statuses.
"""

import asyncio
import time
from typing import Any, List, Optional

from azure.devops.connection import Connection
from azure.devops.exceptions import AzureDevOpsServiceError
from azure.devops.v7_1.git import GitClient
from azure.devops.v7_1.git.models import (
    GitPullRequestStatus,
    GitStatusContext,
    GitVersionDescriptor,
)
from msrest.authentication import BasicAuthentication

from pr_policy.config import Settings
from pr_policy.models.error import PrPolicyError
from pr_policy.models.file_change import CommitChangeSet, FileChange
from pr_policy.models.validation import PrOutcome
from pr_policy.utils.logging import get_logger, log_api_call

logger = get_logger(__name__)

ITEM_NOT_FOUND_TYPE_KEY = "GitItemNotFoundException"


class PlatformCallError(PrPolicyError):
    """Raised when a call to Azure DevOps fails."""

    def __init__(self, operation: str, message: str):
        super().__init__(message)
        self.operation = operation


def _change_path(change: Any) -> Optional[str]:
    """Read the item path from a change entry (dict or SDK model)."""
    if isinstance(change, dict):
        item = change.get("item") or {}
        return item.get("path") if isinstance(item, dict) else getattr(item, "path", None)

    item = getattr(change, "item", None)
    if isinstance(item, dict):
        return item.get("path")
    return getattr(item, "path", None)


class DevOpsClient:
    """
    Thin async wrapper around the Azure DevOps git client.

    Calls run one at a time in a worker thread. Failures are not retried;
    they surface as PlatformCallError.
    """

    def __init__(
        self,
        organization_url: str,
        personal_access_token: str,
        project: Optional[str] = None,
        status_context_name: str = "Validatie Git Bestanden",
        status_context_genre: str = "PR Validator",
    ):
        """
        Initialize the client with an Azure DevOps connection.

        Args:
            organization_url: Azure DevOps organization URL
            personal_access_token: PAT for authentication
            project: Azure DevOps project name
            status_context_name: Name shown for the posted PR status
            status_context_genre: Genre shown for the posted PR status
        """
        self.organization_url = organization_url
        self.project = project
        self.status_context_name = status_context_name
        self.status_context_genre = status_context_genre

        credentials = BasicAuthentication('', personal_access_token)
        self.connection = Connection(base_url=self.organization_url, creds=credentials)
        self.git_client: GitClient = self.connection.clients.get_git_client()

        logger.info(f"DevOpsClient initialized for organization: {self.organization_url}")

    async def _call(self, operation: str, method: str, func, *args, **kwargs):
        """
        Run a synchronous SDK call in a worker thread and log it.

        Raises:
            PlatformCallError: If the SDK call raises
        """
        start_time = time.time()
        try:
            result = await asyncio.to_thread(func, *args, **kwargs)
        except Exception as e:
            log_api_call(
                logger,
                service="azure_devops",
                endpoint=operation,
                method=method,
                duration_ms=(time.time() - start_time) * 1000,
                error=str(e),
            )
            raise PlatformCallError(operation, f"{operation} failed: {e}") from e

        log_api_call(
            logger,
            service="azure_devops",
            endpoint=operation,
            method=method,
            status_code=200,
            duration_ms=(time.time() - start_time) * 1000,
        )
        return result

    async def list_pull_request_commits(self, repository_id: str, pull_request_id: int) -> List[str]:
        """
        List the commit ids of a pull request in platform order.

        Args:
            repository_id: Azure DevOps repository ID
            pull_request_id: Pull request ID

        Returns:
            Commit ids, following continuation tokens until exhausted
        """
        commit_ids: List[str] = []
        continuation_token = None

        while True:
            response = await self._call(
                "get_pull_request_commits",
                "GET",
                self.git_client.get_pull_request_commits,
                repository_id=repository_id,
                pull_request_id=pull_request_id,
                project=self.project,
                continuation_token=continuation_token,
            )

            # Newer SDK releases wrap the list together with a continuation token.
            commits = getattr(response, "value", response) or []
            commit_ids.extend(commit.commit_id for commit in commits)

            continuation_token = getattr(response, "continuation_token", None)
            if not continuation_token:
                break

        logger.info(f"Found {len(commit_ids)} commits for PR {pull_request_id}")
        return commit_ids

    async def get_commit_changes(self, repository_id: str, commit_id: str) -> CommitChangeSet:
        """
        Get the files changed by a commit.

        Args:
            repository_id: Azure DevOps repository ID
            commit_id: Commit ID

        Returns:
            CommitChangeSet, empty when the platform reports no changes
        """
        commit_changes = await self._call(
            "get_changes",
            "GET",
            self.git_client.get_changes,
            commit_id=commit_id,
            repository_id=repository_id,
            project=self.project,
        )

        changes = []
        for change in getattr(commit_changes, "changes", None) or []:
            path = _change_path(change)
            if path:
                changes.append(FileChange(path=path))

        return CommitChangeSet(commit_id=commit_id, changes=changes)

    async def get_file_content(self, repository_id: str, branch: str, path: str) -> str:
        """
        Read a file at the tip of a branch.

        Args:
            repository_id: Azure DevOps repository ID
            branch: Branch name without ``refs/heads/``
            path: Path to file in repository

        Returns:
            File content, or an empty string if the file does not exist on
            that branch
        """
        version_descriptor = GitVersionDescriptor(version=branch, version_type="branch")

        try:
            content_stream = await self._call(
                "get_item_content",
                "GET",
                self.git_client.get_item_content,
                repository_id=repository_id,
                path=path,
                project=self.project,
                version_descriptor=version_descriptor,
            )
        except PlatformCallError as e:
            cause = e.__cause__
            if isinstance(cause, AzureDevOpsServiceError) and cause.type_key == ITEM_NOT_FOUND_TYPE_KEY:
                logger.info(f"{path} does not exist on branch {branch}")
                return ""
            raise

        content = b''.join(content_stream).decode('utf-8', errors='ignore')
        logger.debug(f"Retrieved {len(content)} bytes for {path} on {branch}")
        return content

    async def post_pull_request_status(
        self,
        repository_id: str,
        pull_request_id: int,
        outcome: PrOutcome,
    ) -> None:
        """
        Post the validation outcome as a status on the pull request.

        Args:
            repository_id: Azure DevOps repository ID
            pull_request_id: Pull request ID
            outcome: Outcome to report
        """
        status = GitPullRequestStatus(
            state="succeeded" if outcome.succeeded else "failed",
            description=outcome.description,
            context=GitStatusContext(
                name=self.status_context_name,
                genre=self.status_context_genre,
            ),
        )

        await self._call(
            "create_pull_request_status",
            "POST",
            self.git_client.create_pull_request_status,
            status=status,
            repository_id=repository_id,
            pull_request_id=pull_request_id,
            project=self.project,
        )

        logger.info(f"Posted status '{outcome.description}' on PR {pull_request_id}")


def create_devops_client(settings: Settings) -> DevOpsClient:
    """
    Factory function to create DevOpsClient from settings.

    Returns:
        DevOpsClient configured with application settings
    """
    return DevOpsClient(
        organization_url=settings.organization_url,
        personal_access_token=settings.devops_pat,
        project=settings.devops_project,
        status_context_name=settings.status_context_name,
        status_context_genre=settings.status_context_genre,
    )
