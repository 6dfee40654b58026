"""
Change Scanner component.

Walks the file changes of every commit in a pull request and records
whether the GitVersion file and the change log were touched.
"""

from typing import Awaitable, Callable, Iterable

from pr_policy.models.file_change import CommitChangeSet, FileChange
from pr_policy.models.validation import ValidationResult
from pr_policy.utils.logging import get_logger

logger = get_logger(__name__)

VERSION_FILE_INDICATOR = "gitversion.yml"
CHANGELOG_INDICATOR = "changelog.md"

VersionFileValidator = Callable[[FileChange], Awaitable[bool]]


def is_version_file(change: FileChange) -> bool:
    """Check if the file name contains the GitVersion indicator."""
    return VERSION_FILE_INDICATOR in change.file_name


def is_changelog_file(change: FileChange) -> bool:
    """Check if the file name contains the change log indicator."""
    return CHANGELOG_INDICATOR in change.file_name


class ChangeScanner:
    """Flags which of the required files a pull request changed."""

    def __init__(self, validate_version_file: VersionFileValidator):
        """
        Initialize the scanner.

        Args:
            validate_version_file: Coroutine function deciding whether a
                changed GitVersion file holds a valid version bump
        """
        self.validate_version_file = validate_version_file

    async def scan(
        self,
        commits: Iterable[CommitChangeSet],
        changelog_optional: bool = False,
    ) -> ValidationResult:
        """
        Scan commit change sets in order.

        Args:
            commits: Change sets in the order the platform returned them
            changelog_optional: Seed the change log flag as already satisfied

        Returns:
            ValidationResult for the whole pull request
        """
        result = ValidationResult(
            version_file_updated=False,
            changelog_updated=changelog_optional,
        )

        for commit in commits:
            if not commit.changes:
                logger.debug(f"Commit {commit.commit_id} has no changes, skipping")
                continue

            for change in commit.changes:
                if is_version_file(change):
                    # Overwrite, not OR: the last GitVersion change decides.
                    result.version_file_updated = await self.validate_version_file(change)
                    logger.info(
                        f"GitVersion file {change.path} in commit {commit.commit_id} "
                        f"valid: {result.version_file_updated}"
                    )

                if is_changelog_file(change):
                    result.changelog_updated = True
                    logger.info(f"Change log {change.path} updated in commit {commit.commit_id}")

        return result
