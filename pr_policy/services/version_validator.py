"""
Version Validator component.

Decides whether an edit to a GitVersion file is a real version bump by
comparing the ``next-version`` field before and after the pull request.
"""

from typing import NamedTuple, Optional

import yaml
from pydantic import ValidationError

from pr_policy.models.error import PrPolicyError
from pr_policy.models.gitversion import GitVersionFile
from pr_policy.utils.logging import get_logger

logger = get_logger(__name__)


class VersionParseError(PrPolicyError):
    """Raised when a GitVersion file holds no usable version."""
    pass


class VersionValue(NamedTuple):
    """Three-component version parsed from the ``next-version`` field."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> "VersionValue":
        """
        Parse a ``major.minor.patch`` string.

        Raises:
            VersionParseError: If there are not exactly three components or
                a component is not a non-negative integer
        """
        parts = text.split(".")
        if len(parts) != 3:
            raise VersionParseError(f"Expected three version components in {text!r}")

        components = []
        for part in parts:
            # ASCII digits only: int() would also take "+1", " 1" and "1_0"
            if not (part.isascii() and part.isdigit()):
                raise VersionParseError(f"Invalid version component {part!r} in {text!r}")
            components.append(int(part))

        return cls(*components)


def parse_version_field(content: str) -> str:
    """
    Extract the version string from GitVersion file content.

    A YAML mapping yields its ``next-version`` key. A document that is a
    single scalar (e.g. ``1.4.2``) is taken as the version itself.

    Args:
        content: Raw file content

    Returns:
        The version string as written in the file

    Raises:
        VersionParseError: If the YAML is invalid or holds no version
    """
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise VersionParseError(f"Invalid GitVersion YAML: {e}") from e

    if isinstance(document, dict):
        try:
            version = GitVersionFile.model_validate(document).next_version
        except ValidationError as e:
            raise VersionParseError(f"Invalid next-version field: {e}") from e
    elif isinstance(document, (str, int, float)) and not isinstance(document, bool):
        version = str(document)
    else:
        version = None

    if not version:
        raise VersionParseError("GitVersion file has no next-version field")

    return version.strip()


def _is_higher_version(original: VersionValue, updated: VersionValue) -> bool:
    # Each tier is checked on its own: a higher patch passes even when the
    # major went down. Kept for compatibility, see DESIGN.md.
    if updated.major > original.major:
        return True

    if updated.minor > original.minor:
        return True

    if updated.patch > original.patch:
        return True

    return False


def is_valid_version_bump(original: Optional[str], updated: Optional[str]) -> bool:
    """
    Validate whether the GitVersion file was bumped correctly.

    Args:
        original: File content from the target branch (before the PR)
        updated: File content from the source branch (the PR)

    Returns:
        True if the version was introduced or increased, False otherwise
    """
    # Added for the first time in this PR, nothing to compare against.
    if not original and updated:
        return True

    if not original or not updated:
        return False

    try:
        original_version = parse_version_field(original)
        updated_version = parse_version_field(updated)

        # Same version means the contents were reverted, not bumped.
        if original_version == updated_version:
            return False

        return _is_higher_version(
            VersionValue.parse(original_version),
            VersionValue.parse(updated_version),
        )
    except VersionParseError as e:
        logger.warning(f"GitVersion file could not be validated: {e}")
        return False
