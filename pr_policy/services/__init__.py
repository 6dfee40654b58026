"""Business logic services package."""

from pr_policy.services.change_scanner import (
    ChangeScanner,
    is_changelog_file,
    is_version_file,
)
from pr_policy.services.devops_client import (
    DevOpsClient,
    PlatformCallError,
    create_devops_client,
)
from pr_policy.services.policy_checker import (
    PullRequestPolicyChecker,
    handle_webhook,
)
from pr_policy.services.status_composer import compose_status
from pr_policy.services.version_validator import (
    VersionParseError,
    VersionValue,
    is_valid_version_bump,
    parse_version_field,
)

__all__ = [
    'ChangeScanner',
    'is_changelog_file',
    'is_version_file',
    'DevOpsClient',
    'PlatformCallError',
    'create_devops_client',
    'PullRequestPolicyChecker',
    'handle_webhook',
    'compose_status',
    'VersionParseError',
    'VersionValue',
    'is_valid_version_bump',
    'parse_version_field',
]
