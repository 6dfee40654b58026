"""
Utility modules for the PR policy checker.
"""

from pr_policy.utils.logging import (
    get_logger,
    setup_logging,
    log_pr_event,
    log_api_call,
    log_error_with_context,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "log_pr_event",
    "log_api_call",
    "log_error_with_context",
]
