"""Error base types shared across the PR policy checker."""


class PrPolicyError(Exception):
    """Base exception for PR policy checker errors."""
    pass
