"""Composes the PR status description from a validation result."""

from typing import Dict

from pr_policy.models.validation import PrOutcome, ValidationResult

DEFAULT_LOCALE = "nl"

STATUS_MESSAGES: Dict[str, Dict[str, str]] = {
    "nl": {
        "version_file": "GitVersion",
        "changelog": "CHANGELOG",
        "conjunction": " en ",
        "not_updated": " niet bijgewerkt.",
        "success": "Alle Git bestanden bijgewerkt.",
    },
    "en": {
        "version_file": "GitVersion",
        "changelog": "CHANGELOG",
        "conjunction": " and ",
        "not_updated": " not updated.",
        "success": "All Git files updated.",
    },
}


def compose_status(result: ValidationResult, locale: str = DEFAULT_LOCALE) -> PrOutcome:
    """
    Build the PR outcome naming every required file that was not updated.

    Args:
        result: Accumulated scan result
        locale: Message catalog key, unknown locales fall back to Dutch

    Returns:
        PrOutcome that succeeds only when both files were updated
    """
    messages = STATUS_MESSAGES.get(locale, STATUS_MESSAGES[DEFAULT_LOCALE])

    missing = []
    if not result.version_file_updated:
        missing.append(messages["version_file"])
    if not result.changelog_updated:
        missing.append(messages["changelog"])

    if not missing:
        return PrOutcome(succeeded=True, description=messages["success"])

    return PrOutcome(
        succeeded=False,
        description=messages["conjunction"].join(missing) + messages["not_updated"],
    )
