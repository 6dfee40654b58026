"""
Unit tests for data models.
"""

import pytest

from pr_policy.models.file_change import FileChange
from pr_policy.models.gitversion import GitVersionFile
from pr_policy.models.pr_event import MalformedPayloadError, PullRequestEvent


@pytest.fixture
def payload():
    return {
        "eventType": "git.pullrequest.updated",
        "resource": {
            "pullRequestId": 123,
            "title": "Add feature",
            "repository": {"id": "repo-123"},
            "sourceRefName": "refs/heads/feature/login",
            "targetRefName": "refs/heads/main",
        },
    }


def test_file_name_is_last_segment_lower_cased():
    assert FileChange(path="/src/Sub/GitVersion.yml").file_name == "gitversion.yml"


def test_gitversion_file_reads_hyphenated_key():
    model = GitVersionFile.model_validate({"next-version": "1.2.3", "mode": "Mainline"})

    assert model.next_version == "1.2.3"


class TestPullRequestEvent:
    """Test suite for service hook payload parsing."""

    def test_from_payload(self, payload):
        event = PullRequestEvent.from_payload(payload)

        assert event.pull_request_id == 123
        assert event.repository_id == "repo-123"
        assert event.source_branch == "feature/login"
        assert event.target_branch == "main"
        assert event.title == "Add feature"
        assert event.event_type == "git.pullrequest.updated"

    def test_string_pull_request_id(self, payload):
        payload["resource"]["pullRequestId"] = "42"

        assert PullRequestEvent.from_payload(payload).pull_request_id == 42

    @pytest.mark.parametrize("value", [None, [], "1", "payload"])
    def test_non_mapping_payload(self, value):
        with pytest.raises(MalformedPayloadError):
            PullRequestEvent.from_payload(value)

    def test_missing_resource(self):
        with pytest.raises(MalformedPayloadError):
            PullRequestEvent.from_payload({"eventType": "git.push"})

    def test_missing_pull_request_id(self, payload):
        del payload["resource"]["pullRequestId"]

        with pytest.raises(MalformedPayloadError):
            PullRequestEvent.from_payload(payload)

    def test_unparsable_pull_request_id(self, payload):
        payload["resource"]["pullRequestId"] = "abc"

        with pytest.raises(MalformedPayloadError, match="Invalid pull request id"):
            PullRequestEvent.from_payload(payload)

    @pytest.mark.parametrize("field", ["repository", "sourceRefName", "targetRefName"])
    def test_missing_required_field(self, payload, field):
        del payload["resource"][field]

        with pytest.raises(MalformedPayloadError, match="missing required fields"):
            PullRequestEvent.from_payload(payload)

    @pytest.mark.parametrize("location,field,value", [
        ("resource", "title", 42),
        ("resource", "title", ["Add feature"]),
        ("root", "eventType", {"x": 1}),
    ])
    def test_wrongly_typed_optional_field(self, payload, location, field, value):
        target = payload["resource"] if location == "resource" else payload
        target[field] = value

        with pytest.raises(MalformedPayloadError, match="Invalid pull request event"):
            PullRequestEvent.from_payload(payload)
