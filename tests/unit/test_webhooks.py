"""
Unit tests for webhook endpoints.
"""

from unittest.mock import AsyncMock, patch

import pytest

# Skip tests if fastapi is not installed
pytest.importorskip("fastapi")

from fastapi.testclient import TestClient

from pr_policy.config import Settings, get_settings
from pr_policy.main import app
from pr_policy.models.file_change import CommitChangeSet, FileChange

WEBHOOK_URL = "/webhooks/azure-devops/pr"


def configured_settings() -> Settings:
    return Settings(
        _env_file=None,
        devops_account="test-org",
        devops_project="test-project",
        devops_pat="test-pat",
    )


@pytest.fixture
def client():
    """Create test client with complete settings."""
    app.dependency_overrides[get_settings] = configured_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def payload():
    return {
        "eventType": "git.pullrequest.created",
        "resource": {
            "pullRequestId": 123,
            "repository": {"id": "repo-123"},
            "sourceRefName": "refs/heads/feature",
            "targetRefName": "refs/heads/main",
            "title": "Test PR",
        },
    }


@pytest.fixture
def mock_devops_client():
    """Mock the Azure DevOps client built for each request."""
    with patch('pr_policy.services.policy_checker.create_devops_client') as factory:
        devops_client = factory.return_value
        devops_client.list_pull_request_commits = AsyncMock(return_value=["c1"])
        devops_client.get_commit_changes = AsyncMock(return_value=CommitChangeSet(
            commit_id="c1",
            changes=[FileChange(path="/GitVersion.yml"), FileChange(path="/CHANGELOG.md")],
        ))
        devops_client.get_file_content = AsyncMock(side_effect=[
            "next-version: 1.0.0\n",
            "next-version: 1.1.0\n",
        ])
        devops_client.post_pull_request_status = AsyncMock()
        yield devops_client


def test_webhook_valid_pr(client, payload, mock_devops_client):
    """Test webhook with a PR that updates both files."""
    response = client.post(WEBHOOK_URL, json=payload)

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "message": "Alle Git bestanden bijgewerkt."}
    outcome = mock_devops_client.post_pull_request_status.await_args.args[2]
    assert outcome.succeeded is True


def test_webhook_changelog_optional_query(client, payload, mock_devops_client):
    """Test validateChangelog=false makes the change log optional."""
    mock_devops_client.get_commit_changes.return_value = CommitChangeSet(
        commit_id="c1",
        changes=[FileChange(path="/GitVersion.yml")],
    )

    response = client.post(f"{WEBHOOK_URL}?validateChangelog=false", json=payload)

    assert response.status_code == 200
    assert response.json()["message"] == "Alle Git bestanden bijgewerkt."


def test_webhook_changelog_required_by_default(client, payload, mock_devops_client):
    """Test the change log is required without the query flag."""
    mock_devops_client.get_commit_changes.return_value = CommitChangeSet(
        commit_id="c1",
        changes=[FileChange(path="/GitVersion.yml")],
    )

    response = client.post(f"{WEBHOOK_URL}?validateChangelog=true", json=payload)

    assert response.status_code == 200
    assert response.json()["message"] == "CHANGELOG niet bijgewerkt."


def test_webhook_empty_body(client, mock_devops_client):
    """Test that a request without a PR payload is not found."""
    response = client.get(WEBHOOK_URL)

    assert response.status_code == 404
    assert response.json()["status"] == "not_found"
    mock_devops_client.list_pull_request_commits.assert_not_awaited()


def test_webhook_invalid_json(client, mock_devops_client):
    """Test that a non-JSON body is not found."""
    response = client.post(
        WEBHOOK_URL,
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 404


def test_webhook_missing_configuration(payload):
    """Test that missing settings return 400 before any Azure DevOps call."""
    app.dependency_overrides[get_settings] = lambda: Settings(
        _env_file=None, devops_account=None, devops_project=None, devops_pat=None
    )
    try:
        with patch('pr_policy.services.policy_checker.create_devops_client') as factory:
            response = TestClient(app).post(WEBHOOK_URL, json=payload)

        assert response.status_code == 400
        assert response.json() == {
            "status": "error",
            "message": "Azure DevOps Account not configured!",
        }
        factory.assert_not_called()
    finally:
        app.dependency_overrides.clear()


def test_webhook_processing_error(client, payload, mock_devops_client):
    """Test that processing exceptions return 400 with the message."""
    mock_devops_client.list_pull_request_commits.side_effect = RuntimeError("boom")

    response = client.post(WEBHOOK_URL, json=payload)

    assert response.status_code == 400
    assert response.json() == {"status": "error", "message": "boom"}


def test_webhook_wrongly_typed_title(client, payload, mock_devops_client):
    """Test that a non-string title is treated as a malformed payload."""
    payload["resource"]["title"] = 42

    response = client.post(WEBHOOK_URL, json=payload)

    assert response.status_code == 404
    assert response.json()["status"] == "not_found"
    mock_devops_client.list_pull_request_commits.assert_not_awaited()
