import pytest

from teams_push_notify.context import RunContext


@pytest.fixture
def run_context():
    return RunContext(
        event_name="push",
        sha="abc123",
        ref="refs/heads/main",
        repository="test-repo",
        repository_url="https://github.com/test-repo",
        server_url="https://github.com",
        run_number="123",
        run_id="123456",
        actor="test-actor",
        workflow="CI",
    )


@pytest.fixture
def github_env(monkeypatch):
    """Clear runner variables that would leak in from a real Actions job."""
    for name in (
        "GITHUB_EVENT_PATH",
        "GITHUB_WORKFLOW_SHA",
        "TEAMS_PUSH_NOTIFY_CONFIG",
        "INPUT_TEMPLATE",
        "INPUT_MESSAGE1",
        "INPUT_MESSAGE2",
        "INPUT_ACTION-TITLES",
        "INPUT_ACTION_TITLES",
        "INPUT_ACTION-URLS",
        "INPUT_ACTION_URLS",
        "INPUT_VISIBLE-CHANGED-FILES",
        "INPUT_VISIBLE_CHANGED_FILES",
        "INPUT_WEBHOOK-URL",
        "INPUT_WEBHOOK_URL",
        "INPUT_JOB-STATUS",
        "INPUT_JOB_STATUS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GITHUB_EVENT_NAME", "push")
    monkeypatch.setenv("GITHUB_SHA", "dummySHA")
    monkeypatch.setenv("GITHUB_REF", "refs/heads/dummyBranch")
    monkeypatch.setenv("GITHUB_REPOSITORY", "octo/dummyRepo")
    monkeypatch.setenv("GITHUB_SERVER_URL", "https://github.com")
    monkeypatch.setenv("GITHUB_RUN_NUMBER", "7")
    monkeypatch.setenv("GITHUB_RUN_ID", "99")
    monkeypatch.setenv("GITHUB_ACTOR", "octocat")
    monkeypatch.setenv("GITHUB_WORKFLOW", "CI")
    return monkeypatch
