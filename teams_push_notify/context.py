"""
Run context for the workflow that triggered the step.

The runner exposes run metadata through GITHUB_* variables and a JSON event
payload on disk. It is read once into an immutable RunContext which is passed
to everything that needs repository, run or actor details.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional


class ContextError(Exception):
    """Raised when the event payload cannot be parsed."""


def _load_event_payload(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return {}
    event_path = Path(path)
    try:
        text = event_path.read_text(encoding="utf-8")
    except OSError:
        return {}
    try:
        payload = json.loads(text) if text.strip() else {}
    except json.JSONDecodeError as exc:
        raise ContextError(f"Invalid JSON in event payload {event_path}") from exc
    return payload if isinstance(payload, dict) else {}


@dataclass(frozen=True)
class RunContext:
    event_name: Optional[str] = None
    sha: Optional[str] = None
    ref: Optional[str] = None
    repository: Optional[str] = None
    repository_url: Optional[str] = None
    server_url: Optional[str] = None
    run_number: Optional[str] = None
    run_id: Optional[str] = None
    actor: Optional[str] = None
    workflow: Optional[str] = None
    workflow_sha: Optional[str] = None
    job_status: Optional[str] = None
    payload: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, job_status: Optional[str] = None) -> "RunContext":
        """
        Build the context from GITHUB_* variables and the event payload file.
        """
        environ = os.environ if env is None else env
        payload = _load_event_payload(environ.get("GITHUB_EVENT_PATH"))
        repo_payload = payload.get("repository") or {}
        full_name = environ.get("GITHUB_REPOSITORY") or repo_payload.get("full_name")
        server_url = environ.get("GITHUB_SERVER_URL") or "https://github.com"

        repository = repo_payload.get("name")
        if not repository and full_name:
            repository = full_name.split("/")[-1]
        repository_url = repo_payload.get("html_url")
        if not repository_url and full_name:
            repository_url = f"{server_url.rstrip('/')}/{full_name}"

        return cls(
            event_name=environ.get("GITHUB_EVENT_NAME"),
            sha=environ.get("GITHUB_SHA"),
            ref=environ.get("GITHUB_REF"),
            repository=repository,
            repository_url=repository_url,
            server_url=server_url,
            run_number=environ.get("GITHUB_RUN_NUMBER"),
            run_id=environ.get("GITHUB_RUN_ID"),
            actor=environ.get("GITHUB_ACTOR"),
            workflow=environ.get("GITHUB_WORKFLOW"),
            workflow_sha=environ.get("GITHUB_WORKFLOW_SHA"),
            job_status=job_status or None,
            payload=payload,
        )

    @property
    def branch(self) -> str:
        return self.ref.replace("refs/heads/", "", 1) if self.ref else ""

    @property
    def workflow_url(self) -> str:
        return f"{self.repository_url}/actions/runs/{self.run_id}"

    @property
    def pull_request_head(self) -> Dict[str, Any]:
        pull_request = self.payload.get("pull_request") or {}
        return pull_request.get("head") or {}

    def resolve_sha(self) -> str:
        """
        Commit to inspect: the head commit for pull requests, GITHUB_SHA otherwise.
        """
        if self.event_name == "pull_request":
            head_sha = self.pull_request_head.get("sha")
            if head_sha:
                return head_sha
        return self.sha or ""

    def resolve_branch(self) -> str:
        if self.event_name == "pull_request":
            head_ref = self.pull_request_head.get("ref")
            if head_ref:
                return head_ref
        return self.branch
