"""
Step orchestration: commit lookup, card assembly and delivery.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Optional

from .config import ActionInputs, ConfigError
from .context import RunContext
from .contents import load_template_body, make_action, make_default_body
from .git import GitInspector
from .logging_utils import format_mapping, log_group
from .models import CommitInfo
from .teams_webhook import make_payload, post_webhook_url


def _log_event(context: RunContext, sha: str, log: logging.Logger) -> None:
    if context.event_name == "push":
        title = "Push event"
    elif context.event_name == "pull_request":
        title = "This action does not support pull request events."
    else:
        title = f"Unsupported event: {context.event_name}"
        log.warning("This action only supports push events; falling back to GITHUB_SHA.")
    with log_group(title):
        log.info("branch = %s", context.resolve_branch())
        log.info("repository = %s", context.repository)
        log.info("actor = %s", context.actor)
        log.info("sha = %s", sha)


def collect_commit(context: RunContext, git: Optional[GitInspector] = None, logger: Optional[logging.Logger] = None) -> CommitInfo:
    log = logger or logging.getLogger(__name__)
    sha = context.resolve_sha()
    _log_event(context, sha, log)
    inspector = git or GitInspector(logger=log)
    return inspector.get_commit_info(sha)


def build_payload(inputs: ActionInputs, context: RunContext, commit: CommitInfo) -> Dict[str, Any]:
    """
    Assemble the Adaptive Card attachment for a commit.
    """
    changed_files = commit.changed_files if inputs.visible_changed_files else None
    if inputs.template:
        body = load_template_body(
            inputs.template, context, inputs.message1, inputs.message2, commit.message, changed_files
        )
    else:
        body = make_default_body(context, inputs.message1, inputs.message2, commit.message, changed_files)
    actions = make_action(context, inputs.action_titles, inputs.action_urls)
    return make_payload(body, actions)


def run(
    inputs: ActionInputs,
    context: RunContext,
    git: Optional[GitInspector] = None,
    poster: Callable[..., Any] = post_webhook_url,
    logger: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    """
    Send the commit notification card and return the posted payload.
    """
    log = logger or logging.getLogger(__name__)
    if not inputs.webhook_url:
        raise ConfigError("Input required and not supplied: webhook-url")

    commit = collect_commit(context, git=git, logger=log)

    with log_group("Inputs"):
        log.info("inputs:\n%s", format_mapping(inputs.redacted()))
        log.info("commit message: %s", commit.message)
        log.info("changed files: %s", ", ".join(commit.changed_files))
        log.debug("context: %s", context)

    payload = build_payload(inputs, context, commit)
    log.debug("payload: %s", json.dumps(payload, indent=2, ensure_ascii=False))

    poster(inputs.webhook_url, payload, logger=log)

    with log_group("Result"):
        log.info("Message sent successfully.")
    return payload
