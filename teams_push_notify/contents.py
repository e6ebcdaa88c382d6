"""
Adaptive Card body and action builders.
"""

from __future__ import annotations

import copy
import json
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .context import RunContext
from .models import CardAction


class ContentError(ValueError):
    """Base class for card content errors."""


class LengthMismatchError(ContentError):
    """Raised when action titles and URLs differ in count."""


class MissingFieldError(ContentError):
    """Raised when an action entry lacks a title or URL."""


class TemplateLoadError(ContentError):
    """Raised when a body template cannot be read, parsed or validated."""


TITLE_BLOCK = {
    "type": "TextBlock",
    "text": "#{GITHUB_RUN_NUMBER} {COMMIT_MESSAGE}",
    "id": "Title",
    "spacing": "Medium",
    "size": "large",
    "weight": "Bolder",
    "color": "Accent",
}

CUSTOM_MESSAGE_1_BLOCK = {
    "type": "TextBlock",
    "text": "{CUSTOM_MESSAGE_1}",
    "separator": True,
    "wrap": True,
}

CUSTOM_MESSAGE_2_BLOCK = {
    "type": "TextBlock",
    "text": "{CUSTOM_MESSAGE_2}",
    "separator": True,
    "wrap": True,
}

FACT_BLOCK = {
    "type": "FactSet",
    "facts": [
        {"title": "Repository/Branch:", "value": "{GITHUB_REPOSITORY} / {BRANCH}"},
        {"title": "Workflow/Event/Actor:", "value": "{GITHUB_WORKFLOW} / {GITHUB_EVENT_NAME} / {GITHUB_ACTOR}"},
        {"title": "SHA-1:", "value": "{GITHUB_SHA}"},
    ],
    "id": "acFactSet",
}

CHANGED_FILES_FACT = {"title": "Changed files:", "value": "{CHANGED_FILES}"}

DEFAULT_ACTION_TITLE = "View Workflow"

TOKEN_PATTERN = re.compile(r"\{[A-Z0-9_]+\}")


def format_changed_files(changed_files: Any) -> str:
    """
    Back-quote each file name and separate entries with a blank line.
    """
    if not isinstance(changed_files, (list, tuple)):
        return ""
    return "\n\n".join(f"`{name}`" for name in changed_files)


def body_parameters(
    context: RunContext,
    message1: str,
    message2: str,
    commit_message: str,
    changed_files: Optional[Sequence[str]] = None,
) -> Dict[str, Optional[str]]:
    """
    Token -> value mapping for body placeholders. None leaves a token untouched.
    """
    return {
        "{GITHUB_RUN_NUMBER}": context.run_number,
        "{GITHUB_RUN_ID}": context.run_id,
        "{COMMIT_MESSAGE}": commit_message,
        "{CUSTOM_MESSAGE_1}": message1,
        "{GITHUB_REPOSITORY}": context.repository,
        "{BRANCH}": context.resolve_branch(),
        "{GITHUB_EVENT_NAME}": context.event_name,
        "{GITHUB_WORKFLOW}": context.workflow,
        "{GITHUB_ACTOR}": context.actor,
        "{GITHUB_SHA}": context.sha,
        "{GITHUB_WORKFLOW_SHA}": context.workflow_sha or context.sha,
        "{GITHUB_JOB_STATUS}": context.job_status,
        "{WORKFLOW_URL}": context.workflow_url if context.repository_url and context.run_id else None,
        "{CHANGED_FILES}": format_changed_files(changed_files),
        "{CUSTOM_MESSAGE_2}": message2,
    }


def substitute_tokens(text: str, values: Mapping[str, Optional[str]]) -> str:
    """
    Replace every occurrence of each token that has a value.

    Substitution is a single pass over ``text``; tokens that appear inside an
    inserted value are kept as written.
    """

    def _lookup(match: re.Match) -> str:
        value = values.get(match.group(0))
        return match.group(0) if value is None else str(value)

    return TOKEN_PATTERN.sub(_lookup, text)


def _json_escape(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    # Drop the surrounding quotes, keep the escapes.
    return json.dumps(str(value), ensure_ascii=False)[1:-1]


def replace_body_parameters(
    target: str,
    context: RunContext,
    message1: str,
    message2: str,
    commit_message: str,
    changed_files: Optional[Sequence[str]] = None,
) -> str:
    """
    Substitute placeholders in serialized JSON text.

    Values are escaped as JSON string content, so a commit message containing
    quotes or newlines keeps the document parseable.
    """
    values = body_parameters(context, message1, message2, commit_message, changed_files)
    escaped = {token: _json_escape(value) for token, value in values.items()}
    return substitute_tokens(target, escaped)


def render_elements(elements: Any, values: Mapping[str, Optional[str]]) -> Any:
    """
    Return a copy of ``elements`` with tokens substituted in every string leaf.
    """
    if isinstance(elements, str):
        return substitute_tokens(elements, values)
    if isinstance(elements, list):
        return [render_elements(item, values) for item in elements]
    if isinstance(elements, dict):
        return {key: render_elements(item, values) for key, item in elements.items()}
    return elements


def make_default_body(
    context: RunContext,
    message1: str,
    message2: str,
    commit_message: str,
    changed_files: Optional[Sequence[str]] = None,
) -> List[Dict[str, Any]]:
    """
    Build the built-in card body.

    Args:
        context: Run context supplying repository, branch, workflow and actor
        message1: Optional text shown above the facts
        message2: Optional text shown below the facts
        commit_message: Latest commit message, shown in the title
        changed_files: Changed file paths; the fact is added only for a non-empty list

    Returns:
        List of Adaptive Card body elements in display order
    """
    body: List[Dict[str, Any]] = [TITLE_BLOCK]
    if message1:
        body.append(CUSTOM_MESSAGE_1_BLOCK)
    fact = copy.deepcopy(FACT_BLOCK)
    if isinstance(changed_files, (list, tuple)) and changed_files:
        fact["facts"].append(CHANGED_FILES_FACT)
    body.append(fact)
    if message2:
        body.append(CUSTOM_MESSAGE_2_BLOCK)

    values = body_parameters(context, message1, message2, commit_message, changed_files)
    return render_elements(body, values)


def validate_body(body: Any) -> List[Dict[str, Any]]:
    """
    Check that a rendered template is a usable Adaptive Card body.
    """
    if not isinstance(body, list):
        raise TemplateLoadError("Template must contain a JSON array of card elements.")
    for index, element in enumerate(body):
        if not isinstance(element, dict):
            raise TemplateLoadError(f"Template element {index} must be an object.")
        element_type = element.get("type")
        if not isinstance(element_type, str) or not element_type:
            raise TemplateLoadError(f"Template element {index} is missing a 'type'.")
        if element_type == "TextBlock" and not isinstance(element.get("text"), str):
            raise TemplateLoadError(f"TextBlock element {index} must have a string 'text'.")
        if element_type == "FactSet" and not isinstance(element.get("facts"), list):
            raise TemplateLoadError(f"FactSet element {index} must have a 'facts' list.")
    return body


def load_template_body(
    path: str,
    context: RunContext,
    message1: str,
    message2: str,
    commit_message: str,
    changed_files: Optional[Sequence[str]] = None,
) -> List[Dict[str, Any]]:
    """
    Read a body template file, substitute placeholders, and parse it.
    """
    template_path = Path(path)
    try:
        text = template_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateLoadError(f"Failed to read template file {template_path}: {exc}") from exc

    replaced = replace_body_parameters(text, context, message1, message2, commit_message, changed_files)
    try:
        body = json.loads(replaced)
    except json.JSONDecodeError as exc:
        raise TemplateLoadError(f"Invalid JSON in template file {template_path}: {exc}") from exc
    return validate_body(body)


def make_action(context: RunContext, titles: Sequence[str], urls: Sequence[str]) -> List[Dict[str, Any]]:
    """
    Pair action titles and URLs into Action.OpenUrl buttons.

    With no actions configured, a single button linking to the workflow run
    is returned instead.
    """
    if len(titles) != len(urls):
        raise LengthMismatchError(
            f"Action titles and URLs must have the same length. Titles: {len(titles)}, URLs: {len(urls)}"
        )

    if not titles or (len(titles) == 1 and not titles[0] and not urls[0]):
        return [CardAction(title=DEFAULT_ACTION_TITLE, url=context.workflow_url).to_dict()]

    actions = []
    for title, url in zip(titles, urls):
        if not title or not url:
            raise MissingFieldError("Action parameters must contain a title and URL.")
        actions.append(CardAction(title=title, url=url).to_dict())
    return actions
