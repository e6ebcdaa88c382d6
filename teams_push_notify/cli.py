"""
Typer CLI entrypoint for teams-push-notify.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from .action import build_payload, collect_commit, run as run_action
from .config import ActionInputs, ConfigError, load_inputs
from .context import RunContext
from .logging_utils import set_failed, setup_logging

app = typer.Typer(add_completion=False, help="Post the latest commit to a Microsoft Teams webhook as an Adaptive Card.")


@dataclass
class CliState:
    logger: Any
    config_file: Optional[Path]


def _overrides(
    webhook_url: Optional[str],
    template: Optional[Path],
    message1: Optional[str],
    message2: Optional[str],
    action_title: Optional[List[str]],
    action_url: Optional[List[str]],
    visible_changed_files: Optional[bool],
    job_status: Optional[str],
) -> Dict[str, Any]:
    return {
        "webhook-url": webhook_url,
        "template": str(template) if template else None,
        "message1": message1,
        "message2": message2,
        "action-titles": list(action_title) if action_title else None,
        "action-urls": list(action_url) if action_url else None,
        "visible-changed-files": visible_changed_files,
        "job-status": job_status,
    }


def _load(state: CliState, overrides: Dict[str, Any]) -> tuple[ActionInputs, RunContext]:
    inputs = load_inputs(overrides=overrides, config_file=str(state.config_file) if state.config_file else None)
    context = RunContext.from_env(job_status=inputs.job_status)
    return inputs, context


@app.callback()
def main(
    ctx: typer.Context,
    config_file: Optional[Path] = typer.Option(None, help="Optional YAML file with default inputs."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose debug logging."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Reduce log verbosity."),
):
    """
    Configure global options and shared context.
    """
    logger = setup_logging(verbose=verbose, quiet=quiet, logger_name="teams-push-notify")
    ctx.obj = CliState(logger=logger, config_file=config_file)


@app.command("notify")
def notify_cmd(
    ctx: typer.Context,
    webhook_url: Optional[str] = typer.Option(None, "--webhook-url", help="Teams incoming webhook URL."),
    template: Optional[Path] = typer.Option(None, "--template", help="JSON body template with {PLACEHOLDER} tokens."),
    message1: Optional[str] = typer.Option(None, "--message1", help="Text shown above the commit facts."),
    message2: Optional[str] = typer.Option(None, "--message2", help="Text shown below the commit facts."),
    action_title: List[str] = typer.Option(None, "--action-title", help="Action button title (repeatable).", show_default=False),
    action_url: List[str] = typer.Option(None, "--action-url", help="Action button URL (repeatable).", show_default=False),
    visible_changed_files: Optional[bool] = typer.Option(
        None, "--visible-changed-files/--hide-changed-files", help="Show the changed files fact.", show_default=False
    ),
    job_status: Optional[str] = typer.Option(None, "--job-status", help="Job status to expose as {GITHUB_JOB_STATUS}."),
):
    """
    Send the latest commit to the Teams webhook.
    """
    state: CliState = ctx.obj
    try:
        inputs, context = _load(
            state,
            _overrides(webhook_url, template, message1, message2, action_title, action_url, visible_changed_files, job_status),
        )
        run_action(inputs, context, logger=state.logger)
    except Exception as exc:
        state.logger.debug("Run failed", exc_info=True)
        set_failed(str(exc))
        raise typer.Exit(code=1)


@app.command("render")
def render_cmd(
    ctx: typer.Context,
    template: Optional[Path] = typer.Option(None, "--template", help="JSON body template with {PLACEHOLDER} tokens."),
    message1: Optional[str] = typer.Option(None, "--message1", help="Text shown above the commit facts."),
    message2: Optional[str] = typer.Option(None, "--message2", help="Text shown below the commit facts."),
    action_title: List[str] = typer.Option(None, "--action-title", help="Action button title (repeatable).", show_default=False),
    action_url: List[str] = typer.Option(None, "--action-url", help="Action button URL (repeatable).", show_default=False),
    visible_changed_files: Optional[bool] = typer.Option(
        None, "--visible-changed-files/--hide-changed-files", help="Show the changed files fact.", show_default=False
    ),
    job_status: Optional[str] = typer.Option(None, "--job-status", help="Job status to expose as {GITHUB_JOB_STATUS}."),
    output_json: Optional[Path] = typer.Option(None, "--output-json", help="Write the payload to a JSON file."),
):
    """
    Build the card payload without posting it.
    """
    state: CliState = ctx.obj
    logger = state.logger
    try:
        inputs, context = _load(
            state,
            _overrides(None, template, message1, message2, action_title, action_url, visible_changed_files, job_status),
        )
        commit = collect_commit(context, logger=logger)
        payload = build_payload(inputs, context, commit)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}", err=True)
        raise typer.Exit(code=2)
    except Exception as exc:
        set_failed(str(exc))
        raise typer.Exit(code=1)

    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output_json:
        output_json.parent.mkdir(parents=True, exist_ok=True)
        output_json.write_text(text, encoding="utf-8")
        logger.info("Wrote payload to %s", output_json)
    else:
        typer.echo(text)


def run():
    app()


if __name__ == "__main__":
    run()
