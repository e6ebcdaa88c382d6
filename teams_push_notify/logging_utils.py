"""
Logging helpers for teams-push-notify.
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional

import typer
from tabulate import tabulate

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _resolve_level(verbose: bool, quiet: bool, runner_debug: bool) -> int:
    if quiet and not verbose:
        return logging.WARNING
    if verbose and quiet:
        return logging.INFO
    if verbose or runner_debug:
        return logging.DEBUG
    return logging.INFO


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    logger_name: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> logging.Logger:
    """
    Configure logging for a step run.

    Args:
        verbose: Log at DEBUG
        quiet: Log at WARNING; cancels out with verbose
        logger_name: Logger to configure; defaults to root
        env: Environment to check for RUNNER_DEBUG (re-run with debug logging)

    Returns:
        The configured logger
    """
    environ = os.environ if env is None else env
    level = _resolve_level(verbose, quiet, environ.get("RUNNER_DEBUG") == "1")
    logging.basicConfig(level=level, stream=sys.stdout, format=LOG_FORMAT)
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    return logger


def escape_command_data(value: str) -> str:
    """
    Escape a workflow command value (%, CR and LF).
    """
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


@contextmanager
def log_group(title: str) -> Iterator[None]:
    """
    Fold everything logged inside the block into a collapsible section.
    """
    typer.echo(f"::group::{escape_command_data(title)}")
    try:
        yield
    finally:
        typer.echo("::endgroup::")


def set_failed(message: str) -> None:
    """
    Report a failure through the runner's error annotation.
    """
    typer.echo(f"::error::{escape_command_data(message)}")


def format_mapping(data: Mapping[str, Any]) -> str:
    rows = []
    for key, value in data.items():
        if isinstance(value, (list, tuple)):
            value = ", ".join(str(item) for item in value)
        rows.append([key, value])
    return tabulate(rows, headers=["Input", "Value"], tablefmt="github")
