"""
Git inspector: reads the latest commit through the git executable.
"""

from __future__ import annotations

import logging
import subprocess
from typing import List, Optional, Sequence

from .models import CommitInfo, GitResult


class GitError(Exception):
    """Raised when the git executable cannot be started."""


def run_git(args: Sequence[str], cwd: Optional[str] = None, logger: Optional[logging.Logger] = None) -> GitResult:
    """
    Run git once and return its output. A non-zero exit code is not an error.
    """
    log = logger or logging.getLogger(__name__)
    cmd = ["git", *args]
    log.debug("git call args=%s", " ".join(args))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=False, cwd=cwd)
    except OSError as exc:
        raise GitError(f"Failed to execute git: {exc}") from exc
    if result.returncode != 0:
        log.debug("git exited with %s: %s", result.returncode, (result.stderr or "").strip())
    return GitResult(returncode=result.returncode, stdout=result.stdout or "", stderr=result.stderr or "")


class GitInspector:
    """
    Fetches commit details for a sha. Holds the working directory so the
    orchestrator can be pointed at another checkout or a fake in tests.
    """

    def __init__(self, cwd: Optional[str] = None, logger: Optional[logging.Logger] = None):
        self.cwd = cwd
        self.logger = logger or logging.getLogger(__name__)

    def get_commit_message(self, sha: str) -> str:
        result = run_git(["show", "-s", "--format=%B", sha], cwd=self.cwd, logger=self.logger)
        return result.stdout.strip()

    def get_changed_files(self, sha: str) -> List[str]:
        result = run_git(["diff-tree", "--no-commit-id", "--name-only", "-r", sha], cwd=self.cwd, logger=self.logger)
        output = result.stdout.strip()
        return output.split("\n") if output else []

    def get_commit_info(self, sha: str) -> CommitInfo:
        return CommitInfo(
            sha=sha,
            message=self.get_commit_message(sha),
            changed_files=self.get_changed_files(sha),
        )
