"""
Data models for teams-push-notify.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class GitResult:
    returncode: int
    stdout: str
    stderr: str = ""


@dataclass
class CommitInfo:
    """Latest commit details shown on the card."""
    sha: str
    message: str
    changed_files: List[str] = field(default_factory=list)


@dataclass
class CardAction:
    """An Action.OpenUrl button on the card."""
    title: str
    url: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "Action.OpenUrl", "title": self.title, "url": self.url}
