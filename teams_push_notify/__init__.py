"""
teams-push-notify package: post the latest commit to a Teams webhook.
"""

__all__ = [
    "action",
    "cli",
    "config",
    "contents",
    "context",
    "git",
    "logging_utils",
    "models",
    "teams_webhook",
    "utils",
]
