"""
Teams webhook sender.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

ADAPTIVE_CARD_CONTENT_TYPE = "application/vnd.microsoft.card.adaptive"
ADAPTIVE_CARD_SCHEMA = "http://adaptivecards.io/schemas/adaptive-card.json"
ADAPTIVE_CARD_VERSION = "1.2"


class RequestFailedError(Exception):
    """Raised when the webhook answers with a non-success status."""

    def __init__(self, status_text: str, status_code: Optional[int] = None):
        super().__init__(f"Request failed: {status_text}")
        self.status_text = status_text
        self.status_code = status_code


def make_payload(body: List[Dict[str, Any]], actions: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Wrap card body and actions in the attachment envelope Teams expects.
    """
    return {
        "type": "message",
        "attachments": [
            {
                "contentType": ADAPTIVE_CARD_CONTENT_TYPE,
                "content": {
                    "$schema": ADAPTIVE_CARD_SCHEMA,
                    "type": "AdaptiveCard",
                    "version": ADAPTIVE_CARD_VERSION,
                    "body": body,
                    "actions": actions,
                },
            }
        ],
    }


def post_webhook_url(
    url: str,
    payload: Dict[str, Any],
    timeout: Optional[float] = None,
    session: Optional[requests.Session] = None,
    logger: Optional[logging.Logger] = None,
) -> requests.Response:
    """
    POST the payload to a Teams incoming webhook once.

    Connection errors from requests propagate unchanged.
    """
    log = logger or logging.getLogger(__name__)
    sender = session or requests
    resp = sender.post(url, json=payload, headers={"Content-Type": "application/json"}, timeout=timeout)
    if not resp.ok:
        log.debug("Teams webhook returned HTTP %s: %s", resp.status_code, (resp.text or "")[:200])
        raise RequestFailedError(resp.reason or str(resp.status_code), status_code=resp.status_code)
    return resp
