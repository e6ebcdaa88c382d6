import types

import pytest
import requests

from teams_push_notify.teams_webhook import RequestFailedError, make_payload, post_webhook_url


def test_make_payload_envelope():
    payload = make_payload([{"type": "TextBlock", "text": "hi"}], [])
    attachment = payload["attachments"][0]
    assert attachment["contentType"] == "application/vnd.microsoft.card.adaptive"
    content = attachment["content"]
    assert content["$schema"] == "http://adaptivecards.io/schemas/adaptive-card.json"
    assert content["type"] == "AdaptiveCard"
    assert content["version"] == "1.2"
    assert content["body"] == [{"type": "TextBlock", "text": "hi"}]
    assert content["actions"] == []


def test_post_success(monkeypatch):
    sent = {}

    def fake_post(url, json, headers, timeout):
        sent.update(url=url, json=json, headers=headers, timeout=timeout)
        return types.SimpleNamespace(ok=True, status_code=200, reason="OK", text="1")

    monkeypatch.setattr("requests.post", fake_post)
    resp = post_webhook_url("https://dummy.url", {"a": 1})
    assert resp.ok
    assert sent["url"] == "https://dummy.url"
    assert sent["json"] == {"a": 1}
    assert sent["headers"] == {"Content-Type": "application/json"}
    assert sent["timeout"] is None


def test_post_failure(monkeypatch):
    def fake_post(url, json, headers, timeout):
        return types.SimpleNamespace(ok=False, status_code=500, reason="Internal Server Error", text="boom")

    monkeypatch.setattr("requests.post", fake_post)
    with pytest.raises(RequestFailedError, match="Request failed: Internal Server Error") as excinfo:
        post_webhook_url("https://dummy.url", {})
    assert excinfo.value.status_code == 500


def test_network_errors_propagate(monkeypatch):
    def fake_post(url, json, headers, timeout):
        raise requests.exceptions.ConnectionError("unreachable")

    monkeypatch.setattr("requests.post", fake_post)
    with pytest.raises(requests.exceptions.ConnectionError):
        post_webhook_url("https://dummy.url", {})
