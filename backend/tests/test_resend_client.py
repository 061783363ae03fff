# backend/tests/test_resend_client.py

import httpx
import pytest

from fgpe_mail.resend_api.client import (
    ResendAPIError,
    ResendClient,
    ResendClientError,
    ResendConnectionError,
)
from fgpe_mail.resend_api.config import ResendConfig, get_resend_config
from fgpe_mail.utils.config import EnvVarMissingError


def _client() -> ResendClient:
    return ResendClient(
        config=ResendConfig(
            api_key="re_test",
            api_base_url="https://api.resend.test",
            timeout_seconds=5,
        )
    )


PAYLOAD = {
    "from": "onboarding@resend.dev",
    "to": "a@b.com",
    "subject": "hello",
    "html": "<p>hi</p>",
}


def test_send_email_success(monkeypatch):
    captured = {}

    def fake_post(url, headers=None, json=None, timeout=None):
        captured.update(url=url, headers=headers, json=json, timeout=timeout)
        return httpx.Response(status_code=200, json={"id": "email-123"})

    monkeypatch.setattr(httpx, "post", fake_post)

    data = _client().send_email(PAYLOAD)

    assert data == {"id": "email-123"}
    assert captured["url"] == "https://api.resend.test/emails"
    assert captured["headers"]["Authorization"] == "Bearer re_test"
    assert captured["json"] == PAYLOAD
    assert captured["timeout"] == 5


def test_send_email_api_error_keeps_provider_body(monkeypatch):
    def fake_post(*args, **kwargs):
        return httpx.Response(
            status_code=422,
            json={
                "statusCode": 422,
                "name": "validation_error",
                "message": "Invalid `to` field.",
            },
        )

    monkeypatch.setattr(httpx, "post", fake_post)

    with pytest.raises(ResendAPIError) as excinfo:
        _client().send_email(PAYLOAD)

    assert excinfo.value.status_code == 422
    assert excinfo.value.name == "validation_error"
    assert excinfo.value.message == "Invalid `to` field."


def test_send_email_api_error_without_json_body(monkeypatch):
    def fake_post(*args, **kwargs):
        return httpx.Response(status_code=502, content=b"Bad Gateway")

    monkeypatch.setattr(httpx, "post", fake_post)

    with pytest.raises(ResendAPIError) as excinfo:
        _client().send_email(PAYLOAD)

    assert excinfo.value.status_code == 502
    assert excinfo.value.name == "application_error"
    assert excinfo.value.message == "Bad Gateway"


def test_send_email_network_error(monkeypatch):
    def fake_post(*args, **kwargs):
        raise httpx.RequestError("network error", request=None)

    monkeypatch.setattr(httpx, "post", fake_post)

    with pytest.raises(ResendConnectionError) as excinfo:
        _client().send_email(PAYLOAD)

    assert isinstance(excinfo.value, ResendClientError)
    assert "network error" in str(excinfo.value)


def test_get_resend_config_reads_env(monkeypatch):
    monkeypatch.setenv("RESEND_API_KEY", "re_from_env")
    monkeypatch.setenv("RESEND_API_BASE_URL", "https://example.com/api/")
    monkeypatch.setenv("RESEND_TIMEOUT_SECONDS", "not-a-number")

    config = get_resend_config()

    assert config.api_key == "re_from_env"
    assert config.api_base_url == "https://example.com/api"
    assert config.timeout_seconds == 10


def test_get_resend_config_requires_api_key(monkeypatch):
    monkeypatch.delenv("RESEND_API_KEY", raising=False)

    with pytest.raises(EnvVarMissingError):
        get_resend_config()
