"""Shared fixtures for formrelay tests."""

import json
from urllib.parse import parse_qs

import httpx
import pytest

from formrelay.config import Settings
from formrelay.models.notification import DeliveryOutcome
from formrelay.services.transports import EmailTransport


class RecordingTransport(EmailTransport):
    """Transport stub that records what it was asked to send."""

    name = "stub"

    def __init__(self, outcome=None, error=None):
        self.sent = []
        self.outcome = outcome or DeliveryOutcome(delivered=True, provider_response={"id": "stub-1"})
        self.error = error

    async def send(self, message, recipient):
        self.sent.append((message, recipient))
        if self.error is not None:
            raise self.error
        return self.outcome


def siteverify_client(body, status_code=200, requests=None):
    """AsyncClient whose every request answers with a fixed siteverify body."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if isinstance(body, Exception):
            raise body
        return httpx.Response(status_code, content=json.dumps(body).encode(),
                              headers={"Content-Type": "application/json"})

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def form_fields(request: httpx.Request) -> dict:
    return {key: values[0] for key, values in parse_qs(request.content.decode()).items()}


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        recaptcha_secret="test-secret",
        resend_api_key="re_test",
        to_email="owner@example.com",
        from_email="Form <forms@example.com>",
    )


@pytest.fixture
def payload():
    return {
        "name": "Ana",
        "email": "a@x.com",
        "phone": "123",
        "service": "Photo",
        "recaptchaToken": "tok",
    }


@pytest.fixture
def transport():
    return RecordingTransport()
