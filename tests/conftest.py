"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any, Optional

import pytest
import requests

from config import AppConfig
from data.auth import CredentialVault, Credentials, TokenManager
from data.connection import QueryClient


TOKEN_URL = "https://esologs.test/oauth/token"
GRAPHQL_URL = "https://esologs.test/api/v2/client"


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> Any:
        if self.text is not None:
            raise requests.exceptions.JSONDecodeError("Expecting value", self.text, 0)
        return self._payload


class FakeSession:
    """Records POSTs and replays queued responses per URL (exceptions are raised)."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self._queued: dict[str, list[Any]] = {}

    def queue(self, url: str, *responses: Any) -> None:
        self._queued.setdefault(url, []).extend(responses)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        queued = self._queued.get(url)
        if not queued:
            raise AssertionError(f"Unexpected POST to {url}")
        response = queued.pop(0) if len(queued) > 1 else queued[0]
        if isinstance(response, BaseException):
            raise response
        return response

    def calls_to(self, url: str) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["url"] == url]


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def token_response(value: str = "tok-1", expires_in: int = 3600) -> FakeResponse:
    return FakeResponse(200, {"token_type": "Bearer", "access_token": value, "expires_in": expires_in})


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def vault() -> CredentialVault:
    return CredentialVault(Credentials(client_id="client-abc", client_secret="s3cret"))


@pytest.fixture
def tokens(vault: CredentialVault, session: FakeSession, clock: FakeClock) -> TokenManager:
    return TokenManager(vault, token_url=TOKEN_URL, session=session, clock=clock)


@pytest.fixture
def client(tokens: TokenManager, session: FakeSession) -> QueryClient:
    return QueryClient(tokens, graphql_url=GRAPHQL_URL, session=session)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        esologs_client_id="client-abc",
        esologs_client_secret="s3cret",
        esologs_base_url="https://esologs.test/",
    )
