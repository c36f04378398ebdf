"""
ESO Logs OAuth client-credentials handshake.

The API hands out short-lived bearer tokens for a client id/secret pair:
https://www.esologs.com/v2-api-docs/eso/
"""
from __future__ import annotations

import base64
import math
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests

from config import PLACEHOLDER_CLIENT_ID, AppConfig
from data.errors import AuthenticationError
from log_config import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class Credentials:
    client_id: str
    client_secret: str


@dataclass(frozen=True)
class CredentialVault:
    credentials: Credentials

    @classmethod
    def from_config(cls, cfg: AppConfig) -> "CredentialVault":
        return cls(Credentials(client_id=cfg.esologs_client_id, client_secret=cfg.esologs_client_secret))

    def is_configured(self) -> bool:
        client_id = self.credentials.client_id
        return bool(client_id) and client_id != PLACEHOLDER_CLIENT_ID


@dataclass(frozen=True)
class AccessToken:
    value: str
    expires_at: float  # epoch seconds

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class TokenManager:
    """
    Caches one access token per instance and re-runs the handshake once it expires.

    Concurrent cache misses may both hit the token endpoint; the handshake is
    idempotent so the last writer wins.
    """

    def __init__(
        self,
        vault: CredentialVault,
        token_url: str,
        session: Any = None,
        clock: Callable[[], float] = time.time,
        timeout: Optional[float] = None,
    ):
        self.vault = vault
        self.token_url = token_url
        self._http = session if session is not None else requests
        self._clock = clock
        self._timeout = timeout
        self._token: Optional[AccessToken] = None

    @property
    def cached_token(self) -> Optional[AccessToken]:
        return self._token

    def invalidate(self) -> None:
        self._token = None

    def get_token(self) -> AccessToken:
        now = self._clock()
        if self._token is not None and self._token.is_valid(now):
            logger.debug("esologs_token_cache_hit", expires_at=self._token.expires_at)
            return self._token

        token = self._handshake(now)
        self._token = token
        return token

    def _basic_auth(self) -> str:
        creds = self.vault.credentials
        raw = f"{creds.client_id}:{creds.client_secret}".encode("utf-8")
        return base64.b64encode(raw).decode("ascii")

    def _handshake(self, now: float) -> AccessToken:
        logger.info("esologs_token_handshake", url=self.token_url)
        try:
            resp = self._http.post(
                self.token_url,
                headers={
                    "Content-Type": "application/x-www-form-urlencoded",
                    "Authorization": f"Basic {self._basic_auth()}",
                },
                data="grant_type=client_credentials",
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise AuthenticationError(f"Authentication failed: {type(e).__name__}") from e

        if not 200 <= resp.status_code < 300:
            logger.warning("esologs_token_rejected", status_code=resp.status_code)
            raise AuthenticationError(f"Authentication failed: {resp.status_code}", status_code=resp.status_code)

        try:
            body = resp.json()
            value = body["access_token"]
            lifetime = float(body["expires_in"])
        except (ValueError, KeyError, TypeError) as e:
            raise AuthenticationError(
                "Authentication failed: malformed token response", status_code=resp.status_code
            ) from e

        if not isinstance(value, str) or not value or not math.isfinite(lifetime) or lifetime <= 0:
            raise AuthenticationError("Authentication failed: malformed token response", status_code=resp.status_code)

        return AccessToken(value=value, expires_at=now + lifetime)
