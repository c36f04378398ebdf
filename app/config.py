from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv


# Shipped credential placeholders; the app runs in demo mode while these are set.
PLACEHOLDER_CLIENT_ID = "YOUR_CLIENT_ID_HERE"
PLACEHOLDER_CLIENT_SECRET = "YOUR_CLIENT_SECRET_HERE"

DEFAULT_BASE_URL = "https://www.esologs.com"


@dataclass(frozen=True)
class AppConfig:
    # ESO Logs API client (https://www.esologs.com/api/clients)
    esologs_client_id: str
    esologs_client_secret: str
    esologs_base_url: str

    # Optional encounter filter for the class statistics query (empty = all encounters)
    encounter_ids: tuple[int, ...] = field(default_factory=tuple)

    # None leaves the timeout to requests (no timeout)
    request_timeout: Optional[float] = None

    # Defaults
    default_update: str = "U43"
    log_level: str = "INFO"
    log_json: bool = False

    def __post_init__(self) -> None:
        # requests rejects non-positive timeouts with a bare ValueError at send time
        t = self.request_timeout
        if t is not None and (not math.isfinite(t) or t <= 0):
            raise ValueError(f"ESOLOGS_TIMEOUT must be a positive number of seconds, got {t!r}")

    @property
    def token_url(self) -> str:
        return f"{self.esologs_base_url.rstrip('/')}/oauth/token"

    @property
    def graphql_url(self) -> str:
        return f"{self.esologs_base_url.rstrip('/')}/api/v2/client"


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _parse_int_list(raw: Optional[str]) -> tuple[int, ...]:
    if not raw:
        return ()
    return tuple(int(part) for part in raw.split(",") if part.strip())


def get_config() -> AppConfig:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - Unset credentials fall back to the placeholders (demo mode)
    """
    load_dotenv(override=False)

    timeout = _getenv("ESOLOGS_TIMEOUT")

    return AppConfig(
        esologs_client_id=_getenv("ESOLOGS_CLIENT_ID", PLACEHOLDER_CLIENT_ID) or PLACEHOLDER_CLIENT_ID,
        esologs_client_secret=_getenv("ESOLOGS_CLIENT_SECRET", PLACEHOLDER_CLIENT_SECRET) or PLACEHOLDER_CLIENT_SECRET,
        esologs_base_url=_getenv("ESOLOGS_BASE_URL", DEFAULT_BASE_URL) or DEFAULT_BASE_URL,
        encounter_ids=_parse_int_list(_getenv("ESOLOGS_ENCOUNTER_IDS")),
        request_timeout=float(timeout) if timeout else None,
        default_update=_getenv("DEFAULT_UPDATE", "U43") or "U43",
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
        log_json=(_getenv("LOG_JSON", "false") or "false").lower() == "true",
    )
