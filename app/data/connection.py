from __future__ import annotations

from typing import Any, Iterable, Optional

import requests

from config import AppConfig
from data import queries
from data.auth import CredentialVault, TokenManager
from data.errors import ProtocolError, TransportError
from data.queries import QueryRequest
from data.time_ranges import TimeRange
from log_config import get_logger


logger = get_logger(__name__)


def _summarize_errors(errors: list[Any]) -> str:
    parts = []
    for err in errors:
        if isinstance(err, dict) and err.get("message"):
            parts.append(str(err["message"]))
        else:
            parts.append(str(err))
    return "; ".join(parts)


class QueryClient:
    """
    ESO Logs GraphQL client (v2 client API).

    One POST per `execute`; no retries. Auth failures propagate from the token
    manager, HTTP failures become TransportError, GraphQL `errors` become ProtocolError.
    """

    def __init__(self, tokens: TokenManager, graphql_url: str, session: Any = None, timeout: Optional[float] = None):
        self.tokens = tokens
        self.graphql_url = graphql_url
        self._http = session if session is not None else requests
        self._timeout = timeout

    def execute(self, request: QueryRequest) -> Any:
        token = self.tokens.get_token()

        try:
            resp = self._http.post(
                self.graphql_url,
                headers={
                    "Authorization": f"Bearer {token.value}",
                    "Content-Type": "application/json",
                },
                json=request.to_payload(),
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"API request failed: {type(e).__name__}") from e

        if not 200 <= resp.status_code < 300:
            logger.warning("esologs_query_failed", status_code=resp.status_code)
            raise TransportError(f"API request failed: {resp.status_code}", status_code=resp.status_code)

        try:
            body = resp.json()
        except ValueError as e:
            raise ProtocolError("API response is not valid JSON") from e
        if not isinstance(body, dict):
            raise ProtocolError("API response is not a JSON object")

        errors = body.get("errors")
        if errors:
            errors = errors if isinstance(errors, list) else [errors]
            raise ProtocolError(f"GraphQL errors: {_summarize_errors(errors)}", errors=errors)

        return body.get("data")

    def get_class_statistics(self, time_range: TimeRange, encounter_ids: Optional[Iterable[int]] = None) -> Any:
        return self.execute(queries.q_class_statistics(time_range, encounter_ids))

    def get_rankings(self, encounter_id: int, time_range: TimeRange, difficulty: Optional[int] = None) -> Any:
        return self.execute(queries.q_rankings(encounter_id, time_range, difficulty))


def get_query_client(cfg: AppConfig, session: Any = None) -> QueryClient:
    tokens = TokenManager(
        CredentialVault.from_config(cfg),
        token_url=cfg.token_url,
        session=session,
        timeout=cfg.request_timeout,
    )
    return QueryClient(tokens, graphql_url=cfg.graphql_url, session=session, timeout=cfg.request_timeout)
