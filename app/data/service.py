from __future__ import annotations

import enum
import itertools
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

import pandas as pd

from config import AppConfig
from data import mock_data
from data.auth import CredentialVault
from data.connection import QueryClient, get_query_client
from data.errors import AuthenticationError, EsoLogsError, ProtocolError, TransformError, TransportError
from data.models import ChartDataset
from data.time_ranges import resolve
from data.transform import process_class_data
from log_config import get_logger


logger = get_logger(__name__)


class ErrorKind(str, enum.Enum):
    AUTHENTICATION = "authentication"
    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    TRANSFORM = "transform"


_ERROR_KINDS: list[tuple[type[EsoLogsError], ErrorKind]] = [
    (AuthenticationError, ErrorKind.AUTHENTICATION),
    (TransportError, ErrorKind.TRANSPORT),
    (ProtocolError, ErrorKind.PROTOCOL),
    (TransformError, ErrorKind.TRANSFORM),
]


@dataclass(frozen=True)
class FetchError:
    kind: ErrorKind
    message: str

    @classmethod
    def from_exception(cls, exc: EsoLogsError) -> "FetchError":
        for exc_type, kind in _ERROR_KINDS:
            if isinstance(exc, exc_type):
                return cls(kind=kind, message=str(exc) or type(exc).__name__)
        raise TypeError(f"Unmapped data error: {type(exc).__name__}")


# Callers that share one orchestrator (e.g. browser sessions) each pass their own scope
DEFAULT_SCOPE = "default"


@dataclass(frozen=True)
class FetchResult:
    dataset: ChartDataset
    source: str  # "baseline" | "esologs"
    selector: str
    generation: int
    error: Optional[FetchError] = None
    scope: str = DEFAULT_SCOPE

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RankingsResult:
    frame: pd.DataFrame = field(default_factory=pd.DataFrame)
    error: Optional[FetchError] = None


class DataFetchOrchestrator:
    """
    Entry point for the class analysis page.

    `fetch` always hands back usable data: demo mode and every runtime failure
    return the baseline dataset, the latter with a FetchError attached. Only an
    unknown selector raises.
    """

    def __init__(
        self,
        vault: CredentialVault,
        client: QueryClient,
        encounter_ids: Iterable[int] = (),
        baseline: Callable[[], ChartDataset] = mock_data.baseline_dataset,
    ):
        self.vault = vault
        self.client = client
        self.encounter_ids = tuple(encounter_ids)
        self._baseline = baseline
        self._generations = itertools.count(1)
        self._latest_generations: dict[str, int] = {}

    def _next_generation(self, scope: str) -> int:
        generation = next(self._generations)
        self._latest_generations[scope] = generation
        return generation

    def is_current(self, result: FetchResult) -> bool:
        """False once a newer fetch has started in the same scope; callers drop such results."""
        return result.generation == self._latest_generations.get(result.scope)

    def fetch(
        self, selector: str, encounter_ids: Optional[Iterable[int]] = None, scope: str = DEFAULT_SCOPE
    ) -> FetchResult:
        generation = self._next_generation(scope)

        if not self.vault.is_configured():
            return FetchResult(
                dataset=self._baseline(), source="baseline", selector=selector, generation=generation, scope=scope
            )

        time_range = resolve(selector)
        encounters = self.encounter_ids if encounter_ids is None else tuple(encounter_ids)

        try:
            payload = self.client.get_class_statistics(time_range, encounters)
            dataset = process_class_data(payload)
        except EsoLogsError as e:
            error = FetchError.from_exception(e)
            logger.warning(
                "esologs_fallback_to_baseline",
                selector=selector,
                generation=generation,
                kind=error.kind.value,
                error=error.message,
            )
            return FetchResult(
                dataset=self._baseline(),
                source="baseline",
                selector=selector,
                generation=generation,
                error=error,
                scope=scope,
            )

        logger.info(
            "esologs_class_statistics_loaded",
            selector=selector,
            generation=generation,
            classes=len(dataset.class_playrates),
        )
        return FetchResult(dataset=dataset, source="esologs", selector=selector, generation=generation, scope=scope)

    def fetch_rankings(self, selector: str, encounter_id: int, difficulty: Optional[int] = None) -> RankingsResult:
        """Character rankings for one encounter as a DataFrame (empty in demo mode or on failure)."""
        if not self.vault.is_configured():
            return RankingsResult()

        time_range = resolve(selector)
        try:
            payload = self.client.get_rankings(encounter_id, time_range, difficulty)
            frame = _rankings_frame(payload)
        except EsoLogsError as e:
            error = FetchError.from_exception(e)
            logger.warning("esologs_rankings_failed", selector=selector, encounter_id=encounter_id, error=error.message)
            return RankingsResult(error=error)
        return RankingsResult(frame=frame)


def _rankings_frame(payload: object) -> pd.DataFrame:
    try:
        rankings = payload["worldData"]["encounter"]["characterRankings"]  # type: ignore[index]
    except (KeyError, TypeError) as e:
        raise TransformError("Response is missing worldData.encounter.characterRankings") from e
    if rankings is None:
        return pd.DataFrame()
    if not isinstance(rankings, dict) or not isinstance(rankings.get("rankings", []), list):
        raise TransformError("characterRankings is not a rankings object")
    return pd.json_normalize(rankings.get("rankings", []))


def get_orchestrator(cfg: AppConfig) -> DataFetchOrchestrator:
    client = get_query_client(cfg)
    return DataFetchOrchestrator(vault=client.tokens.vault, client=client, encounter_ids=cfg.encounter_ids)
