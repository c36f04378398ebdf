from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from data.time_ranges import TimeRange


# ESO is gameID 2 on the shared Warcraft Logs / ESO Logs v2 API.
ESO_GAME_ID = 2


@dataclass(frozen=True)
class QueryRequest:
    document: str
    variables: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))

    def to_payload(self) -> dict[str, Any]:
        return {"query": self.document, "variables": dict(self.variables)}


CLASS_STATISTICS_QUERY = f"""
query ClassStatistics($startTime: Float!, $endTime: Float!, $encounterIDs: [Int]) {{
  reportData {{
    reports(
      startTime: $startTime
      endTime: $endTime
      encounterIDs: $encounterIDs
      gameID: {ESO_GAME_ID}
    ) {{
      data {{
        fights {{
          encounterID
          difficulty
          kill
          classComposition {{
            id
            name
            type
            specs {{
              spec
              count
            }}
          }}
        }}
        players {{
          id
          name
          type
          classID
          specs {{
            spec
            role
          }}
        }}
      }}
    }}
  }}
}}
"""


RANKINGS_QUERY = f"""
query Rankings($encounterID: Int!, $difficulty: Int, $startTime: Float!, $endTime: Float!) {{
  worldData {{
    encounter(id: $encounterID) {{
      characterRankings(
        difficulty: $difficulty
        startTime: $startTime
        endTime: $endTime
        gameID: {ESO_GAME_ID}
      )
    }}
  }}
}}
"""


def q_class_statistics(time_range: TimeRange, encounter_ids: Optional[Iterable[int]] = None) -> QueryRequest:
    """Per-report fight and player composition inside the window, optionally limited to some encounters."""
    return QueryRequest(
        document=CLASS_STATISTICS_QUERY,
        variables={
            "startTime": time_range.start_ms,
            "endTime": time_range.end_ms,
            "encounterIDs": list(encounter_ids or []),
        },
    )


def q_rankings(encounter_id: int, time_range: TimeRange, difficulty: Optional[int] = None) -> QueryRequest:
    return QueryRequest(
        document=RANKINGS_QUERY,
        variables={
            "encounterID": encounter_id,
            "difficulty": difficulty,
            "startTime": time_range.start_ms,
            "endTime": time_range.end_ms,
        },
    )
