from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import pandas as pd


@dataclass(frozen=True)
class ClassPlayrateRecord:
    class_name: str
    total: float
    tank: float
    healer: float
    stamina: float
    magicka: float


@dataclass(frozen=True)
class RoleBreakdownRecord:
    class_name: str
    percentage: float


@dataclass(frozen=True)
class ChartDataset:
    """Canonical chart input: per-class playrates plus one breakdown per role (all values are percentages)."""

    class_playrates: tuple[ClassPlayrateRecord, ...] = ()
    tank_breakdown: tuple[RoleBreakdownRecord, ...] = ()
    healer_breakdown: tuple[RoleBreakdownRecord, ...] = ()
    dps_breakdown: tuple[RoleBreakdownRecord, ...] = ()

    def is_empty(self) -> bool:
        return not self.class_playrates

    def to_dict(self) -> dict[str, Any]:
        # camelCase keys, `class` instead of `class_name`: the shape chart collaborators consume
        def _rename(record: Any) -> dict[str, Any]:
            d = asdict(record)
            d["class"] = d.pop("class_name")
            return d

        return {
            "classPlayrates": [_rename(r) for r in self.class_playrates],
            "tankBreakdown": [_rename(r) for r in self.tank_breakdown],
            "healerBreakdown": [_rename(r) for r in self.healer_breakdown],
            "dpsBreakdown": [_rename(r) for r in self.dps_breakdown],
        }

    def playrates_frame(self) -> pd.DataFrame:
        cols = ["class_name", "total", "tank", "healer", "stamina", "magicka"]
        return pd.DataFrame([asdict(r) for r in self.class_playrates], columns=cols)

    def breakdown_frame(self, role: str) -> pd.DataFrame:
        records = {
            "tank": self.tank_breakdown,
            "healer": self.healer_breakdown,
            "dps": self.dps_breakdown,
        }[role]
        return pd.DataFrame([asdict(r) for r in records], columns=["class_name", "percentage"])
