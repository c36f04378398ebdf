"""
ClassStatistics payload -> ChartDataset.

Aggregation rules:
- every player counts once per report, its weight split evenly over its logged specs
- `role` decides tank / healer / damage; damage specs naming "magicka" count as
  magicka, all other damage specs as stamina
- class playrate columns share one denominator (all weight); each role
  breakdown uses that role's own total, damage covering stamina + magicka
- percentages rounded to 2 decimals, sorted by value desc then class name
"""
from __future__ import annotations

from typing import Any

import pandas as pd

from data.errors import TransformError
from data.models import ChartDataset, ClassPlayrateRecord, RoleBreakdownRecord


SLOTS = ["tank", "healer", "stamina", "magicka"]
ROLE_SLOTS = {
    "tank": ["tank"],
    "healer": ["healer"],
    "dps": ["stamina", "magicka"],
}


def _reports(payload: Any) -> list[Any]:
    try:
        reports = payload["reportData"]["reports"]["data"]
    except (KeyError, TypeError) as e:
        raise TransformError("Response is missing reportData.reports.data") from e
    if not isinstance(reports, list):
        raise TransformError("reportData.reports.data is not a list")
    return reports


def _slot(spec_entry: Any) -> str:
    if not isinstance(spec_entry, dict) or not isinstance(spec_entry.get("role"), str):
        raise TransformError(f"Malformed player spec: {spec_entry!r}")
    role = spec_entry["role"].lower()
    if role in ("tank", "healer"):
        return role
    spec = spec_entry.get("spec")
    if isinstance(spec, str) and "magicka" in spec.lower():
        return "magicka"
    return "stamina"


def _player_rows(reports: list[Any]) -> list[dict[str, Any]]:
    rows = []
    for report in reports:
        if not isinstance(report, dict):
            raise TransformError("Report entry is not an object")
        if not isinstance(report.get("fights"), list) or not isinstance(report.get("players"), list):
            raise TransformError("Report entry is missing fights/players lists")

        for player in report["players"]:
            if not isinstance(player, dict) or not isinstance(player.get("type"), str):
                raise TransformError(f"Malformed player record: {player!r}")
            specs = player.get("specs")
            if not isinstance(specs, list):
                raise TransformError(f"Player {player.get('name')!r} has no specs list")
            if not specs:
                continue
            weight = 1.0 / len(specs)
            for entry in specs:
                rows.append({"class_name": player["type"], "slot": _slot(entry), "weight": weight})
    return rows


def _sorted(frame: pd.DataFrame, value_col: str) -> pd.DataFrame:
    return frame.sort_values([value_col, "class_name"], ascending=[False, True], kind="mergesort")


def _playrates(df: pd.DataFrame) -> tuple[ClassPlayrateRecord, ...]:
    grand_total = df["weight"].sum()
    pivot = (
        df.pivot_table(index="class_name", columns="slot", values="weight", aggfunc="sum", fill_value=0.0)
        .reindex(columns=SLOTS, fill_value=0.0)
    )
    pivot["total"] = pivot[SLOTS].sum(axis=1)
    pct = (pivot / grand_total * 100).round(2).reset_index()

    return tuple(
        ClassPlayrateRecord(
            class_name=str(row.class_name),
            total=float(row.total),
            tank=float(row.tank),
            healer=float(row.healer),
            stamina=float(row.stamina),
            magicka=float(row.magicka),
        )
        for row in _sorted(pct, "total").itertuples(index=False)
    )


def _breakdown(df: pd.DataFrame, role: str) -> tuple[RoleBreakdownRecord, ...]:
    sub = df[df["slot"].isin(ROLE_SLOTS[role])]
    if sub.empty:
        return ()
    by_class = sub.groupby("class_name")["weight"].sum()
    pct = (by_class / by_class.sum() * 100).round(2).reset_index(name="percentage")
    return tuple(
        RoleBreakdownRecord(class_name=str(row.class_name), percentage=float(row.percentage))
        for row in _sorted(pct, "percentage").itertuples(index=False)
    )


def process_class_data(payload: Any) -> ChartDataset:
    """Raises TransformError on malformed input; an empty window yields an empty dataset."""
    rows = _player_rows(_reports(payload))
    if not rows:
        return ChartDataset()

    df = pd.DataFrame(rows, columns=["class_name", "slot", "weight"])
    return ChartDataset(
        class_playrates=_playrates(df),
        tank_breakdown=_breakdown(df, "tank"),
        healer_breakdown=_breakdown(df, "healer"),
        dps_breakdown=_breakdown(df, "dps"),
    )
