from __future__ import annotations

import random
from typing import Any

from faker import Faker

from data.models import ChartDataset, ClassPlayrateRecord, RoleBreakdownRecord


ESO_CLASSES = ["Arcanist", "Dragonknight", "Necromancer", "Sorcerer", "Warden", "Templar", "Nightblade"]
ROLES = ["tank", "healer", "dps"]


def _breakdown(rows: list[tuple[str, float]]) -> tuple[RoleBreakdownRecord, ...]:
    return tuple(RoleBreakdownRecord(class_name=c, percentage=p) for c, p in rows)


def baseline_dataset() -> ChartDataset:
    """Static trial composition snapshot shown in demo mode and whenever live data is unavailable."""
    return ChartDataset(
        class_playrates=(
            ClassPlayrateRecord("Arcanist", total=42.36, tank=1.36, healer=1.99, stamina=40.90, magicka=0.0),
            ClassPlayrateRecord("Dragonknight", total=16.37, tank=4.78, healer=0.0, stamina=3.62, magicka=8.37),
            ClassPlayrateRecord("Necromancer", total=12.12, tank=4.71, healer=1.99, stamina=5.74, magicka=0.28),
            ClassPlayrateRecord("Warden", total=7.78, tank=0.0, healer=7.78, stamina=0.0, magicka=0.0),
            ClassPlayrateRecord("Sorcerer", total=7.94, tank=3.23, healer=0.87, stamina=3.84, magicka=0.0),
            ClassPlayrateRecord("Templar", total=7.13, tank=1.28, healer=2.86, stamina=0.0, magicka=1.29),
            ClassPlayrateRecord("Nightblade", total=2.86, tank=0.0, healer=2.86, stamina=0.0, magicka=0.0),
        ),
        tank_breakdown=_breakdown([
            ("Dragonknight", 33.01),
            ("Necromancer", 32.52),
            ("Sorcerer", 22.33),
            ("Arcanist", 9.39),
            ("Nightblade", 1.13),
            ("Warden", 0.97),
            ("Templar", 0.65),
        ]),
        healer_breakdown=_breakdown([
            ("Warden", 45.23),
            ("Nightblade", 16.62),
            ("Arcanist", 11.58),
            ("Necromancer", 11.58),
            ("Templar", 9.26),
            ("Sorcerer", 5.04),
            ("Dragonknight", 0.68),
        ]),
        dps_breakdown=_breakdown([
            ("Arcanist", 60.07),
            ("Dragonknight", 17.84),
            ("Necromancer", 8.92),
            ("Templar", 6.07),
            ("Sorcerer", 5.00),
            ("Warden", 1.82),
            ("Nightblade", 0.38),
        ]),
    )


def _player_specs(role: str) -> list[dict[str, str]]:
    # Hybrid players occasionally log two specs in one report
    specs = [{"spec": random.choice(["Stamina", "Magicka"]), "role": role}]
    if role == "dps" and random.random() < 0.15:
        specs.append({"spec": "Magicka" if specs[0]["spec"] == "Stamina" else "Stamina", "role": "dps"})
    return specs


def synthetic_class_statistics_response(n_reports: int = 4, group_size: int = 12, seed: int = 7) -> dict[str, Any]:
    """
    Fake `ClassStatistics` query payload (the `data` field) shaped like ESO Logs output.
    Trial groups are 2 tanks, 2 healers, the rest damage dealers.
    """
    random.seed(seed)
    fake = Faker()
    fake.seed_instance(seed)

    reports = []
    for _ in range(n_reports):
        players = []
        for slot in range(group_size):
            role = "tank" if slot < 2 else "healer" if slot < 4 else "dps"
            cls = random.choice(ESO_CLASSES)
            players.append(
                {
                    "id": fake.random_int(min=1, max=10_000),
                    "name": fake.user_name(),
                    "type": cls,
                    "classID": ESO_CLASSES.index(cls) + 1,
                    "specs": _player_specs(role),
                }
            )

        composition: dict[str, int] = {}
        for p in players:
            composition[p["type"]] = composition.get(p["type"], 0) + 1

        fights = [
            {
                "encounterID": fake.random_int(min=1, max=60),
                "difficulty": random.choice([121, 122]),
                "kill": random.random() < 0.7,
                "classComposition": [
                    {"id": ESO_CLASSES.index(c) + 1, "name": c, "type": c, "specs": [{"spec": "Stamina", "count": n}]}
                    for c, n in sorted(composition.items())
                ],
            }
            for _ in range(random.randint(1, 4))
        ]
        reports.append({"fights": fights, "players": players})

    return {"reportData": {"reports": {"data": reports}}}
