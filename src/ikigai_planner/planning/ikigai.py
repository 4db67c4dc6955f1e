# src/ikigai_planner/planning/ikigai.py

"""
Editing the planner's ikigai statement (mission, vision, values, year focus).

The service replaces `ikigaiValues` as a whole, so every edit sends the full
object with one part changed.
"""

from __future__ import annotations

from typing import Any

from ..core.models import IkigaiValues, Planner


def ikigai_patch(
    planner: Planner | None,
    *,
    mission: str | None = None,
    vision: str | None = None,
    values: list[str] | None = None,
    year_focus: str | None = None,
) -> dict[str, Any]:
    base = planner.ikigai if planner is not None else IkigaiValues()
    merged = IkigaiValues(
        mission=base.mission if mission is None else mission,
        vision=base.vision if vision is None else vision,
        values=list(base.values) if values is None else list(values),
        year_focus=base.year_focus if year_focus is None else year_focus,
    )
    return {"ikigaiValues": merged.to_api()}


def add_value(values: list[str], new_value: str) -> list[str]:
    v = (new_value or "").strip()
    if not v:
        return list(values)
    return [*values, v]


def remove_value(values: list[str], index: int) -> list[str]:
    return [v for i, v in enumerate(values) if i != index]
