# src/ikigai_planner/planning/matrix.py

"""Eisenhower priority matrix over the importance/urgency task flags."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from ..core.models import Task


class Quadrant(StrEnum):
    DO_NOW = "Fazer Agora"
    SCHEDULE = "Agendar"
    DELEGATE = "Delegar"
    ELIMINATE = "Eliminar"

    @classmethod
    def of(cls, importance: bool, urgency: bool) -> Quadrant:
        if importance and urgency:
            return cls.DO_NOW
        if importance:
            return cls.SCHEDULE
        if urgency:
            return cls.DELEGATE
        return cls.ELIMINATE

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    Quadrant.DO_NOW: "Tarefas importantes e urgentes que exigem atenção imediata",
    Quadrant.SCHEDULE: "Tarefas importantes mas não urgentes que devem ser planejadas",
    Quadrant.DELEGATE: "Tarefas urgentes mas não importantes que podem ser delegadas",
    Quadrant.ELIMINATE: "Tarefas nem importantes nem urgentes que podem ser eliminadas",
}


def priority_label(importance: bool, urgency: bool) -> str:
    """The `priority` string stored on tasks."""
    return Quadrant.of(importance, urgency).value


def partition_tasks(tasks: Iterable[Task]) -> dict[Quadrant, list[Task]]:
    """
    Split tasks into the four quadrants.

    Every quadrant is present in the result (possibly empty), quadrants are
    in display order, and tasks keep their input order inside a quadrant.
    """
    out: dict[Quadrant, list[Task]] = {q: [] for q in Quadrant}
    for task in tasks:
        out[Quadrant.of(task.importance, task.urgency)].append(task)
    return out
