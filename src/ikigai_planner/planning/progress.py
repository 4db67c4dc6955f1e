# src/ikigai_planner/planning/progress.py

from __future__ import annotations

from typing import Any

from ..core.errors import ValidationError
from ..core.models import Goal, Project, Task

PROGRESS_STEPS: tuple[int, ...] = (0, 25, 50, 75, 100)


def progress_patch(item: Project | Goal, progress: int) -> dict[str, Any]:
    """
    Full update payload setting progress; 100% means completed.

    Progress outside 0..100 is rejected locally, before any remote call.
    """
    if not 0 <= int(progress) <= 100:
        raise ValidationError({"progress": "O progresso deve estar entre 0 e 100"})
    out = item.to_api()
    out["progress"] = int(progress)
    out["completed"] = int(progress) == 100
    return out


def toggle_complete_patch(item: Task | Project | Goal) -> dict[str, Any]:
    """
    Flip `completed`.

    Completing a project/goal also sets progress to 100; reopening keeps the
    progress it had.
    """
    out = item.to_api()
    completing = not item.track.completed
    out["completed"] = completing
    if "progress" in out and completing:
        out["progress"] = 100
    return out
