# src/ikigai_planner/planning/editing.py

"""
Editing tasks, projects and goals through a quick-add line.

An existing record is shown as the quick-add line that would recreate its
tagged fields; the edited line is parsed back and applied over the record's
full payload. Fields a quick-add line cannot express (description, progress,
completed, goal month/year) are carried over unchanged.
"""

from __future__ import annotations

from typing import Any

from ..core.models import Goal, Project, Task
from ..quickadd.parser import TaskDraft
from .matrix import priority_label


def draft_from_record(item: Task | Project | Goal) -> TaskDraft:
    draft = TaskDraft(
        title=item.title,
        life_role=item.life_role or None,
        due_date=item.track.due_day,
    )
    if isinstance(item, Task):
        draft.energy_category = item.energy_category or None
        draft.entropy_category = item.entropy_category or None
        draft.importance = item.importance
        draft.urgency = item.urgency
    return draft


def tracked_payload(draft: TaskDraft) -> dict[str, Any]:
    """Create payload for a project or goal typed as a quick-add line."""
    return {
        "title": draft.title,
        "lifeRole": draft.life_role or "",
        "dueDate": draft.due_date,
        "completed": False,
        "progress": 0,
    }


def edit_patch(item: Task | Project | Goal, draft: TaskDraft) -> dict[str, Any]:
    """
    Full update payload with the edited line applied.

    A tag missing from the line clears that field: the line is the whole
    tagged state of the record, not a partial patch.
    """
    out = item.to_api()
    out["title"] = draft.title
    out["lifeRole"] = draft.life_role or ""
    out["dueDate"] = draft.due_date
    if isinstance(item, Task):
        out["energyCategory"] = draft.energy_category or ""
        out["entropyCategory"] = draft.entropy_category or ""
        out["importance"] = draft.importance
        out["urgency"] = draft.urgency
        out["priority"] = priority_label(draft.importance, draft.urgency)
    return out


def description_patch(item: Task | Project | Goal, description: str) -> dict[str, Any]:
    out = item.to_api()
    out["description"] = (description or "").strip()
    return out
