# tests/test_planning.py

from __future__ import annotations

import pytest

from ikigai_planner.core.errors import ValidationError
from ikigai_planner.core.models import Goal, IkigaiValues, Planner, Project, Task, Trackable
from ikigai_planner.planning.editing import description_patch, draft_from_record, edit_patch, tracked_payload
from ikigai_planner.planning.ikigai import add_value, ikigai_patch, remove_value
from ikigai_planner.planning.matrix import Quadrant, partition_tasks, priority_label
from ikigai_planner.planning.progress import progress_patch, toggle_complete_patch
from ikigai_planner.planning.validation import (
    validate_login,
    validate_quick_add,
    validate_registration,
    validate_task_title,
)
from ikigai_planner.quickadd.parser import TaskDraft


def _task(tid: str, importance: bool, urgency: bool) -> Task:
    return Task(id=tid, planner_id="p1", track=Trackable(title=tid), importance=importance, urgency=urgency)


def test_quadrant_of_flags() -> None:
    assert Quadrant.of(True, True) is Quadrant.DO_NOW
    assert Quadrant.of(True, False) is Quadrant.SCHEDULE
    assert Quadrant.of(False, True) is Quadrant.DELEGATE
    assert Quadrant.of(False, False) is Quadrant.ELIMINATE
    assert priority_label(True, True) == "Fazer Agora"


def test_partition_keeps_every_quadrant_and_input_order() -> None:
    tasks = [_task("a", True, True), _task("b", False, False), _task("c", True, True)]

    parts = partition_tasks(tasks)

    assert list(parts) == [Quadrant.DO_NOW, Quadrant.SCHEDULE, Quadrant.DELEGATE, Quadrant.ELIMINATE]
    assert [t.id for t in parts[Quadrant.DO_NOW]] == ["a", "c"]
    assert parts[Quadrant.SCHEDULE] == []
    assert [t.id for t in parts[Quadrant.ELIMINATE]] == ["b"]


def test_progress_patch_completes_at_100() -> None:
    project = Project(id="pr1", planner_id="p1", track=Trackable(title="Casa", progress=25))

    half = progress_patch(project, 50)
    full = progress_patch(project, 100)

    assert half["progress"] == 50 and half["completed"] is False
    assert full["progress"] == 100 and full["completed"] is True
    assert full["title"] == "Casa"


def test_progress_patch_rejects_out_of_range() -> None:
    goal = Goal(id="g1", planner_id="p1", track=Trackable(title="Ler"), month=5, year=2024)
    with pytest.raises(ValidationError):
        progress_patch(goal, 150)


def test_trackable_clamps_progress() -> None:
    assert Trackable(title="x", progress=140).progress == 100
    assert Trackable.from_api({"title": "x", "progress": -3}).progress == 0


def test_toggle_complete_on_goal_sets_progress_100() -> None:
    goal = Goal(id="g1", planner_id="p1", track=Trackable(title="Ler", progress=50), month=5, year=2024)

    done = toggle_complete_patch(goal)
    assert done["completed"] is True
    assert done["progress"] == 100

    goal.track.completed = True
    goal.track.progress = 100
    reopened = toggle_complete_patch(goal)
    assert reopened["completed"] is False
    assert reopened["progress"] == 100


def test_toggle_complete_on_task_has_no_progress() -> None:
    patch = toggle_complete_patch(_task("t1", True, False))
    assert patch["completed"] is True
    assert "progress" not in patch
    assert patch["importance"] is True


def test_ikigai_patch_changes_one_part_and_sends_the_rest() -> None:
    planner = Planner(
        id="p1",
        title="Vida",
        ikigai=IkigaiValues(mission="Servir", vision="Longe", values=["Fé"], year_focus="Saúde"),
    )

    patch = ikigai_patch(planner, vision="Perto")

    assert patch == {
        "ikigaiValues": {"mission": "Servir", "vision": "Perto", "values": ["Fé"], "yearFocus": "Saúde"}
    }
    assert ikigai_patch(None) == {
        "ikigaiValues": {"mission": "", "vision": "", "values": [], "yearFocus": ""}
    }


def test_values_editing() -> None:
    assert add_value(["A"], "  B ") == ["A", "B"]
    assert add_value(["A"], "   ") == ["A"]
    assert remove_value(["A", "B", "C"], 1) == ["A", "C"]
    assert remove_value(["A"], 5) == ["A"]


def test_validation_messages() -> None:
    with pytest.raises(ValidationError) as exc:
        validate_task_title("  ")
    assert exc.value.field_errors == {"title": "O título é obrigatório"}

    with pytest.raises(ValidationError):
        validate_quick_add("")
    with pytest.raises(ValidationError):
        validate_quick_add("*urgente", TaskDraft(title="", urgency=True))
    validate_quick_add("Algo", TaskDraft(title="Algo"))

    with pytest.raises(ValidationError) as exc:
        validate_login("ana@example.com", "")
    assert str(exc.value) == "Por favor, preencha todos os campos"

    with pytest.raises(ValidationError) as exc:
        validate_registration("Ana", "ana@example.com", "a", "b")
    assert exc.value.field_errors == {"confirmPassword": "As senhas não coincidem"}


def test_record_to_quick_add_line() -> None:
    task = Task(
        id="t1",
        planner_id="p1",
        track=Trackable(title="Correr", due_date="2024-05-12T00:00:00.000Z"),
        life_role="saude",
        energy_category="fisica",
        urgency=True,
    )
    goal = Goal(id="g1", planner_id="p1", track=Trackable(title="Ler"), month=5, year=2024, life_role="intelectual")

    assert draft_from_record(task).to_quick_add() == "Correr @saude #fisica !2024-05-12 *urgente"
    assert draft_from_record(goal).to_quick_add() == "Ler @intelectual"


def test_edit_patch_replaces_tagged_fields_and_keeps_the_rest() -> None:
    goal = Goal(
        id="g1",
        planner_id="p1",
        track=Trackable(title="Ler", progress=75),
        month=5,
        year=2024,
        description="Dois livros",
        life_role="intelectual",
    )

    patch = edit_patch(goal, TaskDraft(title="Ler mais", due_date="2024-05-31"))

    assert patch["title"] == "Ler mais"
    assert patch["lifeRole"] == ""
    assert patch["dueDate"] == "2024-05-31"
    assert patch["progress"] == 75
    assert patch["description"] == "Dois livros"
    assert (patch["month"], patch["year"]) == (5, 2024)
    assert "importance" not in patch


def test_edit_patch_on_task_recomputes_priority() -> None:
    patch = edit_patch(_task("t1", False, False), TaskDraft(title="t1", importance=True, urgency=True))
    assert patch["priority"] == "Fazer Agora"
    assert "progress" not in patch


def test_tracked_payload_and_description_patch() -> None:
    assert tracked_payload(TaskDraft(title="Casa", life_role="familiar")) == {
        "title": "Casa",
        "lifeRole": "familiar",
        "dueDate": None,
        "completed": False,
        "progress": 0,
    }
    project = Project(id="pr1", planner_id="p1", track=Trackable(title="Casa"))
    assert description_patch(project, "  Reforma  ")["description"] == "Reforma"
