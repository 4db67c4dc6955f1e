# src/ikigai_planner/planning/validation.py

"""
Local form preconditions.

Each check raises ValidationError with a {field: message} mapping and is meant
to run before any store operation, so an invalid form never reaches the network.
"""

from __future__ import annotations

from ..core.errors import ValidationError
from ..quickadd.parser import TaskDraft

FILL_ALL_FIELDS = "Por favor, preencha todos os campos"


def _blank(value: str | None) -> bool:
    return not value or not value.strip()


def validate_task_title(title: str | None) -> None:
    if _blank(title):
        raise ValidationError({"title": "O título é obrigatório"})


def validate_quick_add(text: str | None, draft: TaskDraft | None = None) -> None:
    if _blank(text):
        raise ValidationError({"quickAddText": "Digite o texto da tarefa"})
    if draft is not None and _blank(draft.title):
        raise ValidationError({"quickAddText": "O título da tarefa é obrigatório"})


def validate_login(email: str | None, password: str | None) -> None:
    if _blank(email) or not password:
        raise ValidationError({"form": FILL_ALL_FIELDS})


def validate_registration(
    name: str | None,
    email: str | None,
    password: str | None,
    confirm_password: str | None,
) -> None:
    if _blank(name) or _blank(email) or not password or not confirm_password:
        raise ValidationError({"form": FILL_ALL_FIELDS})
    if password != confirm_password:
        raise ValidationError({"confirmPassword": "As senhas não coincidem"})


def validate_forgot_password(email: str | None) -> None:
    if _blank(email):
        raise ValidationError({"email": "Por favor, informe seu email"})


def validate_planner_title(title: str | None) -> None:
    if _blank(title):
        raise ValidationError({"title": "O título do planner é obrigatório"})
