# src/ikigai_planner/core/models.py

"""
Entity records as returned by the planner service.

Task, Project and Goal share the trackable shape (title, due date, completed,
progress) by holding a Trackable value rather than inheriting from a base.
Conversion to/from the service JSON (camelCase, Mongo-style `_id`) lives here
so stores and services only ever see plain dicts on the wire side.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


# Suggested tag values (value -> label). Tags stay free text on the wire.
LIFE_ROLES: dict[str, str] = {
    "profissional": "Profissional",
    "familiar": "Familiar",
    "pessoal": "Pessoal",
    "social": "Social",
    "saude": "Saúde",
    "financeiro": "Financeiro",
    "espiritual": "Espiritual",
    "intelectual": "Intelectual",
}

ENERGY_CATEGORIES: dict[str, str] = {
    "emocional": "EMOCIONAL",
    "espiritual": "ESPIRITUAL",
    "mental": "MENTAL",
    "fisica": "FÍSICA",
}

ENTROPY_CATEGORIES: dict[str, str] = {
    "acao": "Ação",
    "planejamento": "Planejamento",
    "organizacao": "Organização",
    "reflexao": "Reflexão",
}


def _str(data: Mapping[str, Any], key: str, default: str = "") -> str:
    val = data.get(key)
    if val is None:
        return default
    return str(val)


def _opt_str(data: Mapping[str, Any], key: str) -> str | None:
    val = data.get(key)
    if val is None or val == "":
        return None
    return str(val)


def _bool(data: Mapping[str, Any], key: str) -> bool:
    return bool(data.get(key) or False)


def _int(data: Mapping[str, Any], key: str, default: int = 0) -> int:
    try:
        return int(data.get(key) or default)
    except (TypeError, ValueError):
        return default


def record_id(data: Mapping[str, Any]) -> str:
    """Server ids arrive as `_id`; accept `id` too."""
    return _str(data, "_id") or _str(data, "id")


def clamp_progress(value: int) -> int:
    return max(0, min(100, int(value)))


@dataclass(slots=True)
class Trackable:
    title: str
    due_date: str | None = None
    completed: bool = False
    progress: int = 0

    def __post_init__(self) -> None:
        self.progress = clamp_progress(self.progress)

    @property
    def due_day(self) -> str | None:
        """Due date as YYYY-MM-DD (servers may send full ISO timestamps)."""
        if not self.due_date:
            return None
        return self.due_date.split("T", 1)[0]

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> Trackable:
        return cls(
            title=_str(data, "title"),
            due_date=_opt_str(data, "dueDate"),
            completed=_bool(data, "completed"),
            progress=_int(data, "progress"),
        )

    def to_api(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "dueDate": self.due_date,
            "completed": self.completed,
            "progress": self.progress,
        }


@dataclass(slots=True)
class Task:
    id: str
    planner_id: str
    track: Trackable
    description: str = ""
    life_role: str = ""
    energy_category: str = ""
    entropy_category: str = ""
    importance: bool = False
    urgency: bool = False
    priority: str = ""
    project_id: str | None = None

    @property
    def title(self) -> str:
        return self.track.title

    @property
    def completed(self) -> bool:
        return self.track.completed

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> Task:
        return cls(
            id=record_id(data),
            planner_id=_str(data, "plannerId"),
            track=Trackable.from_api(data),
            description=_str(data, "description"),
            life_role=_str(data, "lifeRole"),
            energy_category=_str(data, "energyCategory"),
            entropy_category=_str(data, "entropyCategory"),
            importance=_bool(data, "importance"),
            urgency=_bool(data, "urgency"),
            priority=_str(data, "priority"),
            project_id=_opt_str(data, "projectId"),
        )

    def to_api(self) -> dict[str, Any]:
        out = self.track.to_api()
        # Tasks carry no progress on the wire.
        out.pop("progress", None)
        out.update(
            {
                "description": self.description,
                "lifeRole": self.life_role,
                "energyCategory": self.energy_category,
                "entropyCategory": self.entropy_category,
                "importance": self.importance,
                "urgency": self.urgency,
                "priority": self.priority,
            }
        )
        if self.project_id:
            out["projectId"] = self.project_id
        return out


@dataclass(slots=True)
class Project:
    id: str
    planner_id: str
    track: Trackable
    description: str = ""
    life_role: str = ""

    @property
    def title(self) -> str:
        return self.track.title

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> Project:
        return cls(
            id=record_id(data),
            planner_id=_str(data, "plannerId"),
            track=Trackable.from_api(data),
            description=_str(data, "description"),
            life_role=_str(data, "lifeRole"),
        )

    def to_api(self) -> dict[str, Any]:
        out = self.track.to_api()
        out.update({"description": self.description, "lifeRole": self.life_role})
        return out


@dataclass(slots=True)
class Goal:
    id: str
    planner_id: str
    track: Trackable
    month: int
    year: int
    description: str = ""
    life_role: str = ""

    @property
    def title(self) -> str:
        return self.track.title

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> Goal:
        return cls(
            id=record_id(data),
            planner_id=_str(data, "plannerId"),
            track=Trackable.from_api(data),
            month=_int(data, "month"),
            year=_int(data, "year"),
            description=_str(data, "description"),
            life_role=_str(data, "lifeRole"),
        )

    def to_api(self) -> dict[str, Any]:
        out = self.track.to_api()
        out.update(
            {
                "description": self.description,
                "lifeRole": self.life_role,
                "month": self.month,
                "year": self.year,
            }
        )
        return out


@dataclass(slots=True)
class IkigaiValues:
    mission: str = ""
    vision: str = ""
    values: list[str] = field(default_factory=list)
    year_focus: str = ""

    @classmethod
    def from_api(cls, data: Mapping[str, Any] | None) -> IkigaiValues:
        if not data:
            return cls()
        raw_values = data.get("values") or []
        return cls(
            mission=_str(data, "mission"),
            vision=_str(data, "vision"),
            values=[str(v) for v in raw_values if v is not None],
            year_focus=_str(data, "yearFocus"),
        )

    def to_api(self) -> dict[str, Any]:
        return {
            "mission": self.mission,
            "vision": self.vision,
            "values": list(self.values),
            "yearFocus": self.year_focus,
        }


@dataclass(slots=True)
class Planner:
    id: str
    title: str
    ikigai: IkigaiValues = field(default_factory=IkigaiValues)
    user_id: str = ""
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> Planner:
        return cls(
            id=record_id(data),
            title=_str(data, "title"),
            ikigai=IkigaiValues.from_api(data.get("ikigaiValues")),
            user_id=_str(data, "userId"),
            created_at=_opt_str(data, "createdAt"),
            updated_at=_opt_str(data, "updatedAt"),
        )

    def to_api(self) -> dict[str, Any]:
        return {"title": self.title, "ikigaiValues": self.ikigai.to_api()}


@dataclass(slots=True)
class User:
    id: str
    name: str
    email: str
    profile_picture: str | None = None
    preferences: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> User:
        prefs = data.get("preferences")
        return cls(
            id=record_id(data),
            name=_str(data, "name"),
            email=_str(data, "email"),
            profile_picture=_opt_str(data, "profilePicture"),
            preferences=dict(prefs) if isinstance(prefs, Mapping) else {},
        )

    def merged(self, data: Mapping[str, Any]) -> User:
        """Overlay a partial server response on this user."""
        return User(
            id=record_id(data) or self.id,
            name=_str(data, "name", self.name),
            email=_str(data, "email", self.email),
            profile_picture=_opt_str(data, "profilePicture") or self.profile_picture,
            preferences=dict(data["preferences"])
            if isinstance(data.get("preferences"), Mapping)
            else dict(self.preferences),
        )
