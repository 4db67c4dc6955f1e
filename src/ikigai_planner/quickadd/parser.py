# src/ikigai_planner/quickadd/parser.py

"""
Quick-add mini-grammar.

    Buy milk @pessoal #fisica $acao !30/05 *importante *urgente

  @word        -> life role
  #word        -> energy category
  $word        -> entropy category
  !date        -> due date: YYYY-MM-DD, DD/MM/YYYY or DD/MM (current year)
  *importante  -> importance flag
  *urgente     -> urgency flag

Only the first token of each kind is captured and stripped; later tokens of
the same kind stay in the title as plain text. Tags do not nest, so each kind
is an independent pattern search over the original input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any

ROLE_RE = re.compile(r"@(\w+)")
ENERGY_RE = re.compile(r"#(\w+)")
ENTROPY_RE = re.compile(r"\$(\w+)")
DATE_RE = re.compile(r"!([0-9]{4}-[0-9]{2}-[0-9]{2}|[0-9]{2}/[0-9]{2}/[0-9]{4}|[0-9]{2}/[0-9]{2})")

IMPORTANT_FLAG = "*importante"
URGENT_FLAG = "*urgente"


@dataclass(slots=True)
class TaskDraft:
    """Partial task record produced from quick-add text (None = not given)."""

    title: str
    importance: bool = False
    urgency: bool = False
    life_role: str | None = None
    energy_category: str | None = None
    entropy_category: str | None = None
    due_date: str | None = None

    def to_payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "title": self.title,
            "importance": self.importance,
            "urgency": self.urgency,
        }
        if self.life_role is not None:
            out["lifeRole"] = self.life_role
        if self.energy_category is not None:
            out["energyCategory"] = self.energy_category
        if self.entropy_category is not None:
            out["entropyCategory"] = self.entropy_category
        if self.due_date is not None:
            out["dueDate"] = self.due_date
        return out

    def to_quick_add(self) -> str:
        return format_quick_add(
            self.title,
            life_role=self.life_role,
            energy_category=self.energy_category,
            entropy_category=self.entropy_category,
            due_date=self.due_date,
            importance=self.importance,
            urgency=self.urgency,
        )


def normalize_date(raw: str, *, today: date | None = None) -> str:
    """DD/MM and DD/MM/YYYY -> YYYY-MM-DD; YYYY-MM-DD passes through."""
    if "/" not in raw:
        return raw
    parts = raw.split("/")
    if len(parts) == 2:
        year = (today or date.today()).year
        day, month = parts
    else:
        day, month, year_s = parts
        year = int(year_s)
    return f"{year:04d}-{month}-{day}"


def _strip_spans(text: str, spans: list[tuple[int, int]]) -> str:
    out: list[str] = []
    pos = 0
    for start, end in sorted(spans):
        if start < pos:
            # Overlapping tokens: the earlier one already consumed this text.
            continue
        out.append(text[pos:start])
        pos = end
    out.append(text[pos:])
    return " ".join("".join(out).split())


def parse_quick_add(text: str, *, today: date | None = None) -> TaskDraft:
    """
    Translate one line of quick-add text into a TaskDraft.

    Never raises: text without tags yields just the trimmed title.
    """
    text = text or ""
    draft = TaskDraft(title="")
    spans: list[tuple[int, int]] = []

    m = ROLE_RE.search(text)
    if m:
        draft.life_role = m.group(1)
        spans.append(m.span())

    m = ENERGY_RE.search(text)
    if m:
        draft.energy_category = m.group(1)
        spans.append(m.span())

    m = ENTROPY_RE.search(text)
    if m:
        draft.entropy_category = m.group(1)
        spans.append(m.span())

    m = DATE_RE.search(text)
    if m:
        draft.due_date = normalize_date(m.group(1), today=today)
        spans.append(m.span())

    i = text.find(IMPORTANT_FLAG)
    if i != -1:
        draft.importance = True
        spans.append((i, i + len(IMPORTANT_FLAG)))

    i = text.find(URGENT_FLAG)
    if i != -1:
        draft.urgency = True
        spans.append((i, i + len(URGENT_FLAG)))

    draft.title = _strip_spans(text, spans)
    return draft


def format_quick_add(
    title: str,
    *,
    life_role: str | None = None,
    energy_category: str | None = None,
    entropy_category: str | None = None,
    due_date: str | None = None,
    importance: bool = False,
    urgency: bool = False,
) -> str:
    """Inverse of parse_quick_add: rebuild the tagged line from form fields."""
    parts = [title.strip()] if title and title.strip() else []
    if life_role:
        parts.append(f"@{life_role}")
    if energy_category:
        parts.append(f"#{energy_category}")
    if entropy_category:
        parts.append(f"${entropy_category}")
    if due_date:
        parts.append(f"!{due_date.split('T', 1)[0]}")
    if importance:
        parts.append(IMPORTANT_FLAG)
    if urgency:
        parts.append(URGENT_FLAG)
    return " ".join(parts)
