"""Row models read by the assistant."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

BUG_STATUSES = ("open", "in_progress", "resolved", "closed")
BUG_PRIORITIES = ("low", "medium", "high", "critical")
FEATURE_STATUSES = ("pending", "approved", "in_development", "completed", "rejected")
FEATURE_PRIORITIES = ("low", "medium", "high")
TURN_ROLES = ("user", "assistant", "system")


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _tags(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except ValueError:
            return [t.strip() for t in value.split(",") if t.strip()]
        return [str(t) for t in parsed] if isinstance(parsed, list) else []
    return [str(t) for t in value]


@dataclass
class Bug:
    id: str
    title: str
    description: str = ""
    status: str = "open"
    priority: str = "medium"
    assigned_to: Optional[str] = None
    team_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Bug":
        return cls(
            id=_text(row["id"]),
            title=_text(row.get("title")),
            description=_text(row.get("description")),
            status=row.get("status") or "open",
            priority=row.get("priority") or "medium",
            assigned_to=row.get("assigned_to"),
            team_id=row.get("team_id"),
            created_by=row.get("created_by"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


@dataclass
class FeatureRequest:
    id: str
    title: str
    description: str = ""
    status: str = "pending"
    priority: str = "medium"
    votes: int = 0
    team_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "FeatureRequest":
        return cls(
            id=_text(row["id"]),
            title=_text(row.get("title")),
            description=_text(row.get("description")),
            status=row.get("status") or "pending",
            priority=row.get("priority") or "medium",
            votes=max(int(row.get("votes") or 0), 0),
            team_id=row.get("team_id"),
            created_by=row.get("created_by"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


@dataclass
class KnowledgeCase:
    id: str
    title: str
    content: str = ""
    category: str = ""
    tags: List[str] = field(default_factory=list)
    team_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "KnowledgeCase":
        return cls(
            id=_text(row["id"]),
            title=_text(row.get("title")),
            content=_text(row.get("content")),
            category=_text(row.get("category")),
            tags=_tags(row.get("tags")),
            team_id=row.get("team_id"),
            created_by=row.get("created_by"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


@dataclass
class TimeLog:
    id: str
    description: str
    hours: float = 0.0
    date: Optional[str] = None
    project: Optional[str] = None
    team_id: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "TimeLog":
        return cls(
            id=_text(row["id"]),
            description=_text(row.get("description")),
            hours=max(float(row.get("hours") or 0), 0.0),
            date=row.get("date"),
            project=row.get("project"),
            team_id=row.get("team_id"),
            user_id=row.get("user_id"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


@dataclass
class Team:
    id: str
    name: str
    description: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Team":
        return cls(
            id=_text(row["id"]),
            name=_text(row.get("name")),
            description=_text(row.get("description")),
        )


@dataclass(frozen=True)
class ConversationTurn:
    """One chat message; never mutated after creation."""

    id: str
    content: str
    role: str
    team_id: str
    user_id: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ConversationTurn":
        role = row.get("role") or "user"
        # Rows written by the web client use "ai" for assistant turns.
        if role == "ai":
            role = "assistant"
        return cls(
            id=_text(row["id"]),
            content=_text(row.get("content")),
            role=role,
            team_id=_text(row.get("team_id")),
            user_id=row.get("user_id"),
            created_at=row.get("created_at"),
        )
