"""Data access used by the assistant.

The assistant never talks to a database client directly; it receives a
``DataStore`` and only reads collections and appends conversation turns.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional

from flowcaser.db import get_conn
from flowcaser.models import Bug, ConversationTurn, FeatureRequest, KnowledgeCase, Team, TimeLog

DEFAULT_FETCH_LIMIT = 50
DEFAULT_TIME_LOG_FETCH_LIMIT = 100


class DataStore(ABC):
    """Read/append interface over the team's collections."""

    @abstractmethod
    def list_bugs(self, team_id: str, limit: int = DEFAULT_FETCH_LIMIT) -> List[Bug]:
        """Newest bugs first."""

    @abstractmethod
    def list_features(self, team_id: str, limit: int = DEFAULT_FETCH_LIMIT) -> List[FeatureRequest]:
        """Newest feature requests first."""

    @abstractmethod
    def list_knowledge(self, team_id: str, limit: int = DEFAULT_FETCH_LIMIT) -> List[KnowledgeCase]:
        """Newest knowledge cases first."""

    @abstractmethod
    def list_time_logs(self, team_id: str, limit: int = DEFAULT_TIME_LOG_FETCH_LIMIT) -> List[TimeLog]:
        """Time logs ordered by work date, newest first."""

    @abstractmethod
    def get_team(self, team_id: str) -> Optional[Team]:
        """Return the team or None."""

    @abstractmethod
    def append_conversation_turn(self, turn: ConversationTurn) -> None:
        """Insert one turn."""

    @abstractmethod
    def load_conversation_history(self, team_id: str, limit: int = 50) -> List[ConversationTurn]:
        """Newest ``limit`` turns of a team, oldest first."""


class SqliteDataStore(DataStore):
    """DataStore over the local SQLite schema in :mod:`flowcaser.db`."""

    def __init__(self, db_path: str | None = None) -> None:
        self.db_path = db_path

    def _select(self, sql: str, params: tuple) -> list[dict]:
        with get_conn(self.db_path) as conn:
            rows = conn.execute(sql, params).fetchall()
        return [dict(r) for r in rows]

    def list_bugs(self, team_id: str, limit: int = DEFAULT_FETCH_LIMIT) -> List[Bug]:
        rows = self._select(
            "SELECT id, title, description, status, priority, assigned_to, team_id, created_by, created_at, updated_at "
            "FROM bugs WHERE team_id = ? ORDER BY created_at DESC LIMIT ?",
            (team_id, limit),
        )
        return [Bug.from_row(r) for r in rows]

    def list_features(self, team_id: str, limit: int = DEFAULT_FETCH_LIMIT) -> List[FeatureRequest]:
        rows = self._select(
            "SELECT id, title, description, status, priority, votes, team_id, created_by, created_at, updated_at "
            "FROM feature_requests WHERE team_id = ? ORDER BY created_at DESC LIMIT ?",
            (team_id, limit),
        )
        return [FeatureRequest.from_row(r) for r in rows]

    def list_knowledge(self, team_id: str, limit: int = DEFAULT_FETCH_LIMIT) -> List[KnowledgeCase]:
        rows = self._select(
            "SELECT id, title, content, category, tags, team_id, created_by, created_at, updated_at "
            "FROM knowledge_cases WHERE team_id = ? ORDER BY created_at DESC LIMIT ?",
            (team_id, limit),
        )
        return [KnowledgeCase.from_row(r) for r in rows]

    def list_time_logs(self, team_id: str, limit: int = DEFAULT_TIME_LOG_FETCH_LIMIT) -> List[TimeLog]:
        rows = self._select(
            "SELECT id, description, hours, date, project, team_id, user_id, created_at, updated_at "
            "FROM time_logs WHERE team_id = ? ORDER BY date DESC LIMIT ?",
            (team_id, limit),
        )
        return [TimeLog.from_row(r) for r in rows]

    def get_team(self, team_id: str) -> Optional[Team]:
        rows = self._select("SELECT id, name, description FROM teams WHERE id = ?", (team_id,))
        if not rows:
            return None
        return Team.from_row(rows[0])

    def append_conversation_turn(self, turn: ConversationTurn) -> None:
        created_at = turn.created_at or datetime.now(timezone.utc).isoformat()
        with get_conn(self.db_path) as conn:
            conn.execute(
                "INSERT INTO chat_messages (id, content, role, team_id, user_id, created_at) VALUES (?,?,?,?,?,?)",
                (turn.id, turn.content, turn.role, turn.team_id, turn.user_id, created_at),
            )
            conn.commit()

    def load_conversation_history(self, team_id: str, limit: int = 50) -> List[ConversationTurn]:
        rows = self._select(
            "SELECT id, content, role, team_id, user_id, created_at FROM chat_messages "
            "WHERE team_id = ? ORDER BY created_at DESC, seq DESC LIMIT ?",
            (team_id, limit),
        )
        return [ConversationTurn.from_row(r) for r in reversed(rows)]
