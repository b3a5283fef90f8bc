import logging
import uuid
from datetime import datetime, timezone

from flowcaser.models import TURN_ROLES, ConversationTurn
from flowcaser.store import DataStore

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50


def new_turn(team_id: str, role: str, content: str, user_id: str | None = None) -> ConversationTurn:
    if role not in TURN_ROLES:
        raise ValueError(f"unknown role: {role}")
    return ConversationTurn(
        id=uuid.uuid4().hex,
        content=content,
        role=role,
        team_id=team_id,
        user_id=user_id,
        created_at=datetime.now(timezone.utc).isoformat(),
    )


class ConversationLog:
    """Append-only chat history of a team."""

    def __init__(self, store: DataStore):
        self.store = store

    def append_turn(self, turn: ConversationTurn) -> bool:
        """Store a turn; failures are logged and reported as False, never raised."""
        try:
            self.store.append_conversation_turn(turn)
            return True
        except Exception as exc:
            logger.warning("append turn failed (team=%s, role=%s): %s", turn.team_id, turn.role, exc)
            return False

    def record(self, team_id: str, role: str, content: str, user_id: str | None = None) -> ConversationTurn:
        turn = new_turn(team_id, role, content, user_id=user_id)
        self.append_turn(turn)
        return turn

    def load_history(self, team_id: str, limit: int = DEFAULT_HISTORY_LIMIT) -> list[ConversationTurn]:
        """Newest ``limit`` turns, oldest first. Each call reads a fresh snapshot."""
        if limit <= 0:
            return []
        try:
            turns = self.store.load_conversation_history(team_id, limit)
        except Exception as exc:
            logger.warning("load history failed (team=%s): %s", team_id, exc)
            return []
        return list(turns)[-limit:]
