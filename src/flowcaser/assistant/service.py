"""
Assistant orchestration: log the question, classify, gather context, reply, log the answer.
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional

from dotenv import load_dotenv

from flowcaser.assistant.context import ContextAssembler
from flowcaser.assistant.intent import GENERAL, classify_intent
from flowcaser.assistant.responder import AssistantMessage, ResponseGenerator, apology_message
from flowcaser.assistant.search import SearchResult, format_search_results, search_across_modules
from flowcaser.config import FlowcaserConfig, load_config
from flowcaser.conversation import ConversationLog
from flowcaser.models import ConversationTurn
from flowcaser.store import DataStore, SqliteDataStore

logger = logging.getLogger(__name__)


class AssistantService:
    def __init__(
        self,
        store: DataStore,
        config: Optional[FlowcaserConfig] = None,
        generator: Optional[ResponseGenerator] = None,
    ):
        self.store = store
        self.config = config or load_config()
        self.generator = generator or ResponseGenerator(self.config)
        self.assembler = ContextAssembler(store)
        self.log = ConversationLog(store)

    @classmethod
    def from_config(cls, config: Optional[FlowcaserConfig] = None) -> "AssistantService":
        """Service over the local SQLite store named by the config.

        Without an explicit config, a ``.env`` file is loaded before the
        environment is read.
        """
        if config is None:
            load_dotenv()
            config = load_config()
        return cls(SqliteDataStore(config.db_path or None), config)

    def process_query(self, query: str, team_id: str, user_id: str | None) -> AssistantMessage:
        started = time.time()
        self.log.record(team_id, "user", query, user_id=user_id)

        intent = GENERAL
        try:
            intent = classify_intent(query)
            bundle = self.assembler.assemble(query, intent, team_id)
            message = self.generator.generate(query, bundle, intent)
        except Exception:
            logger.exception("assistant query failed (team=%s)", team_id)
            message = apology_message(intent)

        self.log.append_turn(
            ConversationTurn(
                id=message.id,
                content=message.content,
                role="assistant",
                team_id=team_id,
                user_id=None,
                created_at=message.created_at,
            )
        )
        logger.info(
            "assistant reply (team=%s, intent=%s, source=%s, ms=%.0f)",
            team_id,
            message.intent,
            message.source,
            (time.time() - started) * 1000,
        )
        return message

    def history(self, team_id: str, limit: int | None = None) -> List[ConversationTurn]:
        if limit is None:
            limit = self.config.history_limit
        return self.log.load_history(team_id, limit)

    def search(self, query: str, team_id: str) -> List[SearchResult]:
        return search_across_modules(query, team_id, self.store)

    def search_reply(self, query: str, team_id: str) -> str:
        return format_search_results(query, self.search(query, team_id), rng=self.generator.rng)
