"""
Assistant reply generation.

With an API key configured the reply comes from the remote chat-completion
endpoint; without one, or when the remote call fails, a local Danish template
is used. ``generate`` never raises.
"""

from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from flowcaser.assistant.context import ContextBundle
from flowcaser.assistant.prompts import build_messages
from flowcaser.assistant.templates import APOLOGY, pick_reply
from flowcaser.config import FlowcaserConfig
from flowcaser.provider.llm_client import chat_completion_request, extract_message_content

logger = logging.getLogger(__name__)


@dataclass
class AssistantMessage:
    content: str
    intent: str = "general"
    context: Optional[ContextBundle] = None
    source: str = "template"  # remote | template | fallback
    role: str = "assistant"
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


def apology_message(intent: str = "general") -> AssistantMessage:
    return AssistantMessage(content=APOLOGY, intent=intent, source="fallback")


class ResponseGenerator:
    """Builds an assistant reply for a query and its assembled context."""

    def __init__(
        self,
        config: FlowcaserConfig,
        client: Callable[..., Dict[str, Any]] | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config
        self.client = client or chat_completion_request
        self.rng = rng or random.Random(config.random_seed)

    def generate(self, query: str, bundle: ContextBundle, intent: str) -> AssistantMessage:
        try:
            if self.config.remote_enabled:
                content = self._remote_reply(query, bundle, intent)
                if content:
                    return AssistantMessage(content=content, intent=intent, context=bundle, source="remote")
            return AssistantMessage(content=self._template_reply(bundle), intent=intent, context=bundle)
        except Exception:
            logger.exception("response generation failed (intent=%s)", intent)
            return apology_message(intent)

    def _template_reply(self, bundle: ContextBundle) -> str:
        reply = pick_reply(bundle, self.rng)
        return reply or APOLOGY

    def _remote_reply(self, query: str, bundle: ContextBundle, intent: str) -> str | None:
        cfg = self.config
        payload = {
            "model": cfg.llm_model,
            "messages": build_messages(query, bundle, intent),
            "temperature": cfg.llm_temperature,
            "max_tokens": cfg.llm_max_tokens,
        }
        try:
            result = self.client(
                cfg.llm_url,
                payload,
                cfg.llm_api_key,
                connect_timeout=cfg.llm_connect_timeout,
                read_timeout=cfg.llm_read_timeout,
                retries=cfg.llm_retries,
            )
        except Exception as exc:
            logger.warning("remote completion raised, using template reply: %s", exc)
            return None
        if not result.get("ok"):
            error = result.get("error") or {}
            logger.warning(
                "remote completion failed (type=%s, trace_id=%s), using template reply",
                error.get("type"),
                result.get("trace_id"),
            )
            return None
        content = extract_message_content(result.get("data"))
        if content is None:
            logger.warning("remote completion had no content (trace_id=%s), using template reply", result.get("trace_id"))
        return content


def generate_response(query: str, bundle: ContextBundle, intent: str, config: FlowcaserConfig) -> AssistantMessage:
    return ResponseGenerator(config).generate(query, bundle, intent)
