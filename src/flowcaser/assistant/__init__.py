"""FlowCaser chat assistant."""

from flowcaser.assistant.context import ContextAssembler, ContextBundle, assemble_context  # noqa: F401
from flowcaser.assistant.intent import classify_intent  # noqa: F401
from flowcaser.assistant.responder import AssistantMessage, ResponseGenerator, generate_response  # noqa: F401
from flowcaser.assistant.search import relevance_score, search_across_modules  # noqa: F401
from flowcaser.assistant.service import AssistantService  # noqa: F401

__all__ = [
    "AssistantMessage",
    "AssistantService",
    "ContextAssembler",
    "ContextBundle",
    "ResponseGenerator",
    "assemble_context",
    "classify_intent",
    "generate_response",
    "relevance_score",
    "search_across_modules",
]
