"""Remote model providers."""

from flowcaser.provider.llm_client import chat_completion_request, extract_message_content  # noqa: F401

__all__ = ["chat_completion_request", "extract_message_content"]
