"""Prompt text for the remote model."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from flowcaser.assistant.context import ContextBundle

SYSTEM_PROMPT = (
    "Du er FlowCaser AI, en dansk assistent for et team. "
    "Svar kort og handlingsorienteret. "
    "Brug kontekst, hvis relevant. "
    "Brug punktopstilling ved behov. "
    "Undgå at opfinde data."
)

MAX_ITEMS_PER_SECTION = 10

# (heading, fields) per collection, in prompt order.
SECTIONS: Dict[str, tuple] = {
    "knowledge": ("Viden", ("title", "category")),
    "bugs": ("Bugs", ("title", "status", "priority")),
    "features": ("Features", ("title", "status", "votes")),
    "time_logs": ("Tid", ("description", "hours", "date")),
}


def summarize_items(items: Sequence[Any], fields: Sequence[str], max_items: int = MAX_ITEMS_PER_SECTION) -> List[str]:
    lines = []
    for item in list(items)[:max_items]:
        parts = []
        for name in fields:
            value = getattr(item, name, None)
            parts.append(f"{name}: {'' if value is None else value}")
        lines.append(" | ".join(parts))
    return lines


def build_user_prompt(query: str, bundle: ContextBundle, intent: str) -> str:
    parts = [f"Brugerens spørgsmål: {query}", f"Intent: {intent}"]
    if bundle.team is not None:
        parts.append(f"Team: {bundle.team.name}")
    collections = bundle.collections()
    for name, (heading, fields) in SECTIONS.items():
        items = collections.get(name) or []
        if items:
            parts.append(f"{heading}:\n" + "\n".join(summarize_items(items, fields)))
    return "\n\n".join(parts)


def build_messages(query: str, bundle: ContextBundle, intent: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_prompt(query, bundle, intent)},
    ]
