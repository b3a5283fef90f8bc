"""
Cross-module search ranked by word-overlap relevance.

``relevance_score`` adds up the length of every query word (split on single
spaces) that occurs in the candidate text. There is no tokenization, stemming
or weighting beyond that.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, List, Optional

from flowcaser.assistant.context import ContextAssembler, matches_query
from flowcaser.assistant.templates import (
    GENERIC_SEARCH_REPLIES,
    contextual_tip,
    format_hours,
    priority_label,
    status_label,
)
from flowcaser.store import DataStore

logger = logging.getLogger(__name__)

PER_COLLECTION_LIMIT = 5
RESULT_LIMIT = 10
PREVIEW_CHARS = 100

# collection -> (result type, fields joined into the scored text)
_SCORED_TEXT = {
    "bugs": ("bug", ("title", "description")),
    "features": ("feature", ("title", "description")),
    "knowledge": ("knowledge", ("title", "content")),
    "time_logs": ("time", ("description", "project")),
}


@dataclass
class SearchResult:
    type: str
    record: Any
    relevance: int


def relevance_score(query: str, text: str) -> int:
    text_lower = (text or "").lower()
    score = 0
    for word in (query or "").lower().split(" "):
        if word in text_lower:
            score += len(word)
    return score


def _scored_text(record: Any, fields) -> str:
    return " ".join("" if getattr(record, name, None) is None else str(getattr(record, name)) for name in fields)


def search_across_modules(query: str, team_id: str, store: DataStore, limit: int = RESULT_LIMIT) -> List[SearchResult]:
    """Top ``limit`` records across all collections, most relevant first."""
    try:
        fetched, _failed = ContextAssembler(store).fetch(team_id, list(_SCORED_TEXT))
        results: List[SearchResult] = []
        for collection, (kind, fields) in _SCORED_TEXT.items():
            hits = [r for r in fetched[collection] if matches_query(r, collection, query)]
            for record in hits[:PER_COLLECTION_LIMIT]:
                results.append(SearchResult(kind, record, relevance_score(query, _scored_text(record, fields))))
        results.sort(key=lambda r: r.relevance, reverse=True)
        return results[:limit]
    except Exception as exc:
        logger.warning("search across modules failed (team=%s): %s", team_id, exc)
        return []


def _preview(text: Optional[str]) -> str:
    return f"{(text or '')[:PREVIEW_CHARS]}..."


def _danish_date(value: Optional[str]) -> str:
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value).date() if "T" in value else date.fromisoformat(value)
    except ValueError:
        return value
    return f"{parsed.day}.{parsed.month}.{parsed.year}"


def _describe(result: SearchResult) -> str:
    r = result.record
    if result.type == "bug":
        return (
            f"🐛 **Bug**: {r.title}\n"
            f"   Status: {status_label(r.status)} | Prioritet: {priority_label(r.priority)}\n"
            f"   {_preview(r.description)}\n\n"
        )
    if result.type == "feature":
        return (
            f"💡 **Feature**: {r.title}\n"
            f"   Status: {status_label(r.status)} | Stemmer: {r.votes}\n"
            f"   {_preview(r.description)}\n\n"
        )
    if result.type == "knowledge":
        return f"📚 **Viden**: {r.title}\n   Kategori: {r.category}\n   {_preview(r.content)}\n\n"
    return (
        f"⏰ **Tid**: {r.description}\n"
        f"   Projekt: {r.project or ''} | Timer: {format_hours(r.hours)}\n"
        f"   Dato: {_danish_date(r.date)}\n\n"
    )


def format_search_results(query: str, results: List[SearchResult], rng: random.Random | None = None) -> str:
    if not results:
        return (rng or random.Random()).choice(GENERIC_SEARCH_REPLIES).format(query=query)

    text = f"Baseret på din søgning fandt jeg {len(results)} relevante resultater:\n\n"
    for result in results[:3]:
        text += _describe(result)
    if len(results) > 3:
        text += f"... og {len(results) - 3} flere resultater.\n\n"
    text += contextual_tip([r.type for r in results])
    return text
