"""
Context assembly for assistant replies.

Filtering is a plain case-insensitive substring match of the whole query
against each record's text fields, in storage order. It is not search.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from flowcaser.assistant.intent import BUGS, FEATURES, GENERAL, KNOWLEDGE, TEAM, TIME
from flowcaser.models import Team
from flowcaser.store import DataStore

logger = logging.getLogger(__name__)

MATCH_LIMITS: Dict[str, int] = {BUGS: 10, FEATURES: 10, KNOWLEDGE: 10, TIME: 20}
SAMPLE_LIMITS: Dict[str, int] = {"bugs": 5, "features": 5, "knowledge": 5, "time_logs": 10}

_INTENT_COLLECTION = {BUGS: "bugs", FEATURES: "features", KNOWLEDGE: "knowledge", TIME: "time_logs"}

# Text fields matched per collection.
_MATCH_FIELDS: Dict[str, tuple] = {
    "bugs": ("title", "description"),
    "features": ("title", "description"),
    "knowledge": ("title", "content", "category"),
    "time_logs": ("description", "project"),
}


@dataclass
class ContextBundle:
    """Records assembled for one query."""

    type: str
    data: List[Any] = field(default_factory=list)
    sample: Dict[str, List[Any]] = field(default_factory=dict)
    team: Optional[Team] = None
    failed: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.data and not any(self.sample.values())

    def collections(self) -> Dict[str, List[Any]]:
        """Records keyed by collection name, for prompts and summaries."""
        if self.type in _INTENT_COLLECTION:
            return {_INTENT_COLLECTION[self.type]: list(self.data)}
        return {name: list(items) for name, items in self.sample.items()}


def matches_query(record: Any, collection: str, query: str) -> bool:
    needle = (query or "").lower()
    for name in _MATCH_FIELDS[collection]:
        value = getattr(record, name, None)
        if value and needle in str(value).lower():
            return True
    return False


class ContextAssembler:
    """Fetches a team's collections and narrows them for an intent."""

    def __init__(self, store: DataStore, max_workers: int = 4):
        self.store = store
        self.max_workers = max_workers

    def _fetchers(self) -> Dict[str, Callable[[str], List[Any]]]:
        return {
            "bugs": self.store.list_bugs,
            "features": self.store.list_features,
            "knowledge": self.store.list_knowledge,
            "time_logs": self.store.list_time_logs,
        }

    def fetch(self, team_id: str, collections: List[str]) -> tuple[Dict[str, List[Any]], List[str]]:
        """
        Fetch several collections concurrently and wait for all of them.

        A collection whose fetch raises comes back empty and is listed in the
        second element of the result.
        """
        fetchers = self._fetchers()
        results: Dict[str, List[Any]] = {}
        failed: List[str] = []
        with ThreadPoolExecutor(max_workers=max(1, min(self.max_workers, len(collections)))) as pool:
            futures = {name: pool.submit(fetchers[name], team_id) for name in collections}
            for name, future in futures.items():
                try:
                    results[name] = list(future.result() or [])
                except Exception as exc:
                    logger.warning("context fetch failed (collection=%s, team=%s): %s", name, team_id, exc)
                    results[name] = []
                    failed.append(name)
        return results, failed

    def _fetch_team(self, team_id: str) -> Optional[Team]:
        try:
            return self.store.get_team(team_id)
        except Exception as exc:
            logger.warning("team lookup failed (team=%s): %s", team_id, exc)
            return None

    def assemble(self, query: str, intent: str, team_id: str) -> ContextBundle:
        if intent in _INTENT_COLLECTION:
            collection = _INTENT_COLLECTION[intent]
            fetched, failed = self.fetch(team_id, [collection])
            matches = [r for r in fetched[collection] if matches_query(r, collection, query)]
            return ContextBundle(type=intent, data=matches[: MATCH_LIMITS[intent]], failed=failed)

        fetched, failed = self.fetch(team_id, list(SAMPLE_LIMITS))
        sample = {name: fetched[name][:limit] for name, limit in SAMPLE_LIMITS.items()}
        team = self._fetch_team(team_id) if intent == TEAM else None
        return ContextBundle(type=intent if intent == TEAM else GENERAL, sample=sample, team=team, failed=failed)


def assemble_context(query: str, intent: str, store: DataStore, team_id: str) -> ContextBundle:
    return ContextAssembler(store).assemble(query, intent, team_id)
