"""Keyword intent detection for assistant queries."""

from typing import Tuple

BUGS = "bugs"
FEATURES = "features"
KNOWLEDGE = "knowledge"
TIME = "time"
TEAM = "team"
GENERAL = "general"

INTENTS = (BUGS, FEATURES, KNOWLEDGE, TIME, TEAM, GENERAL)

# Checked top to bottom; the first intent with a matching keyword wins.
INTENT_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (BUGS, ("bug", "fejl", "problem")),
    (FEATURES, ("feature", "funktion", "ønske")),
    (KNOWLEDGE, ("viden", "guide", "hvordan")),
    (TIME, ("tid", "timer", "arbejde")),
    (TEAM, ("team", "medlemmer", "kollega")),
)


def classify_intent(query: str) -> str:
    """
    Map a free-text query to an intent by plain substring checks.

    No tokenization: "altid" contains "tid" and is classified as time.
    """
    lowered = (query or "").lower()
    for intent, keywords in INTENT_KEYWORDS:
        if any(word in lowered for word in keywords):
            return intent
    return GENERAL


__all__ = ["classify_intent", "INTENTS", "INTENT_KEYWORDS", "BUGS", "FEATURES", "KNOWLEDGE", "TIME", "TEAM", "GENERAL"]
