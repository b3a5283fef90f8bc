"""
Danish reply copy for the assistant.

Every template is a ``str.format`` pattern; item lists are rendered before
formatting and passed in as ``items``.
"""

from __future__ import annotations

import random
from typing import Any, Dict, List, Sequence

APOLOGY = "Beklager, jeg kunne ikke behandle din forespørgsel. Prøv igen senere."

TEMPLATES: Dict[str, Dict[str, List[str]]] = {
    "bugs": {
        "found": [
            "Jeg fandt {count} bugs relateret til din forespørgsel:\n\n{items_short}\n\nVil du have mere information om en specifik bug?",
            "Her er de relevante bugs jeg fandt:\n\n{items_long}",
        ],
        "empty": [
            "Jeg kan ikke finde nogen bugs der matcher din søgning. Vil du oprette en ny bug rapport?",
            "Der er ingen bugs relateret til din forespørgsel. Opret en ny bug rapport, hvis du har fundet en fejl.",
        ],
    },
    "features": {
        "found": [
            "Jeg fandt {count} feature requests:\n\n{items_short}",
            "Her er de relevante feature requests:\n\n{items_long}",
        ],
        "empty": [
            "Jeg kan ikke finde nogen feature requests der matcher din søgning. Vil du foreslå en ny feature?",
            "Der er ingen feature requests relateret til din forespørgsel endnu. Du kan oprette en ny feature request.",
        ],
    },
    "knowledge": {
        "found": [
            "Jeg fandt {count} videns artikler:\n\n{items_short}",
            "Her er den relevante viden jeg fandt:\n\n{items_long}",
        ],
        "empty": [
            "Jeg kan ikke finde nogen videns artikler der matcher din søgning. Vil du oprette en ny videns case?",
            "Der er ingen viden tilgængelig om dette emne endnu. Opret en ny videns case, så teamet kan bruge den.",
        ],
    },
    "time": {
        "found": [
            "Jeg fandt {count} tidsregistreringer med i alt {total} timer:\n\n{items_short}",
            "Tidsregistreringer: {total} timer total i {count} poster.",
        ],
        "empty": [
            "Jeg kan ikke finde nogen tidsregistreringer der matcher din søgning. Vil du registrere ny tid?",
            "Der er ingen tidsdata tilgængelig for din forespørgsel. Du kan oprette en ny tidsregistrering.",
        ],
    },
    "team": {
        "found": [
            "Du er en del af teamet {name}. {description}\n\nSpørg mig om teamets bugs, features, viden eller tidsregistreringer.",
        ],
        "empty": [],
    },
    "general": {
        "found": [
            "Hej! Jeg er FlowCaser AI assistenten. Jeg kan hjælpe dig med at finde information om bugs, features, viden og tidsregistreringer. Hvad kan jeg hjælpe dig med?",
            "Jeg er her for at hjælpe! Spørg mig om bugs, feature requests, videns artikler eller tidsregistreringer.",
            "Hej! Jeg kan hjælpe dig med at navigere i FlowCaser. Prøv at spørge om specifikke bugs, features eller videns emner.",
        ],
        "empty": [],
    },
}

STATUS_LABELS = {
    "open": "Åben",
    "in_progress": "I gang",
    "resolved": "Løst",
    "closed": "Lukket",
    "pending": "Afventer",
    "approved": "Godkendt",
    "in_development": "Under udvikling",
    "completed": "Færdig",
    "rejected": "Afvist",
}

PRIORITY_LABELS = {
    "low": "Lav",
    "medium": "Medium",
    "high": "Høj",
    "critical": "Kritisk",
}

TIPS = {
    "bug": "💡 **Tip**: Hvis du arbejder med bugs, kan du bruge filtrering efter status og prioritet for at finde de mest kritiske problemer.",
    "feature": "💡 **Tip**: Feature requests med flest stemmer bliver typisk prioriteret højest. Overvej at stemme på features du finder vigtige.",
    "knowledge": "💡 **Tip**: Videns artikler kan hjælpe dig med at løse lignende problemer. Overvej at oprette ny viden hvis du finder en løsning.",
    "time": "💡 **Tip**: Tidsregistreringer hjælper med at spore hvor meget tid der bruges på forskellige projekter og opgaver.",
    "default": "💡 **Tip**: Brug global søgning for at finde information på tværs af alle moduler i FlowCaser.",
}

GENERIC_SEARCH_REPLIES = [
    'Jeg forstår at du spørger om "{query}". Kan du være mere specifik om hvad du leder efter?',
    'Baseret på din søgning efter "{query}" kunne jeg ikke finde specifikke resultater. Prøv at søge efter bugs, features, videns artikler eller tidsregistreringer.',
    'Jeg kan hjælpe dig med at finde information om bugs, features, videns cases og tidsregistreringer. Hvad vil du gerne vide om "{query}"?',
]


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def priority_label(priority: str) -> str:
    return PRIORITY_LABELS.get(priority, priority)


def format_hours(value: float) -> str:
    """Render hours without a trailing ``.0`` (7.5 -> "7.5", 8.0 -> "8")."""
    rounded = round(float(value), 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:g}"


def _bug_lines(items: Sequence[Any]) -> tuple[str, str]:
    short = "\n".join(f"• {b.title} ({b.status})" for b in items)
    long = "\n\n".join(f"• **{b.title}**\n  Status: {b.status}, Prioritet: {b.priority}" for b in items)
    return short, long


def _feature_lines(items: Sequence[Any]) -> tuple[str, str]:
    short = "\n".join(f"• {f.title} ({f.status}) - {f.votes} stemmer" for f in items)
    long = "\n\n".join(f"• **{f.title}**\n  Status: {f.status}, Stemmer: {f.votes}" for f in items)
    return short, long


def _knowledge_lines(items: Sequence[Any]) -> tuple[str, str]:
    short = "\n".join(f"• {k.title} ({k.category})" for k in items)
    long = "\n\n".join(f"• **{k.title}**\n  Kategori: {k.category}" for k in items)
    return short, long


def _time_lines(items: Sequence[Any]) -> tuple[str, str]:
    short = "\n".join(f"• {t.description} - {format_hours(t.hours)}t ({t.date})" for t in items[:5])
    return short, short


_LINE_RENDERERS = {
    "bugs": _bug_lines,
    "features": _feature_lines,
    "knowledge": _knowledge_lines,
    "time": _time_lines,
}


def candidate_replies(bundle) -> List[str]:
    """All replies the local mode may pick from for ``bundle``."""
    intent = bundle.type
    if intent == "team" and bundle.team is not None:
        values = {"name": bundle.team.name, "description": bundle.team.description or ""}
        team_copy = [t.format(**values).replace(" \n", "\n") for t in TEMPLATES["team"]["found"]]
        return team_copy + list(TEMPLATES["general"]["found"])
    if intent not in _LINE_RENDERERS:
        return list(TEMPLATES["general"]["found"])

    items = list(bundle.data)
    if not items:
        return list(TEMPLATES[intent]["empty"])
    short, long = _LINE_RENDERERS[intent](items)
    values = {"count": len(items), "items_short": short, "items_long": long}
    if intent == "time":
        values["total"] = format_hours(sum(t.hours for t in items))
    return [t.format(**values) for t in TEMPLATES[intent]["found"]]


def pick_reply(bundle, rng: random.Random) -> str:
    return rng.choice(candidate_replies(bundle))


def contextual_tip(result_types: Sequence[str]) -> str:
    for kind in ("bug", "feature", "knowledge", "time"):
        if kind in result_types:
            return TIPS[kind]
    return TIPS["default"]
