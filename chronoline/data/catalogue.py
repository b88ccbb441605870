"""Fixed in-memory catalogue of traditions shown on the timeline.

Each row is ``(id, name, family, first_year)``; the family doubles as the
entity category.
"""

from __future__ import annotations

from typing import Dict, List

from ..core.entities import TimelineEntity

_ROWS = [
    ("watts", "Alan Watts", "Modern", 1915),
    ("absurdism", "Camus / Absurdism", "Modern", 1942),
    ("buddhism", "Buddhism", "Eastern", -480),
    ("judaism", "Judaism", "Abrahamic", -1300),
    ("christianity", "Christianity", "Abrahamic", 30),
    ("islam", "Islam", "Abrahamic", 610),
    ("hinduism", "Hinduism (Advaita Vedānta)", "Eastern", 800),
    ("taoism", "Taoism", "Eastern", -400),
    ("stoicism", "Stoicism", "Classical", -300),
    ("existentialism", "Existentialism", "Modern", 1940),
    ("confucianism", "Confucianism", "Eastern", -551),
    ("sikhism", "Sikhism", "Modern", 1469),
    ("humanism", "Secular Humanism", "Modern", 1933),
    ("jainism", "Jainism", "Eastern", -599),
    ("indigenous", "Indigenous Wisdom", "Traditional", -10000),
]

TRADITIONS: List[TimelineEntity] = [
    TimelineEntity(id=i, name=n, category=fam, year=y) for i, n, fam, y in _ROWS
]

FAMILY_NOTES: Dict[str, str] = {
    "Eastern": "Eastern traditions come from Asia (like India, China, Japan) and often focus on inner peace, meditation, and the connection between all things.",
    "Abrahamic": "Abrahamic religions share the story of Abraham and believe in one God. This includes Judaism, Christianity, and Islam.",
    "Classical": "Classical traditions come from ancient Greece and Rome. They used logic and reason to figure out how to live a good life.",
    "Modern": "Modern philosophies developed in the last few centuries as people began questioning old ideas and thinking in new ways about life and meaning.",
    "Traditional": "Traditional wisdom comes from indigenous cultures worldwide who developed sustainable ways of living in harmony with nature and community over thousands of years.",
}


def load_catalogue() -> List[TimelineEntity]:
    """Return the catalogue in its listing order (not year order)."""
    return list(TRADITIONS)


def family_note(family: str) -> str:
    return FAMILY_NOTES.get(
        family, f"{family} represents a group of related philosophical and religious traditions."
    )


__all__ = ["FAMILY_NOTES", "TRADITIONS", "family_note", "load_catalogue"]
