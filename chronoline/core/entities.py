"""Entity model consumed by the timeline engine.

Entities are immutable records supplied by the caller. The engine only derives
positions from them and never writes back.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Iterable, List


@dataclass(frozen=True)
class TimelineEntity:
    id: str
    name: str
    category: str  # grouping / colour only
    year: int  # negative = BCE

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimelineEntity":
        return cls(
            id=str(data["id"]),
            name=data.get("name", str(data["id"])),
            category=data.get("category", ""),
            year=int(data["year"]),
        )


def sort_by_year(entities: Iterable[TimelineEntity]) -> List[TimelineEntity]:
    """Return entities ordered by year; equal years keep their input order."""
    # sorted() is stable, which is what gives the tie-break.
    return sorted(entities, key=lambda e: e.year)


__all__ = ["TimelineEntity", "sort_by_year"]
