"""Collision resolution for timeline markers.

Turns x positions (already projected by the axis mapper, sorted by year) into
final marker placements that keep at least ``min_spacing`` pixels between
marker centres.

The resolver is a deterministic single-pass greedy heuristic:

1. Each marker starts on row 0 at its projected x.
2. The candidate is checked against every marker placed so far. On a
   collision the next row in ``row_offsets`` is tried.
3. When the row cycle wraps back to row 0 every row has failed at this x, so x
   is nudged right by ``min_spacing / 2`` before retrying.
4. After ``max_attempts`` candidates the marker is degenerate: it keeps the
   candidate with the most clearance and is recorded on the report. Nothing is
   raised.

Distance checks are vectorised with numpy over the placed markers; the scan is
O(n) per candidate and O(n^2) overall, which is fine for tens of markers. A
sorted bucket index by x would be the next step for thousands.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .errors import ConfigError, PlacementDegeneracy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacedMarker:
    entity_id: str
    x: float
    y: float
    row: int

    def translated(self, dx: float) -> "PlacedMarker":
        return replace(self, x=self.x + dx)


@dataclass(frozen=True)
class PlacementReport:
    attempts: Tuple[int, ...] = ()  # candidates checked, per marker
    degeneracy: Optional[PlacementDegeneracy] = None

    @property
    def degenerate(self) -> Tuple[str, ...]:
        if self.degeneracy is None:
            return ()
        return self.degeneracy.entity_ids

    @property
    def ok(self) -> bool:
        return self.degeneracy is None


class CollisionResolver:
    def __init__(
        self,
        min_spacing: float = 25.0,
        row_offsets: Sequence[int] = (0, -25, 25),
        max_attempts: int = 10,
    ):
        if min_spacing < 0:
            raise ConfigError("must not be negative", "min_spacing")
        if not row_offsets:
            raise ConfigError("needs at least one row", "row_offsets")
        if max_attempts < 1:
            raise ConfigError("must be at least 1", "max_attempts")
        self.min_spacing = float(min_spacing)
        self.row_offsets = tuple(int(r) for r in row_offsets)
        self.max_attempts = int(max_attempts)

    @classmethod
    def from_config(cls, config) -> "CollisionResolver":
        return cls(config.min_spacing, config.row_offsets, config.max_attempts)

    def resolve(
        self, positions: Sequence[Tuple[str, float]], base_y: float
    ) -> Tuple[List[PlacedMarker], PlacementReport]:
        """Place ``(entity_id, x)`` pairs, given in ascending year order.

        Returns the markers in input order together with a report of attempts
        and any degenerate placements.
        """
        n = len(positions)
        xs = np.empty(n, dtype=np.float64)
        ys = np.empty(n, dtype=np.float64)
        markers: List[PlacedMarker] = []
        attempts: List[int] = []
        degenerate: List[str] = []
        n_rows = len(self.row_offsets)
        nudge = self.min_spacing / 2.0

        for i, (entity_id, raw_x) in enumerate(positions):
            x = float(raw_x)
            row = 0
            best: Optional[Tuple[float, float, int]] = None  # clearance, x, row
            placed = False
            tries = 0
            for _ in range(self.max_attempts):
                tries += 1
                y = base_y + self.row_offsets[row]
                clearance = _clearance(xs[:i], ys[:i], x, y)
                if clearance >= self.min_spacing:
                    placed = True
                    break
                if best is None or clearance > best[0]:
                    best = (clearance, x, row)
                row = (row + 1) % n_rows
                if row == 0:
                    x += nudge
            if not placed:
                _, x, row = best
                degenerate.append(entity_id)
            y = base_y + self.row_offsets[row]
            xs[i] = x
            ys[i] = y
            attempts.append(tries)
            markers.append(PlacedMarker(entity_id, x, y, row))

        degeneracy = None
        if degenerate:
            degeneracy = PlacementDegeneracy(
                degenerate, self.min_spacing, self.max_attempts
            )
            logger.warning("placement degraded: %s", degeneracy.details)
        logger.debug("placed %d markers (attempts=%s)", n, attempts)
        return markers, PlacementReport(tuple(attempts), degeneracy)


def _clearance(xs: np.ndarray, ys: np.ndarray, x: float, y: float) -> float:
    """Distance from (x, y) to the nearest placed marker."""
    if xs.size == 0:
        return math.inf
    return float(np.min(np.hypot(xs - x, ys - y)))


def pairwise_violations(
    markers: Sequence[PlacedMarker], min_spacing: float
) -> List[Tuple[str, str, float]]:
    """List marker pairs whose centres are closer than ``min_spacing``."""
    if len(markers) < 2:
        return []
    xs = np.array([m.x for m in markers], dtype=np.float64)
    ys = np.array([m.y for m in markers], dtype=np.float64)
    dist = np.hypot(xs[:, None] - xs[None, :], ys[:, None] - ys[None, :])
    out = []
    for i, j in zip(*np.triu_indices(len(markers), k=1)):
        d = float(dist[i, j])
        if d < min_spacing:
            out.append((markers[i].entity_id, markers[j].entity_id, d))
    return out


__all__ = [
    "CollisionResolver",
    "PlacedMarker",
    "PlacementReport",
    "pairwise_violations",
]
