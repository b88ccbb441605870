"""Timeline engine facade.

Ties the pieces together for one timeline view:

    entities -> axis mapping -> collision resolution -> viewport transform
             -> hit-testing -> selection/hover -> re-centring

`TimelineEngine` owns the single `ViewportController` and
`SelectionCoordinator` of a view. The UI layer reads `markers()`,
`viewport_state` and `selection_state`, routes pointer events into
`pointer_moved` / `pointer_clicked` / `wheel` / `drag`, and repaints on
``changed``.

Layout is computed in content coordinates and cached per
``(width, scale, height)``; panning only translates the cached layout, so the
same inputs always give bit-identical markers.

Signals:
    changed()                         # anything visible changed
    selected(object)                  # onSelect(entity_id | None)
    hovered(object)                   # onHover(entity_id | None)
    placementDegraded(object)         # PlacementDegeneracy, on recompute
"""

from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Sequence, Tuple

from PySide6.QtCore import QObject, Signal

from .axis import AxisMapper
from .config import EngineConfig
from .entities import TimelineEntity, sort_by_year
from .errors import ConfigError
from .placement import CollisionResolver, PlacedMarker, PlacementReport
from .selection import SelectionCoordinator, SelectionState
from .viewport import OVERVIEW, ViewportController, ViewportState

logger = logging.getLogger(__name__)


class TimelineEngine(QObject):
    changed = Signal()
    selected = Signal(object)
    hovered = Signal(object)
    placementDegraded = Signal(object)

    def __init__(
        self,
        entities: Sequence[TimelineEntity] = (),
        viewport_width: float = 0.0,
        viewport_height: float = 0.0,
        config: Optional[EngineConfig] = None,
        *,
        on_select: Optional[Callable[[Optional[str]], None]] = None,
        on_hover: Optional[Callable[[Optional[str]], None]] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._config = config or EngineConfig()
        self._resolver = CollisionResolver.from_config(self._config)
        self._entities: Tuple[TimelineEntity, ...] = ()
        self._height = float(viewport_height)
        self._layout_key: Optional[Tuple[float, float, float]] = None
        self._layout: List[PlacedMarker] = []
        self._report = PlacementReport()

        self.viewport = ViewportController(self._config, viewport_width, self)
        self.selection = SelectionCoordinator((), self)
        self._setEntities(entities)

        self.viewport.stateChanged.connect(self._onViewportChanged)
        self.selection.stateChanged.connect(lambda _s: self.changed.emit())
        self.selection.centerRequested.connect(self._onCenterRequested)
        self.selection.overviewRequested.connect(self.viewport.enter_overview)
        self.selection.selected.connect(self.selected.emit)
        self.selection.hovered.connect(self.hovered.emit)
        if on_select is not None:
            self.selected.connect(on_select)
        if on_hover is not None:
            self.hovered.connect(on_hover)

    # --- State ---
    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def entities(self) -> Tuple[TimelineEntity, ...]:
        return self._entities

    @property
    def viewport_state(self) -> ViewportState:
        return self.viewport.state

    @property
    def selection_state(self) -> SelectionState:
        return self.selection.state

    @property
    def viewport_width(self) -> float:
        return self.viewport.viewport_width

    @property
    def viewport_height(self) -> float:
        return self._height

    @property
    def base_y(self) -> float:
        return self._height / 2.0

    @property
    def placement_report(self) -> PlacementReport:
        self._ensureLayout()
        return self._report

    def entity(self, entity_id: str) -> TimelineEntity:
        return self.selection.entity(entity_id)

    def set_entities(self, entities: Sequence[TimelineEntity]) -> None:
        self._setEntities(entities)
        self.changed.emit()

    def resize(self, width: float, height: float) -> bool:
        """Adopt new viewport dimensions. Repeated identical calls are no-ops."""
        height = float(height)
        height_changed = height != self._height
        self._height = height
        width_changed = self.viewport.resize(width)
        if not (height_changed or width_changed):
            return False
        logger.debug("resized to %sx%s", width, height)
        self.changed.emit()
        return True

    # --- Geometry output ---
    def content_markers(self) -> List[PlacedMarker]:
        """Markers in content coordinates (pan not applied)."""
        self._ensureLayout()
        return list(self._layout)

    def markers(self) -> List[PlacedMarker]:
        """Markers in screen coordinates for the current zoom and pan."""
        self._ensureLayout()
        pan = self.viewport.pan_offset
        if pan == 0:
            return list(self._layout)
        return [m.translated(-pan) for m in self._layout]

    def marker(self, entity_id: str) -> Optional[PlacedMarker]:
        for m in self.markers():
            if m.entity_id == entity_id:
                return m
        return None

    def axis(self) -> AxisMapper:
        """Axis mapper in screen coordinates, for ticks and period bands."""
        s = self.viewport.scale
        pan = self.viewport.pan_offset
        pad = self._config.padding
        lo, hi = self._config.domain
        width = max(0.0, self.viewport.viewport_width)
        return AxisMapper(lo, hi, pad * s - pan, (width - pad) * s - pan)

    def screen_x(self, year: float) -> float:
        return self.viewport.screen_x(year)

    def year_at(self, x: float) -> float:
        return self.viewport.year_at(x)

    def hit_test(self, x: float, y: float) -> Optional[str]:
        """Entity id of the nearest marker within the marker radius."""
        best_id = None
        best_d = math.inf
        radius = self._config.marker_radius
        for m in self.markers():
            d = math.hypot(m.x - x, m.y - y)
            if d <= radius and d < best_d:
                best_id, best_d = m.entity_id, d
        return best_id

    # --- Selection surface ---
    def select(self, entity_id: str) -> TimelineEntity:
        return self.selection.select(entity_id)

    def hover(self, entity_id: Optional[str]) -> None:
        self.selection.hover(entity_id)

    def clear(self) -> None:
        self.selection.clear()

    def focus_on(self, year: float) -> None:
        self.selection.focus_on(year)

    def select_next(self) -> Optional[str]:
        return self.selection.select_next()

    def select_previous(self) -> Optional[str]:
        return self.selection.select_previous()

    # --- Pointer routing ---
    def pointer_moved(self, x: float, y: float) -> Optional[str]:
        hit = self.hit_test(x, y)
        self.selection.hover(hit)
        return hit

    def pointer_left(self) -> None:
        self.selection.hover(None)

    def pointer_clicked(self, x: float, y: float) -> Optional[str]:
        """Select the marker under the pointer, or focus the year clicked."""
        hit = self.hit_test(x, y)
        if hit is not None:
            self.selection.select(hit)
        elif self.viewport.is_active:
            self.selection.focus_on(round(self.viewport.year_at(x)))
        return hit

    # --- Viewport surface ---
    def zoom_by(self, factor: float, anchor: Optional[float] = None) -> bool:
        return self.viewport.zoom_by(factor, anchor)

    def zoom_in(self) -> bool:
        return self.viewport.zoom_in()

    def zoom_out(self) -> bool:
        return self.viewport.zoom_out()

    def pan_by(self, delta: float) -> bool:
        return self.viewport.pan_by(delta)

    def wheel(self, delta_y: float, modifier: bool = False, anchor: Optional[float] = None) -> bool:
        return self.viewport.wheel(delta_y, modifier, anchor)

    def drag(self, dx: float) -> bool:
        return self.viewport.drag(dx)

    def enter_detailed(self, focus_year: float) -> bool:
        return self.viewport.enter_detailed(focus_year)

    def enter_overview(self) -> bool:
        return self.viewport.enter_overview()

    def settle(self) -> None:
        self.viewport.settle()

    def reset(self) -> None:
        """Back to defaults: no selection, overview."""
        self.selection.clear()
        self.viewport.reset()

    # --- Internals ---
    def _setEntities(self, entities: Sequence[TimelineEntity]) -> None:
        ordered = sort_by_year(entities)
        seen = set()
        for e in ordered:
            if e.id in seen:
                raise ConfigError(f"duplicate entity id {e.id!r}", "entities")
            seen.add(e.id)
        self._entities = tuple(ordered)
        self._layout_key = None
        self.selection.set_entities(self._entities)

    def _ensureLayout(self) -> None:
        # width and scale enter content x separately, not only as their product
        key = (self.viewport.viewport_width, self.viewport.scale, self._height)
        if key == self._layout_key:
            return
        self._layout_key = key
        if not self.viewport.is_active:
            self._layout, self._report = [], PlacementReport()
            return
        positions = [(e.id, self.viewport.content_x(e.year)) for e in self._entities]
        self._layout, self._report = self._resolver.resolve(positions, self.base_y)
        logger.debug(
            "layout recomputed for width %.1f, scale %.3f, height %.1f", *key
        )
        if self._report.degeneracy is not None:
            self.placementDegraded.emit(self._report.degeneracy)

    def _onViewportChanged(self, _state: ViewportState) -> None:
        self.changed.emit()

    def _onCenterRequested(self, year: float) -> None:
        if self.viewport.mode == OVERVIEW:
            self.viewport.enter_detailed(year)
        else:
            self.viewport.center_on(year)


__all__ = ["TimelineEngine"]
