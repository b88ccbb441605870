"""Selection and hover coordination.

SelectionCoordinator tracks which entity is selected, which is hovered and the
year the view is focused on. It never touches the viewport itself; it asks for
re-centring through signals and the engine routes those to the
`ViewportController`.

Signals:
    selected(object)         # entity id, or None after clear()
    hovered(object)          # entity id or None
    centerRequested(float)   # exactly one per select()/focus_on() call
    overviewRequested()      # emitted by clear()
    stateChanged(SelectionState)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence

from PySide6.QtCore import QObject, Signal

from .entities import TimelineEntity, sort_by_year
from .errors import UnknownEntity


@dataclass(frozen=True)
class SelectionState:
    selected_id: Optional[str] = None
    hovered_id: Optional[str] = None
    focus_year: Optional[float] = None


class SelectionCoordinator(QObject):
    selected = Signal(object)
    hovered = Signal(object)
    centerRequested = Signal(float)
    overviewRequested = Signal()
    stateChanged = Signal(object)

    def __init__(self, entities: Sequence[TimelineEntity] = (), parent: Optional[QObject] = None):
        super().__init__(parent)
        self._state = SelectionState()
        self._by_id: Dict[str, TimelineEntity] = {}
        self._ordered: List[TimelineEntity] = []
        self.set_entities(entities)

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def selected_id(self) -> Optional[str]:
        return self._state.selected_id

    @property
    def hovered_id(self) -> Optional[str]:
        return self._state.hovered_id

    @property
    def focus_year(self) -> Optional[float]:
        return self._state.focus_year

    def set_entities(self, entities: Sequence[TimelineEntity]) -> None:
        """Replace the entity table.

        A selection or hover whose id vanished is dropped and announced with
        ``selected(None)`` / ``hovered(None)``; a dropped selection also takes
        its focus year with it.
        """
        self._ordered = sort_by_year(entities)
        self._by_id = {e.id: e for e in self._ordered}
        state = self._state
        lost_selection = state.selected_id is not None and state.selected_id not in self._by_id
        lost_hover = state.hovered_id is not None and state.hovered_id not in self._by_id
        if lost_selection:
            state = replace(state, selected_id=None, focus_year=None)
        if lost_hover:
            state = replace(state, hovered_id=None)
        self._setState(state)
        if lost_selection:
            self.selected.emit(None)
        if lost_hover:
            self.hovered.emit(None)

    def entity(self, entity_id: str) -> TimelineEntity:
        try:
            return self._by_id[entity_id]
        except KeyError:
            raise UnknownEntity(entity_id) from None

    # --- Public API ---
    def select(self, entity_id: str) -> TimelineEntity:
        """Select an entity and request that the view centre on its year."""
        entity = self.entity(entity_id)
        self._setState(
            replace(self._state, selected_id=entity.id, focus_year=entity.year)
        )
        self.selected.emit(entity.id)
        self.centerRequested.emit(float(entity.year))
        return entity

    def hover(self, entity_id: Optional[str]) -> None:
        if entity_id is not None:
            self.entity(entity_id)
        if entity_id == self._state.hovered_id:
            return
        self._setState(replace(self._state, hovered_id=entity_id))
        self.hovered.emit(entity_id)

    def focus_on(self, year: float) -> None:
        """Focus a bare year, e.g. after a click on empty timeline space."""
        self._setState(replace(self._state, focus_year=year))
        self.centerRequested.emit(float(year))

    def clear(self) -> None:
        had_selection = self._state.selected_id is not None
        had_hover = self._state.hovered_id is not None
        self._setState(SelectionState())
        if had_selection:
            self.selected.emit(None)
        if had_hover:
            self.hovered.emit(None)
        self.overviewRequested.emit()

    def select_next(self) -> Optional[str]:
        """Step forward in time; with nothing selected start at the earliest."""
        return self._step(+1)

    def select_previous(self) -> Optional[str]:
        return self._step(-1)

    # --- Internals ---
    def _step(self, direction: int) -> Optional[str]:
        if not self._ordered:
            return None
        current = self._state.selected_id
        if current is None:
            index = 0
        else:
            ids = [e.id for e in self._ordered]
            index = ids.index(current) + direction
            if not 0 <= index < len(ids):
                return current  # already at the end
        return self.select(self._ordered[index].id).id

    def _setState(self, state: SelectionState) -> None:
        if state == self._state:
            return
        self._state = state
        self.stateChanged.emit(state)


__all__ = ["SelectionCoordinator", "SelectionState"]
