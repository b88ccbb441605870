"""Timeline control bar.

A row of buttons under the timeline: step to the previous/next entity, zoom
in/out, reset, plus a zoom readout and a badge naming the selected entity.

The bar only forwards clicks to the engine and mirrors engine state back into
its labels; it keeps no state of its own.
"""

from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QWidget

from ...core.engine import TimelineEngine
from ...core.viewport import OVERVIEW
from ...utils.yearfmt import format_year


class TimelineControls(QWidget):
    def __init__(self, engine: TimelineEngine, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._engine = engine
        layout = QHBoxLayout()
        layout.setContentsMargins(2, 2, 2, 2)
        layout.setSpacing(4)
        self.btn_prev = QPushButton("‹")
        self.btn_next = QPushButton("›")
        self.btn_zoom_out = QPushButton("−")
        self.btn_zoom_in = QPushButton("+")
        self.btn_reset = QPushButton("Reset")
        self.btn_prev.setToolTip("Previous tradition")
        self.btn_next.setToolTip("Next tradition")
        self.btn_zoom_out.setToolTip("Zoom out")
        self.btn_zoom_in.setToolTip("Zoom in")
        self.btn_reset.setToolTip("Back to overview")
        for b in [self.btn_prev, self.btn_next, self.btn_zoom_out, self.btn_zoom_in, self.btn_reset]:
            b.setFixedHeight(22)
            b.setMinimumWidth(26)
            layout.addWidget(b)
        self.label_zoom = QLabel("100%")
        self.label_selected = QLabel("")
        layout.addWidget(self.label_zoom)
        layout.addStretch(1)
        layout.addWidget(self.label_selected)
        self.setLayout(layout)

        self.btn_prev.clicked.connect(self._engine.select_previous)
        self.btn_next.clicked.connect(self._engine.select_next)
        self.btn_zoom_in.clicked.connect(self._engine.zoom_in)
        self.btn_zoom_out.clicked.connect(self._engine.zoom_out)
        self.btn_reset.clicked.connect(self._engine.reset)
        self._engine.changed.connect(self._refresh)
        self._refresh()

    def _refresh(self):
        vp = self._engine.viewport_state
        scale = 1.0 if vp.mode == OVERVIEW else vp.scale
        self.label_zoom.setText(f"{round(scale * 100)}%")
        cfg = self._engine.config
        self.btn_zoom_in.setEnabled(scale < cfg.max_scale)
        self.btn_zoom_out.setEnabled(scale > cfg.min_scale)

        selected = self._engine.selection_state.selected_id
        if selected is None:
            self.label_selected.setText("")
            return
        entity = self._engine.entity(selected)
        self.label_selected.setText(f"{entity.name} · {format_year(entity.year)}")


__all__ = ["TimelineControls"]
