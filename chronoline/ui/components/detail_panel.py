"""Detail panel for the selected tradition.

Shows name, first year, family and a short note on the family. Empty (with a
prompt) while nothing is selected.
"""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from ...core.engine import TimelineEngine
from ...data.catalogue import family_note
from ...utils.palette import resolve_style
from ...utils.yearfmt import format_year

PROMPT = "Select a tradition on the timeline"


class DetailPanel(QWidget):
    def __init__(self, engine: TimelineEngine, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._engine = engine
        layout = QVBoxLayout()
        layout.setContentsMargins(8, 8, 8, 8)
        self.label_name = QLabel(PROMPT)
        self.label_name.setStyleSheet("font-size:15px;font-weight:600;")
        self.label_year = QLabel("")
        self.label_family = QLabel("")
        self.label_note = QLabel("")
        self.label_note.setWordWrap(True)
        self.label_note.setStyleSheet("color:#666;font-size:11px;")
        for lbl in (self.label_name, self.label_year, self.label_family, self.label_note):
            lbl.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
            layout.addWidget(lbl)
        layout.addStretch(1)
        self.setLayout(layout)
        engine.selected.connect(self.showEntity)

    def showEntity(self, entity_id: Optional[str]):
        if entity_id is None:
            self.label_name.setText(PROMPT)
            self.label_name.setStyleSheet("font-size:15px;font-weight:600;")
            for lbl in (self.label_year, self.label_family, self.label_note):
                lbl.setText("")
            return
        entity = self._engine.entity(entity_id)
        r, g, b = resolve_style(entity.id, entity.category).accent
        self.label_name.setText(entity.name)
        self.label_name.setStyleSheet(
            f"font-size:15px;font-weight:600;color:rgb({r},{g},{b});"
        )
        self.label_year.setText(f"First appears: {format_year(entity.year)}")
        self.label_family.setText(entity.category)
        self.label_note.setText(family_note(entity.category))


__all__ = ["DetailPanel"]
