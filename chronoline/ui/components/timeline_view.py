"""Timeline canvas widget.

Renders the engine's output and feeds pointer gestures back into it. The widget
holds no timeline state of its own; everything it draws comes from
`TimelineEngine.markers()`, `TimelineEngine.axis()` and the selection state.

Gestures:
    click            select the marker under the pointer, else focus that year
    drag             pan (only while zoomed in)
    wheel            pan; with Ctrl held, zoom around the pointer
    Left / Right     previous / next entity
    Escape           clear selection and return to overview
"""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QPointF, QRectF, QSize, Qt
from PySide6.QtGui import QColor, QFont, QPainter, QPen
from PySide6.QtWidgets import QWidget

from ...core.engine import TimelineEngine
from ...utils.palette import resolve_style

logger = logging.getLogger(__name__)

HINT_TEXT = "Use mouse wheel to pan, Ctrl+wheel to zoom"
CLICK_SLOP = 3  # px of travel before a press becomes a drag
WHEEL_STEP = 4  # angleDelta units per pixel of pan (one notch = 30 px)


class TimelineView(QWidget):
    """Paints period bands, the year axis and entity markers."""

    def __init__(self, engine: TimelineEngine, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._engine = engine
        self._press_pos: Optional[QPointF] = None
        self._last_drag_x = 0.0
        self._dragging = False
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMinimumHeight(120)
        engine.changed.connect(self.update)

    @property
    def engine(self) -> TimelineEngine:
        return self._engine

    def sizeHint(self):  # type: ignore[override]
        return QSize(800, 140)

    # --- Painting ---
    def paintEvent(self, event):  # type: ignore[override]
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        p.fillRect(self.rect(), QColor(250, 250, 252))
        if self._engine.viewport_width <= 0:
            p.end()
            return
        h = self.height()
        base_y = self._engine.base_y
        axis = self._engine.axis()

        small = QFont(self.font())
        small.setPointSizeF(max(6.0, small.pointSizeF() * 0.8))
        p.setFont(small)

        for band, x0, x1 in axis.period_bands():
            r, g, b, a = band.rgba
            p.fillRect(QRectF(x0, 0, x1 - x0, h), QColor(r, g, b, int(a * 255)))
            p.setPen(QColor(120, 120, 130))
            p.drawText(QRectF(x0 + 4, 2, max(0.0, x1 - x0 - 8), 14), Qt.AlignmentFlag.AlignLeft, band.name)

        p.setPen(QPen(QColor(160, 160, 170), 1))
        p.drawLine(QPointF(axis.pixel_min, base_y), QPointF(axis.pixel_max, base_y))
        for x, label in axis.ticks():
            p.drawLine(QPointF(x, base_y - 4), QPointF(x, base_y + 4))
            p.drawText(QRectF(x - 40, h - 30, 80, 14), Qt.AlignmentFlag.AlignHCenter, label)

        sel = self._engine.selection_state
        for m in self._engine.markers():
            entity = self._engine.entity(m.entity_id)
            style = resolve_style(entity.id, entity.category)
            if m.entity_id == sel.selected_id:
                radius = 8
                p.setPen(QPen(QColor(*style.accent), 2))
            elif m.entity_id == sel.hovered_id:
                radius = 7
                p.setPen(QPen(QColor(*style.accent), 1))
            else:
                radius = 6
                p.setPen(QPen(QColor(255, 255, 255), 1))
            p.setBrush(QColor(*style.primary))
            p.drawEllipse(QPointF(m.x, m.y), radius, radius)
            if m.entity_id in (sel.selected_id, sel.hovered_id):
                p.setPen(QColor(40, 40, 50))
                p.drawText(
                    QRectF(m.x - 80, m.y - radius - 16, 160, 14),
                    Qt.AlignmentFlag.AlignHCenter,
                    entity.name,
                )

        p.setPen(QColor(140, 140, 150))
        p.drawText(QRectF(6, h - 16, self.width() - 12, 14), Qt.AlignmentFlag.AlignLeft, HINT_TEXT)
        p.end()

    # --- Geometry ---
    def resizeEvent(self, event):  # type: ignore[override]
        super().resizeEvent(event)
        self._engine.resize(self.width(), self.height())

    def showEvent(self, event):  # type: ignore[override]
        super().showEvent(event)
        self._engine.resize(self.width(), self.height())

    # --- Pointer ---
    def mousePressEvent(self, event):  # type: ignore[override]
        if event.button() == Qt.MouseButton.LeftButton:
            self._press_pos = event.position()
            self._last_drag_x = event.position().x()
            self._dragging = False
            self.setFocus()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):  # type: ignore[override]
        pos = event.position()
        if self._press_pos is not None and event.buttons() & Qt.MouseButton.LeftButton:
            if not self._dragging and abs(pos.x() - self._press_pos.x()) > CLICK_SLOP:
                self._dragging = True
            if self._dragging:
                self._engine.drag(pos.x() - self._last_drag_x)
                self._last_drag_x = pos.x()
        else:
            self._engine.pointer_moved(pos.x(), pos.y())
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):  # type: ignore[override]
        if event.button() == Qt.MouseButton.LeftButton and self._press_pos is not None:
            if not self._dragging:
                pos = event.position()
                self._engine.pointer_clicked(pos.x(), pos.y())
            self._press_pos = None
            self._dragging = False
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event):  # type: ignore[override]
        self._engine.pointer_left()
        super().leaveEvent(event)

    def wheelEvent(self, event):  # type: ignore[override]
        delta = event.angleDelta().y() / WHEEL_STEP
        modifier = bool(event.modifiers() & Qt.KeyboardModifier.ControlModifier)
        if self._engine.wheel(delta, modifier, event.position().x()):
            event.accept()
        else:
            event.ignore()

    def keyPressEvent(self, event):  # type: ignore[override]
        key = event.key()
        if key == Qt.Key.Key_Left:
            self._engine.select_previous()
        elif key == Qt.Key.Key_Right:
            self._engine.select_next()
        elif key == Qt.Key.Key_Escape:
            self._engine.clear()
        else:
            super().keyPressEvent(event)


__all__ = ["TimelineView", "HINT_TEXT"]
