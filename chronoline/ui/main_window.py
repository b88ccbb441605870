"""Main application window (UI layer).

Two layout variants, picked by `EngineConfig.layout`:

    three_pane
    +-----------+-------------------------------+--------------+
    | Tradition | Timeline                      | Detail panel |
    | list      | Controls                      |              |
    +-----------+-------------------------------+--------------+

    tiles
    +----------------------------------------------------------+
    | Tile grid (one button per tradition)                     |
    +----------------------------------------------------------+
    | Timeline                                                 |
    | Controls                                                 |
    +----------------------------------------------------------+
    | Detail panel                                             |
    +----------------------------------------------------------+

Both variants share one `TimelineEngine`; list rows and tiles call
`engine.select`, and engine selection is mirrored back into them.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Dict, Optional, Sequence

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QGuiApplication
from PySide6.QtWidgets import (
    QApplication,
    QGridLayout,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSplitter,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from ..core.config import EngineConfig
from ..core.engine import TimelineEngine
from ..core.entities import TimelineEntity
from ..data.catalogue import load_catalogue
from ..utils.yearfmt import format_year
from .components.controls import TimelineControls
from .components.detail_panel import DetailPanel
from .components.timeline_view import TimelineView

logger = logging.getLogger(__name__)

TILE_COLUMNS = 5


class MainWindow(QMainWindow):
    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        entities: Optional[Sequence[TimelineEntity]] = None,
    ):
        super().__init__()
        self.setWindowTitle("Chronoline")
        self.setGeometry(100, 100, 1100, 520)
        self.config = config or EngineConfig()
        self._listing = list(load_catalogue() if entities is None else entities)
        self.engine = TimelineEngine(self._listing, config=self.config, parent=self)
        self.entity_list: Optional[QListWidget] = None
        self.tiles: Dict[str, QPushButton] = {}
        self._syncing = False
        self._createMenuBar()
        self.setStatusBar(QStatusBar())
        if self.config.layout == "tiles":
            self._createTilesLayout()
        else:
            self._createThreePaneLayout()
        self.engine.selected.connect(self._onEngineSelected)
        self.engine.placementDegraded.connect(self._onPlacementDegraded)

    def centerOnPreferredScreen(self):
        """Center the window on the selected screen.

        Selection priority:
        1. Environment variable CHRONOLINE_SCREEN_INDEX if valid.
        2. Primary screen.
        """
        screens = QGuiApplication.screens()
        if not screens:
            return
        screen = None
        idx_env = os.getenv("CHRONOLINE_SCREEN_INDEX")
        if idx_env is not None:
            try:
                idx = int(idx_env)
            except ValueError:
                logger.warning("ignoring CHRONOLINE_SCREEN_INDEX=%r", idx_env)
            else:
                if 0 <= idx < len(screens):
                    screen = screens[idx]
        if screen is None:
            screen = QGuiApplication.primaryScreen() or screens[0]
        geo = screen.availableGeometry()
        win_geo = self.frameGeometry()
        win_geo.moveCenter(geo.center())
        self.move(win_geo.topLeft())

    def _createMenuBar(self):
        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("File")
        exit_action = QAction("Exit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)
        view_menu = menu_bar.addMenu("View")
        for text, slot in (
            ("Zoom In", self.engine.zoom_in),
            ("Zoom Out", self.engine.zoom_out),
            ("Reset View", self.engine.reset),
        ):
            action = QAction(text, self)
            action.triggered.connect(slot)
            view_menu.addAction(action)
        about_menu = menu_bar.addMenu("About")
        about_action = QAction("About Chronoline", self)
        about_action.triggered.connect(self._showAboutDialog)
        about_menu.addAction(about_action)

    def _showAboutDialog(self):
        QMessageBox.about(
            self,
            "About Chronoline",
            "Chronoline\nPhilosophical and religious traditions on a historical timeline.",
        )

    def _createTimelineColumn(self) -> QWidget:
        column = QWidget()
        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        self.timeline_view = TimelineView(self.engine)
        self.controls = TimelineControls(self.engine)
        layout.addWidget(self.timeline_view, stretch=1)
        layout.addWidget(self.controls)
        column.setLayout(layout)
        return column

    def _createThreePaneLayout(self):
        splitter = QSplitter()
        splitter.setOrientation(Qt.Orientation.Horizontal)

        self.entity_list = QListWidget()
        self.entity_list.setSelectionMode(QListWidget.SelectionMode.SingleSelection)
        for entity in self._listing:
            item = QListWidgetItem(f"{entity.name} ({format_year(entity.year)})")
            item.setData(Qt.ItemDataRole.UserRole, entity.id)
            self.entity_list.addItem(item)
        # focus alone sets a current item without selecting it
        self.entity_list.itemSelectionChanged.connect(self._onListSelectionChanged)
        splitter.addWidget(self.entity_list)

        splitter.addWidget(self._createTimelineColumn())
        self.detail_panel = DetailPanel(self.engine)
        splitter.addWidget(self.detail_panel)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 4)
        splitter.setStretchFactor(2, 1)
        self.setCentralWidget(splitter)

    def _createTilesLayout(self):
        central = QWidget()
        layout = QVBoxLayout()
        grid_host = QWidget()
        grid = QGridLayout()
        grid.setContentsMargins(0, 0, 0, 0)
        for i, entity in enumerate(self._listing):
            tile = QPushButton(f"{entity.name}\n{format_year(entity.year)}")
            tile.setCheckable(True)
            tile.clicked.connect(lambda _checked=False, eid=entity.id: self.engine.select(eid))
            grid.addWidget(tile, i // TILE_COLUMNS, i % TILE_COLUMNS)
            self.tiles[entity.id] = tile
        grid_host.setLayout(grid)
        layout.addWidget(grid_host)
        layout.addWidget(self._createTimelineColumn(), stretch=1)
        self.detail_panel = DetailPanel(self.engine)
        layout.addWidget(self.detail_panel)
        central.setLayout(layout)
        self.setCentralWidget(central)

    # --- Slots ---
    def _onListSelectionChanged(self):
        if self._syncing:
            return
        items = self.entity_list.selectedItems()
        if not items:
            return
        self.engine.select(items[0].data(Qt.ItemDataRole.UserRole))

    def _onEngineSelected(self, entity_id: Optional[str]):
        self._syncing = True
        try:
            if self.entity_list is not None:
                row = -1
                for i in range(self.entity_list.count()):
                    if self.entity_list.item(i).data(Qt.ItemDataRole.UserRole) == entity_id:
                        row = i
                        break
                self.entity_list.setCurrentRow(row)
                if row < 0:
                    self.entity_list.clearSelection()
            for eid, tile in self.tiles.items():
                tile.setChecked(eid == entity_id)
        finally:
            self._syncing = False
        if entity_id is None:
            self.statusBar().showMessage("")
        else:
            entity = self.engine.entity(entity_id)
            self.statusBar().showMessage(f"{entity.name}: {format_year(entity.year)}")

    def _onPlacementDegraded(self, degeneracy):
        self.statusBar().showMessage(f"Some markers overlap: {degeneracy.details}")


def _configureLogging():
    name = os.getenv("CHRONOLINE_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def run():  # convenience launcher
    _configureLogging()
    app = QApplication(sys.argv)
    window = MainWindow(EngineConfig.from_env())
    window.show()
    window.centerOnPreferredScreen()
    sys.exit(app.exec())


__all__ = ["MainWindow", "run"]
