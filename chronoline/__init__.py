"""Top-level package exports.

Public API surface (keep minimal):
 - TimelineEngine, EngineConfig, TimelineEntity (engine core)
 - MainWindow, run (UI entry point)
"""

from .core.config import EngineConfig  # noqa: F401
from .core.engine import TimelineEngine  # noqa: F401
from .core.entities import TimelineEntity  # noqa: F401
from .ui.main_window import MainWindow, run  # noqa: F401

__all__ = ["EngineConfig", "MainWindow", "TimelineEngine", "TimelineEntity", "run"]
