"""Viewport controller: zoom scale, pan offset and the overview/detailed modes.

Design:
ViewportController owns the single `ViewportState` of a timeline view and is
its only writer. Every mutation goes through `_apply`, which clamps scale to
``[min_scale, max_scale]`` and pan to ``[0, width * scale - width]`` before
publishing the new state through ``stateChanged``.

Content model: at scale 1 the content is exactly one viewport wide, with the
year axis spanning ``[padding, width - padding]``. At scale ``s`` the whole
content is stretched by ``s``, so a year's content x is ``s * base_x`` and its
screen x is that minus the pan offset.

Modes:
    overview  scale fixed at 1, pan fixed at 0, pan gestures ignored
    detailed  scale in [min_scale, max_scale], pan enabled

Signals:
    stateChanged(ViewportState)
    transitionStarted(float)   # target pan offset of an eased re-centre
    transitionFinished()

Pan and zoom are synchronous. The only asynchronous piece is the eased
re-centring transition started by `center_on`: one `QVariantAnimation`, owned
for the controller's lifetime and restarted per centring, that any later
state change stops. There is never more than one in flight
and nothing is queued.

A viewport with ``width <= 0`` (transient layouts during resize) is inert:
pan and zoom requests return False and leave the state alone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from PySide6.QtCore import QObject, QEasingCurve, QVariantAnimation, Signal

from .axis import x_to_year, year_to_x
from .config import EngineConfig

logger = logging.getLogger(__name__)

OVERVIEW = "overview"
DETAILED = "detailed"


@dataclass(frozen=True)
class ViewportState:
    scale: float = 1.0
    pan_offset: float = 0.0
    mode: str = OVERVIEW


class ViewportController(QObject):
    stateChanged = Signal(object)
    transitionStarted = Signal(float)
    transitionFinished = Signal()

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        viewport_width: float = 0.0,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._config = config or EngineConfig()
        self._width = float(viewport_width)
        self._state = ViewportState()
        # one animation for the controller's lifetime; restarted, never recreated
        self._animation = QVariantAnimation(self)
        self._animation.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._animation.valueChanged.connect(self._onTransitionValue)
        self._animation.finished.connect(self._onTransitionFinished)
        self._animation_target: Optional[float] = None  # None while idle

    # --- Read API ---
    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def state(self) -> ViewportState:
        return self._state

    @property
    def scale(self) -> float:
        return self._state.scale

    @property
    def pan_offset(self) -> float:
        return self._state.pan_offset

    @property
    def mode(self) -> str:
        return self._state.mode

    @property
    def viewport_width(self) -> float:
        return self._width

    @property
    def is_active(self) -> bool:
        return self._width > 0

    @property
    def content_width(self) -> float:
        return max(0.0, self._width) * self._state.scale

    @property
    def transition_active(self) -> bool:
        return self._animation_target is not None

    def max_pan(self, scale: Optional[float] = None) -> float:
        s = self._state.scale if scale is None else scale
        return max(0.0, self._width * s - self._width)

    def content_x(self, year: float, scale: Optional[float] = None) -> float:
        s = self._state.scale if scale is None else scale
        lo, hi = self._config.domain
        pad = self._config.padding
        return year_to_x(year, lo, hi, pad * s, (self._width - pad) * s)

    def screen_x(self, year: float) -> float:
        return self.content_x(year) - self._state.pan_offset

    def year_at(self, screen_x: float) -> float:
        s = self._state.scale
        lo, hi = self._config.domain
        pad = self._config.padding
        return x_to_year(
            screen_x + self._state.pan_offset, lo, hi, pad * s, (self._width - pad) * s
        )

    # --- Clamping ---
    def clamp_scale(self, scale: float) -> float:
        return min(max(scale, self._config.min_scale), self._config.max_scale)

    def clamp_pan(self, pan: float, scale: Optional[float] = None) -> float:
        return min(max(pan, 0.0), self.max_pan(scale))

    # --- Transitions between modes ---
    def enter_detailed(self, focus_year: float) -> bool:
        """Switch to detailed mode with ``focus_year`` horizontally centred."""
        if not self.is_active:
            return False
        if self._state.mode == DETAILED:
            scale = self._state.scale
        else:
            scale = self._config.detail_scale
        pan = self.content_x(focus_year, scale) - self._width / 2.0
        logger.debug("enter detailed at year %s (scale=%s)", focus_year, scale)
        return self._apply(scale=scale, pan=pan, mode=DETAILED)

    def enter_overview(self) -> bool:
        """Return to the fit-to-width overview."""
        return self._apply(scale=1.0, pan=0.0, mode=OVERVIEW)

    def reset(self) -> bool:
        return self.enter_overview()

    # --- Zoom & pan ---
    def zoom_by(self, factor: float, anchor: Optional[float] = None) -> bool:
        """Multiply the scale by ``factor`` keeping the point under ``anchor`` fixed.

        ``anchor`` is a screen x; it defaults to the viewport centre. Zooming
        from overview switches to detailed mode first.
        """
        if not self.is_active or factor <= 0:
            return False
        if self._state.mode == OVERVIEW:
            old_scale, old_pan = 1.0, 0.0
        else:
            old_scale, old_pan = self._state.scale, self._state.pan_offset
        new_scale = self.clamp_scale(old_scale * factor)
        a = self._width / 2.0 if anchor is None else float(anchor)
        pan = (old_pan + a) / old_scale * new_scale - a
        return self._apply(scale=new_scale, pan=pan, mode=DETAILED)

    def zoom_in(self, anchor: Optional[float] = None) -> bool:
        return self.zoom_by(self._config.zoom_in_factor, anchor)

    def zoom_out(self, anchor: Optional[float] = None) -> bool:
        return self.zoom_by(self._config.zoom_out_factor, anchor)

    def pan_by(self, delta: float) -> bool:
        if not self.is_active or self._state.mode != DETAILED:
            return False
        return self._apply(pan=self._state.pan_offset + delta)

    # --- Gestures ---
    def wheel(self, delta_y: float, modifier: bool = False, anchor: Optional[float] = None) -> bool:
        """Map a vertical wheel delta to a pan, or to a zoom step.

        With ``wheel_zoom_modifier`` set, the wheel pans and only zooms while a
        modifier key is held; otherwise the wheel always zooms.
        """
        if delta_y == 0:
            return False
        if modifier or not self._config.wheel_zoom_modifier:
            if delta_y > 0:
                return self.zoom_in(anchor)
            return self.zoom_out(anchor)
        # wheel down (negative delta) moves forward in time
        return self.pan_by(-delta_y)

    def drag(self, dx: float) -> bool:
        """Pointer drag by ``dx`` screen pixels; only pans while zoomed in."""
        if self._state.scale <= 1.0:
            return False
        return self.pan_by(-dx)

    # --- Geometry ---
    def resize(self, width: float) -> bool:
        """Adopt a new viewport width and re-clamp pan. Idempotent."""
        width = float(width)
        if width == self._width:
            return False
        self._width = width
        if not self.is_active:
            self._cancel_transition()
        else:
            self._apply(pan=self._state.pan_offset)
        return True

    # --- Eased centring ---
    def center_on(self, year: float, animate: bool = True) -> bool:
        """Bring ``year`` to the horizontal centre of the viewport.

        In overview this is `enter_detailed`. In detailed mode the pan eases
        towards the target unless ``animate`` is False or transitions are
        disabled. Returns False when nothing had to move: the target is
        already reached, or already being animated to, within
        ``center_epsilon``.
        """
        if not self.is_active:
            return False
        if self._state.mode == OVERVIEW:
            return self.enter_detailed(year)
        target = self.clamp_pan(self.content_x(year) - self._width / 2.0)
        eps = self._config.center_epsilon
        if self._animation_target is not None:
            if abs(self._animation_target - target) <= eps:
                return False
        elif abs(self._state.pan_offset - target) <= eps:
            return False
        self._cancel_transition()
        if not animate or self._config.transition_ms <= 0:
            return self._apply(pan=target)
        self._start_transition(target)
        return True

    def settle(self) -> None:
        """Finish an in-flight transition immediately at its target."""
        target = self._animation_target
        if target is None:
            return
        self._animation_target = None
        self._animation.stop()
        self._apply(pan=target, cancel=False)
        self.transitionFinished.emit()

    # --- Internals ---
    def _start_transition(self, target: float) -> None:
        anim = self._animation
        anim.stop()
        anim.setDuration(self._config.transition_ms)
        anim.setStartValue(float(self._state.pan_offset))
        anim.setEndValue(float(target))
        self._animation_target = target
        logger.debug("transition %.1f -> %.1f", self._state.pan_offset, target)
        self.transitionStarted.emit(target)
        anim.start()

    def _onTransitionValue(self, value) -> None:
        if self._animation_target is None:
            return  # stopped or settled
        self._apply(pan=float(value), cancel=False)

    def _onTransitionFinished(self) -> None:
        target = self._animation_target
        if target is None:
            return
        self._animation_target = None
        self._apply(pan=target, cancel=False)
        self.transitionFinished.emit()

    def _cancel_transition(self) -> None:
        if self._animation_target is None:
            return
        self._animation_target = None
        self._animation.stop()
        logger.debug("transition cancelled")

    def _apply(
        self,
        scale: Optional[float] = None,
        pan: Optional[float] = None,
        mode: Optional[str] = None,
        cancel: bool = True,
    ) -> bool:
        if cancel:
            self._cancel_transition()
        mode = self._state.mode if mode is None else mode
        if mode == OVERVIEW:
            scale, pan = 1.0, 0.0
        else:
            scale = self.clamp_scale(self._state.scale if scale is None else scale)
            pan = self.clamp_pan(self._state.pan_offset if pan is None else pan, scale)
        new_state = replace(self._state, scale=scale, pan_offset=pan, mode=mode)
        if new_state == self._state:
            return False
        self._state = new_state
        self.stateChanged.emit(new_state)
        return True


__all__ = ["DETAILED", "OVERVIEW", "ViewportController", "ViewportState"]
