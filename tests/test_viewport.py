import gc
import random

import pytest
from PySide6.QtCore import QEventLoop, QTimer
from PySide6.QtWidgets import QApplication

from chronoline.core.config import EngineConfig
from chronoline.core.errors import ConfigError
from chronoline.core.viewport import DETAILED, OVERVIEW, ViewportController

_app = None


def _ensure_app():
    global _app
    if _app is None:
        _app = QApplication.instance() or QApplication([])


def _vp(width=800, **overrides):
    _ensure_app()
    return ViewportController(EngineConfig(**overrides), width)


def test_starts_in_overview():
    vp = _vp()
    assert vp.state.scale == 1.0
    assert vp.state.pan_offset == 0.0
    assert vp.mode == OVERVIEW


def test_repeated_zoom_clamps_at_max_scale():
    vp = _vp()
    for _ in range(5):
        vp.zoom_by(1.3)
    assert vp.scale == 3.0
    assert vp.mode == DETAILED
    assert 0.0 <= vp.pan_offset <= vp.max_pan()


def test_zoom_keeps_anchor_point_fixed():
    vp = _vp()
    vp.zoom_by(2.0)  # around the centre
    year = vp.year_at(300)
    vp.zoom_by(1.3, anchor=300)
    assert vp.year_at(300) == pytest.approx(year)


def test_pan_and_scale_stay_clamped_under_random_gestures():
    vp = _vp()
    rng = random.Random(1234)
    for _ in range(500):
        op = rng.choice(["zoom", "pan", "wheel", "drag", "overview", "detail"])
        if op == "zoom":
            vp.zoom_by(rng.uniform(0.2, 3.0), anchor=rng.uniform(-100, 900))
        elif op == "pan":
            vp.pan_by(rng.uniform(-3000, 3000))
        elif op == "wheel":
            vp.wheel(rng.uniform(-240, 240), modifier=rng.random() < 0.3)
        elif op == "drag":
            vp.drag(rng.uniform(-500, 500))
        elif op == "overview":
            vp.enter_overview()
        else:
            vp.enter_detailed(rng.uniform(-12000, 2024))
        assert 0.5 <= vp.scale <= 3.0
        assert 0.0 <= vp.pan_offset <= max(0.0, 800 * vp.scale - 800)
        if vp.mode == OVERVIEW:
            assert vp.scale == 1.0 and vp.pan_offset == 0.0


def test_pan_is_ignored_in_overview():
    vp = _vp()
    assert vp.pan_by(100) is False
    assert vp.wheel(-120) is False
    assert vp.pan_offset == 0.0


def test_drag_only_pans_when_zoomed_in():
    vp = _vp()
    vp.zoom_by(0.7)  # detailed, but below 1x
    assert vp.drag(-50) is False
    vp.zoom_by(3.0)
    before = vp.pan_offset
    assert vp.drag(-50) is True
    assert vp.pan_offset == pytest.approx(before + 50)


def test_ctrl_wheel_zooms():
    vp = _vp()
    vp.wheel(120, modifier=True)
    assert vp.scale == pytest.approx(1.3)
    vp.wheel(-120, modifier=True)
    assert vp.scale == pytest.approx(0.91)


def test_wheel_always_zooms_without_modifier_setting():
    vp = _vp(wheel_zoom_modifier=False)
    vp.wheel(120)
    assert vp.scale == pytest.approx(1.3)


def test_zero_width_is_inert():
    vp = _vp(width=0)
    assert vp.zoom_by(2.0) is False
    assert vp.enter_detailed(0) is False
    assert vp.center_on(0) is False
    assert vp.state.scale == 1.0
    vp.resize(-10)
    assert vp.pan_by(10) is False


def test_resize_is_idempotent_and_reclamps():
    vp = _vp()
    vp.zoom_by(3.0)
    vp.pan_by(10_000)
    assert vp.pan_offset == pytest.approx(1600)
    assert vp.resize(400) is True
    assert vp.pan_offset == pytest.approx(800)
    assert vp.resize(400) is False


def test_min_scale_above_max_scale_is_rejected():
    with pytest.raises(ConfigError):
        EngineConfig(min_scale=4.0, max_scale=3.0)


def test_enter_detailed_centres_year():
    vp = _vp()
    vp.enter_detailed(-1300)
    assert vp.mode == DETAILED
    assert vp.scale == 2.0
    assert vp.screen_x(-1300) == pytest.approx(400, abs=1)


def test_center_on_settles_within_a_pixel():
    vp = _vp()
    vp.zoom_by(3.0)
    assert vp.center_on(-480) is True
    assert vp.transition_active
    vp.settle()
    assert not vp.transition_active
    assert vp.screen_x(-480) == pytest.approx(400, abs=1)


def test_center_on_runs_the_eased_transition():
    vp = _vp(transition_ms=40)
    vp.zoom_by(3.0)
    finished = []
    vp.transitionFinished.connect(lambda: finished.append(True))
    vp.center_on(-480)
    loop = QEventLoop()
    QTimer.singleShot(300, loop.quit)
    loop.exec()
    assert finished == [True]
    assert vp.screen_x(-480) == pytest.approx(400, abs=1)


def test_center_on_does_not_restart_for_same_target():
    vp = _vp()
    vp.zoom_by(3.0)
    started = []
    vp.transitionStarted.connect(started.append)
    vp.center_on(-480)
    assert vp.center_on(-480) is False  # already animating there
    vp.settle()
    assert vp.center_on(-480) is False  # already there
    assert len(started) == 1


def test_new_state_change_cancels_transition():
    vp = _vp()
    vp.zoom_by(3.0)
    vp.center_on(-480)
    assert vp.transition_active
    vp.pan_by(5)
    assert not vp.transition_active


def test_reset_returns_to_overview():
    vp = _vp()
    vp.enter_detailed(1000)
    vp.reset()
    assert vp.state.mode == OVERVIEW
    assert vp.state.scale == 1.0 and vp.state.pan_offset == 0.0


def test_transition_survives_controller_teardown():
    vp = _vp(transition_ms=40)
    vp.zoom_by(3.0)
    vp.center_on(-480)
    vp.settle()
    vp.center_on(-1300)  # left running
    del vp
    gc.collect()
    loop = QEventLoop()
    QTimer.singleShot(100, loop.quit)
    loop.exec()


def test_one_animation_is_reused_across_centrings():
    vp = _vp()
    vp.zoom_by(3.0)
    anim = vp._animation
    vp.center_on(-480)
    vp.settle()
    vp.center_on(610)
    assert vp._animation is anim
    assert vp.transition_active
    vp.pan_by(-5)
    assert not vp.transition_active
    assert vp._animation is anim


def test_stopped_transition_leaves_pan_alone():
    vp = _vp(transition_ms=40)
    vp.zoom_by(3.0)
    finished = []
    vp.transitionFinished.connect(lambda: finished.append(True))
    vp.center_on(-480)
    vp.pan_by(5)
    pan = vp.pan_offset
    loop = QEventLoop()
    QTimer.singleShot(150, loop.quit)
    loop.exec()
    assert vp.pan_offset == pan
    assert finished == []
