import random

import pytest
from PySide6.QtWidgets import QApplication

from chronoline.core.config import EngineConfig
from chronoline.core.engine import TimelineEngine
from chronoline.core.entities import TimelineEntity
from chronoline.core.errors import ConfigError
from chronoline.core.placement import pairwise_violations
from chronoline.core.selection import SelectionState
from chronoline.core.viewport import DETAILED, OVERVIEW
from chronoline.data.catalogue import load_catalogue

_app = None


def _ensure_app():
    global _app
    if _app is None:
        _app = QApplication.instance() or QApplication([])


SCENARIO = [
    TimelineEntity("indigenous", "Indigenous Wisdom", "Traditional", -10000),
    TimelineEntity("buddhism", "Buddhism", "Eastern", -480),
    TimelineEntity("christianity", "Christianity", "Abrahamic", 30),
    TimelineEntity("islam", "Islam", "Abrahamic", 610),
    TimelineEntity("existentialism", "Existentialism", "Modern", 1940),
]


def _engine(entities=SCENARIO, **kwargs):
    _ensure_app()
    return TimelineEngine(entities, 800, 120, **kwargs)


def test_markers_for_scenario():
    engine = _engine()
    markers = engine.markers()
    assert [m.entity_id for m in markers] == [e.id for e in SCENARIO]
    assert [m.row for m in markers] == [0, 0, 1, 0, 0]
    assert markers[0].y == 60
    assert engine.placement_report.ok
    assert pairwise_violations(markers, 25) == []


def test_markers_are_identical_for_identical_inputs():
    a = _engine().markers()
    b = _engine(list(reversed(SCENARIO))).markers()
    assert a == b


def test_resize_is_idempotent():
    engine = _engine()
    changes = []
    engine.changed.connect(lambda: changes.append(1))
    before = engine.markers()
    assert engine.resize(800, 120) is False
    assert changes == []
    assert engine.markers() == before
    assert engine.resize(1000, 120) is True
    assert engine.markers() != before


def test_pan_translates_without_relayout():
    engine = _engine()
    engine.zoom_by(3.0)
    content = engine.content_markers()
    engine.pan_by(-100)
    pan = engine.viewport_state.pan_offset
    assert [m.x for m in engine.markers()] == pytest.approx([m.x - pan for m in content])
    assert [m.row for m in engine.markers()] == [m.row for m in content]


def test_hit_test_finds_marker_within_radius():
    engine = _engine()
    m = engine.marker("islam")
    assert engine.hit_test(m.x + 3, m.y - 3) == "islam"
    assert engine.hit_test(m.x, m.y + 30) is None


def test_pointer_click_selects_and_centres():
    selected = []
    engine = _engine(on_select=selected.append)
    m = engine.marker("buddhism")
    assert engine.pointer_clicked(m.x, m.y) == "buddhism"
    assert selected == ["buddhism"]
    assert engine.selection_state.selected_id == "buddhism"
    assert engine.selection_state.focus_year == -480
    assert engine.viewport_state.mode == DETAILED
    # near the right edge, so pan clamping keeps it on screen but off centre
    assert 400 <= engine.screen_x(-480) < 800


def test_pointer_click_on_empty_space_sets_focus_year():
    engine = _engine()
    expected = round(engine.year_at(100))
    assert engine.pointer_clicked(100, 110) is None
    assert engine.selection_state.selected_id is None
    assert engine.selection_state.focus_year == expected
    assert engine.viewport_state.mode == DETAILED


def test_hover_callbacks():
    hovered = []
    engine = _engine(on_hover=hovered.append)
    m = engine.marker("islam")
    engine.pointer_moved(m.x, m.y)
    engine.pointer_moved(m.x + 1, m.y)
    engine.pointer_left()
    assert hovered == ["islam", None]
    assert engine.selection_state.hovered_id is None


def test_selection_recentres_when_already_detailed():
    engine = _engine()
    engine.zoom_by(3.0)
    engine.select("buddhism")
    assert engine.viewport.transition_active
    engine.settle()
    assert engine.screen_x(-480) == pytest.approx(400, abs=1)


def test_clear_and_reset_return_to_overview():
    engine = _engine()
    engine.select("islam")
    engine.clear()
    assert engine.viewport_state.mode == OVERVIEW
    assert engine.selection_state.selected_id is None
    engine.zoom_in()
    engine.reset()
    assert engine.viewport_state.mode == OVERVIEW
    assert engine.viewport_state.scale == 1.0


def test_zero_width_engine_has_no_markers():
    _ensure_app()
    engine = TimelineEngine(SCENARIO)
    assert engine.markers() == []
    assert engine.zoom_in() is False
    engine.resize(800, 120)
    assert len(engine.markers()) == 5


def test_degenerate_layout_is_signalled():
    crowded = [TimelineEntity(f"e{i}", f"E{i}", "Modern", 1900) for i in range(6)]
    cfg = EngineConfig(row_offsets=(0,), max_attempts=1)
    _ensure_app()
    engine = TimelineEngine(crowded, config=cfg)
    seen = []
    engine.placementDegraded.connect(seen.append)
    engine.resize(800, 120)
    report = engine.placement_report
    assert not report.ok
    assert len(seen) == 1
    assert seen[0].entity_ids == ("e1", "e2", "e3", "e4", "e5")


def test_duplicate_ids_are_rejected():
    with pytest.raises(ConfigError):
        _engine(SCENARIO + [SCENARIO[0]])


def test_catalogue_lays_out_cleanly_at_default_settings():
    engine = _engine(load_catalogue())
    assert len(engine.markers()) == 15
    for m in engine.markers():
        assert m.entity_id in {e.id for e in load_catalogue()}
    assert engine.placement_report.ok
    assert pairwise_violations(engine.markers(), 25) == []


def test_layout_follows_width_when_content_width_repeats():
    _ensure_app()
    engine = TimelineEngine(SCENARIO, 1200, 120)
    engine.markers()  # cache 1200 px at scale 1
    engine.resize(600, 120)
    engine.enter_detailed(0)  # 600 px at scale 2: same content width
    assert engine.content_markers()[0].x == pytest.approx(engine.viewport.content_x(-10000))
    fresh = TimelineEngine(SCENARIO, 600, 120)
    fresh.enter_detailed(0)
    assert engine.content_markers() == fresh.content_markers()
    assert engine.markers() == fresh.markers()


def test_markers_after_resize_history_match_a_fresh_engine():
    engine = _engine()
    rng = random.Random(99)
    for _ in range(200):
        op = rng.choice(["resize", "zoom", "pan", "overview", "detail"])
        if op == "resize":
            engine.resize(rng.choice([400, 600, 800, 1000, 1200]), rng.choice([80, 120, 200]))
        elif op == "zoom":
            engine.zoom_by(rng.choice([0.5, 0.7, 1.3, 1.5, 2.0, 3.0]))
        elif op == "pan":
            engine.pan_by(rng.uniform(-800, 800))
        elif op == "overview":
            engine.enter_overview()
        else:
            engine.enter_detailed(rng.choice([e.year for e in SCENARIO]))
        engine.markers()

        state = engine.viewport_state
        fresh = TimelineEngine(SCENARIO, engine.viewport_width, engine.viewport_height)
        if state.mode == DETAILED:
            fresh.zoom_by(state.scale)
            fresh.pan_by(state.pan_offset - fresh.viewport_state.pan_offset)
        assert fresh.viewport_state.scale == state.scale
        assert fresh.content_markers() == engine.content_markers()
        assert [m.x for m in engine.markers()] == pytest.approx(
            [m.x for m in fresh.markers()], abs=1e-6
        )
        assert [m.y for m in engine.markers()] == [m.y for m in fresh.markers()]


def test_zoomed_selection_survives_width_change():
    engine = _engine()
    engine.zoom_by(3.0)
    engine.select("buddhism")
    engine.settle()
    engine.resize(1000, 120)
    assert engine.selection_state.selected_id == "buddhism"
    m = engine.marker("buddhism")
    assert engine.hit_test(m.x, m.y) == "buddhism"
    fresh = TimelineEngine(SCENARIO, 1000, 120)
    fresh.zoom_by(3.0)
    assert engine.content_markers() == fresh.content_markers()
    content = {c.entity_id: c for c in engine.content_markers()}
    assert m.x == pytest.approx(content["buddhism"].x - engine.viewport_state.pan_offset)


def test_replacing_entities_announces_dropped_selection():
    seen = []
    engine = _engine(on_select=seen.append)
    engine.select("indigenous")
    engine.set_entities(SCENARIO[1:])
    assert seen == ["indigenous", None]
    assert engine.selection_state == SelectionState()
    assert len(engine.markers()) == 4
