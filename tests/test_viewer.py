"""Tests for the pygame glue that needs no display."""

import pygame
import pytest

from animation import AnimationConfig, Bounce, Transform
from curve_editor import CurveEditorSurface
from curve_model import CurveModel, preset_by_name
from viewer import (
    CurveEditorView,
    ParamSlider,
    build_parser,
    config_from_args,
    dispatch_pointer_event,
    project_cube,
)


@pytest.fixture
def editor():
    surface = CurveEditorSurface(CurveModel(), 100, 100)
    return surface, pygame.Rect(500, 200, 100, 100)


def mouse(kind, pos, button=1):
    if kind == pygame.MOUSEMOTION:
        return pygame.event.Event(kind, pos=pos, rel=(0, 0), buttons=(1, 0, 0))
    return pygame.event.Event(kind, pos=pos, button=button)


class TestDispatchPointerEvent:
    def test_drag_through_pygame_events(self, editor):
        surface, rect = editor
        # default p1 (0.25, 0.1) sits at (25, 90) inside the viewport
        assert dispatch_pointer_event(surface, rect, mouse(pygame.MOUSEBUTTONDOWN, (525, 290)))
        assert dispatch_pointer_event(surface, rect, mouse(pygame.MOUSEMOTION, (530, 230)))
        assert surface.model.get().p1 == pytest.approx((0.3, 0.7))
        assert dispatch_pointer_event(surface, rect, mouse(pygame.MOUSEBUTTONUP, (530, 230)))
        assert surface.dragging is None

    def test_click_outside_viewport_is_not_consumed(self, editor):
        surface, rect = editor
        assert not dispatch_pointer_event(surface, rect, mouse(pygame.MOUSEBUTTONDOWN, (10, 10)))
        assert surface.dragging is None

    def test_right_button_ignored(self, editor):
        surface, rect = editor
        event = mouse(pygame.MOUSEBUTTONDOWN, (525, 290), button=3)
        assert not dispatch_pointer_event(surface, rect, event)

    def test_drag_outside_viewport_is_clamped(self, editor):
        surface, rect = editor
        dispatch_pointer_event(surface, rect, mouse(pygame.MOUSEBUTTONDOWN, (525, 290)))
        dispatch_pointer_event(surface, rect, mouse(pygame.MOUSEMOTION, (700, 250)))
        assert surface.model.get().p1 == pytest.approx((1.0, 0.5))

    def test_window_leave_ends_drag(self, editor):
        surface, rect = editor
        dispatch_pointer_event(surface, rect, mouse(pygame.MOUSEBUTTONDOWN, (525, 290)))
        dispatch_pointer_event(surface, rect, pygame.event.Event(pygame.WINDOWLEAVE))
        assert surface.dragging is None


class TestCommandLine:
    def test_defaults(self):
        config = config_from_args(build_parser().parse_args([]))
        assert config.mode.name == "none"
        assert config.loop_period == 2.0
        assert config.curve.get().as_tuple() == (0.25, 0.1, 0.25, 1.0)

    def test_options(self):
        args = build_parser().parse_args([
            "--mode", "bounce", "--preset", "elastic", "--rotate",
            "--rotation-speed", "2.5", "--loop-period", "3", "--size", "1200x700",
        ])
        config = config_from_args(args)
        assert isinstance(config.mode, Bounce)
        assert config.rotation_enabled
        assert config.rotation_speed == 2.5
        assert config.loop_period == 3.0
        assert config.curve.get().as_tuple() == (0.68, -0.55, 0.265, 1.55)
        assert args.size == (1200, 700)

    def test_bad_size_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--size", "big"])


class TestProjectCube:
    def test_lift_moves_every_corner_up(self):
        rest = project_cube(Transform(), (0, 0), scale=100)
        lifted = Transform()
        lifted.position[1] = 0.5
        moved = project_cube(lifted, (0, 0), scale=100)
        for (x0, y0), (x1, y1) in zip(rest, moved):
            assert x1 == pytest.approx(x0)
            assert y1 < y0


class TestCurveEditorView:
    """The view keeps its sampled path in step with the model."""

    def test_path_rebuilt_on_model_change(self):
        model = CurveModel()
        view = CurveEditorView(CurveEditorSurface(model, 100, 100))
        before = list(view.path)
        model.apply_preset(preset_by_name("Ease-In"))
        assert view.path != before
        assert view.path == view.surface.path_points()

    def test_close_stops_updates(self):
        model = CurveModel()
        view = CurveEditorView(CurveEditorSurface(model, 100, 100))
        view.close()
        cached = list(view.path)
        model.apply_preset(preset_by_name("Linear"))
        assert view.path == cached


class TestParamSlider:
    @pytest.fixture
    def loop_slider(self):
        config = AnimationConfig(CurveModel())
        slider = ParamSlider("Loop period (s)", 0.5, 5.0, 0.1,
                             lambda: config.loop_period,
                             lambda v: setattr(config, "loop_period", v))
        slider.rect = pygame.Rect(0, 0, 100, 8)
        return slider, config

    def test_value_snaps_to_step(self, loop_slider):
        slider, _ = loop_slider
        assert slider.value_at(52) == pytest.approx(2.8)
        assert slider.value_at(100) == pytest.approx(5.0)

    def test_drag_past_left_end_stops_at_floor(self, loop_slider):
        slider, config = loop_slider
        slider.handle_event(mouse(pygame.MOUSEBUTTONDOWN, (0, 4)))
        slider.handle_event(mouse(pygame.MOUSEMOTION, (-300, 4)))
        assert config.loop_period == pytest.approx(0.5)
        slider.handle_event(mouse(pygame.MOUSEBUTTONUP, (-300, 4)))
        assert not slider.dragging

    def test_motion_without_grab_is_ignored(self, loop_slider):
        slider, config = loop_slider
        slider.handle_event(mouse(pygame.MOUSEMOTION, (90, 4)))
        assert config.loop_period == 2.0
