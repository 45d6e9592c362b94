"""Pygame front end for the bezier motion studio.

Shows a wireframe cube animated by :class:`animation.AnimationDriver` next
to a panel holding the curve editor, the preset buttons and the animation
controls.  The window owns the render loop: every frame it feeds the driver
the elapsed time and forwards mouse events to the curve editor surface.
"""
from __future__ import annotations

import argparse
import logging
import math
from typing import Callable, List, Sequence, Tuple

import pygame

from animation import (
    MODES,
    AnimationConfig,
    AnimationDriver,
    FrameSample,
    Transform,
    mode_from_name,
)
from curve_editor import CurveEditorSurface
from curve_model import PRESETS, ControlPoints, CurveModel, preset_by_name
from errors import DegenerateConfiguration, InvalidArgument

logger = logging.getLogger(__name__)

PANEL_WIDTH = 260
EDITOR_SIZE = 200
MODE_KEYS = {
    pygame.K_1: "none",
    pygame.K_2: "float",
    pygame.K_3: "bounce",
    pygame.K_4: "swing",
    pygame.K_5: "custom",
}


def dispatch_pointer_event(
    surface: CurveEditorSurface, rect: pygame.Rect, event: pygame.event.Event
) -> bool:
    """Forward a pygame mouse event to ``surface``; True if it was consumed."""
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        if rect.collidepoint(event.pos):
            return surface.pointer_down(event.pos[0] - rect.x, event.pos[1] - rect.y)
    elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
        was_dragging = surface.dragging is not None
        surface.pointer_up()
        return was_dragging
    elif event.type == pygame.MOUSEMOTION and surface.dragging is not None:
        surface.pointer_move(event.pos[0] - rect.x, event.pos[1] - rect.y)
        return True
    elif event.type == pygame.WINDOWLEAVE:
        surface.pointer_leave()
    return False


# ---------------------------------------------------------------------------
# Widgets
# ---------------------------------------------------------------------------


class ParamSlider:
    """Horizontal slider that snaps to ``step`` and never leaves ``[low, high]``.

    The floor keeps settings like the loop period away from zero while the
    knob is dragged past the left end.
    """

    def __init__(self, label: str, low: float, high: float, step: float,
                 getter: Callable[[], float], setter: Callable[[float], None]) -> None:
        self.label = label
        self.low = low
        self.high = high
        self.step = step
        self.getter = getter
        self.setter = setter
        self.rect = pygame.Rect(0, 0, 0, 0)
        self.dragging = False

    def value_at(self, mx: float) -> float:
        frac = (mx - self.rect.x) / max(1, self.rect.width)
        raw = self.low + max(0.0, min(1.0, frac)) * (self.high - self.low)
        snapped = self.low + round((raw - self.low) / self.step) * self.step
        return round(max(self.low, min(self.high, snapped)), 6)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False
            return
        grabbed = (event.type == pygame.MOUSEBUTTONDOWN and event.button == 1
                   and self.rect.collidepoint(event.pos))
        if grabbed:
            self.dragging = True
        if grabbed or (event.type == pygame.MOUSEMOTION and self.dragging):
            value = self.value_at(event.pos[0])
            if value != self.getter():
                self.setter(value)

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, x: int, y: int) -> None:
        value = self.getter()
        txt = font.render(f"{self.label}: {value:.1f}", True, (230, 230, 230))
        surface.blit(txt, (x, y))
        y += 18
        self.rect = pygame.Rect(x, y, PANEL_WIDTH - 40, 8)
        pygame.draw.rect(surface, (80, 80, 80), self.rect)
        pos = (value - self.low) / (self.high - self.low)
        knob_x = self.rect.x + max(0.0, min(1.0, pos)) * self.rect.width
        pygame.draw.rect(surface, (200, 200, 0), pygame.Rect(knob_x - 4, y - 4, 8, 16))


class Button:
    def __init__(self, text: str, callback: Callable[[], object],
                 active: Callable[[], bool] | None = None) -> None:
        self.rect = pygame.Rect(0, 0, 0, 0)
        self.text = text
        self.callback = callback
        self.active = active

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, rect: pygame.Rect) -> None:
        self.rect = rect
        colour = (37, 99, 235) if self.active and self.active() else (70, 70, 70)
        pygame.draw.rect(surface, colour, self.rect)
        txt = font.render(self.text, True, (255, 255, 255))
        surface.blit(txt, txt.get_rect(center=self.rect.center))


class CurveEditorView:
    """Draws a :class:`CurveEditorSurface` and routes mouse events to it.

    The sampled curve is cached and only rebuilt when the model reports a
    change.
    """

    def __init__(self, surface: CurveEditorSurface) -> None:
        self.surface = surface
        self.rect = pygame.Rect(0, 0, int(surface.width), int(surface.height))
        self.path: List[Tuple[float, float]] = surface.path_points()
        surface.model.subscribe(self._on_curve_changed)

    def _on_curve_changed(self, points: ControlPoints) -> None:
        self.path = self.surface.path_points()

    def close(self) -> None:
        self.surface.model.unsubscribe(self._on_curve_changed)

    def handle_event(self, event: pygame.event.Event) -> bool:
        return dispatch_pointer_event(self.surface, self.rect, event)

    def _offset(self, point: Tuple[float, float]) -> Tuple[float, float]:
        return self.rect.x + point[0], self.rect.y + point[1]

    def draw(self, screen: pygame.Surface, font: pygame.font.Font, x: int, y: int) -> None:
        self.rect.topleft = (x, y)
        pygame.draw.rect(screen, (17, 24, 39), self.rect)
        for i in range(1, 10):
            gx = self.rect.x + i * self.rect.width / 10
            gy = self.rect.y + i * self.rect.height / 10
            pygame.draw.line(screen, (55, 65, 81), (gx, self.rect.top), (gx, self.rect.bottom))
            pygame.draw.line(screen, (55, 65, 81), (self.rect.left, gy), (self.rect.right, gy))
        pygame.draw.rect(screen, (100, 116, 139), self.rect, 1)

        for start, end in self.surface.handle_lines():
            pygame.draw.line(screen, (107, 114, 128), self._offset(start), self._offset(end))
        pts = [self._offset(p) for p in self.path]
        pygame.draw.lines(screen, (59, 130, 246), False, pts, 2)
        points = self.surface.model.get()
        for index, point in enumerate((points.p1, points.p2)):
            colour = (250, 204, 21) if self.surface.dragging == index else (59, 130, 246)
            centre = self._offset(self.surface.to_viewport(*point))
            pygame.draw.circle(screen, colour, centre, 6)

        txt = font.render(points.css(), True, (156, 163, 175))
        screen.blit(txt, (x, self.rect.bottom + 4))


# ---------------------------------------------------------------------------
# Scene
# ---------------------------------------------------------------------------


CUBE_VERTICES = [
    (x, y, z) for x in (-0.5, 0.5) for y in (-0.5, 0.5) for z in (-0.5, 0.5)
]
CUBE_EDGES = [
    (a, b)
    for a in range(8)
    for b in range(a + 1, 8)
    if sum(1 for i in range(3) if CUBE_VERTICES[a][i] != CUBE_VERTICES[b][i]) == 1
]


def project_cube(transform: Transform, centre: Tuple[int, int], scale: float,
                 pitch: float = 0.35) -> List[Tuple[float, float]]:
    """Screen positions of the cube's corners after applying ``transform``."""
    _, yaw, roll = transform.rotation
    offset_y = transform.position[1]
    cr, sr = math.cos(roll), math.sin(roll)
    cy, sy = math.cos(yaw), math.sin(yaw)
    cp, sp = math.cos(pitch), math.sin(pitch)
    out = []
    for x, y, z in CUBE_VERTICES:
        # roll about z, then yaw about y, then lift
        x, y = x * cr - y * sr, x * sr + y * cr
        x, z = x * cy + z * sy, -x * sy + z * cy
        y += offset_y
        # tilt the camera down a little so the top face is visible
        y, z = y * cp - z * sp, y * sp + z * cp
        out.append((centre[0] + x * scale, centre[1] - y * scale))
    return out


class Viewer:
    BG = (30, 41, 59)
    PANEL_BG = (15, 23, 42)

    def __init__(self, config: AnimationConfig, size: Tuple[int, int] = (1000, 640),
                 fps: int = 60) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode(size)
        pygame.display.set_caption("Bezier Motion Studio")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("arial", 14)
        self.fps = fps

        self.config = config
        self.driver = AnimationDriver(config)
        self.transform = Transform()
        self.elapsed = 0.0
        self.sample: FrameSample | None = None

        self.editor = CurveEditorView(
            CurveEditorSurface(config.curve, EDITOR_SIZE, EDITOR_SIZE, hit_radius=0.06)
        )
        self.preset_buttons = [
            Button(p.name, lambda p=p: self.editor.surface.select_preset(p)) for p in PRESETS
        ]
        self.mode_buttons = [
            Button(name.title(), lambda name=name: self._set_mode(name),
                   lambda name=name: self.config.mode.name == name)
            for name in MODES
        ]
        self.rotate_button = Button("Rotate", self._toggle_rotation,
                                    lambda: self.config.rotation_enabled)
        self.sliders = [
            ParamSlider("Rotation speed", 0.1, 3.0, 0.1,
                        lambda: self.config.rotation_speed,
                        lambda v: setattr(self.config, "rotation_speed", v)),
            ParamSlider("Loop period (s)", 0.5, 5.0, 0.1,
                        lambda: self.config.loop_period,
                        lambda v: setattr(self.config, "loop_period", v)),
        ]

    # ------------------------------------------------------------------
    def _set_mode(self, name: str) -> None:
        self.config.mode = mode_from_name(name)

    def _toggle_rotation(self) -> None:
        self.config.rotation_enabled = not self.config.rotation_enabled

    @property
    def _widgets(self) -> Sequence:
        return [*self.preset_buttons, *self.mode_buttons, self.rotate_button, *self.sliders]

    # ------------------------------------------------------------------
    def run(self) -> None:
        logger.info("Viewer started at %d fps", self.fps)
        running = True
        while running:
            delta = self.clock.tick(self.fps) / 1000.0
            running = self._handle_events()
            self.elapsed += delta
            self.sample = self.driver.tick(self.elapsed, delta, self.transform)
            self._draw()
        self.editor.close()
        logger.info("Viewer closed after %.1fs", self.elapsed)
        pygame.quit()

    def _handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False
                if event.key == pygame.K_SPACE:
                    self._toggle_rotation()
                elif event.key in MODE_KEYS:
                    self._set_mode(MODE_KEYS[event.key])
                continue
            if self.editor.handle_event(event):
                continue
            for widget in self._widgets:
                widget.handle_event(event)
        return True

    # ------------------------------------------------------------------
    def _draw(self) -> None:
        self.screen.fill(self.BG)
        scene_w = self.screen.get_width() - PANEL_WIDTH
        centre = (scene_w // 2, self.screen.get_height() // 2)
        corners = project_cube(self.transform, centre, scale=140)
        floor_y = centre[1] + 200
        pygame.draw.line(self.screen, (51, 65, 85), (40, floor_y), (scene_w - 40, floor_y), 2)
        for a, b in CUBE_EDGES:
            pygame.draw.line(self.screen, (6, 182, 212), corners[a], corners[b], 2)
        if self.sample is not None:
            hud = (f"{self.config.mode.name}  t={self.sample.normalized_time:.2f}"
                   f"  eased={self.sample.eased:.2f}")
            self.screen.blit(self.font.render(hud, True, (226, 232, 240)), (12, 12))
        self._draw_panel(scene_w)
        pygame.display.flip()

    def _draw_panel(self, x0: int) -> None:
        panel = pygame.Rect(x0, 0, PANEL_WIDTH, self.screen.get_height())
        pygame.draw.rect(self.screen, self.PANEL_BG, panel)
        x = x0 + 20
        y = 16
        self.screen.blit(self.font.render("Animation", True, (34, 211, 238)), (x, y))
        y += 22
        half = (PANEL_WIDTH - 46) // 2
        for i, btn in enumerate(self.mode_buttons):
            col, row = i % 2, i // 2
            btn.draw(self.screen, self.font,
                     pygame.Rect(x + col * (half + 6), y + row * 30, half, 24))
        y += 30 * ((len(self.mode_buttons) + 1) // 2) + 4
        self.rotate_button.draw(self.screen, self.font, pygame.Rect(x, y, PANEL_WIDTH - 40, 24))
        y += 36
        for slider in self.sliders:
            slider.draw(self.screen, self.font, x, y)
            y += 40

        self.screen.blit(self.font.render("Curve", True, (34, 211, 238)), (x, y))
        y += 22
        self.editor.draw(self.screen, self.font, x, y)
        y += EDITOR_SIZE + 28
        for i, btn in enumerate(self.preset_buttons):
            col, row = i % 2, i // 2
            btn.draw(self.screen, self.font,
                     pygame.Rect(x + col * (half + 6), y + row * 30, half, 24))


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def _window_size(text: str) -> Tuple[int, int]:
    try:
        w, h = (int(v) for v in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}") from None
    if w <= PANEL_WIDTH or h <= 0:
        raise argparse.ArgumentTypeError(f"window {text} is too small")
    return w, h


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bezier easing motion studio")
    parser.add_argument("--mode", default="none", choices=list(MODES),
                        help="Animation mode to start with")
    parser.add_argument("--preset", help="Name of the curve preset to start with")
    parser.add_argument("--rotate", action="store_true", help="Start with rotation on")
    parser.add_argument("--rotation-speed", type=float, default=1.0)
    parser.add_argument("--loop-period", type=float, default=2.0,
                        help="Seconds per animation loop")
    parser.add_argument("--fps", type=int, default=60)
    parser.add_argument("--size", type=_window_size, default=(1000, 640),
                        help="Window size as WIDTHxHEIGHT")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def config_from_args(args: argparse.Namespace) -> AnimationConfig:
    curve = CurveModel()
    if args.preset:
        curve.apply_preset(preset_by_name(args.preset))
    return AnimationConfig(
        curve,
        mode=mode_from_name(args.mode),
        rotation_enabled=args.rotate,
        rotation_speed=args.rotation_speed,
        loop_period=args.loop_period,
    )


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = config_from_args(args)
    except (InvalidArgument, DegenerateConfiguration) as exc:
        parser.error(str(exc))
    Viewer(config, size=args.size, fps=args.fps).run()


if __name__ == "__main__":
    main()
