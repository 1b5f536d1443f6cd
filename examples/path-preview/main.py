"""Path Preview: interactive waypoint route animator.

Exercises routeplot, routeplot-geometry, routeplot-timing and
routeplot-offload.

Controls:
  Click   Add major waypoint
  RClick  Add minor waypoint
  Space   Play / pause
  S       Cycle path shape of the last major waypoint
  P       Add pause time to the last waypoint
  M       Toggle constant-speed / constant-time mode
  +/-     Adjust marker speed
  [ ]     Adjust playback rate
  R       Stop and rewind
  C       Clear all waypoints
  Esc     Quit
"""
from __future__ import annotations

import logging
import sys
from dataclasses import replace

import pygame

from routeplot import FrameScheduler
from routeplot_geometry import CoordinateTransform, Path, Waypoint
from routeplot_geometry.types import EMPTY_PATH, PATH_SHAPES
from routeplot_offload import PathResponse, PathService, make_offload_system
from routeplot_timing import (
    AnimationEngine,
    SignalBus,
    WaypointPauses,
    make_animation_system,
)

from ui.constants import (
    BG_COLOR,
    CANVAS_H,
    CANVAS_W,
    FPS,
    IMAGE_H,
    IMAGE_W,
    PAUSE_STEP_MS,
    SCREEN_H,
    SCREEN_W,
    SPEED_STEP,
)
from ui.draw import (
    draw_canvas,
    draw_frame,
    draw_marker,
    draw_path,
    draw_waypoints,
)
from ui.status import draw_sidebar, draw_status_bar

logger = logging.getLogger("path-preview")

MAX_PAUSE_MS = 3000


class PreviewState:
    """Holds waypoints, the current path and the playback machinery."""

    def __init__(self) -> None:
        self.transform = CoordinateTransform(CANVAS_W, CANVAS_H)
        self.transform.set_image_size(IMAGE_W, IMAGE_H)

        self.waypoints: list[Waypoint] = []
        self.canvas_waypoints: list[Waypoint] = []
        self.path: Path = EMPTY_PATH
        self.shape = "line"
        self.active_waypoint = -1
        self.complete_count = 0

        self.bus = SignalBus()
        self.engine = AnimationEngine(bus=self.bus)
        self.service = PathService()
        self.scheduler = FrameScheduler(fps=FPS)

        self.bus.subscribe("waypoint_wait_start", self._on_wait_start)
        self.bus.subscribe("waypoint_wait_end", self._on_wait_end)
        self.bus.subscribe("complete", self._on_complete)

        # Wire systems (order matters)
        self.scheduler.add_system(make_offload_system(
            self.service, on_result=self._on_path, on_error=self._on_path_error,
        ))
        self.scheduler.add_system(make_animation_system(self.engine))

    def _on_wait_start(self, signal: str, data: dict) -> None:
        self.active_waypoint = data["index"]

    def _on_wait_end(self, signal: str, data: dict) -> None:
        self.active_waypoint = -1

    def _on_complete(self, signal: str, data: dict) -> None:
        self.complete_count += 1

    def _on_path(self, response: PathResponse) -> None:
        self.path = response.path
        self.engine.set_path_length(self.path.total_length)
        self.engine.set_wait_predicate(
            WaypointPauses.from_path(self.canvas_waypoints, self.path)
        )

    def _on_path_error(self, response: PathResponse) -> None:
        logger.warning("path request %d failed: %s", response.request_id, response.error)

    def rebuild(self) -> None:
        """Request a new path for the current waypoints."""
        self.canvas_waypoints = self.transform.waypoints_to_canvas(self.waypoints)
        if len(self.canvas_waypoints) < 2:
            # Supersede any request still in flight.
            self.service.make_request(self.canvas_waypoints)
            self.path = EMPTY_PATH
            self.engine.set_wait_predicate(None)
            return
        self.service.submit(self.canvas_waypoints)

    def add_waypoint(self, cx: float, cy: float, is_major: bool) -> None:
        if not self.transform.contains(cx, cy):
            return
        x, y = self.transform.canvas_to_image(cx, cy)
        self.waypoints.append(Waypoint(
            x, y, is_major=is_major, path_shape=self.shape if is_major else "line",
        ))
        self.rebuild()

    def cycle_shape(self) -> None:
        self.shape = PATH_SHAPES[(PATH_SHAPES.index(self.shape) + 1) % len(PATH_SHAPES)]
        for i in range(len(self.waypoints) - 1, -1, -1):
            if self.waypoints[i].is_major:
                self.waypoints[i] = replace(self.waypoints[i], path_shape=self.shape)
                self.rebuild()
                return

    def bump_pause(self) -> None:
        if not self.waypoints:
            return
        last = self.waypoints[-1]
        pause = last.pause_duration + PAUSE_STEP_MS
        if pause > MAX_PAUSE_MS:
            pause = 0.0
        self.waypoints[-1] = replace(last, pause_duration=pause)
        self.rebuild()

    def toggle_mode(self) -> None:
        mode = self.engine.state.mode
        self.engine.set_mode(
            "constant-time" if mode == "constant-speed" else "constant-speed"
        )

    def clear(self) -> None:
        self.waypoints.clear()
        self.engine.reset()
        self.active_waypoint = -1
        self.rebuild()


def main() -> None:
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Path Preview - routeplot demo")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 13)

    state = PreviewState()
    engine = state.engine
    running = True

    while running:
        clock.tick(FPS)

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    engine.toggle()
                elif event.key == pygame.K_r:
                    engine.stop()
                elif event.key == pygame.K_c:
                    state.clear()
                elif event.key == pygame.K_s:
                    state.cycle_shape()
                elif event.key == pygame.K_p:
                    state.bump_pause()
                elif event.key == pygame.K_m:
                    state.toggle_mode()
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    engine.set_speed(engine.state.speed + SPEED_STEP)
                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    engine.set_speed(max(SPEED_STEP, engine.state.speed - SPEED_STEP))
                elif event.key == pygame.K_RIGHTBRACKET:
                    engine.set_playback_speed(engine.state.playback_speed * 1.25)
                elif event.key == pygame.K_LEFTBRACKET:
                    engine.set_playback_speed(engine.state.playback_speed / 1.25)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 3):
                mx, my = event.pos
                if mx < CANVAS_W and my < CANVAS_H:
                    state.add_waypoint(mx, my, is_major=event.button == 1)

        # --- Frame ---
        state.scheduler.step()
        progress = engine.effective_progress

        # --- Render ---
        screen.fill(BG_COLOR)
        draw_canvas(screen, state.transform)
        draw_frame(screen, state.canvas_waypoints)
        draw_path(screen, state.path, progress)
        draw_waypoints(screen, state.canvas_waypoints, state.active_waypoint)
        draw_marker(screen, state.path, progress)
        draw_sidebar(
            screen,
            font,
            snapshot=engine.snapshot(),
            status=engine.status,
            waypoint_count=len(state.waypoints),
            path_length=state.path.total_length,
            backend=state.service.backend,
            shape=state.shape,
        )
        draw_status_bar(screen, font)

        pygame.display.flip()

    state.service.shutdown()
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
