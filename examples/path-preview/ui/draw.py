"""Canvas renderers: image frame, path, waypoints and the moving marker."""
from __future__ import annotations

import math
from collections.abc import Sequence

import pygame

from routeplot_geometry import (
    Bounds,
    CoordinateTransform,
    Path,
    Waypoint,
    pose_at_progress,
)
from routeplot_geometry.shapes import squiggle_control

from ui.constants import (
    CANVAS_BG,
    FRAME_COLOR,
    FRAME_MARGIN,
    IMAGE_BG,
    MAJOR_RADIUS,
    MARKER_COLOR,
    MARKER_SIZE,
    MINOR_COLOR,
    MINOR_RADIUS,
    PAUSE_RING,
    SHAPE_COLORS,
    TEXT_DIM,
    TRAIL_COLOR,
    WAYPOINT_COLOR,
)

SQUIGGLE_STEPS = 4


def draw_canvas(surface: pygame.Surface, transform: CoordinateTransform) -> None:
    """Fill the canvas and the letterboxed image rectangle."""
    surface.fill(CANVAS_BG, (0, 0, transform.canvas_width, transform.canvas_height))
    bounds = transform.image_bounds
    if bounds is not None:
        pygame.draw.rect(surface, IMAGE_BG, (bounds.x, bounds.y, bounds.w, bounds.h))


def draw_frame(surface: pygame.Surface, waypoints: Sequence[Waypoint]) -> None:
    """Outline the region the route covers, clipped to the canvas."""
    bounds = Bounds.from_points(wp.position for wp in waypoints)
    if bounds is None:
        return
    bounds = bounds.expand(FRAME_MARGIN)
    rect = pygame.Rect(
        int(bounds.min_x), int(bounds.min_y), int(bounds.width), int(bounds.height),
    )
    pygame.draw.rect(surface, FRAME_COLOR, rect.clip(surface.get_rect()), 1)


def _quadratic(p0, c, p1, t: float) -> tuple[float, float]:
    u = 1 - t
    return (
        u * u * p0[0] + 2 * u * t * c[0] + t * t * p1[0],
        u * u * p0[1] + 2 * u * t * c[1] + t * t * p1[1],
    )


def draw_path(surface: pygame.Surface, path: Path, progress: float) -> None:
    """Draw the full route dim and the travelled part in its shape color."""
    points = path.points
    if len(points) < 2:
        return
    pygame.draw.lines(surface, TRAIL_COLOR, False, [p.position for p in points], 1)

    reached = progress * (len(points) - 1)
    for i in range(len(points) - 1):
        if i >= reached:
            break
        a, b = points[i], points[i + 1]
        color = SHAPE_COLORS.get(a.path_shape, TEXT_DIM)
        if a.path_shape == "squiggle":
            control = squiggle_control(a.position, b.position, i)
            steps = [
                _quadratic(a.position, control, b.position, k / SQUIGGLE_STEPS)
                for k in range(SQUIGGLE_STEPS + 1)
            ]
            pygame.draw.lines(surface, color, False, steps, 2)
        else:
            pygame.draw.line(surface, color, a.position, b.position, 2)


def draw_waypoints(
    surface: pygame.Surface, waypoints: Sequence[Waypoint], active: int,
) -> None:
    """Major waypoints as filled dots, minor ones as rings.

    The waypoint the marker is currently held at gets a red ring.
    """
    for i, wp in enumerate(waypoints):
        pos = (int(wp.x), int(wp.y))
        if wp.is_major:
            pygame.draw.circle(surface, WAYPOINT_COLOR, pos, MAJOR_RADIUS)
        else:
            pygame.draw.circle(surface, MINOR_COLOR, pos, MINOR_RADIUS, 1)
        if wp.has_pause:
            ring = MAJOR_RADIUS + 4
            width = 3 if i == active else 1
            pygame.draw.circle(surface, PAUSE_RING, pos, ring, width)


def draw_marker(surface: pygame.Surface, path: Path, progress: float) -> None:
    """Arrowhead at ``progress`` pointing along the path."""
    pose = pose_at_progress(path, progress)
    if pose is None:
        return
    x, y, heading = pose
    tip = (x + math.cos(heading) * MARKER_SIZE, y + math.sin(heading) * MARKER_SIZE)
    left = (
        x + math.cos(heading + 2.5) * MARKER_SIZE * 0.7,
        y + math.sin(heading + 2.5) * MARKER_SIZE * 0.7,
    )
    right = (
        x + math.cos(heading - 2.5) * MARKER_SIZE * 0.7,
        y + math.sin(heading - 2.5) * MARKER_SIZE * 0.7,
    )
    pygame.draw.polygon(surface, MARKER_COLOR, [tip, left, right])
