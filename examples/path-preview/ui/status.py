"""Info panel (sidebar) and bottom status bar."""
from __future__ import annotations

from typing import Any

import pygame

from ui.constants import (
    BORDER,
    CANVAS_H,
    LABEL_COLOR,
    SCREEN_W,
    SIDEBAR_BG,
    SIDEBAR_W,
    STATUS_BG,
    STATUS_COLORS,
    STATUS_H,
    TEXT_COLOR,
    TEXT_DIM,
)


def draw_sidebar(
    surface: pygame.Surface,
    font: pygame.font.Font,
    snapshot: dict[str, Any],
    status: str,
    waypoint_count: int,
    path_length: float,
    backend: str,
    shape: str,
) -> None:
    """Draw right-side playback panel."""
    x = SCREEN_W - SIDEBAR_W
    pygame.draw.rect(surface, SIDEBAR_BG, (x, 0, SIDEBAR_W, CANVAS_H))
    pygame.draw.line(surface, BORDER, (x, 0), (x, CANVAS_H))

    pad = 10
    line_h = 22
    cx = x + pad
    cy = 8

    surface.blit(font.render("PLAYBACK", True, LABEL_COLOR), (cx, cy))
    cy += line_h + 4

    color = STATUS_COLORS.get(status, TEXT_COLOR)
    surface.blit(font.render(f"State: {status}", True, color), (cx, cy))
    cy += line_h
    surface.blit(
        font.render(f"Prog: {snapshot['progress'] * 100:5.1f}%", True, TEXT_COLOR),
        (cx, cy),
    )
    cy += line_h
    surface.blit(
        font.render(f"Time: {snapshot['current_time'] / 1000:5.2f}s", True, TEXT_COLOR),
        (cx, cy),
    )
    cy += line_h
    surface.blit(
        font.render(f"Dur:  {snapshot['duration'] / 1000:5.2f}s", True, TEXT_COLOR),
        (cx, cy),
    )
    cy += line_h + 8

    mode = "speed" if snapshot["mode"] == "constant-speed" else "duration"
    surface.blit(font.render(f"Mode: {mode}", True, TEXT_COLOR), (cx, cy))
    cy += line_h
    surface.blit(font.render(f"Speed: {snapshot['speed']:.0f}px/s", True, TEXT_COLOR), (cx, cy))
    cy += line_h
    surface.blit(
        font.render(f"Rate: x{snapshot['playback_speed']:.2f}", True, TEXT_COLOR), (cx, cy),
    )
    cy += line_h + 8

    surface.blit(font.render(f"Points: {waypoint_count}", True, TEXT_COLOR), (cx, cy))
    cy += line_h
    surface.blit(font.render(f"Length: {path_length:.0f}px", True, TEXT_COLOR), (cx, cy))
    cy += line_h
    surface.blit(font.render(f"Shape: {shape}", True, TEXT_COLOR), (cx, cy))
    cy += line_h
    surface.blit(font.render(f"Worker: {backend}", True, TEXT_DIM), (cx, cy))


def draw_status_bar(surface: pygame.Surface, font: pygame.font.Font) -> None:
    """Draw bottom key-bindings bar."""
    y = CANVAS_H
    pygame.draw.rect(surface, STATUS_BG, (0, y, SCREEN_W, STATUS_H))
    pygame.draw.line(surface, BORDER, (0, y), (SCREEN_W, y))

    text = (
        "[Click] Waypoint  [RClick] Minor  [Space] Play  [S] Shape  [P] Pause  "
        "[M] Mode  [+/-] Speed  [[/]] Rate  [R] Stop  [C] Clear  [Esc] Quit"
    )
    label = font.render(text, True, TEXT_DIM)
    surface.blit(label, (8, y + STATUS_H // 2 - label.get_height() // 2))
