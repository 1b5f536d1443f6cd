"""Mapping between canvas pixels and normalized image coordinates."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from routeplot.types import InvalidModeError

from routeplot_geometry.types import Waypoint
from routeplot_geometry.vec import Vec2

FIT_MODES = ("fit", "fill")


@dataclass(frozen=True, slots=True)
class ImageBounds:
    """Where the scaled image lands on the canvas."""

    x: float
    y: float
    w: float
    h: float
    scale: float


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned bounding box."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_points(cls, points: Iterable[Vec2]) -> Bounds | None:
        xs: list[float] = []
        ys: list[float] = []
        for x, y in points:
            xs.append(x)
            ys.append(y)
        if not xs:
            return None
        return cls(min(xs), min(ys), max(xs), max(ys))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Vec2:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def expand(self, margin: float) -> Bounds:
        return Bounds(
            self.min_x - margin,
            self.min_y - margin,
            self.max_x + margin,
            self.max_y + margin,
        )

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y


class CoordinateTransform:
    """Converts between canvas pixels and normalized ``[0, 1]`` image space.

    ``fit`` letterboxes the whole image inside the canvas; ``fill`` covers
    the canvas and crops the overflow. Both reduce to one linear map
    through the displayed image rectangle. With no image loaded the canvas
    itself is the normalization reference.
    """

    def __init__(self, canvas_width: float = 0, canvas_height: float = 0) -> None:
        self.canvas_width = float(canvas_width)
        self.canvas_height = float(canvas_height)
        self.image_width = 0.0
        self.image_height = 0.0
        self.fit_mode = "fit"
        self._bounds: ImageBounds | None = None

    def set_canvas_size(self, width: float, height: float) -> None:
        self.canvas_width = float(width)
        self.canvas_height = float(height)
        self._recompute()

    def set_image_size(self, width: float, height: float, fit_mode: str = "fit") -> None:
        if fit_mode not in FIT_MODES:
            raise InvalidModeError("fit mode", fit_mode, FIT_MODES)
        self.image_width = float(width)
        self.image_height = float(height)
        self.fit_mode = fit_mode
        self._recompute()

    def _recompute(self) -> None:
        if not (self.image_width and self.image_height
                and self.canvas_width and self.canvas_height):
            self._bounds = None
            return
        sx = self.canvas_width / self.image_width
        sy = self.canvas_height / self.image_height
        scale = min(sx, sy) if self.fit_mode == "fit" else max(sx, sy)
        w = self.image_width * scale
        h = self.image_height * scale
        self._bounds = ImageBounds(
            x=(self.canvas_width - w) / 2,
            y=(self.canvas_height - h) / 2,
            w=w,
            h=h,
            scale=scale,
        )

    @property
    def image_bounds(self) -> ImageBounds | None:
        return self._bounds

    def _frame(self) -> tuple[float, float, float, float]:
        if self._bounds is None:
            return (0.0, 0.0, self.canvas_width, self.canvas_height)
        b = self._bounds
        return (b.x, b.y, b.w, b.h)

    def image_to_canvas(self, ix: float, iy: float) -> Vec2:
        x, y, w, h = self._frame()
        return (ix * w + x, iy * h + y)

    def canvas_to_image(self, cx: float, cy: float) -> Vec2:
        """Normalized image coordinates, clamped to ``[0, 1]``."""
        x, y, w, h = self._frame()
        nx = (cx - x) / w if w > 0 else 0.0
        ny = (cy - y) / h if h > 0 else 0.0
        return (min(max(nx, 0.0), 1.0), min(max(ny, 0.0), 1.0))

    def contains(self, cx: float, cy: float) -> bool:
        """True when the canvas point lies on the displayed image."""
        b = self._bounds
        if b is None:
            return False
        return b.x <= cx <= b.x + b.w and b.y <= cy <= b.y + b.h

    def display_size(self) -> tuple[float, float]:
        if self._bounds is None:
            return (self.canvas_width, self.canvas_height)
        return (self._bounds.w, self._bounds.h)

    def waypoints_to_canvas(self, waypoints: Sequence[Waypoint]) -> list[Waypoint]:
        """Copies of normalized waypoints placed in canvas pixel space."""
        out = []
        for wp in waypoints:
            cx, cy = self.image_to_canvas(wp.x, wp.y)
            out.append(replace(wp, x=cx, y=cy))
        return out

    def reset(self) -> None:
        self.canvas_width = 0.0
        self.canvas_height = 0.0
        self.image_width = 0.0
        self.image_height = 0.0
        self.fit_mode = "fit"
        self._bounds = None
