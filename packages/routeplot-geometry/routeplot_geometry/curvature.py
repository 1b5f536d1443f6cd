"""Discrete curvature estimation with a bounded result cache."""
from __future__ import annotations

import logging
import math
from collections import OrderedDict
from collections.abc import Sequence

from routeplot_geometry import vec
from routeplot_geometry.vec import Vec2

logger = logging.getLogger(__name__)

PathKey = tuple[int, Vec2, Vec2, Vec2]


def turning_angle(prev: Vec2, point: Vec2, nxt: Vec2) -> float:
    """Normalized turning angle at ``point``: 0 straight, 1 full reversal."""
    a = vec.sub(point, prev)
    b = vec.sub(nxt, point)
    if (a[0] == 0.0 and a[1] == 0.0) or (b[0] == 0.0 and b[1] == 0.0):
        return 0.0
    return abs(math.atan2(vec.cross(a, b), vec.dot(a, b))) / math.pi


def turning_angles(points: Sequence[Vec2]) -> list[float]:
    """Curvature for every point; endpoints are 0.

    Each angle is measured against the nearest distinct neighbour on
    either side, so a run of repeated samples at a corner reads the
    corner's turn rather than 0.
    """
    n = len(points)
    out = [0.0] * n
    if n < 3:
        return out

    before = [-1] * n
    for i in range(1, n):
        before[i] = i - 1 if points[i - 1] != points[i] else before[i - 1]
    after = [-1] * n
    for i in range(n - 2, -1, -1):
        after[i] = i + 1 if points[i + 1] != points[i] else after[i + 1]

    for i in range(1, n - 1):
        if before[i] < 0 or after[i] < 0:
            continue
        out[i] = turning_angle(points[before[i]], points[i], points[after[i]])
    return out


def path_key(points: Sequence[Vec2]) -> PathKey:
    """Cheap structural key: length plus first, middle and last coordinates."""
    n = len(points)
    if n == 0:
        return (0, (0.0, 0.0), (0.0, 0.0), (0.0, 0.0))
    return (n, tuple(points[0]), tuple(points[n // 2]), tuple(points[-1]))


class CurvatureCache:
    """LRU cache of per-point curvature keyed by ``path_key``.

    Entries remember the sampled points they were computed from. A key
    collision between two different paths counts as a miss and replaces
    the entry, so cached output always matches a fresh computation.
    """

    def __init__(self, max_size: int = 32) -> None:
        self._max_size = max_size
        self._entries: OrderedDict[PathKey, tuple[tuple[Vec2, ...], list[float]]] = (
            OrderedDict()
        )
        self.hits = 0
        self.misses = 0

    @property
    def max_size(self) -> int:
        return self._max_size

    def __len__(self) -> int:
        return len(self._entries)

    def curvatures(self, points: Sequence[Vec2]) -> list[float]:
        snapshot = tuple(points)
        key = path_key(snapshot)
        entry = self._entries.get(key)
        if entry is not None and entry[0] == snapshot:
            self._entries.move_to_end(key)
            self.hits += 1
            logger.debug("curvature cache hit for %d points", len(snapshot))
            return list(entry[1])

        self.misses += 1
        values = turning_angles(snapshot)
        if self._max_size > 0:
            self._entries[key] = (snapshot, values)
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_size:
                self._entries.popitem(last=False)
        return list(values)

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0
