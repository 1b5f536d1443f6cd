"""routeplot-timing - Playback clock, waypoint waits, and event signals."""
from __future__ import annotations

from routeplot_timing.config import MODES, TimingConfig
from routeplot_timing.engine import AnimationEngine
from routeplot_timing.signals import SignalBus
from routeplot_timing.state import AnimationState
from routeplot_timing.systems import make_animation_system
from routeplot_timing.waypoints import WaitRequest, WaypointPauses

__all__ = [
    "AnimationEngine",
    "AnimationState",
    "TimingConfig",
    "MODES",
    "SignalBus",
    "WaitRequest",
    "WaypointPauses",
    "make_animation_system",
]
