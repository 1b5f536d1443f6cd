"""Mutable playback state owned by the animation engine."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AnimationState:
    """Playback position and flags.

    Only ``AnimationEngine`` mutates this. ``progress`` stays in [0, 1];
    while waiting at a waypoint consumers read ``effective_progress``,
    which is the frozen snapshot rather than the live ratio.
    """

    current_time: float = 0.0
    duration: float = 10000.0
    progress: float = 0.0
    is_playing: bool = False
    is_paused: bool = False
    is_waiting_at_waypoint: bool = False
    pause_waypoint_index: int = -1
    pause_start_time: float = 0.0
    pause_end_time: float = 0.0
    waypoint_progress_snapshot: float = 0.0
    playback_speed: float = 1.0
    speed: float = 400.0
    mode: str = "constant-speed"

    @property
    def status(self) -> str:
        if self.is_waiting_at_waypoint:
            return "waiting"
        if self.is_playing:
            return "playing"
        if self.is_paused:
            return "paused"
        return "stopped"

    @property
    def effective_progress(self) -> float:
        if self.is_waiting_at_waypoint:
            return self.waypoint_progress_snapshot
        return self.progress

    def set_progress(self, progress: float) -> None:
        if self.duration <= 0:
            self.progress = 0.0
            self.current_time = 0.0
            return
        self.progress = max(0.0, min(1.0, progress))
        self.current_time = self.progress * self.duration

    def set_time(self, time: float) -> None:
        if self.duration <= 0:
            self.progress = 0.0
            self.current_time = 0.0
            return
        self.current_time = max(0.0, min(self.duration, time))
        self.progress = self.current_time / self.duration

    def clear_wait(self) -> None:
        self.is_waiting_at_waypoint = False
        self.pause_waypoint_index = -1
        self.pause_start_time = 0.0
        self.pause_end_time = 0.0
        self.waypoint_progress_snapshot = 0.0

    def reset(self, duration: float = 10000.0, playback_speed: float = 1.0) -> None:
        """Back to a fresh stopped state. The user's ``speed`` is kept."""
        self.current_time = 0.0
        self.duration = duration
        self.progress = 0.0
        self.is_playing = False
        self.is_paused = False
        self.clear_wait()
        self.playback_speed = playback_speed
        self.mode = "constant-speed"

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_time": self.current_time,
            "duration": self.duration,
            "progress": self.progress,
            "effective_progress": self.effective_progress,
            "is_playing": self.is_playing,
            "is_paused": self.is_paused,
            "is_waiting_at_waypoint": self.is_waiting_at_waypoint,
            "pause_waypoint_index": self.pause_waypoint_index,
            "playback_speed": self.playback_speed,
            "speed": self.speed,
            "mode": self.mode,
            "status": self.status,
        }
