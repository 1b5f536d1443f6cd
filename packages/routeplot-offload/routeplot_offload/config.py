"""Offload configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass

from routeplot.types import InvalidConfigError, InvalidModeError

BACKENDS = ("executor", "inline")


@dataclass(frozen=True)
class OffloadConfig:
    """Immutable configuration for background path computation.

    Attributes:
        timeout: Seconds before an in-flight request is rejected.
        max_workers: ThreadPoolExecutor max workers.
        backend: ``"executor"`` to compute off the calling thread,
            ``"inline"`` to compute synchronously.
    """

    timeout: float = 5.0
    max_workers: int = 1
    backend: str = "executor"

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise InvalidConfigError("timeout must be positive")
        if self.max_workers < 1:
            raise InvalidConfigError("max_workers must be at least 1")
        if self.backend not in BACKENDS:
            raise InvalidModeError("offload backend", self.backend, BACKENDS)
