"""routeplot-offload - Background path computation with timeout and fallback."""
from __future__ import annotations

from routeplot_offload.config import OffloadConfig
from routeplot_offload.messages import PathRequest, PathResponse
from routeplot_offload.service import PathService, run_request
from routeplot_offload.systems import make_offload_system

__all__ = [
    "OffloadConfig",
    "PathRequest",
    "PathResponse",
    "PathService",
    "make_offload_system",
    "run_request",
]
