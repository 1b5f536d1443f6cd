"""System factory driving an animation engine from the frame scheduler."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from routeplot_timing.engine import AnimationEngine

if TYPE_CHECKING:
    from routeplot import FrameContext


def make_animation_system(
    engine: AnimationEngine,
    on_frame: Callable[[AnimationEngine, FrameContext], None] | None = None,
) -> Callable[[FrameContext], None]:
    """One ``engine.tick`` per frame at the frame's clock reading.

    ``on_frame`` runs after the tick, typically to resolve the marker
    position from ``engine.effective_progress``.
    """
    def animation_system(ctx: FrameContext) -> None:
        engine.tick(ctx.now)
        if on_frame is not None:
            on_frame(engine, ctx)

    return animation_system
