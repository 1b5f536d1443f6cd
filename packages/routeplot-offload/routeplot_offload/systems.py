"""System factory delivering offloaded path results once per frame."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from routeplot_offload.messages import PathResponse
from routeplot_offload.service import PathService

if TYPE_CHECKING:
    from routeplot import FrameContext

logger = logging.getLogger(__name__)

ResponseCallback = Callable[[PathResponse], None]


def _fire(callback: ResponseCallback | None, response: PathResponse) -> None:
    """Call ``callback`` with error isolation.

    Exceptions raised by the callback are logged and swallowed.
    """
    if callback is None:
        return
    try:
        callback(response)
    except Exception:
        logger.exception(
            "path response callback failed for request %d", response.request_id,
        )


def make_offload_system(
    service: PathService,
    on_result: ResponseCallback | None = None,
    on_error: ResponseCallback | None = None,
) -> Callable[[FrameContext], None]:
    """Harvest ``service`` each frame and route responses to the callbacks.

    Successful responses go to ``on_result``; rejected ones to
    ``on_error``. Callback failures never stop the frame.
    """
    def offload_system(ctx: FrameContext) -> None:
        for response in service.harvest():
            if response.ok:
                _fire(on_result, response)
            else:
                logger.info(
                    "path request %d rejected: %s", response.request_id, response.error,
                )
                _fire(on_error, response)

    return offload_system
