"""Path computation behind an inline or executor backend.

``PathService`` gives callers one interface whether the geometry pipeline
runs on the calling thread or on a ``concurrent.futures`` executor. Every
request carries a correlation id; only the newest request's response is
delivered. Any backend failure rejects the affected request with an
``OffloadError`` subclass and switches the service to inline computation.
"""
from __future__ import annotations

import itertools
import logging
import time
from collections.abc import Sequence
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass

from routeplot.types import (
    OffloadError,
    OffloadTimeoutError,
    OffloadUnavailableError,
    RouteplotError,
)
from routeplot_geometry.config import PathConfig
from routeplot_geometry.pipeline import PathBuilder, build_path
from routeplot_geometry.types import Path, Waypoint

from routeplot_offload.config import OffloadConfig
from routeplot_offload.messages import PathRequest, PathResponse

logger = logging.getLogger(__name__)


def run_request(request: PathRequest) -> Path:
    """Worker entry point: build the path for one request."""
    return build_path(request.waypoints, request.config)


@dataclass(frozen=True)
class _PendingRequest:
    """Internal record of an in-flight request."""

    request: PathRequest
    future: Future[Path]
    submitted_at: float


class PathService:
    """Computes paths inline or on a background executor.

    Args:
        config: Offload settings; defaults to ``OffloadConfig()``.
        path_config: Geometry settings used when a call passes none.
        executor: Executor to submit work to. When omitted and the backend
            is ``"executor"``, a ``ThreadPoolExecutor`` is created and owned
            by the service.
    """

    def __init__(
        self,
        config: OffloadConfig | None = None,
        path_config: PathConfig | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.config = config if config is not None else OffloadConfig()
        self.path_config = path_config if path_config is not None else PathConfig()
        self._builder = PathBuilder(self.path_config)
        self._ids = itertools.count(1)
        self._latest_id = 0
        self._pending: dict[int, _PendingRequest] = {}
        self._ready: list[PathResponse] = []
        self._owns_executor = False
        self._executor: Executor | None = None
        if self.config.backend == "executor":
            if executor is None:
                executor = ThreadPoolExecutor(
                    max_workers=self.config.max_workers,
                    thread_name_prefix="routeplot-path",
                )
                self._owns_executor = True
            self._executor = executor
        self._shutdown = False

    @property
    def backend(self) -> str:
        return "inline" if self._executor is None else "executor"

    @property
    def pending(self) -> int:
        return len(self._pending)

    @property
    def latest_request_id(self) -> int:
        return self._latest_id

    def make_request(
        self, waypoints: Sequence[Waypoint], config: PathConfig | None = None,
    ) -> PathRequest:
        request = PathRequest(
            request_id=next(self._ids),
            waypoints=tuple(waypoints),
            config=config if config is not None else self.path_config,
        )
        self._latest_id = request.request_id
        return request

    # ------------------------------------------------------------------
    # Blocking form
    # ------------------------------------------------------------------

    def compute(
        self, waypoints: Sequence[Waypoint], config: PathConfig | None = None,
    ) -> Path:
        """Build a path and wait for it.

        Raises:
            OffloadTimeoutError: The executor did not answer within
                ``config.timeout`` seconds.
            OffloadUnavailableError: The executor refused the work.
            OffloadError: The executor failed while computing.
        """
        request = self.make_request(waypoints, config)
        if self._executor is None:
            return self._builder.build(request.waypoints, request.config)

        future = self._submit(self._executor, request)
        try:
            return future.result(timeout=self.config.timeout)
        except FutureTimeoutError:
            future.cancel()
            self._fall_back(f"request {request.request_id} timed out")
            raise OffloadTimeoutError(request.request_id, self.config.timeout) from None
        except RouteplotError:
            raise
        except Exception as exc:
            self._fall_back(f"request {request.request_id} failed: {exc}")
            raise OffloadError(
                f"Path request {request.request_id} failed in executor: {exc}"
            ) from exc

    # ------------------------------------------------------------------
    # Non-blocking form
    # ------------------------------------------------------------------

    def submit(
        self, waypoints: Sequence[Waypoint], config: PathConfig | None = None,
    ) -> int:
        """Queue a computation and return its correlation id.

        Results arrive through ``harvest``. A newer submission supersedes
        every older one; their results are discarded when they finish.
        """
        if self._shutdown:
            raise OffloadUnavailableError("Path service has been shut down")
        request = self.make_request(waypoints, config)
        if self._executor is None:
            self._ready.append(self._inline_response(request))
            return request.request_id

        started = time.monotonic()
        try:
            future = self._submit(self._executor, request)
        except OffloadUnavailableError as exc:
            self._ready.append(PathResponse(
                request_id=request.request_id,
                error=exc,
                elapsed=time.monotonic() - started,
                backend="executor",
            ))
            return request.request_id
        self._pending[request.request_id] = _PendingRequest(
            request=request, future=future, submitted_at=started,
        )
        return request.request_id

    def harvest(self) -> list[PathResponse]:
        """Collect finished responses for the newest request.

        Phases in order: responses already computed inline, completed
        futures, then requests that have exceeded the timeout.
        """
        responses = self._phase_ready()
        responses.extend(self._phase_collect())
        responses.extend(self._phase_timeout())
        return responses

    def _phase_ready(self) -> list[PathResponse]:
        ready = self._ready
        self._ready = []
        return [r for r in ready if not self._superseded(r.request_id)]

    def _phase_collect(self) -> list[PathResponse]:
        responses: list[PathResponse] = []
        for request_id in list(self._pending):
            pending = self._pending[request_id]
            if not pending.future.done():
                continue
            del self._pending[request_id]

            if self._superseded(request_id):
                logger.warning(
                    "dropping response for superseded request %d (latest %d)",
                    request_id, self._latest_id,
                )
                continue

            if pending.future.cancelled():
                continue
            elapsed = time.monotonic() - pending.submitted_at
            exc = pending.future.exception()
            if exc is None:
                responses.append(PathResponse(
                    request_id=request_id,
                    path=pending.future.result(),
                    elapsed=elapsed,
                    backend="executor",
                ))
                continue

            if not isinstance(exc, RouteplotError):
                self._fall_back(f"request {request_id} failed: {exc}")
                wrapped = OffloadError(
                    f"Path request {request_id} failed in executor: {exc}"
                )
                wrapped.__cause__ = exc
                exc = wrapped
            responses.append(PathResponse(
                request_id=request_id, error=exc, elapsed=elapsed, backend="executor",
            ))
        return responses

    def _phase_timeout(self) -> list[PathResponse]:
        responses: list[PathResponse] = []
        timeout = self.config.timeout
        now = time.monotonic()
        for request_id in list(self._pending):
            pending = self._pending[request_id]
            if now - pending.submitted_at <= timeout:
                continue
            pending.future.cancel()
            del self._pending[request_id]
            logger.warning("path request %d timed out after %.1fs", request_id, timeout)
            if self._superseded(request_id):
                continue
            self._fall_back(f"request {request_id} timed out")
            responses.append(PathResponse(
                request_id=request_id,
                error=OffloadTimeoutError(request_id, timeout),
                elapsed=now - pending.submitted_at,
                backend="executor",
            ))
        return responses

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _superseded(self, request_id: int) -> bool:
        return request_id < self._latest_id

    def _inline_response(self, request: PathRequest) -> PathResponse:
        started = time.monotonic()
        try:
            path = self._builder.build(request.waypoints, request.config)
        except RouteplotError as exc:
            return PathResponse(
                request_id=request.request_id,
                error=exc,
                elapsed=time.monotonic() - started,
            )
        return PathResponse(
            request_id=request.request_id,
            path=path,
            elapsed=time.monotonic() - started,
        )

    def _submit(self, executor: Executor, request: PathRequest) -> Future[Path]:
        try:
            return executor.submit(run_request, request)
        except Exception as exc:
            self._fall_back(f"executor refused request {request.request_id}: {exc}")
            raise OffloadUnavailableError(
                f"Executor refused path request {request.request_id}: {exc}"
            ) from exc

    def _fall_back(self, reason: str) -> None:
        """Switch to inline computation for every later call."""
        if self._executor is None:
            return
        logger.info("falling back to inline path computation: %s", reason)
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)
        self._executor = None
        self._owns_executor = False

    def shutdown(self) -> None:
        """Shut down an owned executor and discard pending requests.

        After shutdown, ``submit`` raises ``OffloadUnavailableError``.
        """
        self._shutdown = True
        if self._executor is not None and self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)
        self._executor = None
        self._pending.clear()
        self._ready.clear()
