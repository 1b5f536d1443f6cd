"""Tests for PathService backends, timeouts, fallback and superseding."""
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor

import pytest

from routeplot.types import (
    InvalidConfigError,
    InvalidModeError,
    OffloadError,
    OffloadTimeoutError,
    OffloadUnavailableError,
)
from routeplot_geometry import PathConfig, Waypoint, build_path
from routeplot_offload import OffloadConfig, PathService

WAYPOINTS = [Waypoint(0, 0), Waypoint(120, 30), Waypoint(60, 150), Waypoint(200, 180)]


class ManualExecutor(Executor):
    """Holds submitted jobs until the test runs them."""

    def __init__(self):
        self.jobs = []
        self.shutdown_called = False

    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        self.jobs.append((future, fn, args, kwargs))
        return future

    def run(self, index):
        future, fn, args, kwargs = self.jobs[index]
        future.set_result(fn(*args, **kwargs))

    def shutdown(self, wait=True, *, cancel_futures=False):
        self.shutdown_called = True


class StalledExecutor(ManualExecutor):
    """Accepts work and never finishes it."""


class RefusingExecutor(Executor):
    def submit(self, fn, /, *args, **kwargs):
        raise RuntimeError("cannot schedule new futures after shutdown")


class CrashingExecutor(Executor):
    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        future.set_exception(RuntimeError("worker died"))
        return future


class TestConfig:
    def test_defaults(self):
        config = OffloadConfig()
        assert config.timeout == 5.0
        assert config.max_workers == 1
        assert config.backend == "executor"

    def test_invalid(self):
        with pytest.raises(InvalidConfigError):
            OffloadConfig(timeout=0)
        with pytest.raises(InvalidConfigError):
            OffloadConfig(max_workers=0)
        with pytest.raises(InvalidModeError):
            OffloadConfig(backend="process")


class TestCompute:
    def test_inline_and_thread_pool_agree(self):
        """The execution venue never changes the result."""
        inline = PathService(OffloadConfig(backend="inline"))
        threaded = PathService()
        try:
            assert inline.backend == "inline"
            assert threaded.backend == "executor"
            expected = build_path(WAYPOINTS)
            assert inline.compute(WAYPOINTS) == expected
            assert threaded.compute(WAYPOINTS) == expected
        finally:
            threaded.shutdown()

    def test_external_executor(self):
        with ThreadPoolExecutor(max_workers=2) as pool:
            service = PathService(executor=pool)
            path = service.compute(WAYPOINTS, PathConfig(resampling="uniform"))
        assert path == build_path(WAYPOINTS, PathConfig(resampling="uniform"))

    def test_timeout_raises_and_falls_back(self):
        stalled = StalledExecutor()
        service = PathService(OffloadConfig(timeout=0.01), executor=stalled)
        with pytest.raises(OffloadTimeoutError) as exc_info:
            service.compute(WAYPOINTS)
        assert exc_info.value.request_id == 1
        assert exc_info.value.timeout == 0.01
        assert service.backend == "inline"
        assert stalled.shutdown_called is False
        assert stalled.jobs[0][0].cancelled()

        assert service.compute(WAYPOINTS) == build_path(WAYPOINTS)

    def test_refused_submission(self):
        service = PathService(executor=RefusingExecutor())
        with pytest.raises(OffloadUnavailableError):
            service.compute(WAYPOINTS)
        assert service.backend == "inline"
        assert service.compute(WAYPOINTS) == build_path(WAYPOINTS)

    def test_worker_failure(self):
        service = PathService(executor=CrashingExecutor())
        with pytest.raises(OffloadError) as exc_info:
            service.compute(WAYPOINTS)
        assert not isinstance(exc_info.value, OffloadTimeoutError)
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert service.backend == "inline"

    def test_fewer_than_two_waypoints(self):
        service = PathService(OffloadConfig(backend="inline"))
        assert service.compute([Waypoint(1, 1)]).is_empty


class TestSubmitHarvest:
    def test_inline_submit(self):
        service = PathService(OffloadConfig(backend="inline"))
        request_id = service.submit(WAYPOINTS)
        responses = service.harvest()
        assert len(responses) == 1
        assert responses[0].ok
        assert responses[0].request_id == request_id
        assert responses[0].backend == "inline"
        assert service.harvest() == []

    def test_executor_submit(self):
        pool = ManualExecutor()
        service = PathService(executor=pool)
        request_id = service.submit(WAYPOINTS)
        assert service.pending == 1
        assert service.harvest() == []

        pool.run(0)
        responses = service.harvest()
        assert [r.request_id for r in responses] == [request_id]
        assert responses[0].path == build_path(WAYPOINTS)
        assert responses[0].backend == "executor"
        assert service.pending == 0

    def test_newer_request_supersedes_older(self):
        """Only the newest request's response is delivered."""
        pool = ManualExecutor()
        service = PathService(executor=pool)
        first = service.submit(WAYPOINTS)
        second = service.submit(WAYPOINTS[:2])
        assert second > first
        assert service.latest_request_id == second

        pool.run(0)
        assert service.harvest() == []
        pool.run(1)
        responses = service.harvest()
        assert [r.request_id for r in responses] == [second]
        assert responses[0].path == build_path(WAYPOINTS[:2])

    def test_make_request_supersedes_pending_submit(self):
        """Taking a new id without submitting still retires older requests."""
        pool = ManualExecutor()
        service = PathService(executor=pool)
        service.submit(WAYPOINTS)
        service.make_request(WAYPOINTS[:1])
        pool.run(0)
        assert service.harvest() == []
        assert service.pending == 0

    def test_superseded_inline_responses_dropped(self):
        service = PathService(OffloadConfig(backend="inline"))
        service.submit(WAYPOINTS)
        latest = service.submit(WAYPOINTS[:3])
        assert [r.request_id for r in service.harvest()] == [latest]

    def test_waypoints_are_snapshotted(self):
        pool = ManualExecutor()
        service = PathService(executor=pool)
        waypoints = list(WAYPOINTS)
        service.submit(waypoints)
        waypoints.append(Waypoint(500, 500))
        request = pool.jobs[0][2][0]
        assert request.waypoints == tuple(WAYPOINTS)

    def test_harvest_expires_timed_out_request(self):
        stalled = StalledExecutor()
        service = PathService(OffloadConfig(timeout=0.01), executor=stalled)
        request_id = service.submit(WAYPOINTS)
        time.sleep(0.05)
        responses = service.harvest()
        assert len(responses) == 1
        assert responses[0].request_id == request_id
        assert isinstance(responses[0].error, OffloadTimeoutError)
        assert not responses[0].ok
        assert service.backend == "inline"
        assert service.pending == 0

        service.submit(WAYPOINTS)
        assert service.harvest()[0].ok

    def test_worker_failure_response(self):
        service = PathService(executor=CrashingExecutor())
        service.submit(WAYPOINTS)
        responses = service.harvest()
        assert isinstance(responses[0].error, OffloadError)
        assert service.backend == "inline"

    def test_refused_submit_response(self):
        service = PathService(executor=RefusingExecutor())
        service.submit(WAYPOINTS)
        responses = service.harvest()
        assert isinstance(responses[0].error, OffloadUnavailableError)

    def test_shutdown(self):
        service = PathService()
        service.shutdown()
        assert service.backend == "inline"
        with pytest.raises(OffloadUnavailableError):
            service.submit(WAYPOINTS)

    def test_owned_executor_shut_down_on_fallback(self):
        service = PathService()
        pool = service._executor
        service._fall_back("test")
        with pytest.raises(RuntimeError):
            pool.submit(print)
