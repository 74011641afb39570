"""
Performance tracking for a single chat turn.

Records named timing checkpoints through the pipeline and reports the
phase durations to analytics once the turn is done. Reporting is
fire-and-forget: the report is built inline, then delivered on a worker
thread so a slow or failing reporter never holds up or reaches the user.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

PIPELINE_START = "request_start"

# Checkpoint names recorded by the pipeline
CONTEXT_COMPLETE = "context_complete"
COMPOSITION_START = "composition_start"
COMPOSITION_COMPLETE = "composition_complete"
COMPLETION_START = "completion_start"
COMPLETION_COMPLETE = "completion_complete"
EXTRACTION_START = "extraction_start"
EXTRACTION_COMPLETE = "extraction_complete"

PERFORMANCE_EVENT = "edge_function_performance"

Reporter = Callable[[str, str, Dict[str, Any]], None]

# Shared by every tracker that is not handed its own executor
_REPORT_POOL = ThreadPoolExecutor(max_workers=2, thread_name_prefix="mano-report")


def _now_ms() -> float:
    return time.time() * 1000.0


class PerformanceTracker:
    """
    Timestamps pipeline phases for one request.

    Re-recording a checkpoint overwrites it, so retried phases report
    their last attempt.
    """

    def __init__(
        self,
        user_id: str = "anonymous",
        request_id: str = "",
        reporter: Optional[Reporter] = None,
        clock: Callable[[], float] = _now_ms,
        executor: Optional[Executor] = None,
    ):
        self.user_id = user_id
        self.request_id = request_id
        self.reporter = reporter
        self.executor = executor or _REPORT_POOL
        self.pending: Optional[Future] = None
        self._clock = clock
        self.start_time = clock()
        self.checkpoints: Dict[str, float] = {PIPELINE_START: self.start_time}

    def record(self, name: str) -> None:
        """Store the current time under a checkpoint name."""
        self.checkpoints[name] = self._clock()

    def duration(self, start: str, end: Optional[str] = None) -> float:
        """Milliseconds between two checkpoints (end defaults to now).

        Unknown checkpoints fall back to the pipeline start time.
        """
        from_time = self.checkpoints.get(start, self.start_time)
        if end is None:
            to_time = self._clock()
        else:
            to_time = self.checkpoints.get(end, self.start_time)
        return to_time - from_time

    def total_duration(self) -> float:
        return self._clock() - self.start_time

    def checkpoint_names(self) -> List[str]:
        return list(self.checkpoints.keys())

    def report(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Fixed phase durations, with caller extras merged last."""
        data: Dict[str, Any] = {
            "request_id": self.request_id,
            "total_duration_ms": self.total_duration(),
            "context_build_duration_ms": self.duration(PIPELINE_START, CONTEXT_COMPLETE),
            "composition_duration_ms": self.duration(COMPOSITION_START, COMPOSITION_COMPLETE),
            "completion_duration_ms": self.duration(COMPLETION_START, COMPLETION_COMPLETE),
            "extraction_duration_ms": self.duration(EXTRACTION_START, EXTRACTION_COMPLETE),
        }
        data.update(extra or {})
        return data

    def finish(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Build the report and queue it for the reporter, if any.

        Returns as soon as the report is built; delivery runs on the
        executor and can be awaited through ``pending``.
        """
        data = self.report(extra)
        if self.reporter is not None:
            try:
                self.pending = self.executor.submit(self._deliver, dict(data))
            except RuntimeError as e:
                # executor already shut down
                logger.warning(f"[Performance] Could not queue report for request {self.request_id}: {e}")
        return data

    def _deliver(self, data: Dict[str, Any]) -> None:
        try:
            self.reporter(self.user_id, PERFORMANCE_EVENT, data)
        except Exception as e:
            logger.warning(f"[Performance] Reporting failed for request {self.request_id}: {e}")
