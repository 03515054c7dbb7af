"""
Request monitoring for OKChain client.

Records the latency and outcome of every node round trip, keyed by
RPC method and query path.
"""

import time
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class RequestMetrics:
    """Metrics for a single node round trip."""
    method: str
    path: str
    succeeded: bool
    duration_ms: float
    timestamp: float
    error_type: Optional[str] = None


@dataclass
class Statistics:
    """Aggregate statistics across all round trips."""
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_duration_ms: float = 0.0
    avg_duration_ms: float = 0.0
    min_duration_ms: float = float("inf")
    max_duration_ms: float = 0.0

    def update(self, metrics: RequestMetrics) -> None:
        """Fold one round trip into the totals."""
        self.total_requests += 1
        self.total_duration_ms += metrics.duration_ms
        self.avg_duration_ms = self.total_duration_ms / self.total_requests
        self.min_duration_ms = min(self.min_duration_ms, metrics.duration_ms)
        self.max_duration_ms = max(self.max_duration_ms, metrics.duration_ms)

        if metrics.succeeded:
            self.successful_requests += 1
        else:
            self.failed_requests += 1


class PerformanceMonitor:
    """Tracks round-trip metrics per query path."""

    def __init__(self, max_history: int = 1000):
        self._max_history = max_history
        self._statistics = Statistics()
        self._request_history: deque[RequestMetrics] = deque(maxlen=max_history)
        self._path_stats: Dict[str, deque] = defaultdict(lambda: deque(maxlen=max_history))

    def record_request(
        self,
        method: str,
        path: str,
        duration_ms: float,
        error: Optional[BaseException] = None,
    ) -> None:
        """Record a completed round trip; ``error`` is set when it failed."""
        metrics = RequestMetrics(
            method=method,
            path=path,
            succeeded=error is None,
            duration_ms=duration_ms,
            timestamp=time.time(),
            error_type=type(error).__name__ if error is not None else None,
        )

        self._statistics.update(metrics)
        self._request_history.append(metrics)
        self._path_stats[f"{method} {path}"].append(metrics)

    @property
    def statistics(self) -> Statistics:
        return self._statistics

    def get_path_stats(self, method: str, path: str) -> Dict[str, float]:
        """Get statistics for one RPC method and path."""
        requests = self._path_stats.get(f"{method} {path}")

        if not requests:
            return {
                "count": 0,
                "avg_duration_ms": 0.0,
                "success_rate": 0.0,
            }

        durations = [r.duration_ms for r in requests]
        successful = sum(1 for r in requests if r.succeeded)

        return {
            "count": len(requests),
            "avg_duration_ms": sum(durations) / len(durations),
            "success_rate": successful / len(requests),
        }

    def get_recent_requests(self, count: int = 10) -> List[RequestMetrics]:
        """Get most recent round trips."""
        return list(self._request_history)[-count:]

    def reset(self) -> None:
        """Reset all statistics and history."""
        self._statistics = Statistics()
        self._request_history.clear()
        self._path_stats.clear()
