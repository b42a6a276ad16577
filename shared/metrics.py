"""
Shared metrics for engine runs.
"""

from prometheus_client import Counter, Histogram, CollectorRegistry, REGISTRY
from typing import Dict, Any, Optional
import time
import threading
from contextlib import contextmanager


class MetricsCollector:
    """Prometheus metrics recorded by every engine run."""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else REGISTRY
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up engine metrics."""
        self._metrics["engine_runs_total"] = Counter(
            "engine_runs_total",
            "Total engine runs",
            ["engine", "outcome"],
            registry=self.registry
        )

        self._metrics["engine_run_duration_seconds"] = Histogram(
            "engine_run_duration_seconds",
            "Engine run duration in seconds",
            ["engine"],
            registry=self.registry
        )

        self._metrics["engine_units_invoked_total"] = Counter(
            "engine_units_invoked_total",
            "Total units invoked by engine runs",
            ["engine"],
            registry=self.registry
        )

    def record_run(self, engine: str, outcome: str, duration: float):
        """Record a finished run."""
        self._metrics["engine_runs_total"].labels(engine=engine, outcome=outcome).inc()
        self._metrics["engine_run_duration_seconds"].labels(engine=engine).observe(duration)

    def record_units_invoked(self, engine: str, count: int):
        """Record how many units a run invoked."""
        if count:
            self._metrics["engine_units_invoked_total"].labels(engine=engine).inc(count)

    @contextmanager
    def time_run(self, engine: str):
        """Context manager recording outcome and duration of a run."""
        start_time = time.perf_counter()
        outcome = "success"
        try:
            yield
        except Exception:
            outcome = "error"
            raise
        finally:
            self.record_run(engine, outcome, time.perf_counter() - start_time)


_default_collector: Optional[MetricsCollector] = None
_default_lock = threading.Lock()


def get_metrics_collector(registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector.

    Without a registry the process-wide collector on the default Prometheus
    registry is returned, since metric names can only be registered once.
    """
    global _default_collector

    if registry is not None:
        return MetricsCollector(registry)

    with _default_lock:
        if _default_collector is None:
            _default_collector = MetricsCollector()
        return _default_collector
