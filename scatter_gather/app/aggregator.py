"""
Scatter/gather aggregators.

Every registered source is invoked independently of the others and the
partial results are merged only once all of them are available. Source
failures are logged and re-raised unchanged.
"""

import asyncio
import itertools
import time
from concurrent.futures import Executor
from typing import Any, Dict, Iterable, List, Optional, Tuple, TypeVar

from shared.logging import get_logger
from shared.metrics import MetricsCollector, get_metrics_collector
from shared.registry import UnitRegistry
from .models import FactorSource, KeyedSource

U = TypeVar("U")


def _unit_name(unit: Any) -> str:
    return getattr(unit, "name", type(unit).__name__)


class ParallelAggregator(UnitRegistry[U]):
    """Registry of independent sources plus a merge policy."""

    engine_type = "parallel"

    def __init__(self, sources: Optional[Iterable[U]] = None, name: Optional[str] = None,
                 metrics: Optional[MetricsCollector] = None):
        super().__init__(sources)
        self.name = name or self.engine_type
        self.logger = get_logger(f"scatter_gather.{self.engine_type}")
        self.metrics = metrics if metrics is not None else get_metrics_collector()

    def _log_gathered(self, sources: Tuple[U, ...], start_time: float):
        self.metrics.record_units_invoked(self.name, len(sources))
        self.logger.debug(
            "Sources gathered",
            engine=self.name,
            sources=len(sources),
            duration_ms=(time.perf_counter() - start_time) * 1000
        )


class MultiplicativeAggregator(ParallelAggregator[FactorSource]):
    """Multiplies the input by the factor of every source.

    With an executor, every ``get_factor`` call is submitted before any
    result is collected. Factors are always multiplied in registration
    order, so the result does not depend on completion order.
    """

    engine_type = "multiplicative"

    def __init__(self, sources: Optional[Iterable[FactorSource]] = None, name: Optional[str] = None,
                 metrics: Optional[MetricsCollector] = None, executor: Optional[Executor] = None):
        super().__init__(sources, name=name, metrics=metrics)
        self.executor = executor

    def run(self, value: float) -> float:
        """Return ``value`` multiplied by every source factor."""
        sources = self.units
        start_time = time.perf_counter()

        with self.metrics.time_run(self.name):
            try:
                factors = self._scatter(sources)
            except Exception as e:
                self.logger.error("Source failed", engine=self.name, sources=len(sources), error=str(e))
                raise

        self._log_gathered(sources, start_time)

        result = value
        for factor in factors:
            result *= factor
        return result

    def _scatter(self, sources: Tuple[FactorSource, ...]) -> List[float]:
        if self.executor is None:
            return [source.get_factor() for source in sources]

        futures = [self.executor.submit(source.get_factor) for source in sources]
        return [future.result() for future in futures]


class KeyedUnionAggregator(ParallelAggregator[KeyedSource]):
    """Merges the ``(key, value)`` pairs of asynchronous sources.

    All fetches are scheduled as tasks before any of them is awaited.
    Pairs are merged in completion order, so if two sources emit the same
    key the later arrival wins. Such collisions are a caller error and are
    only reported as warnings.
    """

    engine_type = "keyed_union"

    async def run(self) -> Dict[str, Any]:
        """Fetch from every source concurrently and merge the results."""
        sources = self.units
        start_time = time.perf_counter()
        arrivals = itertools.count()

        with self.metrics.time_run(self.name):
            tasks = [asyncio.create_task(self._fetch(source, arrivals)) for source in sources]
            try:
                results = await asyncio.gather(*tasks)
            except Exception as e:
                self.logger.error("Source failed", engine=self.name, sources=len(sources), error=str(e))
                raise

        self._log_gathered(sources, start_time)
        return self._merge(results)

    async def _fetch(self, source: KeyedSource, arrivals) -> Tuple[int, str, Any, str]:
        key, value = await source.fetch()
        return next(arrivals), key, value, _unit_name(source)

    def _merge(self, results: List[Tuple[int, str, Any, str]]) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        owners: Dict[str, str] = {}

        for _, key, value, source_name in sorted(results, key=lambda r: r[0]):
            if key in merged:
                self.logger.warning(
                    "Duplicate key from sources",
                    engine=self.name,
                    key=key,
                    previous_source=owners[key],
                    source=source_name
                )
            merged[key] = value
            owners[key] = source_name

        return merged
