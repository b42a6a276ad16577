"""
Sequential rule engines.

Both variants evaluate the registered rules synchronously and strictly in
registration order. Rule failures are logged and re-raised unchanged.
"""

import time
from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, Optional, TypeVar

from shared.logging import get_logger
from shared.metrics import MetricsCollector, get_metrics_collector
from shared.registry import UnitRegistry
from .models import PredicateRule, TransformRule

U = TypeVar("U")
T = TypeVar("T")
C = TypeVar("C")


def _unit_name(unit: Any) -> str:
    return getattr(unit, "name", type(unit).__name__)


class SequentialRuleEngine(UnitRegistry[U], ABC):
    """Registry of rules plus an ordered run policy."""

    engine_type = "sequential"

    def __init__(self, rules: Optional[Iterable[U]] = None, name: Optional[str] = None,
                 metrics: Optional[MetricsCollector] = None):
        super().__init__(rules)
        self.name = name or self.engine_type
        self.logger = get_logger(f"rule_chain.{self.engine_type}")
        self.metrics = metrics if metrics is not None else get_metrics_collector()

    def run(self, value: Any) -> Any:
        """Run the registered rules against ``value``."""
        rules = self.units
        start_time = time.perf_counter()

        with self.metrics.time_run(self.name):
            try:
                result, invoked = self._evaluate(rules, value)
            except Exception as e:
                self.logger.error("Rule failed", engine=self.name, rules=len(rules), error=str(e))
                raise

        self.metrics.record_units_invoked(self.name, invoked)
        self.logger.debug(
            "Rule chain evaluated",
            engine=self.name,
            rules=len(rules),
            invoked=invoked,
            duration_ms=(time.perf_counter() - start_time) * 1000
        )
        return result

    @abstractmethod
    def _evaluate(self, rules, value):
        """Return the run result and the number of rules invoked."""


class FoldRuleEngine(SequentialRuleEngine[TransformRule[T]], Generic[T]):
    """Threads an accumulator through every rule."""

    engine_type = "fold"

    def run(self, value: T) -> T:
        return super().run(value)

    def _evaluate(self, rules, value):
        accumulator = value
        for rule in rules:
            accumulator = rule.apply(accumulator)
        return accumulator, len(rules)


class PredicateRuleEngine(SequentialRuleEngine[PredicateRule[C]], Generic[C]):
    """Logical AND over the rules, stopping at the first rejection.

    An empty engine accepts every context.
    """

    engine_type = "predicate"

    def run(self, context: C) -> bool:
        return super().run(context)

    def _evaluate(self, rules, context):
        for index, rule in enumerate(rules):
            if not rule.check(context):
                self.logger.debug(
                    "Rule chain short-circuited", engine=self.name, index=index, rule=_unit_name(rule)
                )
                return False, index + 1
        return True, len(rules)
