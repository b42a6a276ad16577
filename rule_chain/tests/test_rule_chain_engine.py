"""
Unit tests for the sequential rule engines.
"""

import itertools

import pytest
from unittest.mock import MagicMock
from prometheus_client import CollectorRegistry

from rule_chain.app.engine import FoldRuleEngine, PredicateRuleEngine, SequentialRuleEngine
from shared.metrics import MetricsCollector


class Multiply:
    def __init__(self, factor):
        self.factor = factor

    def apply(self, value):
        return value * self.factor


class Add:
    def __init__(self, amount):
        self.amount = amount

    def apply(self, value):
        return value + self.amount


class Failing:
    def __init__(self, error):
        self.error = error

    def apply(self, value):
        raise self.error


def predicate(result):
    """Create a spy predicate rule returning ``result``."""
    rule = MagicMock(spec=["check"])
    rule.check.return_value = result
    return rule


class TestSequentialRuleEngine:
    """Test cases for the engine base class."""

    def test_base_engine_is_abstract(self):
        """Test that an engine without run policy cannot be created."""
        with pytest.raises(TypeError):
            SequentialRuleEngine()

    def test_policy_subclass(self):
        """Test that a subclass only has to supply the evaluation policy."""
        class CountingEngine(SequentialRuleEngine):
            engine_type = "counting"

            def _evaluate(self, rules, value):
                return value + len(rules), len(rules)

        engine = CountingEngine([Add(1), Add(2)], metrics=MetricsCollector(CollectorRegistry()))

        assert engine.name == "counting"
        assert engine.run(10) == 12


class TestFoldRuleEngine:
    """Test cases for FoldRuleEngine."""

    @pytest.fixture
    def registry(self):
        """Create a private Prometheus registry."""
        return CollectorRegistry()

    @pytest.fixture
    def engine(self, registry):
        """Create FoldRuleEngine instance."""
        return FoldRuleEngine(metrics=MetricsCollector(registry))

    def test_empty_engine_returns_input(self, engine):
        """Test that an engine without rules returns its input."""
        assert engine.run(42) == 42

    def test_threads_value_in_registration_order(self, engine):
        """Test that each rule receives the previous rule's output."""
        engine.add_units([Add(10), Multiply(2)])

        assert engine.run(1) == 22

        engine.set_units([Multiply(2), Add(10)])

        assert engine.run(1) == 12

    def test_commuting_rules_are_order_independent(self, engine):
        """Test that every permutation of multiplicative rules gives the same result."""
        rules = [Multiply(0.9), Multiply(0.8), Multiply(0.7)]

        for permutation in itertools.permutations(rules):
            engine.set_units(permutation)
            assert engine.run(100) == pytest.approx(50.4)

    def test_run_does_not_mutate_registry(self, engine):
        """Test that runs can be repeated against the same rules."""
        rules = [Multiply(2), Add(1)]
        engine.add_units(rules)

        assert engine.run(1) == 3
        assert engine.run(5) == 11
        assert engine.units == tuple(rules)

    def test_rule_failure_propagates_unchanged(self, engine, registry):
        """Test that a rule exception reaches the caller as-is."""
        error = ValueError("broken rule")
        engine.add_units([Multiply(2), Failing(error)])

        with pytest.raises(ValueError) as exc_info:
            engine.run(1)

        assert exc_info.value is error
        assert registry.get_sample_value(
            "engine_runs_total", {"engine": "fold", "outcome": "error"}
        ) == 1.0

    def test_records_run_metrics(self, engine, registry):
        """Test that successful runs are counted."""
        engine.add_units([Multiply(2), Multiply(3)])

        engine.run(1)
        engine.run(2)

        assert registry.get_sample_value(
            "engine_runs_total", {"engine": "fold", "outcome": "success"}
        ) == 2.0
        assert registry.get_sample_value(
            "engine_units_invoked_total", {"engine": "fold"}
        ) == 4.0

    def test_named_engine_labels_metrics(self, registry):
        """Test that the engine name is used as metrics label."""
        engine = FoldRuleEngine([Multiply(2)], name="pricing", metrics=MetricsCollector(registry))

        assert engine.run(4) == 8
        assert registry.get_sample_value(
            "engine_runs_total", {"engine": "pricing", "outcome": "success"}
        ) == 1.0


class TestPredicateRuleEngine:
    """Test cases for PredicateRuleEngine."""

    @pytest.fixture
    def registry(self):
        """Create a private Prometheus registry."""
        return CollectorRegistry()

    @pytest.fixture
    def engine(self, registry):
        """Create PredicateRuleEngine instance."""
        return PredicateRuleEngine(metrics=MetricsCollector(registry))

    def test_empty_engine_is_vacuously_true(self, engine):
        """Test that an engine without rules accepts any context."""
        assert engine.run({"anything": True}) is True
        assert engine.run(None) is True

    def test_all_rules_pass(self, engine):
        """Test that every rule is consulted once when all accept."""
        rules = [predicate(True), predicate(True), predicate(True)]
        engine.add_units(rules)
        context = object()

        assert engine.run(context) is True
        for rule in rules:
            rule.check.assert_called_once_with(context)

    def test_short_circuits_on_first_rejection(self, engine, registry):
        """Test that rules after the first rejection are never invoked."""
        first, second, third = predicate(True), predicate(False), predicate(True)
        engine.add_units([first, second, third])

        assert engine.run("ctx") is False
        first.check.assert_called_once_with("ctx")
        second.check.assert_called_once_with("ctx")
        third.check.assert_not_called()
        assert registry.get_sample_value(
            "engine_units_invoked_total", {"engine": "predicate"}
        ) == 2.0

    def test_first_rule_rejecting_skips_all_others(self, engine):
        """Test short-circuit at the head of the chain."""
        rules = [predicate(False), predicate(True)]
        engine.add_units(rules)

        assert engine.run("ctx") is False
        rules[1].check.assert_not_called()

    def test_falsy_results_reject(self, engine):
        """Test that falsy check results are treated as rejection."""
        engine.add_units([predicate(0)])

        assert engine.run("ctx") is False

    def test_rule_failure_propagates(self, engine):
        """Test that a failing check aborts the run with its own exception."""
        failing = MagicMock(spec=["check"])
        failing.check.side_effect = RuntimeError("check crashed")
        later = predicate(True)
        engine.add_units([failing, later])

        with pytest.raises(RuntimeError, match="check crashed"):
            engine.run("ctx")
        later.check.assert_not_called()

    def test_runs_are_independent(self, engine):
        """Test that one rejection does not affect later runs."""
        rule = MagicMock(spec=["check"])
        rule.check.side_effect = [False, True]
        engine.add_units([rule])

        assert engine.run("first") is False
        assert engine.run("second") is True
