"""
Shared utilities for the decoupling patterns.

This package aggregates common building blocks consumed by both engines:

- registry: Ordered unit registry with add/reset/set mutators
- config: Configuration via pydantic-settings
- logging: Structured logging with correlation context
- metrics: Prometheus metrics for engine runs
- errors: Error types and responses for bundled units
- domain: Pricing domain values

Do not import from rule_chain or scatter_gather into shared/.
"""
