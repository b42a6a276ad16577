"""
Scatter/gather package.

Parallel composition of independent sources:

- app.aggregator: ParallelAggregator with multiplicative and keyed union
  merge policies.
- app.models: Capability protocols and DTO models.
- app.pricing: Price factor sources.
- app.sources: Asynchronous DTO sources and the ProfileAssembler facade.

Sources never observe each other's results; the merged output is built
only after every source has finished.
"""
