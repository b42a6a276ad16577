"""Scatter/gather aggregators and bundled sources."""

from .aggregator import KeyedUnionAggregator, MultiplicativeAggregator, ParallelAggregator
from .models import FactorSource, KeyedSource

__all__ = [
    "FactorSource",
    "KeyedSource",
    "KeyedUnionAggregator",
    "MultiplicativeAggregator",
    "ParallelAggregator",
]
