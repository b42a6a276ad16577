"""Rule chain engines and bundled rules."""

from .engine import FoldRuleEngine, PredicateRuleEngine, SequentialRuleEngine
from .models import PredicateRule, RequestContext, TransformRule

__all__ = [
    "FoldRuleEngine",
    "PredicateRule",
    "PredicateRuleEngine",
    "RequestContext",
    "SequentialRuleEngine",
    "TransformRule",
]
