"""
Capability interfaces and contexts for the rule chain.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, TypeVar

T = TypeVar("T")
C_contra = TypeVar("C_contra", contravariant=True)


class TransformRule(Protocol[T]):
    """Rule that transforms an accumulated value."""

    def apply(self, value: T) -> T:
        ...


class PredicateRule(Protocol[C_contra]):
    """Rule that accepts or rejects a shared context."""

    def check(self, context: C_contra) -> bool:
        ...


@dataclass
class RequestContext:
    """Incoming request as seen by authorization checks."""
    ip: str
    path: str
    token: Optional[str] = None
    method: str = "GET"
