"""
Unit registry shared by the rule chain and scatter/gather engines.
"""

from typing import Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from shared.logging import get_logger

U = TypeVar("U")


class UnitRegistry(Generic[U]):
    """Ordered collection of pluggable units.

    Units are held by reference and never inspected or mutated. Mutators
    return ``self`` so calls can be chained.
    """

    def __init__(self, units: Optional[Iterable[U]] = None):
        self.logger = get_logger("shared.registry")
        self._units: List[U] = list(units) if units is not None else []

    def add_units(self, units: Iterable[U]) -> "UnitRegistry[U]":
        """Append units, preserving call order."""
        added = list(units)
        self._units.extend(added)
        self.logger.debug("Units added", added=len(added), total=len(self._units))
        return self

    def reset_units(self) -> "UnitRegistry[U]":
        """Remove every registered unit."""
        self._units = []
        self.logger.debug("Units reset")
        return self

    def set_units(self, units: Iterable[U]) -> "UnitRegistry[U]":
        """Replace the registered units in one step."""
        # Materialize first so a failing iterable leaves the old contents intact
        replacement = list(units)
        self._units = replacement
        self.logger.debug("Units replaced", total=len(replacement))
        return self

    @property
    def units(self) -> Tuple[U, ...]:
        """Snapshot of the registered units."""
        return tuple(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self) -> Iterator[U]:
        return iter(self.units)
