"""
Asynchronous DTO sources and the profile assembler built on them.
"""

import asyncio
from typing import Any, Awaitable, Callable, Iterable, Optional, Tuple

from shared.config import get_config
from shared.errors import SourceError
from shared.logging import get_logger
from .aggregator import KeyedUnionAggregator
from .models import AddressDTO, CompanyDTO, ProfileDTO, UserDTO


def _resolve_delay(delay: Optional[float]) -> float:
    """Use the configured source latency unless one is given."""
    return delay if delay is not None else get_config().source_delay_seconds


class UserSource:
    """Produces the ``user`` entry."""

    name = "user"

    def __init__(self, name: str, email: Optional[str] = None, delay: Optional[float] = None):
        self.user = UserDTO(name=name, email=email)
        self.delay = _resolve_delay(delay)

    async def fetch(self) -> Tuple[str, UserDTO]:
        await asyncio.sleep(self.delay)
        return "user", self.user


class CompanySource:
    """Produces the ``company`` entry."""

    name = "company"

    def __init__(self, name: str, registration_number: Optional[str] = None, delay: Optional[float] = None):
        self.company = CompanyDTO(name=name, registration_number=registration_number)
        self.delay = _resolve_delay(delay)

    async def fetch(self) -> Tuple[str, CompanyDTO]:
        await asyncio.sleep(self.delay)
        return "company", self.company


class AddressSource:
    """Produces the ``address`` entry."""

    name = "address"

    def __init__(self, street: str, city: str, postal_code: str, country: str = "DE", delay: Optional[float] = None):
        self.address = AddressDTO(street=street, city=city, postal_code=postal_code, country=country)
        self.delay = _resolve_delay(delay)

    async def fetch(self) -> Tuple[str, AddressDTO]:
        await asyncio.sleep(self.delay)
        return "address", self.address


class CallableSource:
    """Adapts a coroutine function into a keyed source.

    Raises SourceError when the loader returns ``None``.
    """

    def __init__(self, key: str, loader: Callable[[], Awaitable[Any]], name: Optional[str] = None):
        self.key = key
        self.loader = loader
        self.name = name or key

    async def fetch(self) -> Tuple[str, Any]:
        value = await self.loader()
        if value is None:
            raise SourceError(self.name, "loader returned no value", details={"key": self.key})
        return self.key, value


class ProfileAssembler:
    """Builds a ProfileDTO from independent sources."""

    def __init__(self, sources: Iterable, aggregator: Optional[KeyedUnionAggregator] = None):
        self.logger = get_logger("scatter_gather.profile")
        self.aggregator = aggregator if aggregator is not None else KeyedUnionAggregator(name="profile")
        self.aggregator.set_units(sources)

    async def assemble(self) -> ProfileDTO:
        """Gather every source and validate the merged mapping."""
        merged = await self.aggregator.run()
        profile = ProfileDTO.model_validate(merged)
        self.logger.info("Profile assembled", parts=sorted(merged))
        return profile
