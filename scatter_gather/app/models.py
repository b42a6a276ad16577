"""
Capability interfaces and DTO models for scatter/gather.
"""

from typing import Any, Awaitable, Optional, Protocol, Tuple

from pydantic import BaseModel, Field


class FactorSource(Protocol):
    """Source contributing one multiplicative factor."""

    def get_factor(self) -> float:
        ...


class KeyedSource(Protocol):
    """Source asynchronously producing one named value."""

    def fetch(self) -> Awaitable[Tuple[str, Any]]:
        ...


class UserDTO(BaseModel):
    """User part of a profile."""
    name: str = Field(..., description="Display name")
    email: Optional[str] = Field(None, description="Contact email")


class CompanyDTO(BaseModel):
    """Company part of a profile."""
    name: str = Field(..., description="Company name")
    registration_number: Optional[str] = Field(None, description="Trade register number")


class AddressDTO(BaseModel):
    """Address part of a profile."""
    street: str = Field(..., description="Street and number")
    city: str = Field(..., description="City")
    postal_code: str = Field(..., description="Postal code")
    country: str = Field("DE", description="ISO country code")


class ProfileDTO(BaseModel):
    """Profile assembled from independent sources."""
    user: UserDTO
    company: Optional[CompanyDTO] = None
    address: Optional[AddressDTO] = None
