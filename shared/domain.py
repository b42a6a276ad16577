"""
Pricing domain values shared by the rule chain and scatter/gather examples.
"""

from dataclasses import dataclass
from enum import Enum

from shared.errors import ValidationError


class UserType(str, Enum):
    """Customer segments."""
    B2B = "b2b"
    B2C = "b2c"


@dataclass(frozen=True)
class Customer:
    """Customer placing an order."""
    customer_id: str
    user_type: UserType = UserType.B2C
    is_partner: bool = False


@dataclass(frozen=True)
class Product:
    """Product with its list price."""
    sku: str
    name: str
    price: float


def validate_factor(name: str, factor: float) -> float:
    """Check that a price factor lies in (0, 1]."""
    if not 0.0 < factor <= 1.0:
        raise ValidationError(
            f"Factor '{name}' must be in (0, 1]",
            details={"factor": name, "value": factor}
        )
    return factor
