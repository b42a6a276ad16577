"""
Price factor sources for the multiplicative aggregator.
"""

from datetime import date
from typing import List, Optional

from shared.config import PatternsConfig, get_config
from shared.domain import Customer, UserType, validate_factor


class UserTypeFactor:
    """Reduced ratio for B2B customers."""

    name = "user_type"

    def __init__(self, customer: Customer, b2b_ratio: float = 0.9):
        self.customer = customer
        self.b2b_ratio = validate_factor("b2b_ratio", b2b_ratio)

    def get_factor(self) -> float:
        return self.b2b_ratio if self.customer.user_type == UserType.B2B else 1.0


class PartnerFactor:
    """Additional discount for partners."""

    name = "partner_discount"

    def __init__(self, customer: Customer, discount: float = 0.8):
        self.customer = customer
        self.discount = validate_factor("partner_discount", discount)

    def get_factor(self) -> float:
        return self.discount if self.customer.is_partner else 1.0


class SpecialOfferFactor:
    """Discount for orders placed on the special offer weekday."""

    name = "special_offer"

    def __init__(self, order_date: date, discount: float = 0.7, weekday: int = 6):
        self.order_date = order_date
        self.discount = validate_factor("special_offer_discount", discount)
        self.weekday = weekday

    def get_factor(self) -> float:
        return self.discount if self.order_date.weekday() == self.weekday else 1.0


def build_factor_sources(customer: Customer, order_date: date,
                         config: Optional[PatternsConfig] = None) -> List:
    """Build the factor sources for one order."""
    config = config or get_config()
    return [
        UserTypeFactor(customer, config.b2b_ratio),
        PartnerFactor(customer, config.partner_discount),
        SpecialOfferFactor(order_date, config.special_offer_discount, config.special_offer_weekday),
    ]
