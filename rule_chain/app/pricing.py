"""
Pricing rules for the rule chain.

Each rule multiplies the running price by its own factor, so the rules
commute and their registration order does not change the final price.
"""

from datetime import date
from typing import List, Optional

from shared.config import PatternsConfig, get_config
from shared.domain import Customer, Product, UserType, validate_factor
from shared.logging import get_logger
from .engine import FoldRuleEngine


class UserTypeRule:
    """B2B customers pay a reduced ratio of the price."""

    name = "user_type"

    def __init__(self, customer: Customer, b2b_ratio: float = 0.9):
        self.customer = customer
        self.b2b_ratio = validate_factor("b2b_ratio", b2b_ratio)

    def apply(self, price: float) -> float:
        if self.customer.user_type == UserType.B2B:
            return price * self.b2b_ratio
        return price


class PartnerDiscountRule:
    """Partners get an additional discount."""

    name = "partner_discount"

    def __init__(self, customer: Customer, discount: float = 0.8):
        self.customer = customer
        self.discount = validate_factor("partner_discount", discount)

    def apply(self, price: float) -> float:
        if self.customer.is_partner:
            return price * self.discount
        return price


class SpecialOfferRule:
    """Orders placed on the special offer weekday are discounted."""

    name = "special_offer"

    def __init__(self, order_date: date, discount: float = 0.7, weekday: int = 6):
        self.order_date = order_date
        self.discount = validate_factor("special_offer_discount", discount)
        self.weekday = weekday

    def apply(self, price: float) -> float:
        if self.order_date.weekday() == self.weekday:
            return price * self.discount
        return price


def build_pricing_rules(customer: Customer, order_date: date,
                        config: Optional[PatternsConfig] = None) -> List:
    """Build the pricing rules for one order."""
    config = config or get_config()
    return [
        UserTypeRule(customer, config.b2b_ratio),
        PartnerDiscountRule(customer, config.partner_discount),
        SpecialOfferRule(order_date, config.special_offer_discount, config.special_offer_weekday),
    ]


class PriceCalculator:
    """Computes the final price of a product for one order."""

    def __init__(self, customer: Customer, order_date: date,
                 config: Optional[PatternsConfig] = None, engine: Optional[FoldRuleEngine] = None):
        self.logger = get_logger("rule_chain.pricing")
        self.engine = engine if engine is not None else FoldRuleEngine(name="pricing")
        self.engine.set_units(build_pricing_rules(customer, order_date, config))
        self.customer = customer

    def calculate(self, product: Product) -> float:
        """Return the discounted price, rounded to cents."""
        price = round(self.engine.run(product.price), 2)
        self.logger.info(
            "Price calculated",
            sku=product.sku,
            customer_id=self.customer.customer_id,
            list_price=product.price,
            price=price
        )
        return price
