"""
Test helper functions and factory methods for the decoupling patterns.
"""

from typing import Any, Dict, List, Optional
from datetime import date, datetime, timedelta, timezone
import jwt

from shared.domain import Customer, Product, UserType

TEST_TOKEN_SECRET = "test-secret-that-is-long-enough-for-hs256"


class TestDataFactory:
    """Factory for creating test data."""

    @staticmethod
    def create_customers() -> Dict[str, Customer]:
        """Create one customer per pricing segment."""
        return {
            "b2c": Customer(customer_id="cust-1", user_type=UserType.B2C),
            "b2b": Customer(customer_id="cust-2", user_type=UserType.B2B),
            "b2b_partner": Customer(customer_id="cust-3", user_type=UserType.B2B, is_partner=True),
        }

    @staticmethod
    def create_product(price: float = 100.0) -> Product:
        """Create a product with the given price."""
        return Product(sku="sku-1", name="Test Product", price=price)

    @staticmethod
    def create_order_dates() -> Dict[str, date]:
        """Create a weekday and a Sunday order date."""
        return {
            "weekday": date(2024, 6, 5),  # Wednesday
            "sunday": date(2024, 6, 9),
        }


class MockTokenGenerator:
    """Generate mock JWT tokens for testing."""

    def __init__(self, secret: str = TEST_TOKEN_SECRET, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def generate_access_token(self, user_id: str = "user-1", roles: Optional[List[str]] = None,
                              expires_in: int = 3600) -> str:
        """Generate access token for a user."""
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
            "roles": roles or ["user"],
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def generate_expired_token(self, user_id: str = "user-1") -> str:
        """Generate an access token that expired an hour ago."""
        return self.generate_access_token(user_id, expires_in=-3600)


# Global instances for easy access
test_data_factory = TestDataFactory()
mock_token_generator = MockTokenGenerator()
