"""
Shared configuration management for the decoupling patterns.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PatternsConfig(BaseSettings):
    """Configuration for the engines and their bundled units.

    Every field can be overridden with a ``PATTERNS_`` prefixed environment
    variable or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="PATTERNS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")
    log_json: bool = Field(default=True)

    # Pricing
    b2b_ratio: float = Field(default=0.9)
    partner_discount: float = Field(default=0.8)
    special_offer_discount: float = Field(default=0.7)
    special_offer_weekday: int = Field(default=6, ge=0, le=6)  # Sunday

    # Authorization
    token_secret: str = Field(default="change-me")
    token_algorithm: str = Field(default="HS256")
    blocked_ips: List[str] = Field(default_factory=list)
    allowed_path_prefixes: List[str] = Field(default_factory=lambda: ["/"])

    # DTO sources
    source_delay_seconds: float = Field(default=0.0, ge=0.0)


def get_config(**overrides) -> PatternsConfig:
    """Build configuration from the environment plus explicit overrides."""
    return PatternsConfig(**overrides)
