"""
Request authorization checks for the rule chain.
"""

from typing import Iterable, List, Optional, Sequence

import jwt

from shared.config import PatternsConfig, get_config
from shared.errors import AuthorizationError
from shared.logging import get_logger
from .engine import PredicateRuleEngine
from .models import RequestContext


class TokenCheck:
    """Accepts requests carrying a valid signed JWT."""

    name = "token"

    def __init__(self, secret: str, algorithms: Sequence[str] = ("HS256",)):
        self.secret = secret
        self.algorithms = list(algorithms)
        self.logger = get_logger("rule_chain.authorization.token")

    def check(self, context: RequestContext) -> bool:
        if not context.token:
            return False

        try:
            jwt.decode(
                context.token,
                self.secret,
                algorithms=self.algorithms,
                options={"require": ["exp", "sub"]}
            )
        except jwt.InvalidTokenError as e:
            self.logger.info("Token rejected", path=context.path, error=str(e))
            return False

        return True


class IpBlocker:
    """Rejects requests from blocked addresses."""

    name = "ip_blocker"

    def __init__(self, blocked_ips: Iterable[str]):
        self.blocked_ips = frozenset(blocked_ips)

    def check(self, context: RequestContext) -> bool:
        return context.ip not in self.blocked_ips


class PathCheck:
    """Accepts only requests under an allowed path prefix."""

    name = "path"

    def __init__(self, allowed_prefixes: Iterable[str]):
        self.allowed_prefixes = tuple(allowed_prefixes)

    def check(self, context: RequestContext) -> bool:
        return context.path.startswith(self.allowed_prefixes)


def build_authorization_checks(config: Optional[PatternsConfig] = None) -> List:
    """Build the default checks: token, then IP, then path."""
    config = config or get_config()
    return [
        TokenCheck(config.token_secret, algorithms=[config.token_algorithm]),
        IpBlocker(config.blocked_ips),
        PathCheck(config.allowed_path_prefixes),
    ]


class RequestAuthorizer:
    """Authorizes requests against a chain of checks."""

    def __init__(self, checks: Optional[Iterable] = None, config: Optional[PatternsConfig] = None,
                 engine: Optional[PredicateRuleEngine] = None):
        self.logger = get_logger("rule_chain.authorization")
        self.engine = engine if engine is not None else PredicateRuleEngine(name="authorization")
        if checks is None:
            checks = build_authorization_checks(config)
        self.engine.set_units(checks)

    def is_allowed(self, context: RequestContext) -> bool:
        """Return whether every check accepts the request."""
        return self.engine.run(context)

    def authorize(self, context: RequestContext) -> None:
        """Raise AuthorizationError unless every check accepts the request."""
        if not self.is_allowed(context):
            self.logger.warning("Request denied", ip=context.ip, path=context.path, method=context.method)
            raise AuthorizationError(
                "Request denied",
                details={"ip": context.ip, "path": context.path, "method": context.method}
            )
