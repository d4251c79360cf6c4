"""
Request authorization gate.

Rules are evaluated in order and the first one matching both the request path
and method decides. Patterns are Ant style: ``/api/**`` matches ``/api`` and
everything below it, while a pattern without ``**`` must match exactly.
``None`` matches any path or method.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .constants import API_PREFIX, STATIC_PREFIX

logger = logging.getLogger(__name__)


class Decision(str, enum.Enum):
    ALLOW = "ALLOW"
    DENY = "DENY"


class Access(str, enum.Enum):
    PERMIT_ALL = "permit_all"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class AuthorizationRule:
    pattern: Optional[str]
    method: Optional[str]
    access: Access

    def matches(self, path: str, method: str) -> bool:
        if self.method is not None and self.method.upper() != (method or "").upper():
            return False
        if self.pattern is None:
            return True
        return path_matches(self.pattern, path)

    def decide(self, is_authenticated: bool) -> Decision:
        if self.access is Access.PERMIT_ALL or is_authenticated:
            return Decision.ALLOW
        return Decision.DENY


def path_matches(pattern: str, path: str) -> bool:
    """Match ``path`` against an Ant-style ``pattern`` ending in ``/**`` or a literal path."""
    if pattern in ("/**", "**"):
        return True
    if pattern.endswith("/**"):
        base = pattern[:-3]
        return path == base or path.startswith(base + "/")
    return path == pattern


DEFAULT_RULES = (
    AuthorizationRule(STATIC_PREFIX + "/**", None, Access.PERMIT_ALL),
    AuthorizationRule("/**", "OPTIONS", Access.PERMIT_ALL),
    AuthorizationRule(API_PREFIX + "/**", None, Access.AUTHENTICATED),
)


class AuthorizationGate:
    """First-match-wins evaluator over an ordered rule list."""

    def __init__(self, rules: Sequence[AuthorizationRule] = DEFAULT_RULES,
                 default: Access = Access.PERMIT_ALL):
        self.rules = tuple(rules)
        self.default = default

    def evaluate(self, path: str, method: str, is_authenticated: bool) -> Decision:
        for rule in self.rules:
            if rule.matches(path, method):
                decision = rule.decide(is_authenticated)
                logger.debug("%s %s matched %s -> %s", method, path, rule.pattern, decision.value)
                return decision
        if self.default is Access.PERMIT_ALL or is_authenticated:
            return Decision.ALLOW
        return Decision.DENY


_default_gate = AuthorizationGate()


def evaluate(path: str, method: str, is_authenticated: bool) -> Decision:
    """Evaluate the default rule set for a single request."""
    return _default_gate.evaluate(path, method, is_authenticated)
