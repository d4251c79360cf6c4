"""
Bearer token verification.

Tokens are issued elsewhere; this module only checks signature, expiry and,
when configured, issuer and audience of an incoming JWT.
"""

import logging
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from .config import Settings, load_settings
from .constants import BEARER_SCHEME

logger = logging.getLogger(__name__)


class TokenVerifier:
    """Validates JWT bearer tokens and returns their claims."""

    def __init__(self, secret: Optional[str], algorithm: str = "HS256",
                 issuer: Optional[str] = None, audience: Optional[str] = None):
        self.secret = secret
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenVerifier":
        return cls(
            settings.jwt_secret,
            settings.jwt_algorithm,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        )

    def verify_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Verify and decode a JWT, None when it is invalid or expired."""
        if not self.secret or not token:
            return None
        options = {
            'require_exp': True,
            'verify_aud': self.audience is not None,
        }
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options=options,
            )
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            return None


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the credential of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, credentials = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME.lower():
        return None
    credentials = credentials.strip()
    return credentials or None


_verifier = None


def get_token_verifier() -> TokenVerifier:
    """Return the process wide verifier, built from settings on first use."""
    global _verifier
    if _verifier is None:
        _verifier = TokenVerifier.from_settings(load_settings())
        logger.debug("Created token verifier (algorithm=%s)", _verifier.algorithm)
    return _verifier


def clear_verifier():
    """Clear the singleton (mainly for testing)."""
    global _verifier
    _verifier = None
    logger.debug("Cleared token verifier singleton")
