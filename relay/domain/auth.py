"""Shared-secret request authentication."""

import hmac
from enum import Enum
from typing import Optional

from relay.domain.results import Unauthorized

DONATION_AUTH_HEADER = "x-authorization-key"
RANK_AUTH_HEADER = "x-authorization-token"


class AuthOutcome(Enum):
    AUTHORIZED = "authorized"
    MISSING = "missing"
    MISMATCH = "mismatch"


def check_secret(supplied: Optional[str], expected: str) -> AuthOutcome:
    """Compare a caller-supplied secret against the configured one.

    Exact equality, checked in constant time.

    An absent or empty header is MISSING. An empty configured secret never
    authorizes, so an unset environment variable cannot open the endpoint.
    """
    if not supplied:
        return AuthOutcome.MISSING
    if not expected or not hmac.compare_digest(supplied.encode(), expected.encode()):
        return AuthOutcome.MISMATCH
    return AuthOutcome.AUTHORIZED


def require_secret(supplied: Optional[str], expected: str) -> None:
    """Raise Unauthorized unless *supplied* matches *expected*."""
    outcome = check_secret(supplied, expected)
    if outcome is not AuthOutcome.AUTHORIZED:
        raise Unauthorized(missing=outcome is AuthOutcome.MISSING)
