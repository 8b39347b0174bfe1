"""Payload validation for relay request bodies.

Presence is a JavaScript-style truthiness test: ``None``, ``""``, ``0``,
``False`` and NaN count as missing. Containers are always present, so an
empty ``[]`` or ``{}`` passes here even though Python would treat it as
falsy. A donation of exactly 0 is therefore rejected as a missing amount,
while a negative amount passes.
"""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict

from relay.domain.results import InvalidPayload


class DonationPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    username: Any = None
    amount: Any = None


class RankPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    user: Any = None
    rank: Any = None


def is_present(value: Any) -> bool:
    """Truthiness predicate used for every required field."""
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def _as_object(body: Any) -> dict:
    return body if isinstance(body, dict) else {}


def _missing(payload: BaseModel, names) -> list:
    return [name for name in names if not is_present(getattr(payload, name))]


def validate_donation(body: Any) -> DonationPayload:
    payload = DonationPayload.model_validate(_as_object(body))
    missing = _missing(payload, ("username", "amount"))
    if missing:
        raise InvalidPayload(missing)
    return payload


def validate_rank(body: Any) -> RankPayload:
    payload = RankPayload.model_validate(_as_object(body))
    missing = _missing(payload, ("user", "rank"))
    if missing:
        raise InvalidPayload(missing)
    return payload
