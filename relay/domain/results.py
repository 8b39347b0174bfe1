"""Outcome values and error taxonomy shared by both relays."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class RelayError(Exception):
    """Base class for failures detected by a relay pipeline."""


class Unauthorized(RelayError):
    """Shared secret missing or wrong."""

    def __init__(self, missing: bool):
        super().__init__("authorization header missing" if missing else "authorization mismatch")
        self.missing = missing


class InvalidPayload(RelayError):
    """A required body field is missing or falsy."""

    def __init__(self, fields):
        self.fields = tuple(fields)
        super().__init__(f"missing field(s): {', '.join(self.fields)}")


class ResolutionFailure(RelayError):
    """Configured channel is absent or cannot receive text."""


class ExternalCallFailure(RelayError):
    """A platform client call raised."""


class RelayOutcome(Enum):
    SUCCESS = "success"
    AUTH_MISSING = "auth_missing"
    AUTH_MISMATCH = "auth_mismatch"
    INVALID_PAYLOAD = "invalid_payload"
    CHANNEL_UNRESOLVED = "channel_unresolved"
    EXTERNAL_FAILURE = "external_failure"


@dataclass(frozen=True)
class ActionResult:
    """Result of an external action sequence.

    Evaluates truthy on success. On failure *error* holds the
    ``ExternalCallFailure`` wrapping whatever the client raised.
    """

    success: bool
    error: Optional[ExternalCallFailure] = field(default=None, repr=False)

    @classmethod
    def ok(cls) -> "ActionResult":
        return cls(success=True)

    @classmethod
    def fail(cls, cause: BaseException) -> "ActionResult":
        error = ExternalCallFailure(str(cause))
        error.__cause__ = cause
        return cls(success=False, error=error)

    def __bool__(self) -> bool:
        return self.success

    @property
    def outcome(self) -> RelayOutcome:
        return RelayOutcome.SUCCESS if self.success else RelayOutcome.EXTERNAL_FAILURE
