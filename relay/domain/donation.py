"""Donation relay — announce a donation in a Discord channel.

Pipeline: shared-secret check, payload validation, channel resolution, then
the ordered action sequence send -> react -> pin (when the amount reaches
the threshold). A message that was already sent stays sent when a later
step fails; the caller is told the whole operation failed.
"""

import random
import sys
from typing import Any, Optional

from relay.domain.auth import require_secret
from relay.domain.policy import (
    DEFAULT_CURRENCY_EMOJI,
    MIN_PIN_AMOUNT,
    choose_reaction,
    format_announcement,
    should_pin,
)
from relay.domain.results import (
    ActionResult,
    InvalidPayload,
    RelayOutcome,
    ResolutionFailure,
    Unauthorized,
)
from relay.domain.validation import DonationPayload, validate_donation
from relay.ports.outbound import ChannelHandle, ChatPlatformPort


def _log(msg: str):
    print(msg, file=sys.stderr)


class DonationRelay:
    """Relay A: POST /donation."""

    def __init__(
        self,
        chat: ChatPlatformPort,
        channel_id: str,
        secret: str,
        glyph: str = DEFAULT_CURRENCY_EMOJI,
        min_pin_amount: int = MIN_PIN_AMOUNT,
        rng: Optional[random.Random] = None,
    ):
        self._chat = chat
        self._channel_id = channel_id
        self._secret = secret
        self.glyph = glyph
        self.min_pin_amount = min_pin_amount
        self._rng = rng

    async def resolve_channel(self) -> ChannelHandle:
        """Resolve the configured channel or raise ResolutionFailure."""
        channel = await self._chat.resolve_channel(self._channel_id)
        if channel is None or not isinstance(channel, ChannelHandle):
            raise ResolutionFailure(f"channel {self._channel_id} not found or not text-based")
        return channel

    async def announce(self, channel: ChannelHandle, payload: DonationPayload) -> ActionResult:
        """Send the announcement, react, and pin large donations."""
        text = format_announcement(payload.username, payload.amount, self.glyph)
        try:
            message = await channel.send_text(text)
            await message.add_reaction(choose_reaction(self._rng))
            if should_pin(payload.amount, self.min_pin_amount):
                await message.pin()
        except Exception as e:
            _log(f"[donation] Failed to send message: {e}.")
            return ActionResult.fail(e)
        return ActionResult.ok()

    async def handle(self, auth_header: Optional[str], body: Any) -> RelayOutcome:
        try:
            require_secret(auth_header, self._secret)
            payload = validate_donation(body)
        except Unauthorized as e:
            return RelayOutcome.AUTH_MISSING if e.missing else RelayOutcome.AUTH_MISMATCH
        except InvalidPayload:
            return RelayOutcome.INVALID_PAYLOAD

        try:
            channel = await self.resolve_channel()
        except ResolutionFailure as e:
            _log(f"[donation] {e}")
            return RelayOutcome.CHANNEL_UNRESOLVED
        except Exception as e:
            _log(f"[donation] Failed to send message: {e}.")
            return RelayOutcome.EXTERNAL_FAILURE

        result = await self.announce(channel, payload)
        if result:
            _log(f"[donation] announced {payload.username} ({payload.amount})")
        return result.outcome
