"""Tests for domain/donation.py — the announce pipeline."""

import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from relay.domain.donation import DonationRelay
from relay.domain.policy import REACTION_EMOJIS
from relay.domain.results import RelayOutcome
from relay.domain.validation import DonationPayload

DONATION_KEY = "donation-secret"
CHANNEL_ID = "1364000000000000000"


def _relay(chat, **kwargs):
    return DonationRelay(chat, channel_id=CHANNEL_ID, secret=DONATION_KEY, glyph="<G>", **kwargs)


class TestAuthAndValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("header, expected", [
        (None, RelayOutcome.AUTH_MISSING),
        ("wrong", RelayOutcome.AUTH_MISMATCH),
    ])
    async def test_auth_failure_makes_no_calls(self, chat, header, expected):
        outcome = await _relay(chat).handle(header, {"username": "Alice", "amount": 10000})
        assert outcome is expected
        chat.resolve_channel.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {"username": "Alice", "amount": 0},
        {"username": "", "amount": 100},
        {"amount": 100},
        {"username": "Alice"},
        None,
    ])
    async def test_invalid_payload_sends_nothing(self, chat, channel, body):
        outcome = await _relay(chat).handle(DONATION_KEY, body)
        assert outcome is RelayOutcome.INVALID_PAYLOAD
        chat.resolve_channel.assert_not_called()
        assert channel.sent == []

    @pytest.mark.asyncio
    async def test_auth_checked_before_payload(self, chat):
        outcome = await _relay(chat).handle("wrong", {})
        assert outcome is RelayOutcome.AUTH_MISMATCH


class TestChannelResolution:
    @pytest.mark.asyncio
    async def test_channel_not_found(self, chat):
        chat.resolve_channel = AsyncMock(return_value=None)
        outcome = await _relay(chat).handle(DONATION_KEY, {"username": "Alice", "amount": 1})
        assert outcome is RelayOutcome.CHANNEL_UNRESOLVED
        chat.resolve_channel.assert_awaited_once_with(CHANNEL_ID)

    @pytest.mark.asyncio
    async def test_channel_without_text_capability(self, chat):
        chat.resolve_channel = AsyncMock(return_value=object())
        outcome = await _relay(chat).handle(DONATION_KEY, {"username": "Alice", "amount": 1})
        assert outcome is RelayOutcome.CHANNEL_UNRESOLVED

    @pytest.mark.asyncio
    async def test_resolution_error_is_external_failure(self, chat):
        chat.resolve_channel = AsyncMock(side_effect=RuntimeError("gateway down"))
        outcome = await _relay(chat).handle(DONATION_KEY, {"username": "Alice", "amount": 1})
        assert outcome is RelayOutcome.EXTERNAL_FAILURE

    @pytest.mark.asyncio
    async def test_resolved_per_request(self, chat):
        relay = _relay(chat)
        await relay.handle(DONATION_KEY, {"username": "A", "amount": 1})
        await relay.handle(DONATION_KEY, {"username": "B", "amount": 1})
        assert chat.resolve_channel.await_count == 2


class TestAnnounceSequence:
    @pytest.mark.asyncio
    async def test_large_donation_sends_reacts_and_pins(self, chat, channel):
        outcome = await _relay(chat).handle(DONATION_KEY, {"username": "Alice", "amount": 10000})
        assert outcome is RelayOutcome.SUCCESS
        assert len(channel.sent) == 1
        text, message = channel.sent[0]
        assert text == "Alice has donated <G> **10000**"
        message.add_reaction.assert_awaited_once()
        assert message.add_reaction.await_args.args[0] in REACTION_EMOJIS
        message.pin.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_pin_at_exact_threshold(self, chat, channel):
        await _relay(chat).handle(DONATION_KEY, {"username": "A", "amount": 5000})
        channel.sent[0][1].pin.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_pin_below_threshold(self, chat, channel):
        await _relay(chat).handle(DONATION_KEY, {"username": "A", "amount": 4999})
        message = channel.sent[0][1]
        message.add_reaction.assert_awaited_once()
        message.pin.assert_not_called()

    @pytest.mark.asyncio
    async def test_custom_threshold(self, chat, channel):
        await _relay(chat, min_pin_amount=100).handle(DONATION_KEY, {"username": "A", "amount": 100})
        channel.sent[0][1].pin.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_seeded_rng_picks_reaction(self, chat, channel):
        rng = random.Random(0)
        expected = REACTION_EMOJIS[random.Random(0).randrange(2)]
        await _relay(chat, rng=rng).handle(DONATION_KEY, {"username": "A", "amount": 1})
        channel.sent[0][1].add_reaction.assert_awaited_once_with(expected)

    @pytest.mark.asyncio
    async def test_repeated_payload_sends_two_messages(self, chat, channel):
        relay = _relay(chat)
        body = {"username": "Alice", "amount": 10}
        assert await relay.handle(DONATION_KEY, body) is RelayOutcome.SUCCESS
        assert await relay.handle(DONATION_KEY, body) is RelayOutcome.SUCCESS
        assert len(channel.sent) == 2
        assert channel.sent[0][1] is not channel.sent[1][1]


class TestPartialFailure:
    @pytest.mark.asyncio
    async def test_send_failure(self, chat):
        broken = MagicMock()
        broken.send_text = AsyncMock(side_effect=RuntimeError("403 Missing Access"))
        chat.resolve_channel = AsyncMock(return_value=broken)
        outcome = await _relay(chat).handle(DONATION_KEY, {"username": "A", "amount": 1})
        assert outcome is RelayOutcome.EXTERNAL_FAILURE

    @pytest.mark.asyncio
    async def test_reaction_failure_after_send(self, chat, channel):
        original_send = channel.send_text

        async def send_then_break(text):
            message = await original_send(text)
            message.add_reaction.side_effect = RuntimeError("Unknown Emoji")
            return message

        channel.send_text = send_then_break
        chat.resolve_channel = AsyncMock(return_value=channel)
        outcome = await _relay(chat).handle(DONATION_KEY, {"username": "A", "amount": 9000})
        assert outcome is RelayOutcome.EXTERNAL_FAILURE
        # The message stays sent; the pin step is never reached.
        assert len(channel.sent) == 1
        channel.sent[0][1].pin.assert_not_called()

    @pytest.mark.asyncio
    async def test_pin_failure_after_react(self, chat, channel):
        original_send = channel.send_text

        async def send_then_break(text):
            message = await original_send(text)
            message.pin.side_effect = RuntimeError("Maximum pins reached")
            return message

        channel.send_text = send_then_break
        chat.resolve_channel = AsyncMock(return_value=channel)
        outcome = await _relay(chat).handle(DONATION_KEY, {"username": "A", "amount": 9000})
        assert outcome is RelayOutcome.EXTERNAL_FAILURE
        channel.sent[0][1].add_reaction.assert_awaited_once()


class TestAnnounce:
    @pytest.mark.asyncio
    async def test_result_carries_error(self):
        broken = MagicMock()
        broken.send_text = AsyncMock(side_effect=ValueError("boom"))
        relay = _relay(MagicMock())
        result = await relay.announce(broken, DonationPayload(username="A", amount=1))
        assert not result
        assert isinstance(result.error.__cause__, ValueError)

    @pytest.mark.asyncio
    async def test_result_ok(self, channel):
        relay = _relay(MagicMock())
        result = await relay.announce(channel, DonationPayload(username="A", amount=1))
        assert result
        assert result.outcome is RelayOutcome.SUCCESS
