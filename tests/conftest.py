"""Shared fakes for the chat and economy platform ports."""

from unittest.mock import AsyncMock, MagicMock

import pytest


class FakeMessage:
    def __init__(self):
        self.add_reaction = AsyncMock()
        self.pin = AsyncMock()


class FakeChannel:
    def __init__(self):
        self.sent = []

    async def send_text(self, text):
        message = FakeMessage()
        self.sent.append((text, message))
        return message


@pytest.fixture
def channel():
    return FakeChannel()


@pytest.fixture
def chat(channel):
    port = MagicMock()
    port.resolve_channel = AsyncMock(return_value=channel)
    return port


@pytest.fixture
def economy():
    port = MagicMock()
    port.set_rank = AsyncMock(return_value=None)
    return port
