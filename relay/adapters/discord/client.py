"""Discord adapter — ChatPlatformPort backed by discord.Client.

Only the calls the donation relay needs are exposed: resolve a channel,
send text to it, react to and pin the sent message.
"""

import sys
from typing import Optional

import discord

from relay.ports.outbound import ChannelHandle, MessageHandle


def _log(msg: str):
    print(msg, file=sys.stderr)


class DonationBot(discord.Client):
    """Minimal gateway client: guild and guild-message intents only."""

    def __init__(self, **discord_kwargs):
        intents = discord.Intents.none()
        intents.guilds = True
        intents.guild_messages = True
        super().__init__(intents=intents, **discord_kwargs)

    async def on_ready(self):
        _log(f"[discord] logged in as {self.user}")


class DiscordMessageHandle:
    """MessageHandle wrapping a sent discord.Message."""

    def __init__(self, message: discord.Message):
        self._message = message

    @property
    def id(self) -> int:
        return self._message.id

    async def add_reaction(self, emoji: str) -> None:
        await self._message.add_reaction(emoji)

    async def pin(self) -> None:
        await self._message.pin()


class DiscordChannelHandle:
    """ChannelHandle wrapping any text-capable Discord channel."""

    def __init__(self, channel: discord.abc.Messageable):
        self._channel = channel

    async def send_text(self, text: str) -> MessageHandle:
        message = await self._channel.send(text)
        return DiscordMessageHandle(message)


class DiscordChatAdapter:
    """ChatPlatformPort implementation using discord.Client.

    Channels are fetched from the API on every call rather than read from
    the gateway cache.
    """

    def __init__(self, client: discord.Client):
        self._client = client

    async def resolve_channel(self, channel_id: str) -> Optional[ChannelHandle]:
        try:
            channel = await self._client.fetch_channel(int(channel_id))
        except discord.NotFound:
            return None
        if not isinstance(channel, discord.abc.Messageable):
            _log(f"[discord] channel {channel_id} is not text-based ({type(channel).__name__})")
            return None
        return DiscordChannelHandle(channel)
