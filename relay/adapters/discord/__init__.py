"""Discord adapter package."""

from relay.adapters.discord.client import (
    DiscordChannelHandle,
    DiscordChatAdapter,
    DiscordMessageHandle,
    DonationBot,
)

__all__ = [
    "DiscordChannelHandle",
    "DiscordChatAdapter",
    "DiscordMessageHandle",
    "DonationBot",
]
