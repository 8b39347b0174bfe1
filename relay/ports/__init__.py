"""Port interfaces (Hexagonal Architecture)."""

from relay.ports.outbound import (
    ChannelHandle,
    ChatPlatformPort,
    EconomyPlatformPort,
    Identity,
    MessageHandle,
)

__all__ = [
    "ChannelHandle",
    "ChatPlatformPort",
    "EconomyPlatformPort",
    "Identity",
    "MessageHandle",
]
