"""Outbound ports — interfaces for the external platform clients."""

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable


@dataclass
class Identity:
    """Account the economy-platform session is authenticated as."""

    user_id: int
    name: str
    display_name: str = ""


@runtime_checkable
class MessageHandle(Protocol):
    """A sent chat message."""

    async def add_reaction(self, emoji: str) -> None: ...
    async def pin(self) -> None: ...


@runtime_checkable
class ChannelHandle(Protocol):
    """A chat channel able to receive text."""

    async def send_text(self, text: str) -> MessageHandle: ...


@runtime_checkable
class ChatPlatformPort(Protocol):
    """Interface for the chat-platform client."""

    async def resolve_channel(self, channel_id: str) -> Optional[ChannelHandle]: ...


@runtime_checkable
class EconomyPlatformPort(Protocol):
    """Interface for the economy-platform client."""

    async def authenticate(self, cookie: str) -> Identity: ...
    async def get_current_identity(self) -> Identity: ...

    async def set_rank(
        self,
        group_id: Optional[int],
        user_id: Optional[int],
        rank_id: Optional[int],
    ) -> None: ...
