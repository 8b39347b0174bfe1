"""Donation & Rank Relay — authenticated HTTP relays into Discord and Roblox."""

from relay.config import CONFIG, AppConfig, DonationConfig, RankConfig, __version__
from relay.domain.donation import DonationRelay
from relay.domain.rank import RankRelay
from relay.domain.results import ActionResult, RelayOutcome
from relay.adapters.discord.client import DiscordChatAdapter, DonationBot
from relay.adapters.roblox.client import RobloxClient, RobloxError
from relay.adapters.web.server import create_app

__all__ = [
    "__version__",
    "CONFIG",
    "AppConfig",
    "DonationConfig",
    "RankConfig",
    "DonationRelay",
    "RankRelay",
    "ActionResult",
    "RelayOutcome",
    "DiscordChatAdapter",
    "DonationBot",
    "RobloxClient",
    "RobloxError",
    "create_app",
]
