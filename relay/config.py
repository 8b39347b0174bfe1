"""Configuration and shared state."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass, field

from dotenv import load_dotenv

from relay.domain.policy import DEFAULT_CURRENCY_EMOJI, DEFAULT_MIN_PIN_AMOUNT

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        _stderr_print(f"Invalid {name}={raw!r}, falling back to {default}")
        return default


CONFIG = {
    "host": os.getenv("HOST", "0.0.0.0"),
    # Donation relay (Discord)
    "donation_key": os.getenv("KEY", ""),
    "discord_token": os.getenv("TOKEN", ""),
    "discord_channel_id": os.getenv("CHANNEL_ID", ""),
    "donation_port": _int_env("PORT", 3000),
    "currency_emoji": os.getenv("CURRENCY_EMOJI", DEFAULT_CURRENCY_EMOJI),
    "min_pin_amount": _int_env("MIN_PIN_AMOUNT", DEFAULT_MIN_PIN_AMOUNT),
    # Rank relay (Roblox)
    "rank_token": os.getenv("API_AUTHORIZATION_TOKEN", ""),
    # Kept as the raw string; coerced per request like user and rank.
    "roblox_group_id": os.getenv("ROBLOX_GROUP_ID", ""),
    "roblox_cookie": os.getenv("ROBLOX_COOKIE", ""),
    "rank_port": _int_env("API_PORT", 3001),
}


# ── Typed config ────────────────────────────────────────────


@dataclass
class DonationConfig:
    authorization_key: str = ""
    discord_token: str = ""
    channel_id: str = ""
    currency_emoji: str = DEFAULT_CURRENCY_EMOJI
    min_pin_amount: int = DEFAULT_MIN_PIN_AMOUNT
    port: int = 3000

    @property
    def is_configured(self) -> bool:
        return bool(self.authorization_key and self.discord_token and self.channel_id)


@dataclass
class RankConfig:
    authorization_token: str = ""
    group_id: str = ""
    cookie: str = field(default="", repr=False)
    port: int = 3001

    @property
    def is_configured(self) -> bool:
        return bool(self.authorization_token and self.group_id and self.cookie)


@dataclass
class AppConfig:
    """Typed configuration for both relays."""

    host: str = "0.0.0.0"
    donation: DonationConfig = field(default_factory=DonationConfig)
    rank: RankConfig = field(default_factory=RankConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            host=CONFIG["host"],
            donation=DonationConfig(
                authorization_key=CONFIG["donation_key"],
                discord_token=CONFIG["discord_token"],
                channel_id=CONFIG["discord_channel_id"],
                currency_emoji=CONFIG["currency_emoji"],
                min_pin_amount=CONFIG["min_pin_amount"],
                port=CONFIG["donation_port"],
            ),
            rank=RankConfig(
                authorization_token=CONFIG["rank_token"],
                group_id=CONFIG["roblox_group_id"],
                cookie=CONFIG["roblox_cookie"],
                port=CONFIG["rank_port"],
            ),
        )
