"""Launcher — bring up platform sessions, then serve the relays.

Each relay's HTTP listener starts only after its platform client is ready:
the Discord client must report ready, and the Roblox cookie must resolve to
a user. A failure at this stage is fatal and nothing is served.
"""

import argparse
import asyncio
import sys
from typing import List, Optional, Tuple

import uvicorn

from relay.adapters.discord.client import DiscordChatAdapter, DonationBot
from relay.adapters.roblox.client import RobloxClient
from relay.adapters.web.server import create_app
from relay.config import AppConfig, DonationConfig, RankConfig
from relay.domain.donation import DonationRelay
from relay.domain.rank import RankRelay

MODES = ("donation", "rank", "all")


def _log(msg: str):
    print(msg, file=sys.stderr)


class StartupError(Exception):
    """A relay could not be brought up; the process must not serve."""


async def prepare_donation_relay(
    cfg: DonationConfig, bot: Optional[DonationBot] = None
) -> Tuple[DonationRelay, DonationBot, asyncio.Task]:
    """Log the Discord client in and wait for it to become ready."""
    if not cfg.is_configured:
        raise StartupError("Donation relay needs KEY, TOKEN and CHANNEL_ID")
    bot = bot or DonationBot()
    gateway = asyncio.create_task(bot.start(cfg.discord_token))
    ready = asyncio.create_task(bot.wait_until_ready())
    done, _ = await asyncio.wait({gateway, ready}, return_when=asyncio.FIRST_COMPLETED)
    if gateway in done:
        ready.cancel()
        error = gateway.exception() if not gateway.cancelled() else None
        if not bot.is_closed():
            await bot.close()
        raise StartupError(f"Discord login failed: {error or 'client closed before ready'}")
    if ready.cancelled() or ready.exception() is not None:
        error = ready.exception() if not ready.cancelled() else "cancelled"
        gateway.cancel()
        if not bot.is_closed():
            await bot.close()
        raise StartupError(f"Discord client never became ready: {error}")

    relay = DonationRelay(
        DiscordChatAdapter(bot),
        channel_id=cfg.channel_id,
        secret=cfg.authorization_key,
        glyph=cfg.currency_emoji,
        min_pin_amount=cfg.min_pin_amount,
    )
    return relay, bot, gateway


async def prepare_rank_relay(cfg: RankConfig, client: Optional[RobloxClient] = None) -> RankRelay:
    """Establish the Roblox session and confirm the current user."""
    if not cfg.is_configured:
        raise StartupError("Rank relay needs API_AUTHORIZATION_TOKEN, ROBLOX_GROUP_ID and ROBLOX_COOKIE")
    client = client or RobloxClient()
    try:
        await client.authenticate(cfg.cookie)
        identity = await client.get_current_identity()
    except Exception as e:
        raise StartupError(f"Roblox login failed: {e}") from e
    _log(f"Logged in as {identity.name}")
    return RankRelay(client, group_id=cfg.group_id, secret=cfg.authorization_token)


def _server(app, host: str, port: int) -> uvicorn.Server:
    return uvicorn.Server(uvicorn.Config(app, host=host, port=port, log_level="info"))


async def run(mode: str = "all", config: Optional[AppConfig] = None) -> None:
    config = config or AppConfig.from_env()
    servers: List[uvicorn.Server] = []
    background: List[asyncio.Task] = []
    bot: Optional[DonationBot] = None

    try:
        if mode in ("donation", "all"):
            donation_relay, bot, gateway = await prepare_donation_relay(config.donation)
            background.append(gateway)
            _log(f"{bot.user} ready and listening on port {config.donation.port}.")
            servers.append(_server(create_app(donation_relay=donation_relay), config.host, config.donation.port))

        if mode in ("rank", "all"):
            rank_relay = await prepare_rank_relay(config.rank)
            _log(f"Your application is listening on port {config.rank.port}")
            servers.append(_server(create_app(rank_relay=rank_relay), config.host, config.rank.port))

        await asyncio.gather(*(server.serve() for server in servers), *background)
    finally:
        if bot is not None and not bot.is_closed():
            await bot.close()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="relay", description="Donation and rank relay server")
    parser.add_argument("mode", nargs="?", choices=MODES, default="all", help="which relay(s) to serve")
    args = parser.parse_args(argv)
    try:
        asyncio.run(run(args.mode))
    except StartupError as e:
        _log(f"Startup failed: {e}")
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
