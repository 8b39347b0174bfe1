"""FastAPI application factory."""

from typing import Optional

from fastapi import FastAPI

from relay.adapters.web.routes import relay_router
from relay.config import __version__
from relay.domain.donation import DonationRelay
from relay.domain.rank import RankRelay


def create_app(
    donation_relay: Optional[DonationRelay] = None,
    rank_relay: Optional[RankRelay] = None,
) -> FastAPI:
    """Build an app serving whichever relays are supplied.

    The relays are stored on ``app.state`` and read by the route handlers;
    an absent relay answers 503.
    """
    app = FastAPI(title="Donation & Rank Relay", version=__version__)
    app.state.donation_relay = donation_relay
    app.state.rank_relay = rank_relay
    app.include_router(relay_router)
    return app
