"""Relay HTTP routes (donation announce / set rank)."""

from typing import Any, Dict

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from relay.domain.auth import DONATION_AUTH_HEADER, RANK_AUTH_HEADER
from relay.domain.responses import DONATION_RESPONSES, RANK_RESPONSES, ResponseSpec
from relay.domain.results import RelayOutcome

relay_router = APIRouter(tags=["Relay"])


def to_response(outcome: RelayOutcome, table: Dict[RelayOutcome, ResponseSpec]) -> Response:
    status, body = table[outcome]
    if body is None:
        return Response(status_code=status)
    return JSONResponse(status_code=status, content=body)


async def _read_json(request: Request) -> Any:
    """Parsed JSON body, or None when the body is empty or malformed."""
    try:
        return await request.json()
    except ValueError:
        return None


@relay_router.post("/donation")
async def donation(request: Request):
    relay = request.app.state.donation_relay
    if relay is None:
        return JSONResponse(status_code=503, content={"error": "Donation relay not configured."})
    outcome = await relay.handle(
        request.headers.get(DONATION_AUTH_HEADER),
        await _read_json(request),
    )
    return to_response(outcome, DONATION_RESPONSES)


@relay_router.post("/setrank/")
async def set_rank(request: Request):
    relay = request.app.state.rank_relay
    if relay is None:
        return Response(status_code=503)
    outcome = await relay.handle(
        request.headers.get(RANK_AUTH_HEADER),
        await _read_json(request),
    )
    return to_response(outcome, RANK_RESPONSES)


@relay_router.get("/health")
async def health(request: Request):
    state = request.app.state
    relays = [
        name
        for name, relay in (("donation", state.donation_relay), ("setrank", state.rank_relay))
        if relay is not None
    ]
    return {"status": "ok", "relays": relays}
