"""Rank relay — set a user's rank in the configured Roblox group."""

import sys
from typing import Any, Optional

from relay.domain.auth import require_secret
from relay.domain.policy import RankMutationRequest, build_rank_mutation
from relay.domain.results import ActionResult, InvalidPayload, RelayOutcome, Unauthorized
from relay.domain.validation import validate_rank
from relay.ports.outbound import EconomyPlatformPort


def _log(msg: str):
    print(msg, file=sys.stderr)


class RankRelay:
    """Relay B: POST /setrank/.

    Identifiers are coerced without validation; a non-numeric value reaches
    the platform client as ``None`` and its rejection becomes a 500.
    """

    def __init__(self, economy: EconomyPlatformPort, group_id: Any, secret: str):
        self._economy = economy
        self._group_id = group_id
        self._secret = secret

    async def mutate(self, request: RankMutationRequest) -> ActionResult:
        try:
            await self._economy.set_rank(request.group_id, request.user_id, request.rank_id)
        except Exception as e:
            _log(f"[setrank] {type(e).__name__}: {e}")
            return ActionResult.fail(e)
        return ActionResult.ok()

    async def handle(self, auth_header: Optional[str], body: Any) -> RelayOutcome:
        try:
            require_secret(auth_header, self._secret)
            payload = validate_rank(body)
        except Unauthorized as e:
            return RelayOutcome.AUTH_MISSING if e.missing else RelayOutcome.AUTH_MISMATCH
        except InvalidPayload:
            return RelayOutcome.INVALID_PAYLOAD

        request = build_rank_mutation(self._group_id, payload.user, payload.rank)
        result = await self.mutate(request)
        if result:
            _log(
                f"[setrank] user {request.user_id} -> rank {request.rank_id} "
                f"in group {request.group_id}"
            )
        return result.outcome
