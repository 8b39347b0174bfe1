"""Domain layer — relay pipelines and their policies (no platform imports)."""

from relay.domain.auth import AuthOutcome, check_secret
from relay.domain.donation import DonationRelay
from relay.domain.policy import (
    MIN_PIN_AMOUNT,
    REACTION_EMOJIS,
    RankMutationRequest,
    build_rank_mutation,
    choose_reaction,
    coerce_int,
    format_announcement,
    should_pin,
)
from relay.domain.rank import RankRelay
from relay.domain.results import ActionResult, RelayOutcome

__all__ = [
    "AuthOutcome",
    "check_secret",
    "DonationRelay",
    "RankRelay",
    "MIN_PIN_AMOUNT",
    "REACTION_EMOJIS",
    "RankMutationRequest",
    "build_rank_mutation",
    "choose_reaction",
    "coerce_int",
    "format_announcement",
    "should_pin",
    "ActionResult",
    "RelayOutcome",
]
