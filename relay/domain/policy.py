"""Side-effect policies: reaction choice, pin threshold, rank coercion."""

import math
import random
import re
from dataclasses import dataclass
from typing import Any, Optional

REACTION_EMOJIS = ("🙏", "💪")
DEFAULT_CURRENCY_EMOJI = "<:emoji:1364748707374956595>"
DEFAULT_MIN_PIN_AMOUNT = 5_000
MIN_PIN_AMOUNT = DEFAULT_MIN_PIN_AMOUNT

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


# ── ReactionPolicy ──────────────────────────────────────────


def choose_reaction(rng: Optional[random.Random] = None) -> str:
    """Pick one reaction emoji by a uniform draw over the index range."""
    rng = rng or random
    return REACTION_EMOJIS[rng.randrange(len(REACTION_EMOJIS))]


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def should_pin(amount: Any, threshold: int = MIN_PIN_AMOUNT) -> bool:
    """True when *amount* reaches the pin threshold (inclusive)."""
    number = _as_number(amount)
    if number is None or math.isnan(number):
        return False
    return number >= threshold


def _render_amount(amount: Any) -> str:
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


def format_announcement(username: Any, amount: Any, glyph: str = DEFAULT_CURRENCY_EMOJI) -> str:
    # Interpolated verbatim: markdown and mentions in the username are not escaped.
    return f"{username} has donated {glyph} **{_render_amount(amount)}**"


# ── RankCoercionPolicy ──────────────────────────────────────


@dataclass(frozen=True)
class RankMutationRequest:
    """Identifiers for one rank change. ``None`` marks a non-numeric input."""

    group_id: Optional[int]
    user_id: Optional[int]
    rank_id: Optional[int]


def coerce_int(value: Any) -> Optional[int]:
    """Best-effort base-10 integer coercion.

    Parses the leading integer of the textual form (``"12abc"`` -> 12,
    ``" 5.7"`` -> 5). Returns ``None`` when there is no leading digit run;
    no further validation happens here.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def build_rank_mutation(group_id: Any, user: Any, rank: Any) -> RankMutationRequest:
    return RankMutationRequest(
        group_id=coerce_int(group_id),
        user_id=coerce_int(user),
        rank_id=coerce_int(rank),
    )
