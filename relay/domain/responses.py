"""Map relay outcomes to HTTP status codes and bodies.

The donation relay answers with small JSON bodies; the rank relay answers
with bare status codes. The two conventions are part of each endpoint's
contract and are kept separate.
"""

from typing import Dict, Optional, Tuple

from relay.domain.results import RelayOutcome

ResponseSpec = Tuple[int, Optional[dict]]

DONATION_RESPONSES: Dict[RelayOutcome, ResponseSpec] = {
    RelayOutcome.SUCCESS: (200, {"message": "Message sent successfully."}),
    RelayOutcome.AUTH_MISSING: (403, {"error": "Insufficient permissions."}),
    RelayOutcome.AUTH_MISMATCH: (403, {"error": "Insufficient permissions."}),
    RelayOutcome.INVALID_PAYLOAD: (400, {"error": "Missing username and/or amount."}),
    RelayOutcome.CHANNEL_UNRESOLVED: (500, {"error": "Channel not found or not text-based."}),
    RelayOutcome.EXTERNAL_FAILURE: (500, {"error": "Failed to send message."}),
}

RANK_RESPONSES: Dict[RelayOutcome, ResponseSpec] = {
    RelayOutcome.SUCCESS: (200, None),
    RelayOutcome.AUTH_MISSING: (400, None),
    RelayOutcome.AUTH_MISMATCH: (401, None),
    RelayOutcome.INVALID_PAYLOAD: (400, None),
    RelayOutcome.EXTERNAL_FAILURE: (500, None),
}
