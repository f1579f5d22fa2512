"""
Response Envelope - einheitliche Antwortstruktur

Erfolg:  200 {"type", "verified", "data"}
Fehler:  400 {"error", ...}
"""

from typing import Any, Dict, Tuple

from .errors import PayloadError
from .models import DispatchOutcome, Rejected, RejectionKind, Resolved

HTTP_OK = 200
HTTP_BAD_REQUEST = 400

Envelope = Tuple[int, Dict[str, Any]]


def build_response(outcome: DispatchOutcome) -> Envelope:
    """
    Dispatch-Ergebnis in (Status, Body) umwandeln

    Bei BOTH_FORMATS_REJECTED wird nur der Karten-Fehler ausgegeben,
    der VU-Fehler bleibt im Outcome.
    """
    if isinstance(outcome, Resolved):
        return HTTP_OK, {
            "type": outcome.format.value,
            "verified": outcome.verified,
            "data": outcome.record,
        }

    if isinstance(outcome, Rejected):
        if outcome.kind == RejectionKind.BOTH_FORMATS_REJECTED:
            return HTTP_BAD_REQUEST, {
                "error": "Failed to parse as either Card or VU",
                "card_error": outcome.card_error,
            }
        if outcome.kind == RejectionKind.CARD_REJECTED:
            return HTTP_BAD_REQUEST, {
                "error": "Failed to parse as Card",
                "details": outcome.card_error,
            }
        if outcome.kind == RejectionKind.VU_REJECTED:
            return HTTP_BAD_REQUEST, {
                "error": "Failed to parse as VU",
                "details": outcome.vu_error,
            }
        raise TypeError(f"Unknown rejection kind: {outcome.kind!r}")

    raise TypeError(f"Unknown dispatch outcome: {type(outcome).__name__}")


def build_error_response(error: PayloadError) -> Envelope:
    """Extraktionsfehler (EMPTY_PAYLOAD, READ_ERROR) in (Status, Body) umwandeln"""
    return HTTP_BAD_REQUEST, {"error": error.detail}
