"""
Fehlerhierarchie für den DDD Parser

Alle Fehler erben von DDDParserError und tragen eine Art (kind)
plus eine lesbare Detailmeldung, die unverändert an den Client geht.
"""

from enum import Enum
from typing import Optional


class PayloadErrorKind(str, Enum):
    """Fehlerarten beim Auslesen der Rohdaten aus dem Request"""
    EMPTY_PAYLOAD = "empty_payload"
    READ_ERROR = "read_error"


EMPTY_PAYLOAD_MESSAGE = (
    "No data provided. Send file as multipart/form-data with key 'file' "
    "or send raw binary in request body"
)


class DDDParserError(Exception):
    """Basisklasse für alle Parser-Fehler"""

    def __init__(self, detail: str, *, kind: Optional[str] = None):
        self.detail = detail
        self.kind = kind
        super().__init__(detail)


class PayloadError(DDDParserError):
    """Rohdaten konnten nicht aus dem Request gelesen werden"""

    def __init__(self, kind: PayloadErrorKind, detail: str):
        super().__init__(detail, kind=kind)

    @classmethod
    def empty(cls) -> "PayloadError":
        return cls(PayloadErrorKind.EMPTY_PAYLOAD, EMPTY_PAYLOAD_MESSAGE)

    @classmethod
    def read_failed(cls, cause: BaseException) -> "PayloadError":
        reason = getattr(cause, "detail", None) or str(cause) or cause.__class__.__name__
        return cls(PayloadErrorKind.READ_ERROR, f"Failed to read request data: {reason}")


class DecoderError(DDDParserError):
    """
    Decoder hat die Daten abgelehnt

    Wird von Decoder-Adaptern geworfen, wenn die Bytes nicht im
    erwarteten Format vorliegen. Der Dispatcher wandelt sie in einen
    fehlgeschlagenen DecodeAttempt um.
    """

    def __init__(self, detail: str, *, offset: Optional[int] = None):
        self.offset = offset
        super().__init__(detail, kind="decoder_rejected")
