"""
Format Dispatcher - Erkennung und Verteilung auf die Decoder

Reihenfolge bei Auto-Erkennung:
    TryingCard -> (Erfolg) Resolved
               -> (Fehler) TryingVu -> (Erfolg) Resolved
                                    -> (Fehler) Rejected

Karten- und VU-Dateien haben unterschiedliche Rahmen (TLV vs. TV), eine
gültige Datei des einen Formats wird vom anderen Decoder abgelehnt.
Karte zuerst ist eine feste Reihenfolge, kein Header unterscheidet die
beiden Formate vor dem Parsen.
"""

import logging

from .adapters.base import BaseDecoderAdapter
from .errors import DecoderError
from .models import (
    DecodeAttempt,
    DispatchOutcome,
    RecordFormat,
    Rejected,
    RejectionKind,
    Resolved,
)

logger = logging.getLogger(__name__)


def attempt_decode(adapter: BaseDecoderAdapter, fmt: RecordFormat, payload: bytes) -> DecodeAttempt:
    """
    Einen Decoder aufrufen und das Ergebnis als DecodeAttempt zurückgeben

    Nur DecoderError gilt als Ablehnung. Alles andere ist ein Fehler
    im Adapter und wird weitergereicht.
    """
    decode = adapter.decode_card if fmt == RecordFormat.CARD else adapter.decode_vu
    try:
        verified, record = decode(payload)
    except DecoderError as e:
        logger.info(f"{fmt.value} decoder rejected {len(payload)} bytes: {e.detail}")
        return DecodeAttempt(format=fmt, success=False, error=e.detail)
    return DecodeAttempt(format=fmt, success=True, verified=verified, record=record)


def _resolved(attempt: DecodeAttempt) -> Resolved:
    logger.info(f"Parsed {attempt.format.value} data (verified={attempt.verified})")
    return Resolved(format=attempt.format, verified=attempt.verified, record=attempt.record)


def auto_detect(adapter: BaseDecoderAdapter, payload: bytes) -> DispatchOutcome:
    """
    Format automatisch erkennen: erst Karte, dann VU

    Bei erfolgreicher Karten-Dekodierung wird der VU-Decoder nie
    aufgerufen, unabhängig vom verified-Wert.
    """
    card = attempt_decode(adapter, RecordFormat.CARD, payload)
    if card.success:
        return _resolved(card)

    vu = attempt_decode(adapter, RecordFormat.VU, payload)
    if vu.success:
        return _resolved(vu)

    return Rejected(
        kind=RejectionKind.BOTH_FORMATS_REJECTED,
        card_error=card.error,
        vu_error=vu.error
    )


def decode_as_card(adapter: BaseDecoderAdapter, payload: bytes) -> DispatchOutcome:
    """Nur als Fahrerkarte dekodieren"""
    card = attempt_decode(adapter, RecordFormat.CARD, payload)
    if card.success:
        return _resolved(card)
    return Rejected(kind=RejectionKind.CARD_REJECTED, card_error=card.error)


def decode_as_vu(adapter: BaseDecoderAdapter, payload: bytes) -> DispatchOutcome:
    """Nur als VU-Download dekodieren"""
    vu = attempt_decode(adapter, RecordFormat.VU, payload)
    if vu.success:
        return _resolved(vu)
    return Rejected(kind=RejectionKind.VU_REJECTED, vu_error=vu.error)
