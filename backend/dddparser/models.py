"""
DDD Parser Datenmodelle
Ergebnis-Typen für Decode-Versuche und Dispatch
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

__all__ = [
    "RecordFormat",
    "RejectionKind",
    "DecodeAttempt",
    "Resolved",
    "Rejected",
    "DispatchOutcome",
]


class RecordFormat(str, Enum):
    """Format einer DDD-Datei"""
    CARD = "card"   # Fahrerkarte (TLV)
    VU = "vu"       # Fahrzeugeinheit / Massenspeicher (TV)


class RejectionKind(str, Enum):
    """Art der Ablehnung durch den Dispatcher"""
    CARD_REJECTED = "card_rejected"
    VU_REJECTED = "vu_rejected"
    BOTH_FORMATS_REJECTED = "both_formats_rejected"


@dataclass(frozen=True)
class DecodeAttempt:
    """Ergebnis eines einzelnen Decoder-Aufrufs"""
    format: RecordFormat
    success: bool
    verified: bool = False     # nur bei success aussagekräftig
    record: Any = None         # nur bei success gesetzt
    error: Optional[str] = None  # nur bei Fehlschlag gesetzt


@dataclass(frozen=True)
class Resolved:
    """Erfolgreich dekodiert"""
    format: RecordFormat
    verified: bool
    record: Any


@dataclass(frozen=True)
class Rejected:
    """Kein Decoder hat die Daten akzeptiert"""
    kind: RejectionKind
    card_error: Optional[str] = None
    vu_error: Optional[str] = None


DispatchOutcome = Union[Resolved, Rejected]
