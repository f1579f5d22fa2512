"""
Base Decoder Adapter - Abstrakte Basisklasse
Alle Decoder-Implementierungen müssen diese Schnittstelle erfüllen
"""

from abc import ABC, abstractmethod
from typing import Any, Tuple


class BaseDecoderAdapter(ABC):
    """
    Abstrakte Basisklasse für alle Decoder-Adapter

    Beide Methoden sind reine Funktionen der Eingabe-Bytes:
    - Erfolg: Rückgabe (verified, record)
    - Ablehnung: DecoderError

    Andere Exceptions gelten als Vertragsverletzung und werden
    vom Dispatcher nicht abgefangen.

    Implementierungen:
    - FramingAdapter: Nur Strukturprüfung (TLV/TV-Rahmen), keine Signaturprüfung
    """

    name: str = "base"

    @abstractmethod
    def decode_card(self, data: bytes) -> Tuple[bool, Any]:
        """
        Fahrerkarten-Datei dekodieren (TLV)

        Args:
            data: Rohdaten der DDD-Datei

        Returns:
            (verified, record)

        Raises:
            DecoderError: wenn die Daten keine gültige Kartendatei sind
        """
        pass

    @abstractmethod
    def decode_vu(self, data: bytes) -> Tuple[bool, Any]:
        """
        VU-Download dekodieren (TV)

        Args:
            data: Rohdaten der DDD-Datei

        Returns:
            (verified, record)

        Raises:
            DecoderError: wenn die Daten kein gültiger VU-Download sind
        """
        pass
