"""
Parser Service - Zentrale Schnittstelle
Verwaltet den Decoder-Adapter und stellt die drei Parse-Operationen bereit
"""

import logging
import os
from typing import Dict, Optional, Type

from .adapters.base import BaseDecoderAdapter
from .adapters.framing_adapter import FramingAdapter
from .dispatcher import auto_detect, decode_as_card, decode_as_vu
from .models import DispatchOutcome

logger = logging.getLogger(__name__)

DEFAULT_DECODER = "framing"


class ParserService:
    """
    Zentrale Parser-Service-Klasse

    Hält keinen Zustand zwischen Requests, nur den Adapter.

    Verwendung:
        service = ParserService()
        outcome = service.parse(raw_bytes)
    """

    # Verfügbare Adapter
    ADAPTERS: Dict[str, Type[BaseDecoderAdapter]] = {
        "framing": FramingAdapter,
        # Weitere Decoder hier registrieren
    }

    def __init__(self, adapter: Optional[BaseDecoderAdapter] = None):
        self._adapter = adapter or FramingAdapter()

    @classmethod
    def from_name(cls, name: str) -> "ParserService":
        """
        Service mit Adapter nach Name erstellen

        Unbekannte Namen fallen auf den Standard-Decoder zurück.
        """
        adapter_class = cls.ADAPTERS.get(name.strip().lower())
        if not adapter_class:
            logger.warning(f"Unknown decoder '{name}', falling back to '{DEFAULT_DECODER}'")
            adapter_class = cls.ADAPTERS[DEFAULT_DECODER]
        logger.info(f"Using decoder adapter '{adapter_class.name}'")
        return cls(adapter_class())

    @property
    def adapter(self) -> BaseDecoderAdapter:
        return self._adapter

    def parse(self, payload: bytes) -> DispatchOutcome:
        """Format automatisch erkennen (Karte, dann VU)"""
        return auto_detect(self._adapter, payload)

    def parse_card(self, payload: bytes) -> DispatchOutcome:
        """Nur als Fahrerkarte parsen"""
        return decode_as_card(self._adapter, payload)

    def parse_vu(self, payload: bytes) -> DispatchOutcome:
        """Nur als VU-Download parsen"""
        return decode_as_vu(self._adapter, payload)


# ============== Singleton für globalen Zugriff ==============

_service_instance: Optional[ParserService] = None

def get_parser_service() -> ParserService:
    """Globale ParserService-Instanz abrufen"""
    global _service_instance
    if _service_instance is None:
        _service_instance = ParserService.from_name(os.environ.get("DDD_DECODER", DEFAULT_DECODER))
    return _service_instance
