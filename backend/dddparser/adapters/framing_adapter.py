"""
Framing Adapter - Strukturprüfung für DDD-Dateien

Prüft nur den äußeren Rahmen:
- Karte: TAG(2) + TYP(1) + LÄNGE(2) + DATEN (Anhang 1B/1C)
- VU:    0x76 + TREP + DATEN

HINWEIS: Keine Signatur- oder Zertifikatsprüfung, verified ist daher
immer False. Für echte Dekodierung einen vollständigen Decoder-Adapter
registrieren.
"""

import logging
import struct
from typing import Dict, List, Tuple

from .base import BaseDecoderAdapter
from .records import CardBlock, CardRecord, VuRecord
from ..errors import DecoderError

logger = logging.getLogger(__name__)

CARD_HEADER_SIZE = 5
VU_SERVICE_ID = 0x76

# Elementardateien der Fahrerkarte
CARD_FILES: Dict[int, str] = {
    0x0002: "EF_ICC",
    0x0005: "EF_IC",
    0x0501: "EF_Application_Identification",
    0x0502: "EF_Events_Data",
    0x0503: "EF_Faults_Data",
    0x0504: "EF_Driver_Activity_Data",
    0x0505: "EF_Vehicles_Used",
    0x0506: "EF_Places",
    0x0507: "EF_Current_Usage",
    0x0508: "EF_Control_Activity_Data",
    0x050E: "EF_Card_Download",
    0x0520: "EF_Identification",
    0x0521: "EF_Driving_Licence_Info",
    0x0522: "EF_Specific_Conditions",
    0x0523: "EF_VehicleUnits_Used",
    0x0524: "EF_GNSS_Places",
    0x0525: "EF_Application_Identification_V2",
    0xC100: "EF_Card_Certificate",
    0xC101: "EF_CardSignCertificate",
    0xC108: "EF_CA_Certificate",
    0xC109: "EF_Link_Certificate",
}

# Typ-Byte: (Generation, Art)
CARD_BLOCK_TYPES: Dict[int, Tuple[int, str]] = {
    0x00: (1, "data"),
    0x01: (1, "signature"),
    0x02: (2, "data"),
    0x03: (2, "signature"),
}

# TREP: (Generation, Transfer)
VU_TRANSFERS: Dict[int, Tuple[int, str]] = {
    0x01: (1, "overview"),
    0x02: (1, "activities"),
    0x03: (1, "events_and_faults"),
    0x04: (1, "detailed_speed"),
    0x05: (1, "technical_data"),
    0x21: (2, "overview"),
    0x22: (2, "activities"),
    0x23: (2, "events_and_faults"),
    0x24: (2, "detailed_speed"),
    0x25: (2, "technical_data"),
    0x31: (2, "overview_v2"),
    0x32: (2, "activities_v2"),
    0x33: (2, "events_and_faults_v2"),
    0x34: (2, "detailed_speed_v2"),
    0x35: (2, "technical_data_v2"),
}


class FramingAdapter(BaseDecoderAdapter):
    """
    Strukturprüfender Decoder ohne Signaturprüfung

    Eine gültige Kartendatei muss:
    - mit einer bekannten Elementardatei beginnen
    - nur Blöcke mit gültigem Typ-Byte enthalten
    - vollständig aus TLV-Blöcken bestehen (kein Rest)

    Ein gültiger VU-Download muss mit 0x76 und einem bekannten TREP beginnen.
    """

    name = "framing"

    def decode_card(self, data: bytes) -> Tuple[bool, CardRecord]:
        if len(data) < CARD_HEADER_SIZE:
            raise DecoderError(
                f"card data too short: {len(data)} bytes, need at least {CARD_HEADER_SIZE}",
                offset=0
            )

        blocks: List[CardBlock] = []
        offset = 0
        while offset < len(data):
            if len(data) - offset < CARD_HEADER_SIZE:
                raise DecoderError(
                    f"truncated TLV header at offset {offset}", offset=offset
                )

            tag, block_type, length = struct.unpack_from(">HBH", data, offset)
            if not blocks and tag not in CARD_FILES:
                raise DecoderError(
                    f"unknown card file tag 0x{tag:04X} at offset 0", offset=0
                )
            if block_type not in CARD_BLOCK_TYPES:
                raise DecoderError(
                    f"invalid TLV type 0x{block_type:02X} for tag 0x{tag:04X} at offset {offset}",
                    offset=offset
                )

            start = offset + CARD_HEADER_SIZE
            end = start + length
            if end > len(data):
                raise DecoderError(
                    f"TLV block 0x{tag:04X} length {length} exceeds data at offset {offset}",
                    offset=offset
                )

            generation, kind = CARD_BLOCK_TYPES[block_type]
            blocks.append(CardBlock(
                tag=f"0x{tag:04X}",
                file=CARD_FILES.get(tag),
                generation=generation,
                kind=kind,
                length=length,
                data=data[start:end].hex()
            ))
            offset = end

        record = CardRecord(
            generation=max(b.generation for b in blocks),
            block_count=len(blocks),
            blocks=blocks
        )
        logger.debug(f"Card framing ok: {len(blocks)} blocks, generation {record.generation}")
        return False, record

    def decode_vu(self, data: bytes) -> Tuple[bool, VuRecord]:
        if len(data) < 3:
            raise DecoderError(
                f"vu data too short: {len(data)} bytes", offset=0
            )
        if data[0] != VU_SERVICE_ID:
            raise DecoderError(
                f"missing TV header: expected 0x{VU_SERVICE_ID:02X}, got 0x{data[0]:02X}",
                offset=0
            )

        trep = data[1]
        if trep not in VU_TRANSFERS:
            raise DecoderError(f"unknown TREP 0x{trep:02X}", offset=1)

        generation, transfer = VU_TRANSFERS[trep]
        body = data[2:]
        record = VuRecord(
            trep=f"0x{trep:02X}",
            transfer=transfer,
            generation=generation,
            size=len(body),
            data=body.hex()
        )
        logger.debug(f"VU framing ok: {transfer}, generation {generation}")
        return False, record
